"""Color arithmetic: normalization, blending and darken/lighten helpers.

Colors are plain data. A scalar color is a hex string (``#rgb`` up to
``#rrrrggggbbbb``), a color name understood by Qt's color database, or an RGB
triple of floats in ``[0, 1]``. A tiered color is any other list/tuple of
colors ordered from the most to the least capable display; its entries may be
``None``. Blending distributes over tiered colors position by position.
"""

from __future__ import annotations

import re
from numbers import Real
from typing import Any, Iterable, Sequence, Tuple, Union

from .errors import InvalidColor

__all__ = [
    "RGB",
    "ColorValue",
    "BLACK",
    "WHITE",
    "normalize",
    "blend",
    "darken",
    "lighten",
    "to_hex",
    "is_color",
    "is_rgb_triple",
    "is_tiered",
    "luminance",
    "contrast_ratio",
]

RGB = Tuple[float, float, float]
ColorValue = Union[str, RGB, Sequence[Any], None]

BLACK = "#000000"
WHITE = "#ffffff"
_HEX_WIDTHS = (1, 2, 3, 4)
_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")


def normalize(color: Any) -> RGB:
    """Convert ``color`` into an RGB triple of floats in ``[0, 1]``.

    Hex channels are divided by the largest value their digit width can hold,
    so ``#fff`` and ``#ffffffffffff`` both normalize to white.
    """

    if isinstance(color, str):
        text = color.strip()
        if not text:
            raise InvalidColor(color, "empty string")
        if text.startswith("#"):
            return _parse_hex(text)
        return _lookup_name(text)

    if is_rgb_triple(color):
        channels = tuple(float(channel) for channel in color)
        if not all(0.0 <= channel <= 1.0 for channel in channels):
            raise InvalidColor(color, "RGB channels must be between 0 and 1")
        return channels  # type: ignore[return-value]

    raise InvalidColor(color, f"unsupported type {type(color).__name__}")


def blend(first: Any, second: Any, alpha: float) -> Any:
    """Mix ``first`` and ``second``, weighting ``first`` by ``alpha``.

    ``alpha == 1`` yields ``first`` and ``alpha == 0`` yields ``second``. Scalar
    inputs return a ``#rrggbb`` string; tiered inputs return a list. When
    either side is ``None`` or not a color at all, ``first`` is returned as is.
    """

    _check_alpha(alpha)
    if first is None or second is None:
        return first
    if is_tiered(first) or is_tiered(second):
        return _blend_tiered(first, second, alpha)
    if not (is_color(first) and is_color(second)):
        return first

    left = normalize(first)
    right = normalize(second)
    return _format_hex(alpha * a + (1 - alpha) * b for a, b in zip(left, right))


def darken(color: Any, alpha: float) -> Any:
    """Move ``color`` toward black by ``alpha`` (0 keeps it, 1 is black)."""

    _check_alpha(alpha)
    return blend(color, BLACK, 1 - alpha)


def lighten(color: Any, alpha: float) -> Any:
    """Move ``color`` toward white by ``alpha`` (0 keeps it, 1 is white)."""

    _check_alpha(alpha)
    return blend(color, WHITE, 1 - alpha)


def to_hex(color: Any) -> str:
    """Return ``color`` as a lower-case ``#rrggbb`` string."""

    return _format_hex(normalize(color))


def is_rgb_triple(value: Any) -> bool:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        return False
    if len(value) != 3:
        return False
    return all(isinstance(item, Real) and not isinstance(item, bool) for item in value)


def is_tiered(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and not is_rgb_triple(value)


def is_color(value: Any) -> bool:
    """Return ``True`` for scalar color representations (not tiered ones)."""

    return isinstance(value, str) or is_rgb_triple(value)


def luminance(color: Any) -> float:
    """Relative luminance per WCAG 2.0."""

    def channel(c: float) -> float:
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = normalize(color)
    return 0.2126 * channel(r) + 0.7152 * channel(g) + 0.0722 * channel(b)


def contrast_ratio(first: Any, second: Any) -> float:
    lighter, darker = sorted((luminance(first), luminance(second)), reverse=True)
    return (lighter + 0.05) / (darker + 0.05)


def _blend_tiered(first: Any, second: Any, alpha: float) -> list[Any]:
    firsts = list(first) if is_tiered(first) else None
    seconds = list(second) if is_tiered(second) else None
    length = max(len(items) for items in (firsts, seconds) if items is not None)

    blended: list[Any] = []
    for index in range(length):
        left = _tier_item(first, firsts, index)
        right = _tier_item(second, seconds, index)
        if left is None or right is None:
            blended.append(None)
        else:
            blended.append(blend(left, right, alpha))
    return blended


def _tier_item(original: Any, items: list[Any] | None, index: int) -> Any:
    if items is None:
        return original
    if index < len(items):
        return items[index]
    return None


def _check_alpha(alpha: Any) -> None:
    if not isinstance(alpha, Real) or isinstance(alpha, bool):
        raise ValueError(f"alpha must be a number, received {alpha!r}")
    if alpha < 0 or alpha > 1:
        raise ValueError(f"alpha must be between 0 and 1, received {alpha!r}")


def _parse_hex(text: str) -> RGB:
    digits = text[1:]
    width, remainder = divmod(len(digits), 3)
    if remainder or width not in _HEX_WIDTHS:
        raise InvalidColor(text, "hex colors need 3, 6, 9 or 12 digits")
    if not _HEX_DIGITS.fullmatch(digits):
        raise InvalidColor(text, "not a hexadecimal value")
    raw = [int(digits[i : i + width], 16) for i in range(0, len(digits), width)]
    scale = 16**width - 1
    return tuple(channel / scale for channel in raw)  # type: ignore[return-value]


def _lookup_name(name: str) -> RGB:
    try:  # pragma: no cover - Qt optional in CI
        from PySide6.QtGui import QColor  # type: ignore
    except Exception as exc:  # pragma: no cover - headless environments without Qt
        raise InvalidColor(name, "color names require PySide6") from exc

    qcolor = QColor(name)
    if not qcolor.isValid():
        raise InvalidColor(name, "unknown color name")
    r, g, b, _alpha = qcolor.getRgbF()
    return (float(r), float(g), float(b))


def _to_byte(channel: float) -> int:
    value = int(channel * 255 + 0.5)
    if value < 0:
        return 0
    if value > 255:
        return 255
    return value


def _format_hex(channels: Iterable[float]) -> str:
    return "#" + "".join(f"{_to_byte(channel):02x}" for channel in channels)

"""Named-color tables and capability-tier resolution."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Tuple

from .. import color as colors
from ..errors import ConstructionFailure, UndefinedReference
from .expressions import Expression, as_expression, normalize_name

__all__ = [
    "TIER_INDEX",
    "Palette",
    "PaletteBuilder",
    "build_palette",
    "select_tier",
    "tier_index",
    "tier_for_display",
]

LOGGER = logging.getLogger(__name__)

# Requested tier -> position in a tiered color. This ordering is a fixed
# contract with existing theme files; unknown tiers (and ``None`` for full
# GUI color) use the first entry.
TIER_INDEX: Mapping[int, int] = MappingProxyType({256: 0, 1: 1, 16: 2, 2: 3, 8: 4, 3: 5})


def tier_index(tier: int | None) -> int:
    if tier is None:
        return 0
    return TIER_INDEX.get(tier, 0)


def select_tier(value: Any, tier: int | None = None) -> Any:
    """Pick the representation of ``value`` for ``tier``.

    Scalars are returned untouched. Tiered values clamp to their last entry
    when the tier's index runs past the end.
    """

    if not colors.is_tiered(value):
        return value
    items = list(value)
    if not items:
        return None
    index = tier_index(tier)
    if index >= len(items):
        return items[-1]
    return items[index]


def tier_for_display(graphical: bool, colors_available: int | None = None) -> int | None:
    """Fold a display capability probe into a tier value.

    Graphical displays and terminals with more than 256 colors get full color
    (``None``); everything else is identified by its color count.
    """

    if graphical or colors_available is None or colors_available > 256:
        return None
    return int(colors_available)


def _freeze(value: Any) -> Any:
    if colors.is_tiered(value):
        return tuple(_freeze(item) for item in value)
    return value


class Palette(Mapping[str, Any]):
    """Immutable name -> color table produced by :class:`PaletteBuilder`."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, Any] | None = None) -> None:
        frozen = {normalize_name(key): _freeze(value) for key, value in (entries or {}).items()}
        self._entries: Mapping[str, Any] = MappingProxyType(frozen)

    def __getitem__(self, name: str) -> Any:
        try:
            key = normalize_name(name)
        except ValueError:
            raise KeyError(name) from None
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str) or not name.strip():
            return False
        return normalize_name(name) in self._entries

    def __repr__(self) -> str:
        return f"Palette({dict(self._entries)!r})"

    def resolve(self, name: str, tier: int | None = None) -> Any:
        """Return the concrete color for ``name`` at ``tier`` or ``None``."""

        if name not in self:
            return None
        return select_tier(self[name], tier)

    def evaluate(self, expression: Any) -> Any:
        """Evaluate ``expression`` against this finished table."""

        return as_expression(expression).evaluate(self._entries)

    def resolved(self, tier: int | None = None) -> Dict[str, Any]:
        """Return every entry resolved for ``tier``."""

        return {name: select_tier(value, tier) for name, value in self._entries.items()}

    def to_dict(self) -> Dict[str, Any]:
        return {
            name: list(value) if isinstance(value, tuple) else value
            for name, value in self._entries.items()
        }


class PaletteBuilder:
    """Evaluates color definitions in order against the entries built so far."""

    def __init__(self) -> None:
        self._entries: Dict[str, Any] = {}
        self._built = False

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip().lower() in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def define(self, name: str, expression: Any) -> Any:
        """Evaluate ``expression`` and store the result under ``name``.

        Nothing is stored when evaluation fails, so a rejected definition
        leaves the builder exactly as it was.
        """

        if self._built:
            raise RuntimeError("Palette already built")
        key = normalize_name(name)
        node: Expression = as_expression(expression)
        missing = [ref for ref in node.references() if ref not in self._entries]
        if missing:
            raise UndefinedReference(missing[0], entry=key)
        try:
            value = node.evaluate(self._entries)
        except ConstructionFailure as exc:
            if exc.entry is None:
                exc.entry = key
            raise
        if key in self._entries:
            LOGGER.debug("Color '%s' redefined", key)
        self._entries[key] = value
        return value

    def build(self) -> Palette:
        self._built = True
        return Palette(self._entries)


def build_palette(definitions: Iterable[Tuple[str, Any]] | Mapping[str, Any]) -> Palette:
    """Run one ordered evaluation pass over ``definitions``."""

    items = definitions.items() if isinstance(definitions, Mapping) else definitions
    builder = PaletteBuilder()
    for name, expression in items:
        builder.define(name, expression)
    return builder.build()

"""Color expressions evaluated while a palette is being built.

Expressions form a small tree: literals, references to names defined earlier,
tiered families and blend/darken/lighten calls. Plain data (as found in theme
files) is coerced with :func:`as_expression`:

``"#282c34"``                          literal
``"@base"``                            reference to ``base``
``["#282c34", "#262626", "black"]``    tiered family
``{"blend": ["@base", "@bg", 0.5]}``   call
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Tuple

from .. import color as colors
from ..errors import UndefinedReference

__all__ = [
    "Expression",
    "Literal",
    "Ref",
    "Tiered",
    "Blend",
    "Darken",
    "Lighten",
    "REFERENCE_PREFIX",
    "as_expression",
    "normalize_name",
]

REFERENCE_PREFIX = "@"
Scope = Mapping[str, Any]


def normalize_name(name: str) -> str:
    key = str(name).strip().lower()
    if not key:
        raise ValueError("Color names cannot be empty")
    return key


class Expression(ABC):
    """Base class for every expression node."""

    @abstractmethod
    def evaluate(self, scope: Scope) -> Any:
        """Return the color value this node produces against ``scope``."""

    @abstractmethod
    def references(self) -> Iterator[str]:
        """Yield every name this node reads."""

    @abstractmethod
    def to_data(self) -> Any:
        """Return the plain-data form accepted by :func:`as_expression`."""


@dataclass(slots=True, frozen=True)
class Literal(Expression):
    value: Any

    def evaluate(self, scope: Scope) -> Any:
        if self.value is None:
            return None
        if colors.is_rgb_triple(self.value):
            return colors.to_hex(self.value)
        colors.normalize(self.value)
        return self.value

    def references(self) -> Iterator[str]:
        return iter(())

    def to_data(self) -> Any:
        if colors.is_rgb_triple(self.value):
            return list(self.value)
        return self.value


@dataclass(slots=True, frozen=True)
class Ref(Expression):
    name: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", normalize_name(self.name))

    def evaluate(self, scope: Scope) -> Any:
        if self.name not in scope:
            raise UndefinedReference(self.name)
        return scope[self.name]

    def references(self) -> Iterator[str]:
        yield self.name

    def to_data(self) -> str:
        return f"{REFERENCE_PREFIX}{self.name}"


@dataclass(slots=True, frozen=True)
class Tiered(Expression):
    """One color per capability tier, most capable first."""

    items: Tuple[Expression, ...]

    def evaluate(self, scope: Scope) -> list[Any]:
        values: list[Any] = []
        for index, item in enumerate(self.items):
            value = item.evaluate(scope)
            if colors.is_tiered(value):
                # a tiered reference contributes its entry for this position
                value = _pick(value, index)
            values.append(value)
        return values

    def references(self) -> Iterator[str]:
        for item in self.items:
            yield from item.references()

    def to_data(self) -> list[Any]:
        return [item.to_data() for item in self.items]


@dataclass(slots=True, frozen=True)
class Blend(Expression):
    first: Expression
    second: Expression
    alpha: float

    def __post_init__(self) -> None:
        _validate_alpha(self.alpha)

    def evaluate(self, scope: Scope) -> Any:
        return colors.blend(self.first.evaluate(scope), self.second.evaluate(scope), self.alpha)

    def references(self) -> Iterator[str]:
        yield from self.first.references()
        yield from self.second.references()

    def to_data(self) -> dict[str, list[Any]]:
        return {"blend": [self.first.to_data(), self.second.to_data(), self.alpha]}


@dataclass(slots=True, frozen=True)
class Darken(Expression):
    color: Expression
    alpha: float

    def __post_init__(self) -> None:
        _validate_alpha(self.alpha)

    def evaluate(self, scope: Scope) -> Any:
        return colors.darken(self.color.evaluate(scope), self.alpha)

    def references(self) -> Iterator[str]:
        return self.color.references()

    def to_data(self) -> dict[str, list[Any]]:
        return {"darken": [self.color.to_data(), self.alpha]}


@dataclass(slots=True, frozen=True)
class Lighten(Expression):
    color: Expression
    alpha: float

    def __post_init__(self) -> None:
        _validate_alpha(self.alpha)

    def evaluate(self, scope: Scope) -> Any:
        return colors.lighten(self.color.evaluate(scope), self.alpha)

    def references(self) -> Iterator[str]:
        return self.color.references()

    def to_data(self) -> dict[str, list[Any]]:
        return {"lighten": [self.color.to_data(), self.alpha]}


def as_expression(value: Any) -> Expression:
    """Coerce plain data into an :class:`Expression` tree."""

    if isinstance(value, Expression):
        return value
    if value is None:
        return Literal(None)
    if isinstance(value, str):
        text = value.strip()
        if text.startswith(REFERENCE_PREFIX):
            return Ref(text[len(REFERENCE_PREFIX) :])
        return Literal(text)
    if colors.is_rgb_triple(value):
        return Literal(tuple(value))
    if isinstance(value, (list, tuple)):
        return Tiered(tuple(as_expression(item) for item in value))
    if isinstance(value, Mapping):
        return _call_from_mapping(value)
    raise TypeError(f"Cannot interpret {value!r} as a color expression")


def _call_from_mapping(payload: Mapping[str, Any]) -> Expression:
    if len(payload) != 1:
        raise ValueError(f"Color calls take exactly one operator, received {sorted(payload)!r}")
    operator, raw_args = next(iter(payload.items()))
    if not isinstance(raw_args, (list, tuple)):
        raise ValueError(f"Arguments for '{operator}' must be a list")
    args = list(raw_args)
    if operator == "blend":
        if len(args) != 3:
            raise ValueError("blend expects [color, color, alpha]")
        return Blend(as_expression(args[0]), as_expression(args[1]), args[2])
    if operator in ("darken", "lighten"):
        if len(args) != 2:
            raise ValueError(f"{operator} expects [color, alpha]")
        node = Darken if operator == "darken" else Lighten
        return node(as_expression(args[0]), args[1])
    raise ValueError(f"Unknown color operator '{operator}'")


def _validate_alpha(alpha: Any) -> None:
    if isinstance(alpha, bool) or not isinstance(alpha, (int, float)):
        raise ValueError(f"alpha must be a number, received {alpha!r}")
    if not 0 <= alpha <= 1:
        raise ValueError(f"alpha must be between 0 and 1, received {alpha!r}")


def _pick(values: Any, index: int) -> Any:
    items = list(values)
    if not items:
        return None
    return items[min(index, len(items) - 1)]

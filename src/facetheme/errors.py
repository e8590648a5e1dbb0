"""Exception hierarchy shared by the color engine and theme registry."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

__all__ = [
    "ThemeError",
    "ConstructionFailure",
    "InvalidColor",
    "UndefinedReference",
    "ThemeFileError",
    "UnknownTheme",
]


class ThemeError(Exception):
    """Base error for everything raised by facetheme."""


class ConstructionFailure(ThemeError):
    """A theme palette could not be built.

    Subclasses name the specific cause. The registry fills in ``theme`` and
    ``entry`` when the failure happens during activation so callers can tell
    which definition broke.
    """

    def __init__(
        self,
        message: str,
        *,
        theme: str | None = None,
        entry: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.theme = theme
        self.entry = entry

    def __str__(self) -> str:
        location = [part for part in (self.theme, self.entry) if part]
        if not location:
            return self.message
        return f"{'/'.join(location)}: {self.message}"


class InvalidColor(ConstructionFailure, ValueError):
    """Raised when a token is neither a known color name nor a hex/RGB value."""

    def __init__(self, value: Any, reason: str | None = None, **kwargs: Any) -> None:
        message = f"Invalid color {value!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, **kwargs)
        self.value = value


class UndefinedReference(ConstructionFailure, LookupError):
    """Raised when an expression references a name that is not defined yet."""

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(f"Reference to undefined color '{name}'", **kwargs)
        self.name = name


class ThemeFileError(ThemeError):
    """Raised when a theme file cannot be read or fails schema validation."""

    def __init__(self, path: Path | str, errors: Sequence[str]) -> None:
        self.path = Path(path)
        self.errors = list(errors)
        summary = "; ".join(self.errors) or "unknown error"
        super().__init__(f"Invalid theme file {self.path}: {summary}")


class UnknownTheme(ThemeError, KeyError):
    """Raised when a theme name is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown theme '{self.name}'"

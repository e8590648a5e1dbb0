"""Theme registry: registration, atomic activation and color resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List

from ..errors import ConstructionFailure, UnknownTheme
from .builtin import builtin_themes
from .faces import FaceSpec, compile_faces
from .loader import dump_definition, load_definition
from .models import ThemeDefinition
from .palette import Palette, PaletteBuilder

__all__ = [
    "ActiveTheme",
    "RegistryState",
    "ThemeRegistry",
    "available_themes",
    "build_theme",
    "load_theme",
    "theme_registry",
]

LOGGER = logging.getLogger(__name__)


class RegistryState(Enum):
    UNLOADED = "unloaded"
    BUILDING = "building"
    ACTIVE = "active"


@dataclass(slots=True, frozen=True)
class ActiveTheme:
    """A definition paired with the palette built from it."""

    definition: ThemeDefinition
    palette: Palette

    @property
    def name(self) -> str:
        return self.definition.name

    def resolve(self, name: str, tier: int | None = None) -> Any:
        return self.palette.resolve(name, tier)

    def faces(
        self,
        tier: int | None = None,
        *,
        enable_bold: bool = True,
        enable_italic: bool = True,
        extra_faces: Iterable[FaceSpec] = (),
    ) -> Dict[str, Dict[str, Any]]:
        return compile_faces(
            list(self.definition.faces) + list(extra_faces),
            self.palette,
            appearance=self.definition.appearance,
            tier=tier,
            enable_bold=enable_bold,
            enable_italic=enable_italic,
        )


def build_theme(definition: ThemeDefinition) -> ActiveTheme:
    """Evaluate every color of ``definition`` in declaration order."""

    builder = PaletteBuilder()
    try:
        for name, expression in definition.colors:
            builder.define(name, expression)
    except ConstructionFailure as exc:
        exc.theme = definition.name
        raise
    return ActiveTheme(definition=definition, palette=builder.build())


class ThemeRegistry:
    """Holds theme definitions and the one theme currently active."""

    def __init__(self, themes: Iterable[ThemeDefinition] | None = None) -> None:
        self._definitions: Dict[str, ThemeDefinition] = {}
        self._face_overrides: Dict[str, List[FaceSpec]] = {}
        self._active: ActiveTheme | None = None
        self._state = RegistryState.UNLOADED
        for definition in themes or ():
            self.register(definition)

    @property
    def state(self) -> RegistryState:
        return self._state

    @property
    def active(self) -> ActiveTheme | None:
        return self._active

    def register(self, definition: ThemeDefinition, *, overwrite: bool = True) -> None:
        key = definition.name
        if not overwrite and key in self._definitions:
            raise ValueError(f"Theme '{definition.name}' already registered")
        self._definitions[key] = definition

    def available(self) -> List[ThemeDefinition]:
        return [self._definitions[name] for name in sorted(self._definitions)]

    def available_names(self) -> List[str]:
        return sorted(self._definitions)

    def definition(self, theme: ThemeDefinition | str) -> ThemeDefinition:
        if isinstance(theme, ThemeDefinition):
            return theme
        key = (theme or "").strip().lower()
        try:
            return self._definitions[key]
        except KeyError:
            raise UnknownTheme(theme) from None

    def set_faces(self, theme: str, *faces: FaceSpec) -> None:
        """Record face customizations applied whenever ``theme`` is active."""

        key = self.definition(theme).name
        self._face_overrides.setdefault(key, []).extend(faces)

    def clear_faces(self, theme: str | None = None) -> None:
        if theme is None:
            self._face_overrides.clear()
        else:
            self._face_overrides.pop(theme.strip().lower(), None)

    def activate(self, theme: ThemeDefinition | str) -> ActiveTheme:
        """Build ``theme`` and make it the active one.

        The previous theme stays active when building fails.
        """

        definition = self.definition(theme)
        previous_state = self._state
        self._state = RegistryState.BUILDING
        try:
            candidate = build_theme(definition)
        except ConstructionFailure as exc:
            LOGGER.warning(
                "Failed to activate theme '%s' (%s); keeping %s",
                definition.name,
                exc,
                self._active.name if self._active else "no theme",
            )
            raise
        finally:
            self._state = previous_state
        self._active = candidate
        self._state = RegistryState.ACTIVE
        LOGGER.debug("Activated theme '%s' with %d colors", definition.name, len(candidate.palette))
        return candidate

    def reload(self) -> ActiveTheme | None:
        if self._active is None:
            return None
        name = self._active.name
        return self.activate(self._definitions.get(name, self._active.definition))

    def unload(self) -> None:
        self._active = None
        self._state = RegistryState.UNLOADED

    def resolve(self, name: str, tier: int | None = None) -> Any:
        """Resolve ``name`` against the active palette; ``None`` when unknown."""

        if self._active is None:
            return None
        return self._active.resolve(name, tier)

    def faces(
        self,
        tier: int | None = None,
        *,
        enable_bold: bool = True,
        enable_italic: bool = True,
    ) -> Dict[str, Dict[str, Any]]:
        if self._active is None:
            raise RuntimeError("No theme is active")
        return self._active.faces(
            tier,
            enable_bold=enable_bold,
            enable_italic=enable_italic,
            extra_faces=self._face_overrides.get(self._active.name, ()),
        )

    def export_theme(self, theme: ThemeDefinition | str, destination: str | Path, *, indent: int = 2) -> Path:
        return dump_definition(self.definition(theme), destination, indent=indent)

    def import_theme(self, source: str | Path, *, activate: bool = False) -> ThemeDefinition:
        definition = load_definition(source)
        if activate:
            self.activate(definition)
        self.register(definition)
        return definition


theme_registry = ThemeRegistry(builtin_themes())


def load_theme(theme: ThemeDefinition | str) -> ActiveTheme:
    """Build ``theme`` from the shared registry without activating it."""

    return build_theme(theme_registry.definition(theme))


def available_themes() -> List[str]:
    return theme_registry.available_names()

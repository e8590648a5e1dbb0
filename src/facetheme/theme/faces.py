"""Declarative face specs and their compilation against a palette."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping

from ..errors import ConstructionFailure
from .palette import Palette, select_tier

__all__ = [
    "COLOR_ATTRIBUTES",
    "BOLD_WEIGHTS",
    "ITALIC_SLANTS",
    "FaceSpec",
    "merge_face_specs",
    "compile_face",
    "compile_faces",
]

LOGGER = logging.getLogger(__name__)

COLOR_ATTRIBUTES = frozenset(
    {"foreground", "background", "distant_foreground", "underline", "overline", "strike_through"}
)
BOLD_WEIGHTS = frozenset({"bold", "semi-bold", "semibold", "extra-bold", "extrabold", "ultra-bold", "heavy", "black"})
ITALIC_SLANTS = frozenset({"italic", "oblique", "reverse-italic", "reverse-oblique"})
_APPEARANCES = ("dark", "light")


def _normalize_attributes(attributes: Mapping[str, Any] | None) -> Dict[str, Any]:
    return {str(key).strip().replace("-", "_").lower(): value for key, value in (attributes or {}).items()}


@dataclass(slots=True)
class FaceSpec:
    """Style attributes for one face, optionally split by theme appearance."""

    name: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    dark: Dict[str, Any] = field(default_factory=dict)
    light: Dict[str, Any] = field(default_factory=dict)
    override: bool = False

    def __post_init__(self) -> None:
        self.name = str(self.name).strip()
        if not self.name:
            raise ValueError("Face names cannot be empty")
        self.attributes = _normalize_attributes(self.attributes)
        self.dark = _normalize_attributes(self.dark)
        self.light = _normalize_attributes(self.light)

    def attributes_for(self, appearance: str) -> Dict[str, Any]:
        merged = dict(self.attributes)
        if appearance == "dark":
            merged.update(self.dark)
        elif appearance == "light":
            merged.update(self.light)
        return merged

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = dict(self.attributes)
        if self.dark:
            payload["dark"] = dict(self.dark)
        if self.light:
            payload["light"] = dict(self.light)
        if self.override:
            payload["override"] = True
        return payload

    @classmethod
    def from_dict(cls, name: str, payload: Mapping[str, Any]) -> "FaceSpec":
        attributes = dict(payload)
        dark = attributes.pop("dark", None) or {}
        light = attributes.pop("light", None) or {}
        override = bool(attributes.pop("override", False))
        return cls(name=name, attributes=attributes, dark=dict(dark), light=dict(light), override=override)


def merge_face_specs(faces: Iterable[FaceSpec], appearance: str) -> Dict[str, Dict[str, Any]]:
    """Collapse ``faces`` into one attribute mapping per face name.

    A later spec replaces an earlier one of the same name unless it is an
    override, in which case its attributes are merged on top.
    """

    if appearance not in _APPEARANCES:
        raise ValueError(f"Appearance must be 'dark' or 'light', received {appearance!r}")
    merged: Dict[str, Dict[str, Any]] = {}
    for spec in faces:
        attributes = spec.attributes_for(appearance)
        if spec.override and spec.name in merged:
            merged[spec.name].update(attributes)
        else:
            merged[spec.name] = attributes
    return merged


def compile_face(
    attributes: Mapping[str, Any],
    palette: Palette,
    *,
    tier: int | None = None,
    enable_bold: bool = True,
    enable_italic: bool = True,
) -> Dict[str, Any]:
    resolved: Dict[str, Any] = {}
    for key, value in attributes.items():
        if value is None:
            continue
        if isinstance(value, Mapping) and "color" in value:
            # structured attributes such as underline/box styles
            value = dict(value)
            if value["color"] is not None:
                value["color"] = select_tier(palette.evaluate(value["color"]), tier)
        elif key in COLOR_ATTRIBUTES and not isinstance(value, bool):
            value = select_tier(palette.evaluate(value), tier)
            if value is None:
                continue
        elif key == "weight" and not enable_bold and str(value).lower() in BOLD_WEIGHTS:
            value = "normal"
        elif key == "slant" and not enable_italic and str(value).lower() in ITALIC_SLANTS:
            value = "normal"
        resolved[key] = value
    return resolved


def compile_faces(
    faces: Iterable[FaceSpec],
    palette: Palette,
    *,
    appearance: str = "dark",
    tier: int | None = None,
    enable_bold: bool = True,
    enable_italic: bool = True,
) -> Dict[str, Dict[str, Any]]:
    """Resolve every face in ``faces`` to concrete attributes for ``tier``."""

    compiled: Dict[str, Dict[str, Any]] = {}
    for name, attributes in merge_face_specs(faces, appearance).items():
        try:
            compiled[name] = compile_face(
                attributes,
                palette,
                tier=tier,
                enable_bold=enable_bold,
                enable_italic=enable_italic,
            )
        except ConstructionFailure as exc:
            if exc.entry is None:
                exc.entry = name
            raise
    LOGGER.debug("Compiled %d faces (appearance=%s, tier=%s)", len(compiled), appearance, tier)
    return compiled

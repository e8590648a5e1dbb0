"""Data structures describing facetheme theme definitions."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Mapping, Sequence, Tuple

from .expressions import Expression, as_expression, normalize_name
from .faces import FaceSpec

__all__ = ["ColorDefinition", "ThemeDefinition"]

ColorDefinition = Tuple[str, Expression]
ColorsLike = Mapping[str, Any] | Sequence[tuple[str, Any]]
APPEARANCES = ("dark", "light")


def _normalize_colors(colors: ColorsLike | None) -> Tuple[ColorDefinition, ...]:
    if colors is None:
        return ()
    items: Iterable[tuple[str, Any]]
    if isinstance(colors, Mapping):
        items = colors.items()
    else:
        items = colors
    return tuple((normalize_name(name), as_expression(value)) for name, value in items)


def _normalize_faces(faces: Iterable[FaceSpec | Mapping[str, Any]] | Mapping[str, Any] | None) -> Tuple[FaceSpec, ...]:
    if faces is None:
        return ()
    if isinstance(faces, Mapping):
        return tuple(FaceSpec.from_dict(name, payload or {}) for name, payload in faces.items())
    normalized: list[FaceSpec] = []
    for face in faces:
        if isinstance(face, FaceSpec):
            normalized.append(replace(face))
        elif isinstance(face, Mapping) and "name" in face:
            payload = dict(face)
            normalized.append(FaceSpec.from_dict(str(payload.pop("name")), payload))
        else:
            raise TypeError(f"Cannot interpret {face!r} as a face spec")
    return tuple(normalized)


@dataclass(slots=True)
class ThemeDefinition:
    """Serializable description of a theme: ordered colors plus face specs."""

    name: str
    title: str = ""
    appearance: str = "dark"
    colors: Tuple[ColorDefinition, ...] = ()
    faces: Tuple[FaceSpec, ...] = ()
    description: str | None = None
    version: str = "1.0.0"
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.name = (self.name or "").strip().lower()
        if not self.name:
            raise ValueError("Theme definitions need a name")
        self.title = (self.title or self.name.replace("-", " ").title()).strip()
        self.appearance = (self.appearance or "dark").strip().lower()
        if self.appearance not in APPEARANCES:
            raise ValueError(f"Theme appearance must be 'dark' or 'light', received {self.appearance!r}")
        self.colors = _normalize_colors(self.colors)
        self.faces = _normalize_faces(self.faces)
        self.metadata = dict(self.metadata or {})

    @property
    def color_names(self) -> list[str]:
        return [name for name, _ in self.colors]

    def with_faces(self, *faces: FaceSpec) -> "ThemeDefinition":
        """Return a copy with ``faces`` applied after the existing specs."""

        return replace(self, faces=self.faces + tuple(faces))

    def to_dict(self) -> Dict[str, Any]:
        faces: Dict[str, Any] = {}
        for spec in self.faces:
            # repeated names need the ordered list form
            if spec.name in faces:
                return self._to_dict_with_face_list()
            faces[spec.name] = spec.to_dict()
        payload = self._base_payload()
        payload["faces"] = faces
        return payload

    def _to_dict_with_face_list(self) -> Dict[str, Any]:
        payload = self._base_payload()
        payload["faces"] = [{"name": spec.name, **spec.to_dict()} for spec in self.faces]
        return payload

    def _base_payload(self) -> Dict[str, Any]:
        colors: Dict[str, Any] | list[list[Any]]
        if len(set(self.color_names)) == len(self.colors):
            colors = {name: expression.to_data() for name, expression in self.colors}
        else:
            colors = [[name, expression.to_data()] for name, expression in self.colors]
        return {
            "name": self.name,
            "title": self.title,
            "appearance": self.appearance,
            "description": self.description,
            "version": self.version,
            "metadata": dict(self.metadata),
            "colors": colors,
        }

    def to_json(self, *, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ThemeDefinition":
        if "name" not in payload:
            raise ValueError("Theme payload missing 'name'")
        description = payload.get("description")
        return cls(
            name=str(payload["name"]),
            title=str(payload.get("title") or ""),
            appearance=str(payload.get("appearance") or "dark"),
            colors=payload.get("colors") or {},
            faces=payload.get("faces") or {},
            description=str(description) if description is not None else None,
            version=str(payload.get("version") or "1.0.0"),
            metadata=dict(payload.get("metadata") or {}),
        )

    @classmethod
    def from_json(cls, text: str) -> "ThemeDefinition":
        data = json.loads(text)
        if not isinstance(data, Mapping):
            raise ValueError("Theme JSON root must be an object")
        return cls.from_dict(data)

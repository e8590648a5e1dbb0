"""Reading and writing theme definition files (JSON or YAML)."""

from __future__ import annotations

import io
import json
import logging
from json import JSONDecodeError
from pathlib import Path
from typing import Any, Dict, List

import jsonschema
from ruamel.yaml import YAML
from ruamel.yaml.error import MarkedYAMLError

from ..errors import ThemeFileError
from .models import ThemeDefinition

__all__ = ["THEME_SCHEMA", "YAML_SUFFIXES", "load_definition", "parse_definition", "dump_definition", "validate_payload"]

LOGGER = logging.getLogger(__name__)
MAX_SCHEMA_ERRORS = 25
YAML_SUFFIXES = frozenset({".yaml", ".yml"})

_CALL_ARGS = {"type": "array", "minItems": 2, "maxItems": 3}

THEME_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["name"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "title": {"type": ["string", "null"]},
        "appearance": {"enum": ["dark", "light"]},
        "description": {"type": ["string", "null"]},
        "version": {"type": ["string", "null"]},
        "metadata": {"type": ["object", "null"]},
        "colors": {
            "oneOf": [
                {"type": "object", "additionalProperties": {"$ref": "#/$defs/expression"}},
                {
                    "type": "array",
                    "items": {
                        "type": "array",
                        "prefixItems": [{"type": "string", "minLength": 1}, {"$ref": "#/$defs/expression"}],
                        "minItems": 2,
                        "maxItems": 2,
                    },
                },
            ]
        },
        "faces": {
            "oneOf": [
                {"type": "object", "additionalProperties": {"$ref": "#/$defs/face"}},
                {
                    "type": "array",
                    "items": {"allOf": [{"$ref": "#/$defs/face"}, {"required": ["name"]}]},
                },
            ]
        },
    },
    "$defs": {
        "expression": {
            "anyOf": [
                {"type": "null"},
                {"type": "string", "minLength": 1},
                {"type": "array", "items": {"anyOf": [{"type": "number"}, {"$ref": "#/$defs/expression"}]}},
                {
                    "type": "object",
                    "minProperties": 1,
                    "maxProperties": 1,
                    "properties": {
                        "blend": {**_CALL_ARGS, "minItems": 3},
                        "darken": {**_CALL_ARGS, "maxItems": 2},
                        "lighten": {**_CALL_ARGS, "maxItems": 2},
                    },
                    "additionalProperties": False,
                },
            ]
        },
        "face": {
            "type": ["object", "null"],
            "properties": {
                "dark": {"type": "object"},
                "light": {"type": "object"},
                "override": {"type": "boolean"},
            },
        },
    },
}


def validate_payload(payload: Any) -> List[str]:
    """Return schema violations for a decoded theme document."""

    validator = jsonschema.Draft202012Validator(THEME_SCHEMA)
    messages: List[str] = []
    for error in sorted(validator.iter_errors(payload), key=lambda item: list(map(str, item.path))):
        location = ".".join(str(part) for part in error.path) or "<root>"
        messages.append(f"{location}: {error.message}")
        if len(messages) >= MAX_SCHEMA_ERRORS:
            break
    return messages


def parse_definition(text: str, *, path: Path | str = "<string>", yaml: bool = False) -> ThemeDefinition:
    """Decode, validate and build a theme definition from ``text``."""

    payload = _decode(text, Path(path), yaml=yaml)
    problems = validate_payload(payload)
    if problems:
        raise ThemeFileError(path, problems)
    try:
        return ThemeDefinition.from_dict(payload)
    except (TypeError, ValueError) as exc:
        raise ThemeFileError(path, [str(exc)]) from exc


def load_definition(path: Path | str) -> ThemeDefinition:
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise ThemeFileError(source, [exc.strerror or str(exc)]) from exc
    definition = parse_definition(text, path=source, yaml=source.suffix.lower() in YAML_SUFFIXES)
    LOGGER.debug("Loaded theme '%s' from %s", definition.name, source)
    return definition


def dump_definition(definition: ThemeDefinition, path: Path | str, *, indent: int = 2) -> Path:
    """Write ``definition`` as YAML or JSON depending on the file suffix."""

    target = Path(path)
    # normalize tuples and other sequences into plain JSON data
    payload = json.loads(json.dumps(definition.to_dict()))
    if target.suffix.lower() in YAML_SUFFIXES:
        writer = YAML(typ="safe", pure=True)
        # colors are evaluated in declaration order
        writer.sort_base_mapping_type_on_output = False
        writer.default_flow_style = False
        writer.indent(mapping=indent, sequence=indent + 2, offset=indent)
        buffer = io.StringIO()
        writer.dump(payload, buffer)
        body = buffer.getvalue()
    else:
        body = json.dumps(payload, indent=indent)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(body, encoding="utf-8")
    return target


def _decode(text: str, path: Path, *, yaml: bool) -> Any:
    if yaml:
        parser = YAML(typ="safe")
        parser.allow_duplicate_keys = False
        try:
            return parser.load(text)
        except MarkedYAMLError as exc:
            mark = exc.problem_mark
            line = f"line {mark.line + 1}: " if mark is not None else ""
            raise ThemeFileError(path, [f"{line}{exc.problem or exc}"]) from exc
    try:
        return json.loads(text)
    except JSONDecodeError as exc:
        raise ThemeFileError(path, [f"line {exc.lineno}: {exc.msg}"]) from exc

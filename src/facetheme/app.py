"""Command line entry point for inspecting and exporting themes."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, TextIO, get_args, get_origin, get_type_hints

from . import color as colors
from .errors import ThemeError
from .services.settings import Settings, SettingsStore, parse_tier
from .theme.builtin import builtin_themes
from .theme.manager import ThemeRegistry
from .utils import logging as logging_utils

_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}
_FALSE_VALUES = {"0", "false", "no", "off", "disabled"}
_LOGGER = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    """Configure logging for one command line run."""

    level = logging.DEBUG if debug else logging.INFO
    logging_utils.setup_logging(level)
    _LOGGER.debug("Logging configured (level=%s)", logging.getLevelName(level))


def load_settings(
    path: Optional[Path] = None,
    *,
    store: SettingsStore | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Settings:
    """Load persisted settings or fall back to defaults."""

    active_store = store or SettingsStore(path)
    try:
        settings = active_store.load(overrides=overrides)
    except (OSError, ValueError) as exc:
        _LOGGER.warning("Failed to load settings from %s: %s", active_store.path, exc)
        settings = Settings()
    return settings


def build_registry(settings: Settings, theme_files: Sequence[str] = ()) -> ThemeRegistry:
    """Return a registry holding the bundled themes plus any theme files."""

    registry = ThemeRegistry(builtin_themes())
    for path in [*settings.theme_files, *theme_files]:
        registry.import_theme(Path(path).expanduser())
    return registry


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point invoked by the `facetheme` console script."""

    parser = _build_parser()
    args = parser.parse_args(argv)

    debug = args.debug or _env_flag("FACETHEME_DEBUG", default=False)
    configure_logging(debug)

    settings_path = args.settings_path or os.environ.get("FACETHEME_SETTINGS_PATH")
    resolved_path = Path(settings_path).expanduser() if settings_path else None
    settings_store = SettingsStore(resolved_path)
    try:
        cli_overrides = _coerce_cli_overrides(args.overrides or [])
    except ValueError as exc:
        print(f"Invalid --set override: {exc}", file=sys.stderr)
        return 2

    settings = load_settings(resolved_path, store=settings_store, overrides=cli_overrides or None)
    if settings.debug_logging and not debug:
        configure_logging(True)

    if args.dump_settings:
        _dump_settings(settings, settings_store, overrides=cli_overrides)
        return 0
    if args.command is None:
        parser.print_help()
        return 2

    try:
        return args.handler(args, settings)
    except ThemeError as exc:
        _LOGGER.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


def _cmd_list(args: argparse.Namespace, settings: Settings) -> int:
    registry = build_registry(settings, args.theme_files)
    for definition in registry.available():
        marker = "*" if definition.name == settings.theme else " "
        print(f"{marker} {definition.name:<20} {definition.appearance:<6} {definition.title}")
    return 0


def _cmd_palette(args: argparse.Namespace, settings: Settings) -> int:
    registry = build_registry(settings, args.theme_files)
    active = registry.activate(args.theme or settings.theme)
    tier = _effective_tier(args, settings)
    _write_json({"theme": active.name, "tier": tier, "colors": active.palette.resolved(tier)})
    return 0


def _cmd_faces(args: argparse.Namespace, settings: Settings) -> int:
    registry = build_registry(settings, args.theme_files)
    active = registry.activate(args.theme or settings.theme)
    tier = _effective_tier(args, settings)
    faces = registry.faces(
        tier,
        enable_bold=settings.enable_bold and not args.no_bold,
        enable_italic=settings.enable_italic and not args.no_italic,
    )
    _write_json({"theme": active.name, "appearance": active.definition.appearance, "tier": tier, "faces": faces})
    return 0


def _cmd_resolve(args: argparse.Namespace, settings: Settings) -> int:
    registry = build_registry(settings, args.theme_files)
    registry.activate(args.theme or settings.theme)
    value = registry.resolve(args.color, _effective_tier(args, settings))
    if value is None:
        print(f"error: '{args.color}' is not defined", file=sys.stderr)
        return 1
    print(value)
    return 0


def _cmd_blend(args: argparse.Namespace, settings: Settings) -> int:
    print(colors.blend(args.first, args.second, args.alpha))
    return 0


def _cmd_shade(args: argparse.Namespace, settings: Settings) -> int:
    operation = colors.darken if args.command == "darken" else colors.lighten
    print(operation(args.color, args.alpha))
    return 0


def _cmd_contrast(args: argparse.Namespace, settings: Settings) -> int:
    print(f"{colors.contrast_ratio(args.first, args.second):.2f}")
    return 0


def _cmd_export(args: argparse.Namespace, settings: Settings) -> int:
    registry = build_registry(settings, args.theme_files)
    path = registry.export_theme(args.theme, Path(args.destination).expanduser())
    print(path)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="facetheme",
        description="Build editor color themes from named palettes and face specs.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument(
        "--dump-settings",
        action="store_true",
        help="Print the effective settings payload and exit.",
    )
    parser.add_argument(
        "--settings-path",
        metavar="PATH",
        help="Override the default ~/.facetheme/settings.json path.",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="Override persisted settings for this run (repeatable).",
    )
    parser.add_argument(
        "--theme-file",
        dest="theme_files",
        metavar="PATH",
        action="append",
        default=[],
        help="Register a JSON/YAML theme file (repeatable).",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    listing = commands.add_parser("list", help="List registered themes.")
    listing.set_defaults(handler=_cmd_list)

    palette = commands.add_parser("palette", help="Print a theme's resolved colors as JSON.")
    palette.add_argument("theme", nargs="?", help="Theme name (defaults to the configured theme).")
    _add_tier_argument(palette)
    palette.set_defaults(handler=_cmd_palette)

    faces = commands.add_parser("faces", help="Print a theme's compiled faces as JSON.")
    faces.add_argument("theme", nargs="?", help="Theme name (defaults to the configured theme).")
    _add_tier_argument(faces)
    faces.add_argument("--no-bold", action="store_true", help="Render bold weights as normal.")
    faces.add_argument("--no-italic", action="store_true", help="Render italic slants as normal.")
    faces.set_defaults(handler=_cmd_faces)

    resolve = commands.add_parser("resolve", help="Resolve one palette color.")
    resolve.add_argument("color", help="Palette color name.")
    resolve.add_argument("--theme", help="Theme name (defaults to the configured theme).")
    _add_tier_argument(resolve)
    resolve.set_defaults(handler=_cmd_resolve)

    blend = commands.add_parser("blend", help="Blend two colors.")
    blend.add_argument("first")
    blend.add_argument("second")
    blend.add_argument("alpha", type=float, help="Weight of the first color (0-1).")
    blend.set_defaults(handler=_cmd_blend)

    for name, verb in (("darken", "black"), ("lighten", "white")):
        shade = commands.add_parser(name, help=f"Move a color toward {verb}.")
        shade.add_argument("color")
        shade.add_argument("alpha", type=float, help="Amount of change (0-1).")
        shade.set_defaults(handler=_cmd_shade)

    contrast = commands.add_parser("contrast", help="Print the WCAG contrast ratio of two colors.")
    contrast.add_argument("first")
    contrast.add_argument("second")
    contrast.set_defaults(handler=_cmd_contrast)

    export = commands.add_parser("export", help="Write a theme definition to a JSON or YAML file.")
    export.add_argument("theme")
    export.add_argument("destination")
    export.set_defaults(handler=_cmd_export)
    return parser


def _add_tier_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--tier",
        type=_tier_argument,
        default=argparse.SUPPRESS,
        help="Display capability tier such as 256, 16 or 8 ('gui' for full color).",
    )


def _tier_argument(value: str) -> int | None:
    try:
        return parse_tier(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _effective_tier(args: argparse.Namespace, settings: Settings) -> int | None:
    if hasattr(args, "tier"):
        return args.tier
    return settings.tier


def _write_json(payload: Mapping[str, Any], stream: TextIO | None = None) -> None:
    destination = stream or sys.stdout
    json.dump(payload, destination, indent=2)
    destination.write("\n")


def _env_flag(name: str, *, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _coerce_cli_overrides(items: Sequence[str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if not items:
        return overrides

    fields = Settings.__dataclass_fields__  # type: ignore[attr-defined]
    type_hints = get_type_hints(Settings)
    for entry in items:
        if "=" not in entry:
            raise ValueError(f"Override '{entry}' must use KEY=VALUE syntax.")
        key, raw_value = entry.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError("Override is missing a field name.")
        if key not in fields:
            raise ValueError(f"Unknown setting '{key}'.")
        if key == "tier":
            overrides[key] = parse_tier(raw_value)
            continue
        annotation = type_hints.get(key, fields[key].type)
        overrides[key] = _coerce_value(annotation, raw_value.strip())
    return overrides


def _coerce_value(annotation: Any, raw_value: str) -> Any:
    target = _resolve_annotation(annotation)
    normalized = raw_value.strip()

    if target is str or target is Any:
        return normalized
    if target is bool:
        return _parse_bool(normalized)
    if target is int:
        return int(normalized, 10)
    if target is list:
        try:
            return json.loads(normalized or "[]")
        except json.JSONDecodeError as exc:
            raise ValueError("List overrides must be valid JSON arrays") from exc
    if target is dict:
        try:
            return json.loads(normalized or "{}")
        except json.JSONDecodeError as exc:
            raise ValueError("Dict overrides must be valid JSON objects") from exc
    return normalized


def _resolve_annotation(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is None:
        return annotation
    if origin in {list, dict}:
        return origin
    args = [arg for arg in get_args(annotation) if arg is not type(None)]
    if not args:
        return origin
    return args[0]


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Cannot coerce '{value}' to a boolean.")


def _dump_settings(
    settings: Settings,
    store: SettingsStore,
    *,
    overrides: Mapping[str, Any],
    stream: TextIO | None = None,
) -> None:
    metadata = {
        "path": str(store.path),
        "cli_overrides": sorted(overrides.keys()),
        "environment_variables": sorted(name for name in os.environ if name.startswith("FACETHEME_")),
    }
    _write_json({"settings": asdict(settings), "meta": metadata}, stream)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

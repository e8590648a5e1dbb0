"""Unit tests for theme definitions and the theme registry."""

from __future__ import annotations

from pathlib import Path

import pytest

from facetheme import color as colors
from facetheme.errors import ConstructionFailure, UndefinedReference, UnknownTheme
from facetheme.theme import (
    FaceSpec,
    RegistryState,
    ThemeDefinition,
    ThemeRegistry,
    available_themes,
    load_theme,
)
from facetheme.theme.builtin import BASE_FACES, build_one_dark_theme, build_one_light_theme, builtin_themes


def _simple_theme(name: str = "custom", **colors_: object) -> ThemeDefinition:
    palette = colors_ or {"bg": "#000000", "fg": ["#ffffff", "#eeeeee"], "accent": {"darken": ["@fg", 0.5]}}
    return ThemeDefinition(
        name=name,
        colors=palette,
        faces=[FaceSpec("default", {"foreground": "@fg", "background": "@bg"})],
    )


def test_theme_serialization_round_trip() -> None:
    original = ThemeDefinition(
        name="Custom",
        appearance="light",
        colors={"bg": "#ffffff", "fg": ["#000000", "#111111"], "hl": {"blend": ["@bg", "@fg", 0.25]}},
        faces=[FaceSpec("region", {"background": "@hl"}, dark={"foreground": "@fg"})],
        metadata={"author": "someone"},
    )

    payload = original.to_dict()
    assert payload["name"] == "custom"
    assert payload["title"] == "Custom"
    assert payload["colors"]["hl"] == {"blend": ["@bg", "@fg", 0.25]}
    assert payload["faces"]["region"] == {"background": "@hl", "dark": {"foreground": "@fg"}}

    restored = ThemeDefinition.from_json(original.to_json())
    assert restored == original
    assert restored.color_names == ["bg", "fg", "hl"]


def test_repeated_names_serialize_as_ordered_lists() -> None:
    definition = ThemeDefinition(
        name="layered",
        colors=[("a", "#000000"), ("b", "@a"), ("a", "#ffffff")],
        faces=[FaceSpec("x", {"foreground": "@a"}), FaceSpec("x", {"background": "@b"}, override=True)],
    )

    payload = definition.to_dict()

    assert payload["colors"] == [["a", "#000000"], ["b", "@a"], ["a", "#ffffff"]]
    assert [face["name"] for face in payload["faces"]] == ["x", "x"]
    assert ThemeDefinition.from_dict(payload) == definition


def test_definition_validation() -> None:
    with pytest.raises(ValueError):
        ThemeDefinition(name="  ")
    with pytest.raises(ValueError):
        ThemeDefinition(name="x", appearance="sepia")


def test_with_faces_returns_a_copy() -> None:
    base = _simple_theme()
    extended = base.with_faces(FaceSpec("cursor", {"background": "@fg"}))

    assert len(extended.faces) == len(base.faces) + 1
    assert extended.colors == base.colors
    assert len(base.faces) == 1


def test_registry_starts_unloaded() -> None:
    registry = ThemeRegistry([_simple_theme()])

    assert registry.state is RegistryState.UNLOADED
    assert registry.active is None
    assert registry.resolve("bg") is None
    with pytest.raises(RuntimeError):
        registry.faces()


def test_registry_activate_and_resolve() -> None:
    registry = ThemeRegistry([_simple_theme()])

    active = registry.activate("Custom")

    assert registry.state is RegistryState.ACTIVE
    assert registry.active is active
    assert registry.resolve("bg") == "#000000"
    assert registry.resolve("fg", 1) == "#eeeeee"
    assert registry.resolve("accent") == colors.darken("#ffffff", 0.5)
    assert registry.resolve("missing") is None


def test_failed_activation_keeps_previous_theme() -> None:
    good = _simple_theme("good")
    broken = ThemeDefinition(name="broken", colors={"bg": "#000000", "fg": {"lighten": ["@nope", 0.5]}})
    registry = ThemeRegistry([good, broken])
    registry.activate("good")

    with pytest.raises(UndefinedReference) as excinfo:
        registry.activate("broken")

    assert isinstance(excinfo.value, ConstructionFailure)
    assert excinfo.value.theme == "broken"
    assert excinfo.value.entry == "fg"
    assert registry.active is not None and registry.active.name == "good"
    assert registry.state is RegistryState.ACTIVE
    assert registry.resolve("bg") == "#000000"


def test_failed_first_activation_stays_unloaded() -> None:
    registry = ThemeRegistry([ThemeDefinition(name="broken", colors={"bg": "#nothex"})])

    with pytest.raises(ConstructionFailure):
        registry.activate("broken")

    assert registry.state is RegistryState.UNLOADED
    assert registry.resolve("bg") is None


def test_unknown_theme_is_a_key_error() -> None:
    registry = ThemeRegistry()

    with pytest.raises(UnknownTheme) as excinfo:
        registry.activate("missing")

    assert isinstance(excinfo.value, KeyError)
    assert str(excinfo.value) == "Unknown theme 'missing'"


def test_register_without_overwrite_rejects_duplicates() -> None:
    registry = ThemeRegistry([_simple_theme()])

    with pytest.raises(ValueError):
        registry.register(_simple_theme(), overwrite=False)


def test_unload_and_reload() -> None:
    registry = ThemeRegistry([_simple_theme()])
    registry.activate("custom")
    registry.register(_simple_theme(bg="#111111"))

    reloaded = registry.reload()

    assert reloaded is not None
    assert registry.resolve("bg") == "#111111"
    registry.unload()
    assert registry.state is RegistryState.UNLOADED
    assert registry.reload() is None


def test_set_faces_customizes_active_theme() -> None:
    registry = ThemeRegistry([_simple_theme()])
    registry.set_faces("custom", FaceSpec("default", {"background": "@fg"}, override=True))
    registry.activate("custom")

    faces = registry.faces(1)
    assert faces["default"] == {"foreground": "#eeeeee", "background": "#eeeeee"}

    registry.clear_faces("custom")
    assert registry.faces(1)["default"]["background"] == "#000000"


def test_theme_registry_export_and_import(tmp_path: Path) -> None:
    registry = ThemeRegistry([_simple_theme()])
    other = ThemeRegistry([_simple_theme("fallback")])

    for suffix in (".json", ".yaml"):
        export_path = registry.export_theme("custom", tmp_path / f"theme{suffix}")
        imported = other.import_theme(export_path, activate=True)

        assert imported == registry.definition("custom")
        assert other.active is not None and other.active.name == "custom"
        assert other.resolve("accent") == colors.darken("#ffffff", 0.5)


@pytest.mark.parametrize("suffix", [".json", ".yaml"])
def test_builtin_themes_reimport_and_activate(tmp_path: Path, suffix: str) -> None:
    registry = ThemeRegistry(builtin_themes())

    for name in registry.available_names():
        path = registry.export_theme(name, tmp_path / f"{name}{suffix}")
        restored = ThemeRegistry()
        imported = restored.import_theme(path, activate=True)

        assert imported.color_names == registry.definition(name).color_names
        assert restored.resolve("fringe") == load_theme(name).resolve("fringe")


def test_definitions_do_not_share_face_specs() -> None:
    first = build_one_dark_theme()
    second = build_one_dark_theme()

    first.faces[0].attributes["foreground"] = "#ff0000"

    assert second.faces[0].attributes["foreground"] == "@fg"
    assert BASE_FACES[0].attributes["foreground"] == "@fg"


def test_builtin_themes_build_for_every_tier() -> None:
    registry = ThemeRegistry(builtin_themes())

    for name in registry.available_names():
        registry.activate(name)
        for tier in (None, 256, 16, 8, 3):
            faces = registry.faces(tier)
            assert faces["default"]["background"]
            assert faces["font-lock-keyword-face"]["weight"] == "bold"


def test_builtin_one_dark_palette() -> None:
    active = load_theme("one-dark")

    assert active.resolve("bg") == "#282c34"
    assert active.resolve("bg", 16) == "#000000"
    assert active.resolve("grey") == active.resolve("base4")
    assert active.resolve("fringe") == colors.blend("#282c34", "#21252b", 0.5)
    assert active.resolve("fringe", 16) == "#000000"


def test_builtin_one_light_overrides_mode_line() -> None:
    active = load_theme(build_one_light_theme())
    faces = active.faces()

    assert faces["mode-line"]["foreground"] == active.resolve("base8")
    assert faces["mode-line"]["background"] == active.resolve("modeline-bg")


def test_builtin_faces_reference_defined_colors() -> None:
    definition = build_one_dark_theme()
    defined = set(definition.color_names)

    for _, expression in definition.colors:
        for name in expression.references():
            assert name in defined


def test_available_themes_lists_builtins() -> None:
    assert {"one-dark", "one-light"} <= set(available_themes())

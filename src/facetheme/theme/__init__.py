"""Theme module consolidating palettes, face specs and the registry."""

from .expressions import Blend, Darken, Expression, Lighten, Literal, Ref, Tiered, as_expression
from .faces import FaceSpec, compile_faces
from .manager import (
    ActiveTheme,
    RegistryState,
    ThemeRegistry,
    available_themes,
    build_theme,
    load_theme,
    theme_registry,
)
from .models import ThemeDefinition
from .palette import TIER_INDEX, Palette, PaletteBuilder, build_palette, select_tier, tier_for_display

__all__ = [
    "ActiveTheme",
    "Blend",
    "Darken",
    "Expression",
    "FaceSpec",
    "Lighten",
    "Literal",
    "Palette",
    "PaletteBuilder",
    "Ref",
    "RegistryState",
    "TIER_INDEX",
    "ThemeDefinition",
    "ThemeRegistry",
    "Tiered",
    "as_expression",
    "available_themes",
    "build_palette",
    "build_theme",
    "compile_faces",
    "load_theme",
    "select_tier",
    "theme_registry",
    "tier_for_display",
]

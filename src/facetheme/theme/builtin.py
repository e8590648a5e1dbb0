"""Bundled themes and the base face set they share."""

from __future__ import annotations

from typing import Any, Dict, List

from .faces import FaceSpec
from .models import ThemeDefinition

__all__ = ["BASE_FACES", "build_one_dark_theme", "build_one_light_theme", "builtin_themes"]

# Every color is tiered as [gui, 256-color, 16-color].
_ONE_DARK_COLORS: Dict[str, Any] = {
    "bg": ["#282c34", "#262626", "#000000"],
    "bg-alt": ["#21252b", "#1c1c1c", "#000000"],
    "base0": ["#1b2229", "#121212", "#000000"],
    "base1": ["#1c1f24", "#1c1c1c", "#000000"],
    "base2": ["#202328", "#262626", "#000000"],
    "base3": ["#23272e", "#303030", "#7f7f7f"],
    "base4": ["#3f444a", "#3a3a3a", "#7f7f7f"],
    "base5": ["#5b6268", "#585858", "#7f7f7f"],
    "base6": ["#73797e", "#6c6c6c", "#7f7f7f"],
    "base7": ["#9ca0a4", "#a8a8a8", "#7f7f7f"],
    "base8": ["#dfdfdf", "#dfdfdf", "#ffffff"],
    "fg": ["#bbc2cf", "#bfbfbf", "#e5e5e5"],
    "fg-alt": ["#5b6268", "#2d2d2d", "#ffffff"],
    "grey": "@base4",
    "red": ["#ff6c6b", "#ff6655", "#cd0000"],
    "orange": ["#da8548", "#dd8844", "#ffff00"],
    "green": ["#98be65", "#99bb66", "#00cd00"],
    "teal": ["#4db5bd", "#44b9b1", "#00ff00"],
    "yellow": ["#ecbe7b", "#eccc77", "#cdcd00"],
    "blue": ["#51afef", "#55aaff", "#5c5cff"],
    "dark-blue": ["#2257a0", "#2255aa", "#0000ee"],
    "magenta": ["#c678dd", "#cc77dd", "#cd00cd"],
    "violet": ["#a9a1e1", "#aa99ee", "#ff00ff"],
    "cyan": ["#46d9ff", "#44ddff", "#00ffff"],
    "dark-cyan": ["#5699af", "#5599aa", "#00cdcd"],
    "highlight": "@blue",
    "vertical-bar": {"darken": ["@base1", 0.1]},
    "selection": "@dark-blue",
    "builtin": "@magenta",
    "comments": "@base5",
    "doc-comments": {"lighten": ["@base5", 0.25]},
    "constants": "@violet",
    "functions": "@magenta",
    "keywords": "@blue",
    "methods": "@cyan",
    "operators": "@blue",
    "type": "@yellow",
    "strings": "@green",
    "variables": {"lighten": ["@magenta", 0.4]},
    "numbers": "@orange",
    "region": {"darken": ["@base4", 0.1]},
    "error": "@red",
    "warning": "@yellow",
    "success": "@green",
    "vc-modified": "@orange",
    "vc-added": "@green",
    "vc-deleted": "@red",
    "fringe": {"blend": ["@bg", "@bg-alt", 0.5]},
    "modeline-bg": {"darken": ["@bg-alt", 0.15]},
    "modeline-bg-inactive": {"darken": ["@bg", 0.1]},
}

_ONE_LIGHT_COLORS: Dict[str, Any] = {
    "bg": ["#fafafa", "#ffffff", "#ffffff"],
    "bg-alt": ["#f0f0f0", "#eeeeee", "#e5e5e5"],
    "base0": ["#f0f0f0", "#f0f0f0", "#e5e5e5"],
    "base1": ["#e7e7e7", "#e4e4e4", "#e5e5e5"],
    "base2": ["#dfdfdf", "#dadada", "#e5e5e5"],
    "base3": ["#c6c7c7", "#c6c6c6", "#7f7f7f"],
    "base4": ["#9ca0a4", "#a8a8a8", "#7f7f7f"],
    "base5": ["#383a42", "#424242", "#7f7f7f"],
    "base6": ["#202328", "#2e2e2e", "#000000"],
    "base7": ["#1c1f24", "#1e1e1e", "#000000"],
    "base8": ["#1b2229", "#262626", "#000000"],
    "fg": ["#383a42", "#424242", "#000000"],
    "fg-alt": ["#c6c7c7", "#c7c7c7", "#7f7f7f"],
    "grey": "@base4",
    "red": ["#e45649", "#e45649", "#cd0000"],
    "orange": ["#da8548", "#dd8844", "#cdcd00"],
    "green": ["#50a14f", "#50a14f", "#00cd00"],
    "teal": ["#4db5bd", "#44b9b1", "#00cdcd"],
    "yellow": ["#986801", "#986801", "#cdcd00"],
    "blue": ["#4078f2", "#4078f2", "#0000ee"],
    "dark-blue": ["#a0bcf8", "#a0bcf8", "#0000ee"],
    "magenta": ["#a626a4", "#a626a4", "#cd00cd"],
    "violet": ["#b751b6", "#b751b6", "#ff00ff"],
    "cyan": ["#0184bc", "#0184bc", "#00cdcd"],
    "dark-cyan": ["#005478", "#005478", "#00cdcd"],
    "highlight": "@blue",
    "vertical-bar": "@base2",
    "selection": "@dark-blue",
    "builtin": "@magenta",
    "comments": "@base4",
    "doc-comments": {"darken": ["@base4", 0.25]},
    "constants": "@violet",
    "functions": "@magenta",
    "keywords": "@red",
    "methods": "@cyan",
    "operators": "@blue",
    "type": "@yellow",
    "strings": "@green",
    "variables": "@magenta",
    "numbers": "@orange",
    "region": {"darken": ["@bg-alt", 0.1]},
    "error": "@red",
    "warning": "@yellow",
    "success": "@green",
    "vc-modified": "@orange",
    "vc-added": "@green",
    "vc-deleted": "@red",
    "fringe": {"blend": ["@bg", "@bg-alt", 0.5]},
    "modeline-bg": {"darken": ["@bg-alt", 0.05]},
    "modeline-bg-inactive": "@bg-alt",
}

BASE_FACES: List[FaceSpec] = [
    FaceSpec("default", {"foreground": "@fg", "background": "@bg"}),
    FaceSpec("fringe", {"inherit": "default", "foreground": "@base4", "background": "@fringe"}),
    FaceSpec("cursor", {"background": "@highlight"}),
    FaceSpec("region", {"background": "@region", "distant_foreground": {"darken": ["@fg", 0.2]}, "extend": True}),
    FaceSpec("highlight", {"background": "@highlight", "foreground": "@base0", "distant_foreground": "@base8"}),
    FaceSpec("hl-line", {"background": "@bg-alt", "extend": True}),
    FaceSpec("line-number", {"inherit": "default", "foreground": "@base5", "weight": "normal", "slant": "normal"}),
    FaceSpec("line-number-current-line", {"inherit": ["hl-line", "default"], "foreground": "@fg", "weight": "normal"}),
    FaceSpec("vertical-border", {"foreground": "@vertical-bar", "background": "@vertical-bar"}),
    FaceSpec("mode-line", {"background": "@modeline-bg", "foreground": "@fg"}),
    FaceSpec("mode-line-inactive", {"background": "@modeline-bg-inactive", "foreground": "@fg-alt"}),
    FaceSpec("minibuffer-prompt", {"foreground": "@highlight"}),
    FaceSpec("link", {"foreground": "@highlight", "underline": True, "weight": "bold"}),
    FaceSpec("error", {"foreground": "@error"}),
    FaceSpec("warning", {"foreground": "@warning"}),
    FaceSpec("success", {"foreground": "@success"}),
    FaceSpec("shadow", {"foreground": "@base5"}),
    FaceSpec(
        "lazy-highlight",
        {"background": "@dark-blue", "distant_foreground": "@base0", "weight": "bold"},
        dark={"foreground": "@base8"},
        light={"foreground": "@base0"},
    ),
    FaceSpec("match", {"foreground": "@green", "background": "@base0", "weight": "bold"}),
    FaceSpec("isearch", {"inherit": "lazy-highlight", "weight": "bold"}),
    FaceSpec("show-paren-match", {"foreground": "@red", "background": "@base0", "weight": "ultra-bold"}),
    FaceSpec("show-paren-mismatch", {"foreground": "@base0", "background": "@red", "weight": "ultra-bold"}),
    FaceSpec("trailing-whitespace", {"background": "@red"}),
    FaceSpec("font-lock-builtin-face", {"foreground": "@builtin"}),
    FaceSpec("font-lock-comment-face", {"foreground": "@comments", "slant": "italic"}),
    FaceSpec("font-lock-doc-face", {"inherit": "font-lock-comment-face", "foreground": "@doc-comments"}),
    FaceSpec("font-lock-constant-face", {"foreground": "@constants"}),
    FaceSpec("font-lock-function-name-face", {"foreground": "@functions"}),
    FaceSpec("font-lock-keyword-face", {"foreground": "@keywords", "weight": "bold"}),
    FaceSpec("font-lock-string-face", {"foreground": "@strings"}),
    FaceSpec("font-lock-type-face", {"foreground": "@type"}),
    FaceSpec("font-lock-variable-name-face", {"foreground": "@variables"}),
    FaceSpec("font-lock-number-face", {"foreground": "@numbers"}),
    FaceSpec("font-lock-operator-face", {"foreground": "@operators"}),
    FaceSpec("font-lock-warning-face", {"inherit": "warning"}),
    FaceSpec("font-lock-negation-char-face", {"foreground": "@operators", "weight": "bold"}),
    FaceSpec("font-lock-preprocessor-face", {"foreground": "@operators", "weight": "bold"}),
    FaceSpec("diff-added", {"foreground": "@vc-added", "background": {"blend": ["@vc-added", "@bg", 0.1]}}),
    FaceSpec("diff-removed", {"foreground": "@vc-deleted", "background": {"blend": ["@vc-deleted", "@bg", 0.1]}}),
    FaceSpec("diff-changed", {"foreground": "@vc-modified", "background": {"blend": ["@vc-modified", "@bg", 0.1]}}),
]


def build_one_dark_theme() -> ThemeDefinition:
    return ThemeDefinition(
        name="one-dark",
        title="One Dark",
        appearance="dark",
        description="Muted dark theme with saturated syntax accents.",
        colors=_ONE_DARK_COLORS,
        faces=BASE_FACES,
    )


def build_one_light_theme() -> ThemeDefinition:
    return ThemeDefinition(
        name="one-light",
        title="One Light",
        appearance="light",
        description="Light counterpart of One Dark for well-lit rooms.",
        colors=_ONE_LIGHT_COLORS,
        faces=BASE_FACES + [FaceSpec("mode-line", {"foreground": "@base8"}, override=True)],
    )


def builtin_themes() -> List[ThemeDefinition]:
    return [build_one_dark_theme(), build_one_light_theme()]

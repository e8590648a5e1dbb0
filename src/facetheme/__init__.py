"""Editor color theme generation from named palettes and face specs."""

from .color import blend, darken, lighten, normalize, to_hex
from .errors import ConstructionFailure, InvalidColor, ThemeError, ThemeFileError, UndefinedReference, UnknownTheme

__version__ = "0.1.0"

__all__ = [
    "ConstructionFailure",
    "InvalidColor",
    "ThemeError",
    "ThemeFileError",
    "UndefinedReference",
    "UnknownTheme",
    "__version__",
    "blend",
    "darken",
    "lighten",
    "normalize",
    "to_hex",
]

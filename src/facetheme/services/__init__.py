"""Service layer helpers (settings persistence)."""

from .settings import Settings, SettingsStore, parse_tier

__all__ = ["Settings", "SettingsStore", "parse_tier"]

"""Settings dataclass and persistence helpers."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

__all__ = ["Settings", "SettingsStore", "parse_tier"]

LOGGER = logging.getLogger(__name__)
_SETTINGS_DIR = Path.home() / ".facetheme"
_DEFAULT_SETTINGS_PATH = _SETTINGS_DIR / "settings.json"
_SETTINGS_VERSION = 1
_ENV_OVERRIDES: Mapping[str, str] = {
    "FACETHEME_THEME": "theme",
}
_BOOL_ENV_OVERRIDES: Mapping[str, str] = {
    "FACETHEME_ENABLE_BOLD": "enable_bold",
    "FACETHEME_ENABLE_ITALIC": "enable_italic",
    "FACETHEME_DEBUG_LOGGING": "debug_logging",
}
_TIER_ENV = "FACETHEME_TIER"
_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}
_GUI_TIER_VALUES = {"", "gui", "none", "full", "truecolor"}


@dataclass(slots=True)
class Settings:
    """User-configurable settings persisted between sessions."""

    theme: str = "one-dark"
    enable_bold: bool = True
    enable_italic: bool = True
    tier: int | None = None
    debug_logging: bool = False
    theme_files: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


def parse_tier(value: Any) -> int | None:
    """Parse a tier setting; ``gui``/empty mean full color (``None``)."""

    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Invalid tier {value!r}")
    if isinstance(value, int):
        return value
    text = str(value).strip().lower()
    if text in _GUI_TIER_VALUES:
        return None
    try:
        return int(text, 10)
    except ValueError:
        raise ValueError(f"Invalid tier {value!r}") from None


class SettingsStore:
    """Persistence adapter for :class:`Settings`."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or _DEFAULT_SETTINGS_PATH

    @property
    def path(self) -> Path:
        """Return the resolved path backing this store."""

        return self._path

    def load(self, *, overrides: Mapping[str, Any] | None = None) -> Settings:
        """Load settings from disk, applying CLI/environment overrides when present."""

        payload = self._read_payload()
        settings = Settings()
        if payload:
            data = _filter_fields(payload)
            try:
                data["tier"] = parse_tier(data.get("tier"))
            except ValueError as exc:
                LOGGER.warning("Ignoring stored tier: %s", exc)
                data["tier"] = None
            if "theme_files" in data:
                data["theme_files"] = _coerce_theme_files(data["theme_files"])
            try:
                settings = Settings(**data)
            except TypeError as exc:
                LOGGER.warning("Settings payload contained unexpected data: %s", exc)
                settings = Settings()
            LOGGER.debug("Settings loaded from %s (theme=%s)", self._path, settings.theme)

        if overrides:
            settings = self._apply_overrides(settings, overrides, source="CLI")
            if "tier" in overrides and overrides["tier"] is None:
                settings = replace(settings, tier=None)

        return self._apply_env_overrides(settings)

    def save(self, settings: Settings) -> Path:
        """Persist settings to disk with atomic file writes."""

        data = asdict(settings)
        data["version"] = _SETTINGS_VERSION
        body = json.dumps(data, indent=2, sort_keys=True)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        tmp_path.write_text(body, encoding="utf-8")
        tmp_path.replace(self._path)
        LOGGER.debug("Settings saved to %s", self._path)
        return self._path

    def _read_payload(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            text = self._path.read_text(encoding="utf-8")
            payload = json.loads(text)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as exc:
            LOGGER.warning("Settings file %s is not valid JSON: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            LOGGER.warning("Settings file %s does not contain an object", self._path)
            return {}
        return payload

    def _apply_overrides(
        self,
        settings: Settings,
        overrides: Mapping[str, Any],
        *,
        source: str = "runtime",
    ) -> Settings:
        allowed = {field.name for field in fields(Settings)}
        filtered: Dict[str, Any] = {}
        for key, value in overrides.items():
            if key not in allowed or value is None:
                continue
            filtered[key] = value
        if filtered:
            LOGGER.debug("Applying %s settings overrides: %s", source, sorted(filtered))
            settings = replace(settings, **filtered)
        return settings

    def _apply_env_overrides(self, settings: Settings) -> Settings:
        overrides: Dict[str, Any] = {}
        for env_name, field_name in _ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is not None:
                overrides[field_name] = value
        for env_name, field_name in _BOOL_ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is not None:
                overrides[field_name] = value.strip().lower() in _TRUE_VALUES
        tier_value = os.environ.get(_TIER_ENV)
        tier_override = False
        if tier_value is not None:
            try:
                tier = parse_tier(tier_value)
                tier_override = True
            except ValueError:
                LOGGER.warning("Environment override %s=%s is not a valid tier", _TIER_ENV, tier_value)
        if overrides:
            settings = self._apply_overrides(settings, overrides, source="environment")
        if tier_override:
            # ``None`` selects full color and must survive the override filter
            settings = replace(settings, tier=tier)
        return settings


def _coerce_theme_files(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return list(value)
    LOGGER.warning("Ignoring stored theme_files: expected a list of paths, got %r", value)
    return []


def _filter_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    allowed = {field.name for field in fields(Settings)}
    result: Dict[str, Any] = {}
    for key, value in payload.items():
        if key not in allowed:
            continue
        result[key] = value
    return result

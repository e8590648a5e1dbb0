"""Shared pytest fixtures."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from facetheme.theme.palette import Palette, build_palette


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in list(os.environ):
        if name.startswith("FACETHEME_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("FACETHEME_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("FACETHEME_SETTINGS_PATH", str(tmp_path / "settings.json"))


@pytest.fixture
def sample_palette() -> Palette:
    return build_palette(
        [
            ("fg", ["#bbc2cf", "#bfbfbf", "#e5e5e5"]),
            ("bg", "#282c34"),
            ("blue", "#51afef"),
            ("red", ["#ff0000", "#aa0000", "#880000"]),
        ]
    )

from __future__ import annotations

import copy
from collections.abc import Iterator
from pathlib import Path

import pytest

from checkpilot.config.paths import reset_paths
from checkpilot.config.settings import settings


@pytest.fixture(autouse=True)
def isolate_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Prevent tests from persisting settings to disk."""
    original_data = copy.deepcopy(settings._data)

    def _noop_save() -> None:
        return None

    monkeypatch.setattr(settings, "_save", _noop_save)
    try:
        yield
    finally:
        settings._data = original_data


@pytest.fixture(autouse=True)
def isolate_paths(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Iterator[None]:
    """Keep global config lookups inside the test's temp directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    reset_paths()
    try:
        yield
    finally:
        reset_paths()

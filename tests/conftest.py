"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
for _path in (_PROJECT_ROOT / "src", _PROJECT_ROOT):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

from tests.fixture_paths import read_fixture_text  # noqa: E402


@pytest.fixture
def sample_export_xml() -> str:
    """CHB export with Amsterdam, Utrecht and edge-case stop places."""
    return read_fixture_text("chb/export_sample.xml")


@pytest.fixture
def single_stop_export_xml() -> str:
    """Unprefixed export with one stop place holding one bare quay."""
    return read_fixture_text("chb/export_single_stop.xml")


@pytest.fixture
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Clear Halte environment variables and point the data root at tmp_path."""
    for name in ("HALTE_LOCALITY", "HALTE_SOURCE_URL", "HALTE_HTTP_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HALTE_DATA_ROOT", str(tmp_path / "data"))
    return tmp_path

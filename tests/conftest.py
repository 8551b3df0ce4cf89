"""Shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import AppSettings


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return AppSettings(
        _env_file=None,
        local_repository=tmp_path / "m2",
        scratch_dir=tmp_path / "scratch",
    )

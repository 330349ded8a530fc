"""Configure an isolated test environment for the Quome CLI."""

from __future__ import annotations
import os
from collections.abc import Iterator
from pathlib import Path
import pytest
from quome import config


@pytest.fixture(autouse=True)
def isolated_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Iterator[Path]:
    """Point config at a temp dir, run from a clean cwd, drop ``QUOME_*`` vars."""
    for name in list(os.environ):
        if name.startswith("QUOME_"):
            monkeypatch.delenv(name)
    config_dir = tmp_path / "config"
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.setenv("QUOME_CONFIG_DIR", str(config_dir))
    monkeypatch.chdir(workdir)
    config._load_settings.cache_clear()
    yield config_dir
    config._load_settings.cache_clear()


@pytest.fixture()
def config_dir(isolated_env: Path) -> Path:
    return isolated_env


@pytest.fixture()
def workdir(tmp_path: Path) -> Path:
    return tmp_path / "work"

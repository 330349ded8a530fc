"""Shared fixtures for CLI tests."""

from __future__ import annotations
from collections.abc import Callable
from pathlib import Path
from uuid import UUID
import pytest
from typer.testing import CliRunner
from quome.config import get_config_path
from quome.state import ConfigStore, LinkedContext, PersistedConfig, current_dir_key


USER_ID = UUID("0a2c0b6e-8f43-4a53-9d0e-1c2f3a4b5c6d")
ORG_ID = UUID("11111111-1111-1111-1111-111111111111")
APP_ID = UUID("22222222-2222-2222-2222-222222222222")
STAMP = "2024-01-01T00:00:00Z"


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def env(isolated_env: Path) -> dict[str, str]:
    return {
        "QUOME_API_URL": "http://api.test",
        "QUOME_CONFIG_DIR": str(isolated_env),
        "NO_COLOR": "1",
        "COLUMNS": "200",
    }


@pytest.fixture()
def store(isolated_env: Path) -> ConfigStore:
    return ConfigStore(get_config_path())


@pytest.fixture()
def logged_in(store: ConfigStore) -> Callable[..., PersistedConfig]:
    """Return a helper that persists a credential and optional link."""

    def _persist(*, org: bool = True, app: bool = True) -> PersistedConfig:
        config = PersistedConfig()
        config.set_credential("stored-token", USER_ID, "dev@example.com")
        if org:
            config.set_linked(
                current_dir_key(),
                LinkedContext(
                    org_id=ORG_ID,
                    org_name="Acme",
                    app_id=APP_ID if app else None,
                    app_name="web" if app else None,
                ),
            )
        store.save(config)
        return config

    return _persist


@pytest.fixture()
def user_json() -> dict[str, str]:
    return {
        "id": str(USER_ID),
        "email": "dev@example.com",
        "name": "Dev User",
        "created_at": STAMP,
        "updated_at": STAMP,
    }


@pytest.fixture()
def org_json() -> dict[str, str]:
    return {
        "id": str(ORG_ID),
        "name": "Acme",
        "created_at": STAMP,
        "updated_at": STAMP,
    }


@pytest.fixture()
def app_json() -> dict[str, object]:
    return {
        "id": str(APP_ID),
        "name": "web",
        "organization_id": str(ORG_ID),
        "created_at": STAMP,
        "updated_at": STAMP,
        "spec": {"containers": [{"name": "web", "image": "nginx", "port": 80}]},
    }

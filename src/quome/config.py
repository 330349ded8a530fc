"""Runtime configuration helpers for the Quome CLI."""

from __future__ import annotations
import os
from functools import lru_cache
from pathlib import Path
from dynaconf import Dynaconf


CONFIG_DIR_ENV = "QUOME_CONFIG_DIR"
SETTINGS_FILENAME = "settings.json"
CONFIG_FILENAME = "config.json"

_DEFAULTS: dict[str, object] = {
    "API_URL": "https://demo.quome.cloud",
    "DOCS_URL": "https://docs.quome.com",
    "WEBSITE_URL": "https://quome.com",
    "TIMEOUT": 30.0,
    "LOG_LEVEL": "WARNING",
}

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def get_config_dir() -> Path:
    """Return the directory holding ``config.json`` and ``settings.json``."""
    override = os.getenv(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".quome"


def get_config_path() -> Path:
    """Return the path of the persisted credential and link file."""
    return get_config_dir() / CONFIG_FILENAME


def _settings_files() -> list[str]:
    # Later files win: the working directory overrides the global file.
    return [
        str(get_config_dir() / SETTINGS_FILENAME),
        str(Path.cwd() / SETTINGS_FILENAME),
    ]


def _build_loader() -> Dynaconf:
    """Create a Dynaconf loader wired to settings files and ``QUOME_*`` vars."""
    return Dynaconf(
        envvar_prefix="QUOME",
        settings_files=_settings_files(),
        load_dotenv=False,
        environments=False,
    )


def _normalize_url(value: object, key: str) -> str:
    url = str(value).strip().rstrip("/")
    if not url.startswith(("http://", "https://")):
        msg = f"QUOME_{key} must be an http(s) URL, got {value!r}."
        raise ValueError(msg)
    return url


def _normalize_settings(source: Dynaconf) -> Dynaconf:
    """Validate and fill defaults on the raw Dynaconf settings."""
    normalized = Dynaconf(
        envvar_prefix="QUOME",
        settings_files=[],
        load_dotenv=False,
        environments=False,
    )

    for key in ("API_URL", "DOCS_URL", "WEBSITE_URL"):
        raw = source.get(key) or _DEFAULTS[key]
        normalized.set(key, _normalize_url(raw, key))

    timeout_raw = source.get("TIMEOUT", _DEFAULTS["TIMEOUT"])
    try:
        timeout = float(timeout_raw)
    except (TypeError, ValueError) as exc:
        msg = "QUOME_TIMEOUT must be a number of seconds."
        raise ValueError(msg) from exc
    if timeout <= 0:
        msg = "QUOME_TIMEOUT must be greater than zero."
        raise ValueError(msg)
    normalized.set("TIMEOUT", timeout)

    level = str(source.get("LOG_LEVEL") or _DEFAULTS["LOG_LEVEL"]).upper()
    if level not in _LOG_LEVELS:
        msg = f"QUOME_LOG_LEVEL must be one of {', '.join(sorted(_LOG_LEVELS))}."
        raise ValueError(msg)
    normalized.set("LOG_LEVEL", level)

    return normalized


@lru_cache(maxsize=1)
def _load_settings() -> Dynaconf:
    """Load settings once and cache the normalized Dynaconf instance."""
    return _normalize_settings(_build_loader())


def get_settings(*, refresh: bool = False) -> Dynaconf:
    """Return the cached Dynaconf settings, reloading them if requested."""
    if refresh:
        _load_settings.cache_clear()
    return _load_settings()


def resolve_api_url(explicit: str | None, settings: Dynaconf | None = None) -> str:
    """Return the API base URL, preferring an explicit command line value.

    Below the explicit value the order is ``QUOME_API_URL``, the local
    ``settings.json``, the global ``settings.json`` and the built-in default;
    Dynaconf applies that part when the settings are loaded.
    """
    if explicit:
        return _normalize_url(explicit, "API_URL")
    settings = settings if settings is not None else get_settings()
    return str(settings.API_URL)


__all__ = [
    "CONFIG_DIR_ENV",
    "CONFIG_FILENAME",
    "SETTINGS_FILENAME",
    "get_config_dir",
    "get_config_path",
    "get_settings",
    "resolve_api_url",
]

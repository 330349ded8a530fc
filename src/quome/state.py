"""Persisted credential and linked-directory state for the Quome CLI.

The record lives in a single JSON file (``~/.quome/config.json`` by default)::

    {
      "user": {"token": "...", "id": "<uuid>", "email": "..."} | null,
      "linked": {"/abs/path": {"org_id": "<uuid>", "org_name": "...",
                               "app_id": "<uuid>" | null, "app_name": ... }}
    }

Mutations on :class:`PersistedConfig` are in-memory only. Callers persist them
with :meth:`ConfigStore.save`, which replaces the file atomically.
"""

from __future__ import annotations
import logging
import os
import tempfile
from pathlib import Path
from uuid import UUID
from pydantic import BaseModel, Field, ValidationError
from quome.errors import CorruptStateError


logger = logging.getLogger(__name__)


class Credential(BaseModel):
    """API key and display identity of the logged-in user."""

    token: str
    id: UUID
    email: str


class LinkedContext(BaseModel):
    """Organization and application defaults saved for one directory.

    ``org_name`` and ``app_name`` are display caches. Identity is carried by
    the ids only.
    """

    org_id: UUID
    org_name: str
    app_id: UUID | None = None
    app_name: str | None = None


class PersistedConfig(BaseModel):
    """Complete on-disk record: optional credential plus linked directories."""

    user: Credential | None = None
    linked: dict[str, LinkedContext] = Field(default_factory=dict)

    def set_credential(self, token: str, user_id: UUID, email: str) -> None:
        """Replace the stored credential."""
        self.user = Credential(token=token, id=user_id, email=email)

    def clear_credential(self) -> None:
        """Forget the stored credential."""
        self.user = None

    def get_linked(self, key: str) -> LinkedContext | None:
        """Return the context linked to exactly ``key``, if any."""
        return self.linked.get(key)

    def set_linked(self, key: str, context: LinkedContext) -> None:
        """Link ``key`` to ``context``, overwriting any previous link."""
        self.linked[key] = context

    def clear_linked(self, key: str) -> bool:
        """Remove the link for ``key`` and report whether one existed."""
        return self.linked.pop(key, None) is not None


def current_dir_key(cwd: Path | None = None) -> str:
    """Return the canonical key for ``cwd`` (defaults to the working directory)."""
    directory = cwd if cwd is not None else Path.cwd()
    return str(directory.expanduser().resolve())


class ConfigStore:
    """Load and atomically save :class:`PersistedConfig` at a fixed path."""

    def __init__(self, path: Path) -> None:
        """Bind the store to ``path``."""
        self.path = path

    def load(self) -> PersistedConfig:
        """Return the persisted record, or an empty one if the file is absent."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No config at %s, using defaults", self.path)
            return PersistedConfig()
        except UnicodeDecodeError as exc:
            raise CorruptStateError(self.path, "not UTF-8 text") from exc
        try:
            config = PersistedConfig.model_validate_json(raw)
        except ValidationError as exc:
            raise CorruptStateError(
                self.path, f"{exc.error_count()} validation error(s)"
            ) from exc
        logger.debug(
            "Loaded config from %s (%d linked directories)",
            self.path,
            len(config.linked),
        )
        return config

    def save(self, config: PersistedConfig) -> None:
        """Write ``config`` by replacing the file with a fully written copy.

        The temporary file is created in the target directory so that the
        final :func:`os.replace` is a same-filesystem rename.
        """
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        payload = config.model_dump_json(indent=2)

        handle = tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=directory,
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            delete=False,
        )
        tmp_path = Path(handle.name)
        try:
            with handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.debug("Saved config to %s", self.path)


__all__ = [
    "ConfigStore",
    "Credential",
    "LinkedContext",
    "PersistedConfig",
    "current_dir_key",
]

"""Resolve the effective token, organization and application per invocation."""

from __future__ import annotations
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TypeVar
from uuid import UUID
from quome.errors import (
    InvalidInputError,
    NoLinkedAppError,
    NoLinkedOrgError,
    NotLoggedInError,
    QuomeError,
)
from quome.state import LinkedContext, PersistedConfig


TOKEN_ENV = "QUOME_TOKEN"
ORG_ENV = "QUOME_ORG"
APP_ENV = "QUOME_APP"

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class ResolvedContext:
    """Token and identifiers that apply to one command invocation."""

    token: str
    org_id: UUID
    app_id: UUID | None = None


def parse_uuid(value: str | UUID, *, label: str) -> UUID:
    """Parse ``value`` as a UUID or raise :class:`InvalidInputError`."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(value.strip())
    except ValueError as exc:
        raise InvalidInputError(f"{label} is not a valid UUID: {value!r}") from exc


def _parse_token(value: str, *, label: str) -> str:
    token = value.strip()
    if not token:
        raise InvalidInputError(f"{label} is empty")
    return token


class ContextResolver:
    """Apply explicit > environment > persisted precedence to each field.

    Each field is resolved independently. A value that is present but
    malformed at a tier fails immediately instead of falling through to a
    lower tier.
    """

    def __init__(
        self,
        config: PersistedConfig,
        *,
        cwd_key: str,
        env: Mapping[str, str] | None = None,
    ) -> None:
        """Bind the resolver to persisted state, a directory key and an env."""
        self._config = config
        self._cwd_key = cwd_key
        self._env = dict(env or {})

    def linked(self) -> LinkedContext | None:
        """Return the context linked to the current directory, if any."""
        return self._config.get_linked(self._cwd_key)

    def _resolve(
        self,
        *,
        explicit: str | T | None,
        flag: str,
        env_var: str,
        persisted: T | None,
        parse: Callable[..., T],
        missing: Callable[[], QuomeError],
    ) -> T:
        if explicit is not None:
            return parse(explicit, label=flag)
        env_value = self._env.get(env_var)
        if env_value is not None:
            return parse(env_value, label=env_var)
        if persisted is not None:
            return persisted
        raise missing()

    def resolve_token(self, explicit: str | None = None) -> str:
        """Return the API token or raise :class:`NotLoggedInError`."""
        user = self._config.user
        return self._resolve(
            explicit=explicit,
            flag="--token",
            env_var=TOKEN_ENV,
            persisted=user.token if user else None,
            parse=_parse_token,
            missing=NotLoggedInError,
        )

    def resolve_org(self, explicit: str | UUID | None = None) -> UUID:
        """Return the organization id or raise :class:`NoLinkedOrgError`."""
        linked = self.linked()
        return self._resolve(
            explicit=explicit,
            flag="--org",
            env_var=ORG_ENV,
            persisted=linked.org_id if linked else None,
            parse=parse_uuid,
            missing=NoLinkedOrgError,
        )

    def resolve_app(self, explicit: str | UUID | None = None) -> UUID:
        """Return the application id or raise :class:`NoLinkedAppError`."""
        linked = self.linked()
        return self._resolve(
            explicit=explicit,
            flag="--app",
            env_var=APP_ENV,
            persisted=linked.app_id if linked else None,
            parse=parse_uuid,
            missing=NoLinkedAppError,
        )

    def resolve(
        self,
        *,
        token: str | None = None,
        org: str | UUID | None = None,
        app: str | UUID | None = None,
        require_app: bool = False,
    ) -> ResolvedContext:
        """Resolve the token, the organization and optionally the application."""
        resolved_token = self.resolve_token(token)
        org_id = self.resolve_org(org)
        app_id = self.resolve_app(app) if require_app else None
        return ResolvedContext(token=resolved_token, org_id=org_id, app_id=app_id)


__all__ = [
    "APP_ENV",
    "ORG_ENV",
    "TOKEN_ENV",
    "ContextResolver",
    "ResolvedContext",
    "parse_uuid",
]

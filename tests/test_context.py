"""Tests for token, organization and application resolution."""

from __future__ import annotations
from uuid import UUID
import pytest
from quome.context import APP_ENV, ORG_ENV, TOKEN_ENV, ContextResolver, parse_uuid
from quome.errors import (
    InvalidInputError,
    NoLinkedAppError,
    NoLinkedOrgError,
    NotLoggedInError,
)
from quome.state import LinkedContext, PersistedConfig


USER_ID = UUID("0a2c0b6e-8f43-4a53-9d0e-1c2f3a4b5c6d")
LINKED_ORG = UUID("11111111-1111-1111-1111-111111111111")
LINKED_APP = UUID("22222222-2222-2222-2222-222222222222")
ENV_ORG = UUID("33333333-3333-3333-3333-333333333333")
FLAG_ORG = UUID("44444444-4444-4444-4444-444444444444")
CWD = "/work/project"


def _config(*, logged_in: bool = True, linked: bool = True) -> PersistedConfig:
    config = PersistedConfig()
    if logged_in:
        config.set_credential("stored-token", USER_ID, "dev@example.com")
    if linked:
        config.set_linked(
            CWD,
            LinkedContext(
                org_id=LINKED_ORG,
                org_name="Acme",
                app_id=LINKED_APP,
                app_name="web",
            ),
        )
    return config


@pytest.mark.parametrize(
    ("linked", "explicit", "env", "expected"),
    [
        (True, None, {}, LINKED_ORG),
        (True, None, {ORG_ENV: str(ENV_ORG)}, ENV_ORG),
        (True, str(FLAG_ORG), {ORG_ENV: str(ENV_ORG)}, FLAG_ORG),
        (True, str(FLAG_ORG), {}, FLAG_ORG),
        (False, str(FLAG_ORG), {}, FLAG_ORG),
        (False, None, {ORG_ENV: str(ENV_ORG)}, ENV_ORG),
        (False, str(FLAG_ORG), {ORG_ENV: str(ENV_ORG)}, FLAG_ORG),
    ],
)
def test_org_precedence(
    linked: bool, explicit: str | None, env: dict[str, str], expected: UUID
) -> None:
    resolver = ContextResolver(_config(linked=linked), cwd_key=CWD, env=env)

    assert resolver.resolve_org(explicit) == expected


def test_org_without_any_source_is_not_linked() -> None:
    resolver = ContextResolver(_config(linked=False), cwd_key=CWD, env={})

    with pytest.raises(NoLinkedOrgError):
        resolver.resolve_org()


def test_token_precedence() -> None:
    config = _config()

    assert ContextResolver(config, cwd_key=CWD).resolve_token() == "stored-token"
    env_resolver = ContextResolver(config, cwd_key=CWD, env={TOKEN_ENV: "env-token"})
    assert env_resolver.resolve_token() == "env-token"
    assert env_resolver.resolve_token("flag-token") == "flag-token"


def test_malformed_env_does_not_fall_through() -> None:
    resolver = ContextResolver(_config(), cwd_key=CWD, env={ORG_ENV: "not-a-uuid"})

    with pytest.raises(InvalidInputError) as excinfo:
        resolver.resolve_org()

    assert ORG_ENV in excinfo.value.detail


def test_blank_env_token_is_rejected() -> None:
    resolver = ContextResolver(_config(), cwd_key=CWD, env={TOKEN_ENV: "   "})

    with pytest.raises(InvalidInputError):
        resolver.resolve_token()


def test_malformed_flag_is_rejected() -> None:
    resolver = ContextResolver(_config(), cwd_key=CWD)

    with pytest.raises(InvalidInputError) as excinfo:
        resolver.resolve_app("abc")

    assert "--app" in excinfo.value.detail


def test_missing_values_raise_specific_errors() -> None:
    resolver = ContextResolver(
        _config(logged_in=False, linked=False), cwd_key=CWD
    )

    with pytest.raises(NotLoggedInError):
        resolver.resolve_token()
    with pytest.raises(NoLinkedOrgError):
        resolver.resolve_org()
    with pytest.raises(NoLinkedAppError):
        resolver.resolve_app()


def test_link_applies_only_to_exact_directory() -> None:
    resolver = ContextResolver(_config(), cwd_key=f"{CWD}/subdir")

    assert resolver.linked() is None
    with pytest.raises(NoLinkedOrgError):
        resolver.resolve_org()


def test_org_only_link_requires_app_from_elsewhere() -> None:
    config = _config(linked=False)
    config.set_linked(CWD, LinkedContext(org_id=LINKED_ORG, org_name="Acme"))
    resolver = ContextResolver(config, cwd_key=CWD)

    with pytest.raises(NoLinkedAppError):
        resolver.resolve(require_app=True)

    env_resolver = ContextResolver(
        config, cwd_key=CWD, env={APP_ENV: str(LINKED_APP)}
    )
    resolved = env_resolver.resolve(require_app=True)
    assert resolved.org_id == LINKED_ORG
    assert resolved.app_id == LINKED_APP


def test_resolve_without_app() -> None:
    resolved = ContextResolver(_config(), cwd_key=CWD).resolve()

    assert resolved.token == "stored-token"
    assert resolved.org_id == LINKED_ORG
    assert resolved.app_id is None


def test_parse_uuid_strips_whitespace() -> None:
    assert parse_uuid(f"  {LINKED_ORG} ", label="id") == LINKED_ORG
    assert parse_uuid(LINKED_ORG, label="id") is LINKED_ORG

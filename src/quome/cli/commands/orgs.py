"""Organization, member and API key commands."""

from __future__ import annotations
from datetime import UTC, datetime, timedelta
from typing import Annotated
import typer
from quome import api
from quome.api.models import AddOrgMemberRequest, CreateOrgKeyRequest, CreateOrgRequest
from quome.cli.options import ForceOption, JsonOption, OrgOption
from quome.cli.render import (
    format_timestamp,
    render_json,
    render_kv_section,
    render_success,
    render_table,
)
from quome.cli.utils import confirm_or_abort, get_state
from quome.context import parse_uuid


orgs_app = typer.Typer(help="Manage organizations.")
members_app = typer.Typer(help="Manage organization members.")
keys_app = typer.Typer(help="Manage organization API keys.")

MAX_KEY_DAYS = 36500


@orgs_app.command("list")
def list_orgs(ctx: typer.Context, json_output: JsonOption = False) -> None:
    """List organizations you belong to."""
    state = get_state(ctx)
    token = state.resolver().resolve_token()
    with state.transport(token) as transport:
        organizations = api.list_orgs(transport).organizations

    if json_output:
        render_json(state.console, organizations)
        return
    if not organizations:
        state.console.print("No organizations found.")
        return
    render_table(
        state.console,
        title="Organizations",
        columns=("Name", "ID", "Created"),
        rows=[
            (org.name, str(org.id), format_timestamp(org.created_at))
            for org in organizations
        ],
    )


@orgs_app.command("create")
def create_org(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Organization name.")],
    json_output: JsonOption = False,
) -> None:
    """Create an organization."""
    state = get_state(ctx)
    token = state.resolver().resolve_token()
    with state.transport(token) as transport:
        organization = api.create_org(transport, CreateOrgRequest(name=name))

    if json_output:
        render_json(state.console, organization)
        return
    render_kv_section(
        state.console,
        title="Organization Created",
        pairs=[("Name", organization.name), ("ID", str(organization.id))],
    )


@orgs_app.command("get")
def get_org(
    ctx: typer.Context,
    org: OrgOption = None,
    json_output: JsonOption = False,
) -> None:
    """Show organization details."""
    state = get_state(ctx)
    resolved = state.resolve(org=org)
    with state.transport(resolved.token) as transport:
        organization = api.get_org(transport, resolved.org_id)

    if json_output:
        render_json(state.console, organization)
        return
    render_kv_section(
        state.console,
        title=organization.name,
        pairs=[
            ("ID", str(organization.id)),
            ("Created", format_timestamp(organization.created_at)),
            ("Updated", format_timestamp(organization.updated_at)),
        ],
    )


@members_app.command("list")
def list_members(
    ctx: typer.Context,
    org: OrgOption = None,
    json_output: JsonOption = False,
) -> None:
    """List members of the organization."""
    state = get_state(ctx)
    resolved = state.resolve(org=org)
    with state.transport(resolved.token) as transport:
        members = api.list_org_members(transport, resolved.org_id).members

    if json_output:
        render_json(state.console, members)
        return
    if not members:
        state.console.print("No members found.")
        return
    render_table(
        state.console,
        title="Members",
        columns=("User ID", "Joined"),
        rows=[
            (str(member.user_id), format_timestamp(member.created_at))
            for member in members
        ],
    )


@members_app.command("add")
def add_member(
    ctx: typer.Context,
    user_id: Annotated[str, typer.Argument(help="ID of the user to add.")],
    org: OrgOption = None,
    json_output: JsonOption = False,
) -> None:
    """Add a user to the organization."""
    state = get_state(ctx)
    request = AddOrgMemberRequest(user_id=parse_uuid(user_id, label="user ID"))
    resolved = state.resolve(org=org)
    with state.transport(resolved.token) as transport:
        member = api.add_org_member(transport, resolved.org_id, request)

    if json_output:
        render_json(state.console, member)
        return
    render_success(state.console, f"Added user {member.user_id} to the organization.")


@keys_app.command("list")
def list_keys(
    ctx: typer.Context,
    org: OrgOption = None,
    json_output: JsonOption = False,
) -> None:
    """List API keys of the organization."""
    state = get_state(ctx)
    resolved = state.resolve(org=org)
    with state.transport(resolved.token) as transport:
        keys = api.list_org_keys(transport, resolved.org_id).keys

    if json_output:
        render_json(state.console, keys)
        return
    if not keys:
        state.console.print("No API keys found.")
        return
    render_table(
        state.console,
        title="API Keys",
        columns=("ID", "Hash", "Created"),
        rows=[
            (str(key.id), key.key_hash[:12], format_timestamp(key.created_at))
            for key in keys
        ],
    )


@keys_app.command("create")
def create_key(
    ctx: typer.Context,
    expires_days: Annotated[
        int,
        typer.Option(
            "--expires-days",
            min=0,
            max=MAX_KEY_DAYS,
            help="Days until expiration (0 = never expires).",
        ),
    ] = 0,
    org: OrgOption = None,
    json_output: JsonOption = False,
) -> None:
    """Create an API key. The key is shown only once."""
    state = get_state(ctx)
    expiration = None
    if expires_days > 0:
        expiration = datetime.now(tz=UTC) + timedelta(days=expires_days)
    resolved = state.resolve(org=org)
    with state.transport(resolved.token) as transport:
        created = api.create_org_key(
            transport, resolved.org_id, CreateOrgKeyRequest(expiration=expiration)
        )

    if json_output:
        render_json(state.console, created)
        return
    render_kv_section(
        state.console,
        title="API Key Created",
        pairs=[("ID", str(created.id)), ("Key", created.key)],
    )
    state.console.print(
        "[yellow]Store this key now; it cannot be retrieved again.[/yellow]"
    )


@keys_app.command("delete")
def delete_key(
    ctx: typer.Context,
    key_id: Annotated[str, typer.Argument(help="API key ID.")],
    org: OrgOption = None,
    force: ForceOption = False,
) -> None:
    """Revoke an API key."""
    state = get_state(ctx)
    parsed_id = parse_uuid(key_id, label="API key ID")
    resolved = state.resolve(org=org)
    confirm_or_abort(f"Delete API key {parsed_id}?", force=force)
    with state.transport(resolved.token) as transport:
        api.delete_org_key(transport, resolved.org_id, parsed_id)
    render_success(state.console, f"Deleted API key {parsed_id}.")


__all__ = ["keys_app", "members_app", "orgs_app"]

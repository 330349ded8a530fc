"""Secret commands.

Secrets are addressed by name on the command line. Each command lists the
organization's secrets to find the id, then acts on that id.
"""

from __future__ import annotations
from typing import Annotated
from uuid import UUID
import typer
from quome import api
from quome.api.models import CreateSecretRequest, Secret, UpdateSecretRequest
from quome.cli.options import ForceOption, JsonOption, OrgOption
from quome.cli.render import (
    format_timestamp,
    render_json,
    render_kv_section,
    render_success,
    render_table,
)
from quome.cli.utils import confirm_or_abort, get_state
from quome.errors import NotFoundError
from quome.http import Transport


secrets_app = typer.Typer(help="Manage organization secrets.")

NameArgument = Annotated[str, typer.Argument(help="Secret name.")]


def _find_secret(transport: Transport, org_id: UUID, name: str) -> Secret | None:
    for secret in api.list_secrets(transport, org_id).secrets:
        if secret.name == name:
            return secret
    return None


def _require_secret(transport: Transport, org_id: UUID, name: str) -> Secret:
    secret = _find_secret(transport, org_id, name)
    if secret is None:
        raise NotFoundError(f"Secret '{name}'")
    return secret


@secrets_app.command("list")
def list_secrets(
    ctx: typer.Context,
    org: OrgOption = None,
    json_output: JsonOption = False,
) -> None:
    """List secret names (values are not shown)."""
    state = get_state(ctx)
    resolved = state.resolve(org=org)
    with state.transport(resolved.token) as transport:
        secrets = api.list_secrets(transport, resolved.org_id).secrets

    if json_output:
        render_json(state.console, secrets)
        return
    if not secrets:
        state.console.print("No secrets found.")
        return
    render_table(
        state.console,
        title="Secrets",
        columns=("Name", "ID", "Updated"),
        rows=[
            (secret.name, str(secret.id), format_timestamp(secret.updated_at))
            for secret in secrets
        ],
    )


@secrets_app.command("set")
def set_secret(
    ctx: typer.Context,
    name: NameArgument,
    value: Annotated[str, typer.Argument(help="Secret value.")],
    description: Annotated[
        str | None, typer.Option("--description", "-d", help="Description.")
    ] = None,
    org: OrgOption = None,
    json_output: JsonOption = False,
) -> None:
    """Create a secret, or update it if the name already exists."""
    state = get_state(ctx)
    resolved = state.resolve(org=org)
    with state.transport(resolved.token) as transport:
        existing = _find_secret(transport, resolved.org_id, name)
        if existing is not None:
            secret = api.update_secret(
                transport,
                resolved.org_id,
                existing.id,
                UpdateSecretRequest(value=value, description=description),
            )
        else:
            secret = api.create_secret(
                transport,
                resolved.org_id,
                CreateSecretRequest(name=name, value=value, description=description),
            )

    if json_output:
        render_json(state.console, secret)
        return
    action = "Updated" if existing is not None else "Created"
    render_kv_section(
        state.console,
        title=f"{action} secret",
        pairs=[("Name", secret.name), ("ID", str(secret.id))],
    )


@secrets_app.command("get")
def get_secret(
    ctx: typer.Context,
    name: NameArgument,
    org: OrgOption = None,
    json_output: JsonOption = False,
) -> None:
    """Print a secret's value."""
    state = get_state(ctx)
    resolved = state.resolve(org=org)
    with state.transport(resolved.token) as transport:
        meta = _require_secret(transport, resolved.org_id, name)
        secret = api.get_secret(transport, resolved.org_id, meta.id)

    if json_output:
        render_json(state.console, secret)
        return
    typer.echo(secret.value or "")


@secrets_app.command("delete")
def delete_secret(
    ctx: typer.Context,
    name: NameArgument,
    org: OrgOption = None,
    force: ForceOption = False,
) -> None:
    """Delete a secret."""
    state = get_state(ctx)
    resolved = state.resolve(org=org)
    confirm_or_abort(f"Delete secret '{name}'?", force=force)
    with state.transport(resolved.token) as transport:
        secret = _require_secret(transport, resolved.org_id, name)
        api.delete_secret(transport, resolved.org_id, secret.id)
    render_success(state.console, f"Deleted secret '{name}'.")


__all__ = ["secrets_app"]

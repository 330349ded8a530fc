"""Link and unlink the current directory to an organization and app."""

from __future__ import annotations
from collections.abc import Sequence
from typing import Annotated
from uuid import UUID
import click
import typer
from quome import api
from quome.cli.render import render_kv_section, render_success, render_table
from quome.cli.state import CLIState
from quome.cli.utils import get_state
from quome.context import parse_uuid
from quome.http import Transport
from quome.state import LinkedContext


def _choose(
    state: CLIState,
    *,
    title: str,
    options: Sequence[tuple[UUID, str]],
    allow_skip: bool = False,
) -> tuple[UUID, str] | None:
    """Prompt for one of ``options`` by number; ``0`` skips when allowed."""
    rows = [
        (str(index), name, str(item_id))
        for index, (item_id, name) in enumerate(options, start=1)
    ]
    if allow_skip:
        rows.append(("0", "(skip)", ""))
    render_table(state.console, title=title, columns=("#", "Name", "ID"), rows=rows)
    lower = 0 if allow_skip else 1
    choice = typer.prompt(
        f"Select {title.lower().rstrip('s')}",
        type=click.IntRange(lower, len(options)),
    )
    if choice == 0:
        return None
    return options[choice - 1]


def _select_org(
    state: CLIState, transport: Transport, org: str | None
) -> tuple[UUID, str] | None:
    if org is not None:
        organization = api.get_org(transport, parse_uuid(org, label="--org"))
        return organization.id, organization.name
    organizations = api.list_orgs(transport).organizations
    if not organizations:
        state.console.print(
            "No organizations found. Create one with `quome orgs create <name>`."
        )
        return None
    return _choose(
        state,
        title="Organizations",
        options=[(item.id, item.name) for item in organizations],
    )


def _select_app(
    state: CLIState, transport: Transport, org_id: UUID, app: str | None
) -> tuple[UUID, str] | None:
    if app is not None:
        application = api.get_app(transport, org_id, parse_uuid(app, label="--app"))
        return application.id, application.name
    apps = api.list_apps(transport, org_id).apps
    if not apps:
        state.console.print("No applications found in this organization.")
        return None
    return _choose(
        state,
        title="Applications",
        options=[(item.id, item.name) for item in apps],
        allow_skip=True,
    )


def link(
    ctx: typer.Context,
    org: Annotated[
        str | None,
        typer.Option("--org", help="Organization ID (skips interactive selection)."),
    ] = None,
    app: Annotated[
        str | None,
        typer.Option("--app", help="Application ID (skips interactive selection)."),
    ] = None,
) -> None:
    """Link the current directory to an organization and application."""
    state = get_state(ctx)
    token = state.resolver().resolve_token()

    # Names are always re-fetched so the cached display values match the API.
    with state.transport(token) as transport:
        selected_org = _select_org(state, transport, org)
        if selected_org is None:
            return
        org_id, org_name = selected_org
        selected_app = _select_app(state, transport, org_id, app)

    app_id, app_name = selected_app if selected_app else (None, None)
    state.config.set_linked(
        state.cwd_key,
        LinkedContext(
            org_id=org_id, org_name=org_name, app_id=app_id, app_name=app_name
        ),
    )
    state.save_config()

    pairs = [("Directory", state.cwd_key), ("Organization", org_name)]
    if app_name:
        pairs.append(("Application", app_name))
    render_kv_section(state.console, title="Linked", pairs=pairs)


def unlink(ctx: typer.Context) -> None:
    """Remove the link for the current directory."""
    state = get_state(ctx)
    if not state.config.clear_linked(state.cwd_key):
        state.console.print("Not linked to any organization or application.")
        return
    state.save_config()
    render_success(state.console, "Unlinked current directory.")


__all__ = ["link", "unlink"]

"""Login, logout and whoami commands."""

from __future__ import annotations
from typing import Annotated
import typer
from quome import api
from quome.cli.options import JsonOption
from quome.cli.render import render_json, render_kv_section, render_success
from quome.cli.utils import get_state
from quome.context import APP_ENV, ORG_ENV
from quome.errors import InvalidInputError


def login(
    ctx: typer.Context,
    token: Annotated[
        str | None,
        typer.Option("--token", "-t", help="API key (prompted when omitted)."),
    ] = None,
) -> None:
    """Log in with an API key generated from the Quome dashboard."""
    state = get_state(ctx)
    if token is None:
        token = typer.prompt("API Key", hide_input=True)
    token = token.strip()
    if not token:
        raise InvalidInputError("API key must not be empty")

    # The key is only persisted once the API has accepted it.
    with state.transport(token) as transport:
        user = api.get_current_user(transport)

    state.config.set_credential(token, user.id, user.email)
    state.save_config()

    render_kv_section(
        state.console,
        title="Logged in",
        pairs=[("Email", user.email), ("User ID", str(user.id))],
    )


def logout(ctx: typer.Context) -> None:
    """Forget the stored API key."""
    state = get_state(ctx)
    if state.config.user is None:
        state.console.print("Not logged in.")
        return
    state.config.clear_credential()
    state.save_config()
    render_success(state.console, "Logged out successfully.")


def whoami(ctx: typer.Context, json_output: JsonOption = False) -> None:
    """Show the logged-in user and the linked context."""
    state = get_state(ctx)
    token = state.resolver().resolve_token()
    with state.transport(token) as transport:
        user = api.get_current_user(transport)

    if json_output:
        render_json(state.console, user)
        return

    pairs = [("ID", str(user.id)), ("Name", user.name), ("Email", user.email)]
    resolver = state.resolver()
    linked = resolver.linked()
    if linked is not None:
        pairs.append(("Linked organization", linked.org_name))
        if linked.app_name:
            pairs.append(("Linked application", linked.app_name))
    # Environment overrides apply to this invocation only.
    if ORG_ENV in state.env:
        pairs.append((f"Organization ({ORG_ENV})", str(resolver.resolve_org())))
    if APP_ENV in state.env:
        pairs.append((f"Application ({APP_ENV})", str(resolver.resolve_app())))
    render_kv_section(state.console, title=user.name, pairs=pairs)


__all__ = ["login", "logout", "whoami"]

"""Organization event command."""

from __future__ import annotations
from typing import Annotated
import typer
from quome import api
from quome.cli.options import JsonOption, OrgOption
from quome.cli.render import format_timestamp, render_json, render_table
from quome.cli.utils import get_state


def events(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", min=1, help="Number of events to fetch."),
    ] = 50,
    org: OrgOption = None,
    json_output: JsonOption = False,
) -> None:
    """Show recent organization events."""
    state = get_state(ctx)
    resolved = state.resolve(org=org)
    with state.transport(resolved.token) as transport:
        items = api.list_events(transport, resolved.org_id, limit=limit).events

    if json_output:
        render_json(state.console, items)
        return
    if not items:
        state.console.print("No events found.")
        return
    render_table(
        state.console,
        title="Events",
        columns=("Time", "Type", "Actor", "Resource"),
        rows=[
            (
                format_timestamp(event.created_at),
                event.type,
                event.actor.email,
                event.resource.name or f"{event.resource.type} {event.resource.id}",
            )
            for event in items
        ],
    )


__all__ = ["events"]

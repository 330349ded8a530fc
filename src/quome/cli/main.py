"""Quome CLI entrypoint."""

from __future__ import annotations
import os
import sys
from typing import Annotated
import click
import typer
from rich.console import Console
from rich.markup import escape
from quome.cli.commands.agent import agent_app
from quome.cli.commands.apps import apps_app, deployments_app, logs
from quome.cli.commands.auth import login, logout, whoami
from quome.cli.commands.databases import db_app
from quome.cli.commands.events import events
from quome.cli.commands.link import link, unlink
from quome.cli.commands.orgs import keys_app, members_app, orgs_app
from quome.cli.commands.secrets import secrets_app
from quome.cli.state import CLIState
from quome.config import get_config_path, get_settings, resolve_api_url
from quome.errors import QuomeError
from quome.logging_config import configure_logging
from quome.state import ConfigStore, current_dir_key


app = typer.Typer(help="Command line interface for the Quome cloud platform.")
app.command()(login)
app.command()(logout)
app.command()(whoami)
app.command()(link)
app.command()(unlink)
app.command()(logs)
app.command()(events)
app.add_typer(orgs_app, name="orgs")
app.add_typer(members_app, name="members")
app.add_typer(keys_app, name="keys")
app.add_typer(apps_app, name="apps")
app.add_typer(deployments_app, name="deployments")
app.add_typer(secrets_app, name="secrets")
app.add_typer(db_app, name="db")
app.add_typer(agent_app, name="agent")


@app.callback()
def main(
    ctx: typer.Context,
    api_url: Annotated[
        str | None,
        typer.Option("--api-url", help="Override the Quome API URL."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log requests at INFO level."),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Log at DEBUG level."),
    ] = False,
) -> None:
    """Configure shared CLI state before executing a command."""
    try:
        settings = get_settings(refresh=True)
        base_url = resolve_api_url(api_url, settings)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    else:
        level = str(settings.LOG_LEVEL)
    configure_logging(level)

    ctx.obj = CLIState(
        store=ConfigStore(get_config_path()),
        cwd_key=current_dir_key(),
        api_url=base_url,
        timeout=float(settings.TIMEOUT),
        env=dict(os.environ),
        console=Console(),
    )


def _print_error(console: Console, message: str, hint: str | None = None) -> None:
    console.print(f"[bold red]error:[/] {escape(message)}", highlight=False)
    if hint:
        console.print(hint, markup=False, highlight=False)


def run() -> None:
    """Entry point used by console scripts."""
    console = Console(stderr=True)
    try:
        app(standalone_mode=False)
    except click.UsageError as exc:
        _print_error(console, exc.format_message())
        if exc.ctx and exc.ctx.command_path:
            console.print(
                f"Run '{exc.ctx.command_path} --help' for usage information.",
                markup=False,
            )
        sys.exit(exc.exit_code)
    except click.Abort:
        _print_error(console, "Aborted.")
        sys.exit(1)
    except QuomeError as exc:
        _print_error(console, exc.message, exc.hint)
        sys.exit(1)


__all__ = ["app", "main", "run"]

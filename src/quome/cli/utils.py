"""Shared helpers used across CLI command modules."""

from __future__ import annotations
import typer
from .state import CLIState


def get_state(ctx: typer.Context) -> CLIState:
    """Return the CLI state stored on the Typer context object."""
    obj = ctx.find_root().obj
    if not isinstance(obj, CLIState):  # pragma: no cover
        msg = "CLI state has not been initialised"
        raise RuntimeError(msg)
    return obj


def confirm_or_abort(message: str, *, force: bool) -> None:
    """Ask for confirmation unless ``force`` is set; exit quietly on refusal."""
    if force:
        return
    if not typer.confirm(message, default=False):
        typer.echo("Cancelled.")
        raise typer.Exit(code=0)


__all__ = ["confirm_or_abort", "get_state"]

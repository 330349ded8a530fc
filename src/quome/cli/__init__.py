"""Typer command line interface for Quome."""

from quome.cli.main import app, run


__all__ = ["app", "run"]

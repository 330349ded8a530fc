"""Command modules registered on the top-level Typer app."""

"""Reusable Typer option declarations."""

from __future__ import annotations
from typing import Annotated
import typer


OrgOption = Annotated[
    str | None,
    typer.Option("--org", help="Organization ID (uses linked org if not provided)."),
]
AppOption = Annotated[
    str | None,
    typer.Option("--app", help="Application ID (uses linked app if not provided)."),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Output as JSON."),
]
ForceOption = Annotated[
    bool,
    typer.Option("--force", "-f", help="Skip confirmation prompt."),
]

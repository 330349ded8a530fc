"""Managed database commands."""

from __future__ import annotations
from typing import Annotated
import typer
from quome import api
from quome.api.models import (
    ComputeRequested,
    CreateDatabaseRequest,
    DatabaseCompute,
    DatabasePostgres,
    DatabaseReplicas,
    DatabaseStorage,
    StorageRequested,
    UpdateDatabaseRequest,
)
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
from quome.errors import InvalidInputError


db_app = typer.Typer(help="Manage databases.")

DatabaseArgument = Annotated[str, typer.Argument(help="Database ID.")]


@db_app.command("list")
def list_databases(
    ctx: typer.Context,
    org: OrgOption = None,
    json_output: JsonOption = False,
) -> None:
    """List managed databases."""
    state = get_state(ctx)
    resolved = state.resolve(org=org)
    with state.transport(resolved.token) as transport:
        databases = api.list_databases(transport, resolved.org_id).databases

    if json_output:
        render_json(state.console, databases)
        return
    if not databases:
        state.console.print("No databases found.")
        return
    render_table(
        state.console,
        title="Databases",
        columns=("Name", "ID", "State", "Postgres"),
        rows=[
            (
                db.name,
                str(db.id),
                str(db.status.state) if db.status else "",
                str(db.postgres.major_version),
            )
            for db in databases
        ],
    )


@db_app.command("create")
def create_database(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Database name.")],
    postgres_version: Annotated[
        int, typer.Option("--postgres-version", help="PostgreSQL major version.")
    ] = 17,
    vcpu: Annotated[str, typer.Option("--vcpu", help="Number of vCPUs.")] = "1",
    memory: Annotated[
        str, typer.Option("--memory", help="Memory allocation, e.g. 2Gi.")
    ] = "2Gi",
    disk: Annotated[
        str, typer.Option("--disk", help="Disk space, e.g. 1024Mi.")
    ] = "1024Mi",
    replicas: Annotated[
        int, typer.Option("--replicas", min=1, help="Number of replicas.")
    ] = 1,
    org: OrgOption = None,
    json_output: JsonOption = False,
) -> None:
    """Provision a managed Postgres database."""
    state = get_state(ctx)
    if postgres_version not in (15, 16, 17):
        raise InvalidInputError("--postgres-version must be 15, 16 or 17")
    request = CreateDatabaseRequest(
        name=name,
        compute=DatabaseCompute(
            requested=ComputeRequested(vcpu=vcpu, memory=memory)
        ),
        storage=DatabaseStorage(requested=StorageRequested(disk_space=disk)),
        replicas=DatabaseReplicas(requested=replicas),
        postgres=DatabasePostgres(major_version=postgres_version),
    )
    resolved = state.resolve(org=org)
    with state.transport(resolved.token) as transport:
        database = api.create_database(transport, resolved.org_id, request)

    if json_output:
        render_json(state.console, database)
        return
    render_kv_section(
        state.console,
        title="Database Created",
        pairs=[("Name", database.name), ("ID", str(database.id))],
    )


@db_app.command("get")
def get_database(
    ctx: typer.Context,
    database_id: DatabaseArgument,
    org: OrgOption = None,
    json_output: JsonOption = False,
) -> None:
    """Show database details."""
    state = get_state(ctx)
    parsed_id = parse_uuid(database_id, label="database ID")
    resolved = state.resolve(org=org)
    with state.transport(resolved.token) as transport:
        database = api.get_database(transport, resolved.org_id, parsed_id)

    if json_output:
        render_json(state.console, database)
        return
    requested = database.compute.requested
    render_kv_section(
        state.console,
        title=database.name,
        pairs=[
            ("ID", str(database.id)),
            ("State", str(database.status.state) if database.status else "unknown"),
            ("Postgres", str(database.postgres.major_version)),
            ("Compute", f"{requested.vcpu} vCPU / {requested.memory}"),
            ("Disk", database.storage.requested.disk_space),
            ("Replicas", str(database.replicas.requested)),
            ("Created", format_timestamp(database.created_at)),
        ],
    )


@db_app.command("update")
def update_database(
    ctx: typer.Context,
    database_id: DatabaseArgument,
    name: Annotated[str | None, typer.Option("--name", help="New name.")] = None,
    vcpu: Annotated[str | None, typer.Option("--vcpu", help="Number of vCPUs.")] = None,
    memory: Annotated[
        str | None, typer.Option("--memory", help="Memory allocation, e.g. 2Gi.")
    ] = None,
    disk: Annotated[
        str | None, typer.Option("--disk", help="Disk space, e.g. 1024Mi.")
    ] = None,
    replicas: Annotated[
        int | None, typer.Option("--replicas", min=1, help="Number of replicas.")
    ] = None,
    org: OrgOption = None,
    json_output: JsonOption = False,
) -> None:
    """Rename or resize a database.

    ``--vcpu`` and ``--memory`` are sent together, so both must be given.
    """
    state = get_state(ctx)
    parsed_id = parse_uuid(database_id, label="database ID")
    if (vcpu is None) != (memory is None):
        raise InvalidInputError("--vcpu and --memory must be given together")
    request = UpdateDatabaseRequest(
        name=name,
        compute=(
            DatabaseCompute(requested=ComputeRequested(vcpu=vcpu, memory=memory))
            if vcpu is not None and memory is not None
            else None
        ),
        storage=(
            DatabaseStorage(requested=StorageRequested(disk_space=disk))
            if disk is not None
            else None
        ),
        replicas=DatabaseReplicas(requested=replicas) if replicas is not None else None,
    )
    if not request.model_dump(exclude_none=True):
        raise InvalidInputError("nothing to update")
    resolved = state.resolve(org=org)
    with state.transport(resolved.token) as transport:
        database = api.update_database(transport, resolved.org_id, parsed_id, request)

    if json_output:
        render_json(state.console, database)
        return
    render_success(state.console, f"Updated database {database.name}.")


@db_app.command("delete")
def delete_database(
    ctx: typer.Context,
    database_id: DatabaseArgument,
    org: OrgOption = None,
    force: ForceOption = False,
) -> None:
    """Delete a managed database."""
    state = get_state(ctx)
    parsed_id = parse_uuid(database_id, label="database ID")
    resolved = state.resolve(org=org)
    confirm_or_abort(f"Delete database {parsed_id}?", force=force)
    with state.transport(resolved.token) as transport:
        api.delete_database(transport, resolved.org_id, parsed_id)
    render_success(state.console, f"Deleted database {parsed_id}.")


__all__ = ["db_app"]

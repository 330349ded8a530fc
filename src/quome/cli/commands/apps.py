"""Application, deployment and log commands."""

from __future__ import annotations
from typing import Annotated
import typer
from rich.markup import escape
from rich.text import Text
from quome import api
from quome.api.models import (
    AppSpec,
    ContainerSpec,
    CreateAppRequest,
    DeploymentStatus,
    LogLevel,
    UpdateAppRequest,
)
from quome.cli.options import AppOption, ForceOption, JsonOption, OrgOption
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


apps_app = typer.Typer(help="Manage applications.")
deployments_app = typer.Typer(help="Inspect deployments.")

_STATUS_STYLES = {
    DeploymentStatus.CREATED: "dim",
    DeploymentStatus.IN_PROGRESS: "yellow",
    DeploymentStatus.DEPLOYED: "green",
    DeploymentStatus.SUCCESS: "green",
    DeploymentStatus.FAILED: "red",
}

_LEVEL_STYLES = {
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "blue",
    LogLevel.WARN: "yellow",
    LogLevel.ERROR: "red",
}


@apps_app.command("list")
def list_apps(
    ctx: typer.Context,
    org: OrgOption = None,
    json_output: JsonOption = False,
) -> None:
    """List applications of the organization."""
    state = get_state(ctx)
    resolved = state.resolve(org=org)
    with state.transport(resolved.token) as transport:
        apps = api.list_apps(transport, resolved.org_id).apps

    if json_output:
        render_json(state.console, apps)
        return
    if not apps:
        state.console.print("No applications found.")
        return
    render_table(
        state.console,
        title="Applications",
        columns=("Name", "ID", "Updated"),
        rows=[
            (app.name, str(app.id), format_timestamp(app.updated_at)) for app in apps
        ],
    )


@apps_app.command("create")
def create_app(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Application name.")],
    image: Annotated[
        str, typer.Option("--image", help="Container image, e.g. nginx:latest.")
    ],
    port: Annotated[
        int, typer.Option("--port", min=1, max=65535, help="Container port.")
    ] = 80,
    description: Annotated[
        str | None, typer.Option("--description", "-d", help="Description.")
    ] = None,
    org: OrgOption = None,
    json_output: JsonOption = False,
) -> None:
    """Create an application running a single container."""
    state = get_state(ctx)
    request = CreateAppRequest(
        name=name,
        description=description,
        spec=AppSpec(containers=[ContainerSpec(name=name, image=image, port=port)]),
    )
    resolved = state.resolve(org=org)
    with state.transport(resolved.token) as transport:
        app = api.create_app(transport, resolved.org_id, request)

    if json_output:
        render_json(state.console, app)
        return
    render_kv_section(
        state.console,
        title="Application Created",
        pairs=[("Name", app.name), ("ID", str(app.id))],
    )


@apps_app.command("get")
def get_app(
    ctx: typer.Context,
    app: AppOption = None,
    org: OrgOption = None,
    json_output: JsonOption = False,
) -> None:
    """Show application details."""
    state = get_state(ctx)
    resolved = state.resolve(org=org, app=app, require_app=True)
    with state.transport(resolved.token) as transport:
        application = api.get_app(transport, resolved.org_id, resolved.app_id)

    if json_output:
        render_json(state.console, application)
        return
    pairs = [
        ("ID", str(application.id)),
        ("Description", application.description or ""),
        ("Created", format_timestamp(application.created_at)),
        ("Updated", format_timestamp(application.updated_at)),
    ]
    if application.spec is not None:
        for container in application.spec.containers:
            pairs.append(
                (f"Container {container.name}", f"{container.image}:{container.port}")
            )
    render_kv_section(state.console, title=application.name, pairs=pairs)


@apps_app.command("update")
def update_app(
    ctx: typer.Context,
    name: Annotated[str | None, typer.Option("--name", help="New name.")] = None,
    description: Annotated[
        str | None, typer.Option("--description", help="New description.")
    ] = None,
    app: AppOption = None,
    org: OrgOption = None,
    json_output: JsonOption = False,
) -> None:
    """Rename an application or change its description."""
    state = get_state(ctx)
    if name is None and description is None:
        raise InvalidInputError("pass --name and/or --description")
    resolved = state.resolve(org=org, app=app, require_app=True)
    request = UpdateAppRequest(name=name, description=description)
    with state.transport(resolved.token) as transport:
        application = api.update_app(
            transport, resolved.org_id, resolved.app_id, request
        )

    if json_output:
        render_json(state.console, application)
        return
    render_success(state.console, f"Updated application {application.name}.")


@apps_app.command("delete")
def delete_app(
    ctx: typer.Context,
    app: AppOption = None,
    org: OrgOption = None,
    force: ForceOption = False,
) -> None:
    """Delete an application."""
    state = get_state(ctx)
    resolved = state.resolve(org=org, app=app, require_app=True)
    confirm_or_abort(f"Delete application {resolved.app_id}?", force=force)
    with state.transport(resolved.token) as transport:
        api.delete_app(transport, resolved.org_id, resolved.app_id)
    render_success(state.console, f"Deleted application {resolved.app_id}.")


@deployments_app.command("list")
def list_deployments(
    ctx: typer.Context,
    app: AppOption = None,
    org: OrgOption = None,
    json_output: JsonOption = False,
) -> None:
    """List deployments of the application."""
    state = get_state(ctx)
    resolved = state.resolve(org=org, app=app, require_app=True)
    with state.transport(resolved.token) as transport:
        deployments = api.list_deployments(
            transport, resolved.org_id, resolved.app_id
        ).deployments

    if json_output:
        render_json(state.console, deployments)
        return
    if not deployments:
        state.console.print("No deployments found.")
        return
    render_table(
        state.console,
        title="Deployments",
        columns=("ID", "Status", "Created"),
        rows=[
            (
                str(deployment.id),
                Text(str(deployment.status), style=_STATUS_STYLES[deployment.status]),
                format_timestamp(deployment.created_at),
            )
            for deployment in deployments
        ],
    )


@deployments_app.command("get")
def get_deployment(
    ctx: typer.Context,
    deployment_id: Annotated[str, typer.Argument(help="Deployment ID.")],
    app: AppOption = None,
    org: OrgOption = None,
    json_output: JsonOption = False,
) -> None:
    """Show a deployment and its events."""
    state = get_state(ctx)
    parsed_id = parse_uuid(deployment_id, label="deployment ID")
    resolved = state.resolve(org=org, app=app, require_app=True)
    with state.transport(resolved.token) as transport:
        deployment = api.get_deployment(
            transport, resolved.org_id, resolved.app_id, parsed_id
        )

    if json_output:
        render_json(state.console, deployment)
        return
    pairs = [
        ("ID", str(deployment.id)),
        ("Status", str(deployment.status)),
        ("Created", format_timestamp(deployment.created_at)),
        ("Updated", format_timestamp(deployment.updated_at)),
    ]
    if deployment.failure_message:
        pairs.append(("Failure", deployment.failure_message))
    render_kv_section(state.console, title="Deployment", pairs=pairs)
    for event in deployment.events:
        stamp = format_timestamp(event.created_at)
        state.console.print(f"{stamp}  {escape(event.message)}")


def logs(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", min=1, help="Number of log entries to fetch."),
    ] = 100,
    app: AppOption = None,
    org: OrgOption = None,
    json_output: JsonOption = False,
) -> None:
    """Show recent application logs."""
    state = get_state(ctx)
    resolved = state.resolve(org=org, app=app, require_app=True)
    with state.transport(resolved.token) as transport:
        entries = api.get_logs(
            transport, resolved.org_id, resolved.app_id, limit=limit
        ).logs

    if json_output:
        render_json(state.console, entries)
        return
    if not entries:
        state.console.print("No logs found.")
        return
    for entry in entries:
        style = _LEVEL_STYLES[entry.level]
        state.console.print(
            f"[dim]{entry.timestamp:%Y-%m-%d %H:%M:%S}[/] "
            f"[{style}]{entry.level.upper():<5}[/] {escape(entry.message)}",
            highlight=False,
        )


__all__ = ["apps_app", "deployments_app", "logs"]

"""Application, deployment and log endpoints."""

from __future__ import annotations
from uuid import UUID
from quome.api.models import (
    App,
    AppList,
    CreateAppRequest,
    Deployment,
    DeploymentList,
    LogList,
    UpdateAppRequest,
)
from quome.api.paths import limit_params, org_path
from quome.http import Transport


def list_apps(transport: Transport, org_id: UUID) -> AppList:
    """List applications of an organization."""
    return transport.get(org_path(org_id, "apps"), AppList)


def create_app(transport: Transport, org_id: UUID, request: CreateAppRequest) -> App:
    """Create an application."""
    return transport.post(org_path(org_id, "apps"), request, App)


def get_app(transport: Transport, org_id: UUID, app_id: UUID) -> App:
    """Fetch one application."""
    return transport.get(org_path(org_id, "apps", app_id), App)


def update_app(
    transport: Transport, org_id: UUID, app_id: UUID, request: UpdateAppRequest
) -> App:
    """Update an application; fields left as ``None`` are not sent."""
    return transport.put(org_path(org_id, "apps", app_id), request, App)


def delete_app(transport: Transport, org_id: UUID, app_id: UUID) -> None:
    """Delete an application."""
    transport.delete(org_path(org_id, "apps", app_id))


def list_deployments(
    transport: Transport, org_id: UUID, app_id: UUID
) -> DeploymentList:
    """List deployments of an application."""
    path = org_path(org_id, "apps", app_id, "deployments")
    return transport.get(path, DeploymentList)


def get_deployment(
    transport: Transport, org_id: UUID, app_id: UUID, deployment_id: UUID
) -> Deployment:
    """Fetch one deployment with its events."""
    path = org_path(org_id, "apps", app_id, "deployments", deployment_id)
    return transport.get(path, Deployment)


def get_logs(
    transport: Transport, org_id: UUID, app_id: UUID, limit: int | None = None
) -> LogList:
    """Fetch the most recent application log lines."""
    return transport.get(
        org_path(org_id, "apps", app_id, "logs"), LogList, params=limit_params(limit)
    )

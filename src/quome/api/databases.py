"""Managed database endpoints."""

from __future__ import annotations
from uuid import UUID
from quome.api.models import (
    CreateDatabaseRequest,
    Database,
    DatabaseList,
    UpdateDatabaseRequest,
)
from quome.api.paths import org_path
from quome.http import Transport


def list_databases(transport: Transport, org_id: UUID) -> DatabaseList:
    """List managed databases of an organization."""
    return transport.get(org_path(org_id, "dbaas"), DatabaseList)


def create_database(
    transport: Transport, org_id: UUID, request: CreateDatabaseRequest
) -> Database:
    """Provision a managed database."""
    return transport.post(org_path(org_id, "dbaas"), request, Database)


def get_database(transport: Transport, org_id: UUID, database_id: UUID) -> Database:
    """Fetch one managed database."""
    return transport.get(org_path(org_id, "dbaas", database_id), Database)


def update_database(
    transport: Transport,
    org_id: UUID,
    database_id: UUID,
    request: UpdateDatabaseRequest,
) -> Database:
    """Resize or rename a managed database."""
    return transport.put(org_path(org_id, "dbaas", database_id), request, Database)


def delete_database(transport: Transport, org_id: UUID, database_id: UUID) -> None:
    """Delete a managed database."""
    transport.delete(org_path(org_id, "dbaas", database_id))

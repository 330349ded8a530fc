"""Organization event endpoints."""

from __future__ import annotations
from uuid import UUID
from quome.api.models import EventList
from quome.api.paths import limit_params, org_path
from quome.http import Transport


def list_events(
    transport: Transport, org_id: UUID, limit: int | None = None
) -> EventList:
    """List the most recent audit events of an organization."""
    return transport.get(
        org_path(org_id, "events"), EventList, params=limit_params(limit)
    )

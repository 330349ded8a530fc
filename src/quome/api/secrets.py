"""Secret endpoints."""

from __future__ import annotations
from uuid import UUID
from quome.api.models import (
    CreateSecretRequest,
    Secret,
    SecretList,
    UpdateSecretRequest,
)
from quome.api.paths import org_path
from quome.http import Transport


def list_secrets(transport: Transport, org_id: UUID) -> SecretList:
    """List secrets of an organization without their values."""
    return transport.get(org_path(org_id, "secrets"), SecretList)


def create_secret(
    transport: Transport, org_id: UUID, request: CreateSecretRequest
) -> Secret:
    """Create a secret."""
    return transport.post(org_path(org_id, "secrets"), request, Secret)


def get_secret(transport: Transport, org_id: UUID, secret_id: UUID) -> Secret:
    """Fetch one secret including its value."""
    return transport.get(
        org_path(org_id, "secrets", secret_id), Secret, params={"reveal": "true"}
    )


def update_secret(
    transport: Transport,
    org_id: UUID,
    secret_id: UUID,
    request: UpdateSecretRequest,
) -> Secret:
    """Update a secret's value or description."""
    return transport.put(org_path(org_id, "secrets", secret_id), request, Secret)


def delete_secret(transport: Transport, org_id: UUID, secret_id: UUID) -> None:
    """Delete a secret."""
    transport.delete(org_path(org_id, "secrets", secret_id))

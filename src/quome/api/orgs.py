"""Organization, member and API key endpoints."""

from __future__ import annotations
from uuid import UUID
from quome.api.models import (
    AddOrgMemberRequest,
    CreatedOrgKey,
    CreateOrgKeyRequest,
    CreateOrgRequest,
    Organization,
    OrganizationList,
    OrgKeyList,
    OrgMember,
    OrgMemberList,
)
from quome.api.paths import API_PREFIX, org_path
from quome.http import Transport


def list_orgs(transport: Transport) -> OrganizationList:
    """List organizations the caller belongs to."""
    return transport.get(f"{API_PREFIX}/orgs", OrganizationList)


def create_org(transport: Transport, request: CreateOrgRequest) -> Organization:
    """Create an organization."""
    return transport.post(f"{API_PREFIX}/orgs", request, Organization)


def get_org(transport: Transport, org_id: UUID) -> Organization:
    """Fetch one organization."""
    return transport.get(org_path(org_id), Organization)


def list_org_members(transport: Transport, org_id: UUID) -> OrgMemberList:
    """List members of an organization."""
    return transport.get(org_path(org_id, "members"), OrgMemberList)


def add_org_member(
    transport: Transport, org_id: UUID, request: AddOrgMemberRequest
) -> OrgMember:
    """Add an existing user to an organization."""
    return transport.post(org_path(org_id, "members"), request, OrgMember)


def list_org_keys(transport: Transport, org_id: UUID) -> OrgKeyList:
    """List API keys of an organization."""
    return transport.get(org_path(org_id, "keys"), OrgKeyList)


def create_org_key(
    transport: Transport, org_id: UUID, request: CreateOrgKeyRequest
) -> CreatedOrgKey:
    """Create an API key; the response holds the only copy of the secret."""
    return transport.post(org_path(org_id, "keys"), request, CreatedOrgKey)


def delete_org_key(transport: Transport, org_id: UUID, key_id: UUID) -> None:
    """Revoke an API key."""
    transport.delete(org_path(org_id, "keys", key_id))

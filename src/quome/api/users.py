"""User endpoints."""

from __future__ import annotations
from uuid import UUID
from quome.api.models import CreateUserRequest, User
from quome.api.paths import API_PREFIX
from quome.http import Transport


def get_current_user(transport: Transport) -> User:
    """Return the user owning the transport's token."""
    return transport.get(f"{API_PREFIX}/users", User)


def create_user(transport: Transport, request: CreateUserRequest) -> User:
    """Register a new user account."""
    return transport.post(f"{API_PREFIX}/users", request, User)


def get_user(transport: Transport, user_id: UUID) -> User:
    """Return the user with ``user_id``."""
    return transport.get(f"{API_PREFIX}/users/{user_id}", User)

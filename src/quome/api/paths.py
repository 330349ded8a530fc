"""URL path builders shared by the resource modules."""

from __future__ import annotations
from typing import Any
from uuid import UUID


API_PREFIX = "/api/v1"


def org_path(org_id: UUID, *parts: UUID | str) -> str:
    """Return ``/api/v1/orgs/{org_id}`` followed by ``parts``."""
    segments = [f"{API_PREFIX}/orgs/{org_id}", *(str(part) for part in parts)]
    return "/".join(segments)


def limit_params(limit: int | None) -> dict[str, Any] | None:
    """Return the ``limit`` query parameter when one is requested."""
    if limit is None:
        return None
    return {"limit": limit}

"""Typed functions for each Quome API endpoint."""

from __future__ import annotations
from quome.api.agents import (
    get_agent_state,
    pull_agent,
    send_agent_prompt,
    start_agent,
    stop_agent,
)
from quome.api.apps import (
    create_app,
    delete_app,
    get_app,
    get_deployment,
    get_logs,
    list_apps,
    list_deployments,
    update_app,
)
from quome.api.databases import (
    create_database,
    delete_database,
    get_database,
    list_databases,
    update_database,
)
from quome.api.events import list_events
from quome.api.orgs import (
    add_org_member,
    create_org,
    create_org_key,
    delete_org_key,
    get_org,
    list_org_keys,
    list_org_members,
    list_orgs,
)
from quome.api.secrets import (
    create_secret,
    delete_secret,
    get_secret,
    list_secrets,
    update_secret,
)
from quome.api.users import create_user, get_current_user, get_user


__all__ = [
    "add_org_member",
    "create_app",
    "create_database",
    "create_org",
    "create_org_key",
    "create_secret",
    "create_user",
    "delete_app",
    "delete_database",
    "delete_org_key",
    "delete_secret",
    "get_agent_state",
    "get_app",
    "get_current_user",
    "get_database",
    "get_deployment",
    "get_logs",
    "get_org",
    "get_secret",
    "get_user",
    "list_apps",
    "list_databases",
    "list_deployments",
    "list_events",
    "list_org_keys",
    "list_org_members",
    "list_orgs",
    "list_secrets",
    "pull_agent",
    "send_agent_prompt",
    "start_agent",
    "stop_agent",
    "update_app",
    "update_database",
    "update_secret",
]

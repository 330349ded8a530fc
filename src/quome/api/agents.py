"""Coding agent endpoints."""

from __future__ import annotations
from uuid import UUID
from quome.api.models import (
    AgentActionResponse,
    AgentState,
    PullAgentResponse,
    SendPromptRequest,
    StartAgentRequest,
    StartAgentResponse,
    StopAgentRequest,
)
from quome.api.paths import API_PREFIX
from quome.http import Transport


AGENT_PATH = f"{API_PREFIX}/agents/quome-coder"


def start_agent(
    transport: Transport, request: StartAgentRequest
) -> StartAgentResponse:
    """Start a new app building workflow."""
    return transport.post(f"{AGENT_PATH}/start", request, StartAgentResponse)


def send_agent_prompt(
    transport: Transport, thread_id: UUID, request: SendPromptRequest
) -> AgentActionResponse:
    """Send a follow-up prompt to a workflow."""
    path = f"{AGENT_PATH}/{thread_id}/prompt"
    return transport.post(path, request, AgentActionResponse)


def get_agent_state(transport: Transport, thread_id: UUID) -> AgentState:
    """Fetch the current state of a workflow."""
    return transport.get(f"{AGENT_PATH}/{thread_id}/state", AgentState)


def stop_agent(transport: Transport, thread_id: UUID) -> AgentActionResponse:
    """Stop an active workflow."""
    return transport.post(
        f"{AGENT_PATH}/{thread_id}/stop", StopAgentRequest(), AgentActionResponse
    )


def pull_agent(transport: Transport, thread_id: UUID) -> PullAgentResponse:
    """Pull the latest changes of a workflow."""
    return transport.get(f"{AGENT_PATH}/{thread_id}/pull", PullAgentResponse)

"""Request and response models for the Quome API."""

from __future__ import annotations
from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID
from pydantic import BaseModel, Field, model_validator


# Users


class User(BaseModel):
    """Platform user as returned by ``/users``."""

    id: UUID
    email: str
    name: str
    created_at: datetime
    updated_at: datetime
    default_org: UUID | None = None
    avatar: str | None = None
    last_login_at: datetime | None = None
    two_factor: bool | None = None


class CreateUserRequest(BaseModel):
    """Body for ``POST /users``."""

    username: str
    email: str
    password: str


# Organizations


class Organization(BaseModel):
    """Organization owning apps, secrets and keys."""

    id: UUID
    name: str
    created_at: datetime
    updated_at: datetime


class OrganizationList(BaseModel):
    """Envelope for ``GET /orgs``."""

    organizations: list[Organization]


class CreateOrgRequest(BaseModel):
    """Body for ``POST /orgs``."""

    name: str


class OrgMember(BaseModel):
    """Membership of a user in an organization."""

    id: UUID | None = None
    user_id: UUID
    org_id: UUID
    created_at: datetime
    updated_at: datetime


class OrgMemberList(BaseModel):
    """Envelope for ``GET /orgs/{org}/members``."""

    members: list[OrgMember]

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_list(cls, data: Any) -> Any:
        # Some server versions answer with the bare array.
        if isinstance(data, list):
            return {"members": data}
        return data


class AddOrgMemberRequest(BaseModel):
    """Body for ``POST /orgs/{org}/members``."""

    user_id: UUID


class OrgKey(BaseModel):
    """API key metadata; the secret part is only returned on creation."""

    id: UUID
    org_id: UUID
    key_hash: str
    created_at: datetime


class OrgKeyList(BaseModel):
    """Envelope for ``GET /orgs/{org}/keys``."""

    keys: list[OrgKey]


class CreateOrgKeyRequest(BaseModel):
    """Body for ``POST /orgs/{org}/keys``."""

    expiration: datetime | None = None


class CreatedOrgKey(BaseModel):
    """Newly created API key including its secret value."""

    id: UUID
    key: str
    created_at: datetime


# Applications


class ContainerSpec(BaseModel):
    """Single container of an application."""

    name: str
    image: str
    port: int = Field(ge=1, le=65535)


class AppSpec(BaseModel):
    """Deployable specification of an application."""

    containers: list[ContainerSpec] = Field(default_factory=list)


class App(BaseModel):
    """Application deployed inside an organization."""

    id: UUID
    name: str
    description: str | None = None
    organization_id: UUID
    created_at: datetime
    updated_at: datetime
    spec: AppSpec | None = None


class AppList(BaseModel):
    """Envelope for ``GET /orgs/{org}/apps``."""

    apps: list[App]


class CreateAppRequest(BaseModel):
    """Body for ``POST /orgs/{org}/apps``."""

    name: str
    description: str | None = None
    spec: AppSpec


class UpdateAppRequest(BaseModel):
    """Body for ``PUT /orgs/{org}/apps/{app}``; unset fields are left alone."""

    name: str | None = None
    description: str | None = None
    spec: AppSpec | None = None


# Deployments


class DeploymentStatus(StrEnum):
    """Lifecycle state of a deployment."""

    CREATED = "created"
    IN_PROGRESS = "in_progress"
    DEPLOYED = "deployed"
    SUCCESS = "success"
    FAILED = "failed"


class DeploymentEvent(BaseModel):
    """Progress message attached to a deployment."""

    id: UUID
    created_at: datetime
    message: str
    details: dict[str, Any] | None = None


class Deployment(BaseModel):
    """One rollout of an application."""

    id: UUID
    app_id: UUID
    created_at: datetime
    updated_at: datetime
    status: DeploymentStatus
    failure_message: str | None = None
    events: list[DeploymentEvent] = Field(default_factory=list)


class DeploymentList(BaseModel):
    """Envelope for ``GET .../deployments``."""

    deployments: list[Deployment]


# Secrets


class Secret(BaseModel):
    """Organization secret; ``value`` is only present when revealed."""

    id: UUID
    name: str
    value: str | None = None
    description: str | None = None
    organization_id: UUID | None = None
    created_at: datetime
    updated_at: datetime


class SecretList(BaseModel):
    """Envelope for ``GET /orgs/{org}/secrets``."""

    secrets: list[Secret]


class CreateSecretRequest(BaseModel):
    """Body for ``POST /orgs/{org}/secrets``."""

    name: str
    value: str
    description: str | None = None


class UpdateSecretRequest(BaseModel):
    """Body for ``PUT /orgs/{org}/secrets/{secret}``."""

    name: str | None = None
    value: str | None = None
    description: str | None = None


# Events


class EventActor(BaseModel):
    """User who triggered an event."""

    id: UUID
    email: str


class EventResource(BaseModel):
    """Resource an event refers to."""

    type: str
    id: UUID
    name: str | None = None


class Event(BaseModel):
    """Audit event recorded for an organization."""

    id: UUID
    type: str
    actor: EventActor
    resource: EventResource
    metadata: dict[str, Any] | None = None
    organization_id: UUID
    created_at: datetime


class EventList(BaseModel):
    """Envelope for ``GET /orgs/{org}/events``."""

    events: list[Event]
    next_before: datetime | None = None


# Logs


class LogLevel(StrEnum):
    """Severity of an application log line."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class LogEntry(BaseModel):
    """Single application log line."""

    timestamp: datetime
    level: LogLevel
    message: str
    metadata: dict[str, Any] | None = None


class LogList(BaseModel):
    """Envelope for ``GET .../logs``."""

    logs: list[LogEntry]
    next_before: datetime | None = None


# Managed databases


class ComputeRequested(BaseModel):
    """Requested CPU and memory, e.g. ``"1"`` and ``"2Gi"``."""

    vcpu: str
    memory: str


class DatabaseCompute(BaseModel):
    """Compute section of a database definition."""

    requested: ComputeRequested


class StorageRequested(BaseModel):
    """Requested disk size, e.g. ``"10Gi"``."""

    disk_space: str


class DatabaseStorage(BaseModel):
    """Storage section of a database definition."""

    requested: StorageRequested


class DatabaseReplicas(BaseModel):
    """Replica count of a database."""

    requested: int = Field(ge=1)


class DatabasePostgres(BaseModel):
    """Postgres engine settings."""

    major_version: int


class DatabaseState(StrEnum):
    """Provisioning state reported for a database."""

    INITIALIZING = "Initializing"
    READY = "Ready"
    PAUSED = "Paused"
    STOPPING = "Stopping"
    ERROR = "Error"


class DatabaseStatus(BaseModel):
    """Status block of a database."""

    state: DatabaseState


class Database(BaseModel):
    """Managed Postgres database."""

    id: UUID
    name: str
    organization_id: UUID
    compute: DatabaseCompute
    storage: DatabaseStorage
    replicas: DatabaseReplicas
    postgres: DatabasePostgres
    status: DatabaseStatus | None = None
    created_at: datetime
    updated_at: datetime


class DatabaseList(BaseModel):
    """Envelope for ``GET /orgs/{org}/dbaas``."""

    databases: list[Database] = Field(default_factory=list)


class CreateDatabaseRequest(BaseModel):
    """Body for ``POST /orgs/{org}/dbaas``."""

    name: str
    compute: DatabaseCompute
    storage: DatabaseStorage
    replicas: DatabaseReplicas
    postgres: DatabasePostgres


class UpdateDatabaseRequest(BaseModel):
    """Body for ``PUT /orgs/{org}/dbaas/{db}``."""

    name: str | None = None
    compute: DatabaseCompute | None = None
    storage: DatabaseStorage | None = None
    replicas: DatabaseReplicas | None = None


# Coding agent


class StackConfig(BaseModel):
    """Framework and language for one tier of a generated app."""

    stack: str | None = None
    language: str | None = None


class TechStack(BaseModel):
    """Preferred technologies for a generated app."""

    backend: StackConfig | None = None
    frontend: StackConfig | None = None
    database: str | None = None


class ColorPreferences(BaseModel):
    """Custom brand colors for a generated app."""

    type: str = "custom"
    primary_color: str | None = None
    secondary_color: str | None = None


class StartAgentRequest(BaseModel):
    """Body for ``POST /agents/quome-coder/start``."""

    prompt: str
    project_name: str | None = None
    include_github: bool | None = None
    parallel_mode: bool | None = None
    accessibility_target: str | None = None
    tech_stack: TechStack | None = None
    color_preferences: ColorPreferences | None = None


class StartAgentResponse(BaseModel):
    """Thread created for a new agent workflow."""

    thread_id: UUID
    status: str
    message: str


class SendPromptRequest(BaseModel):
    """Body for ``POST /agents/quome-coder/{thread}/prompt``."""

    prompt: str


class AgentActionResponse(BaseModel):
    """Outcome of a prompt or stop request."""

    success: bool
    message: str


class StopAgentRequest(BaseModel):
    """Empty body for ``POST /agents/quome-coder/{thread}/stop``."""


class AgentAppContext(BaseModel):
    name: str | None = None
    goal: str | None = None
    description: str | None = None


class AgentMessage(BaseModel):
    """One entry of the agent conversation."""

    type: str
    content: str | None = None
    timestamp: datetime | None = None


class AgentContainerInfo(BaseModel):
    """Preview sandbox the agent builds in."""

    container_id: str | None = None
    sandbox_id: str | None = None
    app_relative_dir: str | None = None
    frontend_port: int | None = None
    backend_port: int | None = None
    testing_port: int | None = None
    frontend_url: str | None = None
    backend_url: str | None = None
    testing_url: str | None = None
    is_healthy: bool | None = None


class AgentDeploymentInfo(BaseModel):
    url: str | None = None
    status: str | None = None
    files_path: str | None = None
    port: int | None = None


class AgentProgress(BaseModel):
    percentage: float | None = None
    current_stage: int | None = None
    total_stages: int | None = None


class AgentPlanWorkLane(BaseModel):
    description: str | None = None
    parts: list[str] = Field(default_factory=list)
    target_files: list[str] = Field(default_factory=list)
    is_complete: bool | None = None


class AgentPlanStage(BaseModel):
    description: str | None = None
    lanes: list[AgentPlanWorkLane] = Field(default_factory=list)


class AgentPlan(BaseModel):
    """Build plan split into stages of parallel work lanes."""

    context: str | None = None
    stages: list[AgentPlanStage] = Field(default_factory=list)
    current_stage: int | None = None


class BrandKit(BaseModel):
    primary_color: str | None = None
    secondary_color: str | None = None
    accent_color: str | None = None
    background_color: str | None = None
    text_color: str | None = None
    font_family: str | None = None
    company_name: str | None = None
    logo_public_urls: list[str] = Field(default_factory=list)
    hero_public_urls: list[str] = Field(default_factory=list)
    primary_logo_index: int | None = None
    primary_logo_url: str | None = None


class AgentState(BaseModel):
    """Snapshot of an agent workflow thread."""

    thread_id: UUID
    is_working: bool = False
    status: str | None = None
    phase: str | None = None
    app_uuid: UUID | None = None
    app_domain_name: str | None = None
    app_context: AgentAppContext | None = None
    messages: list[AgentMessage] = Field(default_factory=list)
    files: dict[str, str] = Field(default_factory=dict)
    container_info: AgentContainerInfo | None = None
    deployment: AgentDeploymentInfo | None = None
    progress: AgentProgress | None = None
    plan: AgentPlan | None = None
    brand_kit: BrandKit | None = None
    github_repo_url: str | None = None
    github_repo_name: str | None = None
    github_repo_created: bool | None = None
    tests_passed: int | None = None
    tests_failed: int | None = None
    tests_ran: int | None = None


class PullAgentResponse(BaseModel):
    """Result of pulling the latest agent changes."""

    success: bool
    message: str
    state: AgentState | None = None

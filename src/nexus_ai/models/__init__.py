"""Pydantic models for Nexus AI - the contracts."""

from nexus_ai.models.audit import AdminActionRecord
from nexus_ai.models.conversation import (
    ChatRequest,
    ChatResponse,
    ConversationTurn,
    HintsRequest,
    HintsResponse,
    RoadmapRequest,
    RoadmapResponse,
)
from nexus_ai.models.health import ComponentHealth, HealthResponse
from nexus_ai.models.identity import (
    AccountResponse,
    AccountResult,
    AuthSession,
    Identity,
    LoginRequest,
    MeResponse,
    Profile,
    RequestContext,
    SignupRequest,
)
from nexus_ai.models.project import (
    Project,
    ProjectCreate,
    ProjectListResponse,
    ProjectResponse,
    ProjectSnapshot,
    ProjectUpdate,
)

__all__ = [
    "AccountResponse",
    "AccountResult",
    "AdminActionRecord",
    "AuthSession",
    "ChatRequest",
    "ChatResponse",
    "ComponentHealth",
    "ConversationTurn",
    "HealthResponse",
    "HintsRequest",
    "HintsResponse",
    "Identity",
    "LoginRequest",
    "MeResponse",
    "Profile",
    "Project",
    "ProjectCreate",
    "ProjectListResponse",
    "ProjectResponse",
    "ProjectSnapshot",
    "ProjectUpdate",
    "RequestContext",
    "RoadmapRequest",
    "RoadmapResponse",
    "SignupRequest",
]

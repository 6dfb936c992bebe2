"""FastAPI routes for accounts, projects, AI assistance and admin actions."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from nexus_ai import __version__
from nexus_ai.api.auth import (
    AdminAuth,
    Auth,
    OptionalAuth,
    get_audit_logger,
    get_bearer_token,
    get_db_client,
    get_llm_client,
    get_project_store,
)
from nexus_ai.db.client import DatabaseClient
from nexus_ai.exceptions import Unauthenticated, ValidationError
from nexus_ai.models.conversation import (
    ChatRequest,
    ChatResponse,
    HintsRequest,
    HintsResponse,
    RoadmapRequest,
    RoadmapResponse,
)
from nexus_ai.models.health import ComponentHealth, HealthResponse
from nexus_ai.models.identity import (
    AccountResponse,
    LoginRequest,
    MeResponse,
    SignupRequest,
)
from nexus_ai.models.project import (
    ProjectCreate,
    ProjectListResponse,
    ProjectResponse,
    ProjectSnapshot,
    ProjectUpdate,
)
from nexus_ai.services import prompts
from nexus_ai.services.audit import AuditLogger
from nexus_ai.services.projects import ProjectStore
from nexus_ai.tools.claude import ClaudeClient

logger = logging.getLogger(__name__)

router = APIRouter()

MIN_PASSWORD_LENGTH = 6

Db = Annotated[DatabaseClient, Depends(get_db_client)]
Llm = Annotated[ClaudeClient, Depends(get_llm_client)]
Projects = Annotated[ProjectStore, Depends(get_project_store)]
Audit = Annotated[AuditLogger, Depends(get_audit_logger)]


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


def _require_project(project: ProjectSnapshot | None) -> ProjectSnapshot:
    if project is None or not project.name:
        raise ValidationError("Project data is required")
    return project


# -----------------------------------------------------------------------------
# Health
# -----------------------------------------------------------------------------


@router.get("/health", response_model=HealthResponse)
async def health(db: Db, llm: Llm) -> HealthResponse:
    """Report service liveness and backing-store connectivity."""
    db_health = await db.health_check()
    return HealthResponse(
        version=__version__,
        llm_configured=llm.configured,
        database=ComponentHealth(**db_health),
    )


# -----------------------------------------------------------------------------
# Account endpoints
# -----------------------------------------------------------------------------


@router.post("/auth/signup", response_model=AccountResponse)
async def signup(data: SignupRequest, db: Db) -> AccountResponse:
    """Create an account with email and password.

    Args:
        data: Email, password and optional full name
        db: The database client

    Returns:
        The new user and, if the provider issued one, a session
    """
    if not data.email or not data.password:
        raise ValidationError("Email and password are required")
    if len(data.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )

    metadata = {"full_name": data.full_name} if data.full_name else {}
    try:
        account = await db.create_account(data.email, data.password, metadata)
    except Exception as e:
        logger.warning(f"Signup rejected for {data.email}: {e}")
        raise ValidationError(str(e)) from e

    return AccountResponse(user=account.user, session=account.session)


@router.post("/auth/login", response_model=AccountResponse)
async def login(data: LoginRequest, db: Db) -> AccountResponse:
    """Sign in with email and password."""
    if not data.email or not data.password:
        raise ValidationError("Email and password are required")

    try:
        account = await db.authenticate(data.email, data.password)
    except Exception as e:
        logger.warning(f"Login failed for {data.email}: {e}")
        raise Unauthenticated("Invalid email or password") from e

    logger.info(f"User {account.user.id} logged in")
    return AccountResponse(user=account.user, session=account.session)


@router.post("/auth/logout")
async def logout(
    auth: Auth,
    db: Db,
    token: Annotated[str | None, Depends(get_bearer_token)],
) -> dict:
    """Revoke the caller's session.

    A provider failure is logged; the client discards its token either way.
    """
    try:
        await db.invalidate_session(token)
    except Exception as e:
        logger.error(f"Logout failed for user={auth.user.id}: {e}")
    return {"success": True, "message": "Logged out successfully"}


@router.get("/auth/me", response_model=MeResponse)
async def me(auth: Auth) -> MeResponse:
    """Return the caller's identity, profile and admin flag."""
    return MeResponse(user=auth.user, profile=auth.profile, is_admin=auth.is_admin)


# -----------------------------------------------------------------------------
# Project endpoints (require authentication, scoped to the caller)
# -----------------------------------------------------------------------------


@router.get("/projects", response_model=ProjectListResponse)
async def list_projects(auth: Auth, store: Projects) -> ProjectListResponse:
    """List the caller's projects, newest first."""
    projects = await store.list(auth.user.id)
    return ProjectListResponse(projects=projects)


@router.get("/projects/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: str, auth: Auth, store: Projects) -> ProjectResponse:
    """Get one of the caller's projects. Other users' projects are 404."""
    project = await store.get(project_id, auth.user.id)
    return ProjectResponse(project=project)


@router.post("/projects", response_model=ProjectResponse)
async def create_project(
    data: ProjectCreate,
    auth: Auth,
    store: Projects,
) -> ProjectResponse:
    """Create a project owned by the caller.

    Defaults: team_size=1, tags=[], priority="medium".
    """
    project = await store.create(auth.user.id, data)
    return ProjectResponse(project=project)


@router.patch("/projects/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    data: ProjectUpdate,
    auth: Auth,
    store: Projects,
) -> ProjectResponse:
    """Apply only the fields present in the body to the caller's project."""
    project = await store.update(project_id, auth.user.id, data)
    return ProjectResponse(project=project)


@router.delete("/projects/{project_id}")
async def delete_project(project_id: str, auth: Auth, store: Projects) -> dict:
    """Delete one of the caller's projects."""
    message = await store.delete(project_id, auth.user.id)
    return {"success": True, "message": message}


# -----------------------------------------------------------------------------
# AI endpoints (anonymous access allowed)
# -----------------------------------------------------------------------------


@router.get("/ai/test")
async def ai_test(llm: Llm) -> dict:
    """Check that the completion provider answers."""
    text = await llm.complete(prompts.CONNECTIVITY_PROMPT)
    return {"success": True, "message": text}


@router.post("/ai/hints", response_model=HintsResponse)
async def project_hints(data: HintsRequest, auth: OptionalAuth, llm: Llm) -> HintsResponse:
    """Generate tailored insights, stack suggestions and next steps."""
    project = _require_project(data.project)
    logger.info(
        f"Generating project hints for: {project.name} "
        f"(user={auth.user.id if auth.is_authenticated else 'anonymous'})"
    )
    text = await llm.complete(prompts.build_hints_prompt(project))
    logger.info("Generated hints")
    return HintsResponse(hints=text)


@router.post("/ai/chat", response_model=ChatResponse)
async def chat(data: ChatRequest, auth: OptionalAuth, llm: Llm) -> ChatResponse:
    """Reply to a chat message using recent history and project context."""
    if not data.message:
        raise ValidationError("Message is required")
    logger.info(
        f"Processing chat message (user={auth.user.id if auth.is_authenticated else 'anonymous'}, "
        f"history={len(data.conversation_history)})"
    )
    prompt = prompts.build_chat_prompt(
        data.message,
        project=data.project,
        history=data.conversation_history,
    )
    text = await llm.complete(prompt)
    logger.info("Chat response generated")
    return ChatResponse(response=text)


@router.post("/ai/roadmap", response_model=RoadmapResponse)
async def roadmap(data: RoadmapRequest, auth: OptionalAuth, llm: Llm) -> RoadmapResponse:
    """Generate a five-phase roadmap for a project."""
    project = _require_project(data.project)
    logger.info(
        f"Generating roadmap for: {project.name} "
        f"(user={auth.user.id if auth.is_authenticated else 'anonymous'})"
    )
    text = await llm.complete(prompts.build_roadmap_prompt(project))
    logger.info("Roadmap generated")
    return RoadmapResponse(roadmap=text)


# -----------------------------------------------------------------------------
# Admin endpoints (require an admin profile, audited)
# -----------------------------------------------------------------------------


@router.get("/admin/projects", response_model=ProjectListResponse)
async def admin_list_projects(
    request: Request,
    auth: AdminAuth,
    store: Projects,
    audit: Audit,
) -> ProjectListResponse:
    """List every project across all owners."""
    projects = await store.list_all()
    await audit.record(
        auth.user.id,
        "list_all_projects",
        {"count": len(projects), "ip": _client_ip(request)},
    )
    return ProjectListResponse(projects=projects)


@router.delete("/admin/projects/{project_id}")
async def admin_delete_project(
    project_id: str,
    request: Request,
    auth: AdminAuth,
    store: Projects,
    audit: Audit,
) -> dict:
    """Delete any project by id."""
    message = await store.delete_any(project_id)
    await audit.record(
        auth.user.id,
        "delete_project",
        {"project_id": project_id, "ip": _client_ip(request)},
    )
    logger.info(f"Admin {auth.user.id} deleted project {project_id}")
    return {"success": True, "message": message}

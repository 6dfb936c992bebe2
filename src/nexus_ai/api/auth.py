"""API authentication dependencies."""

from typing import Annotated

from fastapi import Depends, Header, Request

from nexus_ai.db.client import DatabaseClient
from nexus_ai.models.identity import RequestContext
from nexus_ai.services.audit import AuditLogger
from nexus_ai.services.auth_gate import AuthGate, extract_bearer_token, require_admin
from nexus_ai.services.projects import ProjectStore
from nexus_ai.tools.claude import ClaudeClient


# Collaborators are constructed in create_app() and stored on app.state.

def get_db_client(request: Request) -> DatabaseClient:
    return request.app.state.db


def get_llm_client(request: Request) -> ClaudeClient:
    return request.app.state.llm


def get_auth_gate(
    db: Annotated[DatabaseClient, Depends(get_db_client)],
) -> AuthGate:
    return AuthGate(db)


def get_project_store(
    db: Annotated[DatabaseClient, Depends(get_db_client)],
) -> ProjectStore:
    return ProjectStore(db)


def get_audit_logger(
    db: Annotated[DatabaseClient, Depends(get_db_client)],
) -> AuditLogger:
    return AuditLogger(db)


def get_bearer_token(
    authorization: Annotated[str | None, Header()] = None,
) -> str | None:
    return extract_bearer_token(authorization)


async def get_request_context(
    gate: Annotated[AuthGate, Depends(get_auth_gate)],
    authorization: Annotated[str | None, Header()] = None,
) -> RequestContext:
    """Require a valid bearer token.

    Raises:
        Unauthenticated: Missing or rejected token (401)
        ProfileUnavailable: Profile store failure (500)
    """
    return await gate.authenticate(authorization)


async def get_optional_request_context(
    gate: Annotated[AuthGate, Depends(get_auth_gate)],
    authorization: Annotated[str | None, Header()] = None,
) -> RequestContext:
    """Authenticate if possible, otherwise return an anonymous context.

    This is for endpoints that support both authenticated and anonymous access.
    """
    return await gate.authenticate_optional(authorization)


async def get_admin_context(
    ctx: Annotated[RequestContext, Depends(get_request_context)],
) -> RequestContext:
    """Require an authenticated admin."""
    return require_admin(ctx)


# Type aliases for dependency injection
Auth = Annotated[RequestContext, Depends(get_request_context)]
OptionalAuth = Annotated[RequestContext, Depends(get_optional_request_context)]
AdminAuth = Annotated[RequestContext, Depends(get_admin_context)]

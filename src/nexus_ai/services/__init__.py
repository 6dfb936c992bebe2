"""Core request services: auth gate, project store, prompts, audit."""

from nexus_ai.services.audit import AuditLogger
from nexus_ai.services.auth_gate import AuthGate, extract_bearer_token, require_admin
from nexus_ai.services.projects import ProjectStore

__all__ = [
    "AuditLogger",
    "AuthGate",
    "ProjectStore",
    "extract_bearer_token",
    "require_admin",
]

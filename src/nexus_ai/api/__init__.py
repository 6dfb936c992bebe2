"""FastAPI routes for Nexus AI."""

from nexus_ai.api.auth import AdminAuth, Auth, OptionalAuth
from nexus_ai.api.routes import router

__all__ = ["AdminAuth", "Auth", "OptionalAuth", "router"]

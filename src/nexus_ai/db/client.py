"""Supabase client for identity, profiles, projects and audit records."""

import logging
import time
from typing import Any

from supabase import Client, create_client

from nexus_ai.config import get_settings
from nexus_ai.models.audit import AdminActionRecord
from nexus_ai.models.identity import AccountResult, AuthSession, Identity, Profile

logger = logging.getLogger(__name__)

PROJECTS_TABLE = "projects"
PROFILES_TABLE = "profiles"
ADMIN_ACTIONS_TABLE = "admin_actions"


def _identity_from_user(user: Any) -> Identity:
    return Identity(id=str(user.id), email=getattr(user, "email", None))


def _session_from_auth(session: Any) -> AuthSession | None:
    if session is None:
        return None
    return AuthSession(
        access_token=session.access_token,
        refresh_token=getattr(session, "refresh_token", None),
        expires_at=getattr(session, "expires_at", None),
    )


class DatabaseClient:
    """Client for Supabase auth and table operations.

    Methods raise whatever the underlying client raises; callers decide how
    a failure is surfaced.
    """

    def __init__(self, client: Client | None = None) -> None:
        if client is None:
            settings = get_settings()
            client = create_client(settings.supabase_url, settings.supabase_key)
        self.client: Client = client

    # -------------------------------------------------------------------------
    # Identity methods
    # -------------------------------------------------------------------------

    async def verify_token(self, token: str) -> Identity | None:
        """Exchange a bearer token for the user it was issued to.

        Args:
            token: The access token from the Authorization header

        Returns:
            Identity if the provider recognises the token, None otherwise
        """
        response = self.client.auth.get_user(token)
        if response is None or response.user is None:
            return None
        return _identity_from_user(response.user)

    async def get_profile(self, user_id: str) -> Profile | None:
        """Look up a user's profile.

        Args:
            user_id: The identity ID

        Returns:
            Profile if found, None otherwise
        """
        result = (
            self.client.table(PROFILES_TABLE)
            .select("*")
            .eq("id", user_id)
            .execute()
        )
        if result.data:
            return Profile(**result.data[0])
        return None

    async def create_account(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any] | None = None,
    ) -> AccountResult:
        """Register a new account with the auth provider.

        Args:
            email: Account email
            password: Account password
            metadata: Extra user metadata (e.g. full_name)

        Returns:
            The created user and, if already confirmed, a session
        """
        response = self.client.auth.sign_up({
            "email": email,
            "password": password,
            "options": {"data": metadata or {}},
        })
        if response.user is None:
            raise RuntimeError("Signup returned no user")
        logger.info(f"Created account {response.user.id}")
        return AccountResult(
            user=_identity_from_user(response.user),
            session=_session_from_auth(response.session),
        )

    async def authenticate(self, email: str, password: str) -> AccountResult:
        """Sign in with email and password.

        Args:
            email: Account email
            password: Account password

        Returns:
            The user and a fresh session
        """
        response = self.client.auth.sign_in_with_password({
            "email": email,
            "password": password,
        })
        if response.user is None:
            raise RuntimeError("Login returned no user")
        return AccountResult(
            user=_identity_from_user(response.user),
            session=_session_from_auth(response.session),
        )

    async def invalidate_session(self, token: str) -> None:
        """Revoke the session that issued the given access token."""
        self.client.auth.admin.sign_out(token)

    # -------------------------------------------------------------------------
    # Project methods
    # -------------------------------------------------------------------------

    async def list_projects(self, owner_id: str) -> list[dict[str, Any]]:
        """List projects owned by a user, newest first.

        Args:
            owner_id: The owner's identity ID

        Returns:
            List of project rows
        """
        result = (
            self.client.table(PROJECTS_TABLE)
            .select("*")
            .eq("owner_id", owner_id)
            .order("created_at", desc=True)
            .execute()
        )
        return result.data

    async def list_all_projects(self) -> list[dict[str, Any]]:
        """List every project regardless of owner, newest first."""
        result = (
            self.client.table(PROJECTS_TABLE)
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return result.data

    async def get_project(
        self,
        project_id: str,
        owner_id: str | None,
    ) -> dict[str, Any] | None:
        """Get a project (with owner check for isolation).

        Args:
            project_id: The project ID
            owner_id: The owner's identity ID, or None to skip the owner filter

        Returns:
            Project row if found, None otherwise
        """
        query = (
            self.client.table(PROJECTS_TABLE)
            .select("*")
            .eq("id", project_id)
        )
        if owner_id is not None:
            query = query.eq("owner_id", owner_id)
        result = query.execute()
        if result.data:
            return result.data[0]
        return None

    async def insert_project(self, data: dict[str, Any]) -> dict[str, Any]:
        """Insert a project row.

        Args:
            data: Column values, including owner_id

        Returns:
            The persisted row with server-generated id and created_at
        """
        result = self.client.table(PROJECTS_TABLE).insert(data).execute()
        logger.debug(f"Inserted project {result.data[0].get('id')}")
        return result.data[0]

    async def update_project(
        self,
        project_id: str,
        owner_id: str,
        updates: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Apply column updates to an owned project.

        Args:
            project_id: The project ID
            owner_id: The owner's identity ID
            updates: The columns to change

        Returns:
            Updated row if a row matched, None otherwise
        """
        result = (
            self.client.table(PROJECTS_TABLE)
            .update(updates)
            .eq("id", project_id)
            .eq("owner_id", owner_id)
            .execute()
        )
        if result.data:
            return result.data[0]
        return None

    async def delete_project(self, project_id: str, owner_id: str | None) -> bool:
        """Delete a project.

        Args:
            project_id: The project ID
            owner_id: The owner's identity ID, or None to skip the owner filter

        Returns:
            True if deleted, False if not found
        """
        query = self.client.table(PROJECTS_TABLE).delete().eq("id", project_id)
        if owner_id is not None:
            query = query.eq("owner_id", owner_id)
        result = query.execute()
        return len(result.data) > 0

    # -------------------------------------------------------------------------
    # Audit methods
    # -------------------------------------------------------------------------

    async def insert_admin_action(self, record: AdminActionRecord) -> None:
        """Append an admin action record."""
        self.client.table(ADMIN_ACTIONS_TABLE).insert(
            record.model_dump(mode="json")
        ).execute()

    # -------------------------------------------------------------------------
    # Health Check
    # -------------------------------------------------------------------------

    async def health_check(self) -> dict[str, Any]:
        """Check database connectivity and return health status.

        Returns:
            Dict with:
                - healthy: bool - whether the database is reachable
                - latency_ms: float - query latency in milliseconds
                - error: str | None - error message if unhealthy
        """
        start = time.perf_counter()
        try:
            self.client.table(PROJECTS_TABLE).select("id").limit(1).execute()
            latency_ms = (time.perf_counter() - start) * 1000

            return {
                "healthy": True,
                "latency_ms": round(latency_ms, 2),
                "error": None,
            }
        except Exception as e:
            latency_ms = (time.perf_counter() - start) * 1000
            logger.error(f"Database health check failed: {e}")

            return {
                "healthy": False,
                "latency_ms": round(latency_ms, 2),
                "error": str(e),
            }

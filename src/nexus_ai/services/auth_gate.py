"""Bearer-token authentication and admin authorization.

The gate turns an Authorization header into a RequestContext. Mandatory mode
raises on any failure; optional mode degrades to an anonymous context.
"""

import logging

from nexus_ai.db.client import DatabaseClient
from nexus_ai.exceptions import AuthorizationDenied, ProfileUnavailable, Unauthenticated
from nexus_ai.models.identity import RequestContext

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from a `Bearer <token>` header, or None."""
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


class AuthGate:
    """Composes token verification and profile lookup."""

    def __init__(self, db: DatabaseClient) -> None:
        self.db = db

    async def authenticate(self, authorization: str | None) -> RequestContext:
        """Build the context for a request that must be authenticated.

        Args:
            authorization: Raw Authorization header value

        Returns:
            RequestContext with user, profile and admin flag

        Raises:
            Unauthenticated: Header missing, not bearer, or token rejected
            ProfileUnavailable: The profile store failed
        """
        token = extract_bearer_token(authorization)
        if token is None:
            raise Unauthenticated("No token provided")

        try:
            user = await self.db.verify_token(token)
        except Exception as e:
            logger.warning(f"Token verification failed ({token[:8]}...): {e}")
            raise Unauthenticated("Invalid or expired token") from e

        if user is None:
            logger.warning(f"Token verification returned no user ({token[:8]}...)")
            raise Unauthenticated("Invalid or expired token")

        try:
            profile = await self.db.get_profile(user.id)
        except Exception as e:
            logger.error(f"Profile lookup failed for user={user.id}: {e}")
            raise ProfileUnavailable() from e

        if profile is None:
            logger.debug(f"No profile stored for user={user.id}")

        return RequestContext(
            user=user,
            profile=profile,
            is_admin=bool(profile and profile.is_admin),
        )

    async def authenticate_optional(self, authorization: str | None) -> RequestContext:
        """Like authenticate(), but every failure yields an anonymous context."""
        if extract_bearer_token(authorization) is None:
            return RequestContext.anonymous()
        try:
            return await self.authenticate(authorization)
        except (Unauthenticated, ProfileUnavailable) as e:
            logger.debug(f"Optional auth fell back to anonymous: {e.message}")
            return RequestContext.anonymous()


def require_admin(ctx: RequestContext) -> RequestContext:
    """Check that an authenticated context belongs to an admin.

    Raises:
        Unauthenticated: No user on the context
        AuthorizationDenied: User is not an admin
    """
    if not ctx.is_authenticated:
        raise Unauthenticated()
    if not ctx.is_admin:
        logger.warning(f"Non-admin user={ctx.user.id} attempted an admin action")
        raise AuthorizationDenied()
    return ctx

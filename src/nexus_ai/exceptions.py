"""Custom exceptions for Nexus AI.

Every exception carries the HTTP status it is surfaced as and a message that
is safe to return to the caller.
"""


class NexusError(Exception):
    """Base class for errors converted into JSON error responses."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def extra(self) -> dict:
        """Additional fields for the JSON error body."""
        return {}


class ValidationError(NexusError):
    """Raised when required input is missing or malformed."""

    status_code = 400
    default_message = "Invalid request"


class Unauthenticated(NexusError):
    """Raised when credentials are missing or invalid."""

    status_code = 401
    default_message = "Authentication required"


class AuthorizationDenied(NexusError):
    """Raised when an authenticated user lacks the required role."""

    status_code = 403
    default_message = (
        "Admin access required. This action is restricted to administrators."
    )

    def extra(self) -> dict:
        return {"isAdmin": False}


class NotFound(NexusError):
    """Raised when a resource is absent or not owned by the caller."""

    status_code = 404
    default_message = "Not found"


class ProfileUnavailable(NexusError):
    """Raised when the profile store fails during mandatory authentication."""

    status_code = 500
    default_message = "Failed to load user profile"


class StoreError(NexusError):
    """Raised when the backing store fails unexpectedly.

    The underlying exception is logged, never echoed.
    """

    status_code = 500
    default_message = "Database operation failed"


class UpstreamError(NexusError):
    """Raised when the LLM provider call fails. The message is passed through."""

    status_code = 500
    default_message = "Upstream service failed"


class InternalError(NexusError):
    """Raised for anything unanticipated."""

    status_code = 500

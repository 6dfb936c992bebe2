"""Identity models for request authentication."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Identity(BaseModel):
    """User identity as reported by the auth provider. Never persisted here."""

    id: str
    email: str | None = None


class Profile(BaseModel):
    """Stored user profile, one per identity."""

    model_config = ConfigDict(extra="allow")

    id: str
    email: str | None = None
    full_name: str | None = None
    is_admin: bool = False
    created_at: datetime | None = None


class RequestContext(BaseModel):
    """Authentication context for a single request.

    Built once by the auth gate and frozen afterwards.
    """

    model_config = ConfigDict(frozen=True)

    user: Identity | None = None
    profile: Profile | None = None
    is_admin: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @classmethod
    def anonymous(cls) -> "RequestContext":
        return cls()


class AuthSession(BaseModel):
    """Session tokens handed back by signup and login."""

    access_token: str
    refresh_token: str | None = None
    expires_at: int | None = None


class AccountResult(BaseModel):
    """Result of creating or authenticating an account."""

    user: Identity
    session: AuthSession | None = None  # None until email confirmation


class SignupRequest(BaseModel):
    email: str | None = None
    password: str | None = None
    full_name: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class AccountResponse(BaseModel):
    success: bool = True
    user: Identity
    session: AuthSession | None = None


class MeResponse(BaseModel):
    success: bool = True
    user: Identity
    profile: Profile | None = None
    is_admin: bool = Field(serialization_alias="isAdmin")

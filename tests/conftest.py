"""Global test configuration for Nexus AI."""

import os
from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio

from nexus_ai.models.audit import AdminActionRecord
from nexus_ai.models.identity import AccountResult, AuthSession, Identity, Profile


@pytest.fixture(autouse=True, scope="session")
def _set_test_env_vars():
    """Set dummy environment variables for Settings validation.

    Only sets values that aren't already present, so real env vars take
    precedence.
    """
    defaults = {
        "ANTHROPIC_API_KEY": "test-anthropic-key",
        "SUPABASE_URL": "https://test.supabase.co",
        "SUPABASE_KEY": "test-supabase-key",
    }
    originals = {}
    for key, value in defaults.items():
        if key not in os.environ:
            os.environ[key] = value
            originals[key] = None
        else:
            originals[key] = os.environ[key]

    from nexus_ai.config import get_settings
    get_settings.cache_clear()

    yield

    for key, original in originals.items():
        if original is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original
    get_settings.cache_clear()


class FakeDatabase:
    """In-memory stand-in for DatabaseClient.

    Tokens map to identities; profiles and project rows live in dicts.
    """

    def __init__(self) -> None:
        self.tokens: dict[str, Identity] = {}
        self.profiles: dict[str, Profile] = {}
        self.projects: dict[str, dict[str, Any]] = {}
        self.admin_actions: list[AdminActionRecord] = []
        self.invalidated: list[str] = []
        self.profile_error: Exception | None = None
        self.audit_error: Exception | None = None
        self._clock = datetime(2026, 1, 1, tzinfo=UTC)

    # Test helpers

    def add_user(self, token: str, *, is_admin: bool = False, profile: bool = True) -> Identity:
        user = Identity(id=str(uuid4()), email=f"{token}@example.com")
        self.tokens[token] = user
        if profile:
            self.profiles[user.id] = Profile(id=user.id, email=user.email, is_admin=is_admin)
        return user

    def _tick(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    # Identity

    async def verify_token(self, token: str) -> Identity | None:
        return self.tokens.get(token)

    async def get_profile(self, user_id: str) -> Profile | None:
        if self.profile_error:
            raise self.profile_error
        return self.profiles.get(user_id)

    async def create_account(self, email, password, metadata=None) -> AccountResult:
        user = Identity(id=str(uuid4()), email=email)
        return AccountResult(
            user=user,
            session=AuthSession(access_token=f"token-{user.id}"),
        )

    async def authenticate(self, email, password) -> AccountResult:
        if password != "correct-password":
            raise RuntimeError("Invalid login credentials")
        user = Identity(id=str(uuid4()), email=email)
        return AccountResult(user=user, session=AuthSession(access_token="fresh"))

    async def invalidate_session(self, token: str) -> None:
        self.invalidated.append(token)

    # Projects

    async def list_projects(self, owner_id):
        rows = [p for p in self.projects.values() if p["owner_id"] == owner_id]
        return sorted(rows, key=lambda p: p["created_at"], reverse=True)

    async def list_all_projects(self):
        return sorted(self.projects.values(), key=lambda p: p["created_at"], reverse=True)

    async def get_project(self, project_id, owner_id):
        row = self.projects.get(project_id)
        if row is None or (owner_id is not None and row["owner_id"] != owner_id):
            return None
        return dict(row)

    async def insert_project(self, data):
        row = {
            "id": str(uuid4()),
            "progress": 0,
            "status": "planning",
            **data,
            "created_at": self._tick(),
        }
        self.projects[row["id"]] = row
        return dict(row)

    async def update_project(self, project_id, owner_id, updates):
        row = self.projects.get(project_id)
        if row is None or row["owner_id"] != owner_id:
            return None
        row.update(updates)
        return dict(row)

    async def delete_project(self, project_id, owner_id):
        row = self.projects.get(project_id)
        if row is None or (owner_id is not None and row["owner_id"] != owner_id):
            return False
        del self.projects[project_id]
        return True

    # Audit

    async def insert_admin_action(self, record: AdminActionRecord) -> None:
        if self.audit_error:
            raise self.audit_error
        self.admin_actions.append(record)

    async def health_check(self):
        return {"healthy": True, "latency_ms": 0.1, "error": None}


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def mock_llm():
    """Completion client that records prompts and returns canned text."""
    llm = MagicMock()
    llm.configured = True
    llm.complete = AsyncMock(return_value="## Generated")
    return llm


@pytest.fixture
def app(fake_db, mock_llm):
    from nexus_ai.main import create_app

    return create_app(db=fake_db, llm=mock_llm)


@pytest_asyncio.fixture
async def client(app):
    from httpx import ASGITransport, AsyncClient

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
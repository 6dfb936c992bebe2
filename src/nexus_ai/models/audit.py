"""Admin audit record model."""

from typing import Any

from pydantic import BaseModel, Field


class AdminActionRecord(BaseModel):
    """Append-only record of an administrative action."""

    admin_id: str
    action_type: str
    details: dict[str, Any] = Field(default_factory=dict)
    ip_address: str | None = None

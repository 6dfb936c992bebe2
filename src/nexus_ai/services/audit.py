"""Best-effort audit trail for admin actions."""

import logging
from typing import Any

from nexus_ai.db.client import DatabaseClient
from nexus_ai.models.audit import AdminActionRecord

logger = logging.getLogger(__name__)


class AuditLogger:
    """Writes admin action records without ever failing the caller.

    A failed write is visible only in the local log. Records may be lost.
    """

    def __init__(self, db: DatabaseClient) -> None:
        self.db = db

    async def record(
        self,
        admin_id: str,
        action_type: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        record = AdminActionRecord(
            admin_id=admin_id,
            action_type=action_type,
            details=details,
            ip_address=details.get("ip"),
        )
        try:
            await self.db.insert_admin_action(record)
        except Exception as e:
            logger.error(f"Error logging admin action {action_type} by {admin_id}: {e}")

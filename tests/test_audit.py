"""Tests for the best-effort audit logger."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from nexus_ai.models.audit import AdminActionRecord
from nexus_ai.services.audit import AuditLogger


class TestAuditLogger:
    @pytest.mark.asyncio
    async def test_writes_record(self):
        db = MagicMock()
        db.insert_admin_action = AsyncMock()

        await AuditLogger(db).record("admin-1", "delete_project", {"project_id": "p1", "ip": "1.2.3.4"})

        record = db.insert_admin_action.call_args.args[0]
        assert isinstance(record, AdminActionRecord)
        assert record.admin_id == "admin-1"
        assert record.action_type == "delete_project"
        assert record.details["project_id"] == "p1"
        assert record.ip_address == "1.2.3.4"

    @pytest.mark.asyncio
    async def test_missing_ip_is_none(self):
        db = MagicMock()
        db.insert_admin_action = AsyncMock()

        await AuditLogger(db).record("admin-1", "list_all_projects")

        assert db.insert_admin_action.call_args.args[0].ip_address is None

    @pytest.mark.asyncio
    async def test_failure_is_swallowed_and_logged(self, caplog):
        db = MagicMock()
        db.insert_admin_action = AsyncMock(side_effect=RuntimeError("table missing"))

        with caplog.at_level(logging.ERROR, logger="nexus_ai.services.audit"):
            result = await AuditLogger(db).record("admin-1", "delete_project")

        assert result is None
        assert "table missing" in caplog.text

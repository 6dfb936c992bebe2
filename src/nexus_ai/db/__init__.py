"""Supabase-backed persistence and identity adapter."""

from nexus_ai.db.client import DatabaseClient

__all__ = ["DatabaseClient"]

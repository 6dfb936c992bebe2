"""Nexus AI - project management assistant backend."""

__version__ = "0.1.0"

from nexus_ai.exceptions import NexusError

__all__ = ["__version__", "NexusError"]

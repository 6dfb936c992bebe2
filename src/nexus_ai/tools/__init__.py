"""External integrations and API wrappers."""

from nexus_ai.tools.claude import ClaudeClient, SamplingConfig

__all__ = ["ClaudeClient", "SamplingConfig"]

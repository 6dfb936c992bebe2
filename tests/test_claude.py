"""Tests for the Claude completion client."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from anthropic import APIConnectionError

from nexus_ai.config import Settings
from nexus_ai.exceptions import UpstreamError
from nexus_ai.tools.claude import ClaudeClient, SamplingConfig


@pytest.fixture
def settings() -> Settings:
    return Settings(
        anthropic_api_key="test-key",
        supabase_url="https://test.supabase.co",
        supabase_key="test",
        claude_model="test-model",
        llm_temperature=0.5,
        llm_top_k=10,
        llm_top_p=0.8,
        llm_max_output_tokens=512,
    )


def _response(*texts: str):
    return MagicMock(content=[MagicMock(type="text", text=t) for t in texts])


@pytest.fixture
def anthropic_client():
    client = MagicMock()
    client.messages.create = AsyncMock(return_value=_response("Hello from Nexus"))
    return client


@pytest.fixture
def claude_client(anthropic_client, settings) -> ClaudeClient:
    return ClaudeClient(client=anthropic_client, settings=settings)


class TestSamplingConfig:
    def test_from_settings(self, settings):
        config = SamplingConfig.from_settings(settings)

        assert config == SamplingConfig(
            temperature=0.5, top_k=10, top_p=0.8, max_output_tokens=512
        )


class TestComplete:
    @pytest.mark.asyncio
    async def test_returns_text(self, claude_client):
        assert await claude_client.complete("prompt") == "Hello from Nexus"

    @pytest.mark.asyncio
    async def test_sends_configured_sampling(self, claude_client, anthropic_client):
        await claude_client.complete("prompt")

        kwargs = anthropic_client.messages.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["max_tokens"] == 512
        assert kwargs["temperature"] == 0.5
        assert kwargs["top_k"] == 10
        assert kwargs["top_p"] == 0.8
        assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]

    @pytest.mark.asyncio
    async def test_override_sampling_omits_unset_options(self, claude_client, anthropic_client):
        await claude_client.complete(
            "prompt",
            SamplingConfig(temperature=0.1, top_k=None, top_p=None, max_output_tokens=64),
        )

        kwargs = anthropic_client.messages.create.call_args.kwargs
        assert kwargs["max_tokens"] == 64
        assert "top_k" not in kwargs
        assert "top_p" not in kwargs

    @pytest.mark.asyncio
    async def test_joins_text_blocks(self, claude_client, anthropic_client):
        anthropic_client.messages.create = AsyncMock(return_value=_response("a", "b"))

        assert await claude_client.complete("prompt") == "ab"

    @pytest.mark.asyncio
    async def test_provider_error_is_upstream_error_without_retry(
        self, claude_client, anthropic_client
    ):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        anthropic_client.messages.create = AsyncMock(
            side_effect=APIConnectionError(message="Connection refused", request=request)
        )

        with pytest.raises(UpstreamError) as exc_info:
            await claude_client.complete("prompt")

        assert "Connection refused" in exc_info.value.message
        assert anthropic_client.messages.create.call_count == 1

    @pytest.mark.asyncio
    async def test_empty_response_is_upstream_error(self, claude_client, anthropic_client):
        anthropic_client.messages.create = AsyncMock(return_value=_response())

        with pytest.raises(UpstreamError):
            await claude_client.complete("prompt")

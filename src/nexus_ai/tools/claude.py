"""Anthropic Claude API wrapper used as the completion client."""

import logging
from dataclasses import dataclass

from anthropic import APIError, AsyncAnthropic

from nexus_ai.config import Settings, get_settings
from nexus_ai.exceptions import UpstreamError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SamplingConfig:
    """Sampling options for a single completion.

    Attributes:
        temperature: Randomness; higher is more varied.
        top_k: Sample only from the k most likely tokens.
        top_p: Nucleus sampling probability mass.
        max_output_tokens: Hard cap on generated length.
    """

    temperature: float = 0.9
    top_k: int | None = 40
    top_p: float | None = 0.95
    max_output_tokens: int = 2048

    @classmethod
    def from_settings(cls, settings: Settings) -> "SamplingConfig":
        return cls(
            temperature=settings.llm_temperature,
            top_k=settings.llm_top_k,
            top_p=settings.llm_top_p,
            max_output_tokens=settings.llm_max_output_tokens,
        )


class ClaudeClient:
    """Single-attempt completion client for Anthropic Claude.

    Any transport or provider failure becomes an UpstreamError carrying the
    provider's message. There are no retries and no fallback model.
    """

    def __init__(
        self,
        client: AsyncAnthropic | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.client = client or AsyncAnthropic(api_key=settings.anthropic_api_key)
        self.model = settings.claude_model
        self.default_sampling = SamplingConfig.from_settings(settings)

    @property
    def configured(self) -> bool:
        return bool(self.client.api_key)

    async def complete(
        self,
        prompt: str,
        sampling: SamplingConfig | None = None,
    ) -> str:
        """Generate a completion from Claude.

        Args:
            prompt: The fully assembled prompt text
            sampling: Sampling options, defaulting to the configured ones

        Returns:
            The generated text response

        Raises:
            UpstreamError: If the request fails for any reason
        """
        sampling = sampling or self.default_sampling
        params = {
            "model": self.model,
            "max_tokens": sampling.max_output_tokens,
            "temperature": sampling.temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if sampling.top_k is not None:
            params["top_k"] = sampling.top_k
        if sampling.top_p is not None:
            params["top_p"] = sampling.top_p

        try:
            response = await self.client.messages.create(**params)
        except APIError as e:
            # Includes connection errors and timeouts
            logger.error(f"Claude request failed: {e}")
            raise UpstreamError(str(e)) from e

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        if not text:
            raise UpstreamError("Model returned an empty response")
        return text

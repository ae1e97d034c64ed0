"""LLM Service - Anthropic Claude API wrapper and text-generator adapter."""

import logging
from dataclasses import dataclass

import anthropic
from anthropic import AsyncAnthropic

from src.shared.config import Settings
from src.shared.exceptions import LLMServiceError, OracleError

logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Response from LLM completion."""

    content: str
    model: str
    usage: dict[str, int]
    stop_reason: str | None = None


class LLMService:
    """Service for interacting with Anthropic Claude API."""

    def __init__(self, settings: Settings, client: AsyncAnthropic | None = None) -> None:
        self._settings = settings
        if client is None and settings.has_llm_credentials:
            client = AsyncAnthropic(api_key=settings.anthropic_api_key)
        self.client = client
        self.default_model = settings.default_model
        self.max_tokens = settings.max_tokens

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    async def complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> LLMResponse:
        """Generate a completion from the LLM.

        Args:
            prompt: The user prompt
            system_prompt: Optional system prompt
            model: Model to use (defaults to the configured model)
            max_tokens: Maximum tokens in response
            temperature: Sampling temperature

        Returns:
            LLMResponse with content and metadata

        Raises:
            LLMServiceError: If no API key is configured
        """
        if self.client is None:
            raise LLMServiceError("ANTHROPIC_API_KEY is not configured")

        messages = [{"role": "user", "content": prompt}]

        response = await self.client.messages.create(
            model=model or self.default_model,
            max_tokens=max_tokens or self.max_tokens,
            temperature=self._settings.temperature if temperature is None else temperature,
            system=system_prompt or "",
            messages=messages,
        )

        text = "".join(
            block.text for block in response.content if getattr(block, "type", "text") == "text"
        )

        return LLMResponse(
            content=text,
            model=response.model,
            usage={
                "input_tokens": response.usage.input_tokens,
                "output_tokens": response.usage.output_tokens,
            },
            stop_reason=response.stop_reason,
        )


class LLMOracle:
    """Adapts LLMService to the text-generator interface used by assessments.

    Every failure mode (missing credentials, API errors, empty completions)
    surfaces as OracleError so the session has a single error to absorb.
    """

    def __init__(self, llm_service: LLMService, system_prompt: str | None = None) -> None:
        self._llm = llm_service
        self._system_prompt = system_prompt

    async def generate(self, prompt: str) -> str:
        try:
            response = await self._llm.complete(prompt=prompt, system_prompt=self._system_prompt)
        except LLMServiceError as e:
            raise OracleError(e.message) from e
        except anthropic.APIError as e:
            logger.debug("Anthropic API error: %s", e)
            raise OracleError(f"{type(e).__name__}: {e}") from e

        if not response.content.strip():
            raise OracleError("Empty completion")
        return response.content


def create_oracle(settings: Settings) -> LLMOracle:
    """Build the default oracle from settings."""
    return LLMOracle(LLMService(settings))

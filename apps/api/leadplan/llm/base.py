"""Abstract base class for LLM adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from leadplan.schemas import LLMMessage, LLMResponse


class LLMAdapter(ABC):
    """Abstract base class for completion service adapters.

    Adapters are shared across concurrent requests, so implementations must
    not keep per-request state on the instance.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'openai')."""
        ...

    @abstractmethod
    async def create_response(
        self,
        messages: list[LLMMessage],
        model: str | None = None,
        temperature: float | None = None,
        max_output_tokens: int | None = None,
        response_format: dict[str, Any] | None = None,
    ) -> LLMResponse:
        """Send a completion request.

        Args:
            messages: System and user instructions
            model: Model name (uses default if None)
            temperature: Sampling temperature (0-2)
            max_output_tokens: Maximum tokens in response
            response_format: Optional structured output format
                (e.g., a strict ``json_schema`` format)

        Returns:
            LLMResponse with output items. Transport failures are reported
            with ``finish_reason="error"`` instead of raising.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the provider API is accessible.

        Returns:
            True if API is accessible, False otherwise
        """
        ...

    async def close(self) -> None:
        """Release network resources."""

    def _build_request(
        self,
        messages: list[LLMMessage],
        model: str,
        temperature: float,
        max_output_tokens: int,
        response_format: dict[str, Any] | None,
    ) -> dict[str, Any]:
        """Build the API request payload.

        This is a helper method that subclasses can use or override.
        """
        payload: dict[str, Any] = {
            "model": model,
            "input": [
                {
                    "role": m.role,
                    "content": [{"type": "input_text", "text": m.content}],
                }
                for m in messages
            ],
            "temperature": temperature,
            "max_output_tokens": max_output_tokens,
        }

        if response_format:
            payload["text"] = {"format": response_format}

        return payload

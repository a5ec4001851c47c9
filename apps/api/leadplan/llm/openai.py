"""OpenAI Responses API adapter.

Talks to ``POST {base_url}/responses`` directly over httpx. Any
OpenAI-compatible endpoint exposing the Responses API can be used by
pointing ``OPENAI_BASE_URL`` at it.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx
from pydantic import ValidationError

from leadplan.config import Settings
from leadplan.schemas import LLMMessage, LLMResponse
from leadplan.llm.base import LLMAdapter


logger = logging.getLogger(__name__)


class OpenAIResponsesAdapter(LLMAdapter):
    """OpenAI adapter using the Responses endpoint."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = settings.openai_api_key
        self.base_url = settings.openai_base_url
        self.default_model = settings.openai_model
        self.temperature = settings.openai_temperature
        self.max_output_tokens = settings.openai_max_output_tokens
        self.timeout = settings.openai_timeout_seconds

        if not self.api_key:
            raise ValueError("OpenAI API key not configured")

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            timeout=self.timeout,
            transport=transport,
        )

    @property
    def provider_name(self) -> str:
        return "openai"

    async def create_response(
        self,
        messages: list[LLMMessage],
        model: str | None = None,
        temperature: float | None = None,
        max_output_tokens: int | None = None,
        response_format: dict[str, Any] | None = None,
    ) -> LLMResponse:
        """Send a request to the Responses API."""
        model = model or self.default_model

        payload = self._build_request(
            messages=messages,
            model=model,
            temperature=self.temperature if temperature is None else temperature,
            max_output_tokens=max_output_tokens or self.max_output_tokens,
            response_format=response_format,
        )

        start_time = time.perf_counter()

        try:
            response = await self._client.post("/responses", json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            return LLMResponse(
                model=model,
                finish_reason="error",
                raw_response={"error": str(e), "status_code": e.response.status_code},
            )
        except (httpx.HTTPError, ValueError) as e:
            return LLMResponse(
                model=model,
                finish_reason="error",
                raw_response={"error": f"{type(e).__name__}: {e}"},
            )

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(f"OpenAI response from {model} in {latency_ms}ms")

        if not isinstance(data, dict):
            return LLMResponse(
                model=model,
                finish_reason="error",
                raw_response={"error": "Response body is not a JSON object"},
            )

        try:
            return LLMResponse(
                model=data.get("model") or model,
                status=data.get("status"),
                output=data.get("output") or [],
                output_text=data.get("output_text"),
                usage=data.get("usage") or {},
                finish_reason=data.get("status"),
                raw_response=data,
            )
        except ValidationError as e:
            return LLMResponse(
                model=model,
                finish_reason="error",
                raw_response={"error": f"Unrecognized response shape: {e}", "body": data},
            )

    async def health_check(self) -> bool:
        """Check if the configured model is reachable."""
        try:
            response = await self._client.get(f"/models/{self.default_model}")
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

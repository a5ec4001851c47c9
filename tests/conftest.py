"""Shared fixtures for LeadPlan tests."""

from __future__ import annotations

import json
from typing import Any

import pytest

from leadplan.config import Settings
from leadplan.llm.base import LLMAdapter
from leadplan.schemas import LeadProfile, LLMMessage, LLMResponse


class StubAdapter(LLMAdapter):
    """Completion adapter returning a canned response and recording calls."""

    def __init__(self, response: LLMResponse | None = None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    @property
    def provider_name(self) -> str:
        return "stub"

    async def create_response(
        self,
        messages: list[LLMMessage],
        model: str | None = None,
        temperature: float | None = None,
        max_output_tokens: int | None = None,
        response_format: dict[str, Any] | None = None,
    ) -> LLMResponse:
        self.calls.append(
            {"messages": messages, "model": model, "response_format": response_format}
        )
        if self.error is not None:
            raise self.error
        return self.response

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self.closed = True


def make_plan_data() -> dict[str, Any]:
    """A schema-valid plan as the model would return it (camelCase)."""
    return {
        "strategySummary": "Lead with proof-driven outbound to RevOps leaders.",
        "icpSnapshot": {
            "title": "RevOps leaders at 50-500 person SaaS companies",
            "bullets": ["Own the CRM", "Report pipeline weekly", "Budget for tooling"],
        },
        "campaignIdeas": [
            {
                "channel": channel,
                "objective": "Book meetings",
                "primaryOffer": "Pipeline audit",
                "sequence": ["Touch 1", "Touch 2", "Touch 3"],
                "metrics": ["Replies", "Meetings", "Pipeline"],
            }
            for channel in ("Outbound", "Webinars", "Partners")
        ],
        "messaging": {
            "email": [
                {"subject": "Pipeline audit", "body": "Hi there"},
                {"subject": "Benchmarks", "body": "Hello again"},
            ],
            "social": ["Post 1", "Post 2", "Post 3"],
            "ads": ["Ad 1", "Ad 2", "Ad 3"],
        },
        "followUpCadence": ["Day 1", "Day 3", "Day 7"],
        "automationSuggestions": ["Enrich", "Score", "Alert"],
        "dataSignals": ["Hiring", "Funding", "Stack changes"],
        "nextSteps": ["Define ICP", "Write copy", "Launch"],
    }


def text_response(text: str, block_type: str = "output_text") -> LLMResponse:
    """A Responses-shaped result with a single text block."""
    return LLMResponse(
        model="gpt-4.1-mini",
        status="completed",
        output=[
            {
                "type": "message",
                "role": "assistant",
                "content": [{"type": block_type, "text": text}],
            }
        ],
        finish_reason="completed",
    )


@pytest.fixture
def settings_without_key() -> Settings:
    return Settings(_env_file=None, openai_api_key="")


@pytest.fixture
def settings_with_key() -> Settings:
    return Settings(
        _env_file=None,
        openai_api_key="sk-test",
        openai_model="gpt-test",
        openai_base_url="https://llm.test/v1",
    )


@pytest.fixture
def sample_profile() -> LeadProfile:
    return LeadProfile(
        business_name="Acme",
        offering="CRM software",
        audience="sales teams",
        goals="more leads",
    )


@pytest.fixture
def plan_data() -> dict[str, Any]:
    return make_plan_data()


@pytest.fixture
def valid_model_response(plan_data) -> LLMResponse:
    return text_response(json.dumps(plan_data))


@pytest.fixture
def make_adapter():
    """Factory for stub adapters."""
    def _make(response: LLMResponse | None = None, error: Exception | None = None) -> StubAdapter:
        return StubAdapter(response=response, error=error)
    return _make


@pytest.fixture
def make_text_response():
    return text_response

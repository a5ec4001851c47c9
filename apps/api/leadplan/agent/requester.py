"""Model plan requester.

Builds the instructions, calls the completion service once with the strict
plan schema attached, then extracts, decodes and validates the answer.
Any problem is raised; a partial plan is never returned.
"""

from __future__ import annotations

import logging

from leadplan.agent.prompts import format_plan_prompt, format_system_prompt
from leadplan.config import Settings
from leadplan.errors import ExternalServiceError
from leadplan.llm.base import LLMAdapter
from leadplan.llm.extract import extract_payload
from leadplan.plan_schema import plan_response_format, plan_schema_text, validate_plan
from leadplan.schemas import LeadProfile, LLMMessage, Plan


logger = logging.getLogger(__name__)


class ModelPlanRequester:
    """Requests a plan from the completion service."""

    def __init__(self, adapter: LLMAdapter, settings: Settings):
        self.adapter = adapter
        self.model = settings.openai_model

    def build_messages(self, profile: LeadProfile) -> list[LLMMessage]:
        return [
            LLMMessage(role="system", content=format_system_prompt(plan_schema_text())),
            LLMMessage(role="user", content=format_plan_prompt(profile)),
        ]

    async def request_plan(self, profile: LeadProfile) -> Plan:
        """Return a validated plan from the model.

        Raises:
            ExternalServiceError: if the call failed.
            ExtractionError: if no payload could be located.
            ParseError: if the payload is not valid JSON.
            PlanValidationError: if the JSON does not match the plan schema.
        """
        logger.info(f"Requesting plan for {profile.business_name!r} from {self.adapter.provider_name}/{self.model}")

        response = await self.adapter.create_response(
            messages=self.build_messages(profile),
            model=self.model,
            response_format=plan_response_format(),
        )

        if response.finish_reason == "error":
            error = (response.raw_response or {}).get("error", "unknown error")
            raise ExternalServiceError(f"Completion request failed: {error}")

        payload = extract_payload(response)
        logger.debug(f"Extracted {payload.kind} payload from {response.model}")

        return validate_plan(payload.decode())

    async def close(self) -> None:
        await self.adapter.close()

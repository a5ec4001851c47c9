"""Error taxonomy for plan generation.

Only ``InputError`` is ever surfaced to callers. Everything under
``ExternalServiceError`` belongs to the model path and is absorbed by the
orchestrator, which falls back to the local synthesizer.
"""

from __future__ import annotations


class LeadPlanError(Exception):
    """Base class for all LeadPlan errors."""


class InputError(LeadPlanError):
    """Malformed request body or missing required profile fields."""


class ExternalServiceError(LeadPlanError):
    """The completion service call failed or returned unusable content."""


class ExtractionError(ExternalServiceError):
    """The response had no recognizable JSON payload."""


class ParseError(ExternalServiceError):
    """The extracted payload is not valid JSON."""


class PlanValidationError(ParseError):
    """The payload is valid JSON but does not satisfy the plan schema."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        super().__init__(message)
        self.errors = errors or []

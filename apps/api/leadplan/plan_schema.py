"""The plan output contract.

The ``Plan`` model is the single declarative definition: its JSON schema is
embedded in the model instructions and attached as the strict response
format, and its validator checks whatever the model sends back.
"""

from __future__ import annotations

import copy
import json
from functools import lru_cache
from typing import Any

from pydantic import ValidationError

from leadplan.errors import PlanValidationError
from leadplan.schemas import Plan


PLAN_SCHEMA_NAME = "lead_generation_plan"


@lru_cache
def _schema() -> dict[str, Any]:
    return Plan.model_json_schema(by_alias=True)


def plan_json_schema() -> dict[str, Any]:
    """Return the JSON schema of a plan (camelCase field names)."""
    return copy.deepcopy(_schema())


def plan_schema_text() -> str:
    """Return the schema as indented JSON text for prompts."""
    return json.dumps(_schema(), indent=2)


def plan_response_format() -> dict[str, Any]:
    """Build the strict ``json_schema`` response format for the Responses API."""
    return {
        "type": "json_schema",
        "name": PLAN_SCHEMA_NAME,
        "schema": plan_json_schema(),
        "strict": True,
    }


def validate_plan(data: Any) -> Plan:
    """Validate decoded JSON against the plan contract.

    Raises:
        PlanValidationError: if a required field is missing, a list is
            shorter than its minimum, a value has the wrong type, a key is
            spelled in snake_case or an unknown key is present.
    """
    try:
        # Keys must be the camelCase names the schema declares.
        return Plan.model_validate(data, by_alias=True, by_name=False)
    except ValidationError as e:
        raise PlanValidationError(
            f"Plan does not match schema ({e.error_count()} errors)",
            errors=e.errors(include_url=False),
        ) from e


def is_valid_plan(data: Any) -> bool:
    try:
        validate_plan(data)
    except PlanValidationError:
        return False
    return True

"""Pydantic schemas for all plan I/O contracts.

These schemas define the strict contracts between:
- API endpoints and clients (camelCase on the wire)
- LLM model inputs/outputs
- The fallback synthesizer and the model path (both produce a ``Plan``)
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    StringConstraints,
    Tag,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from leadplan.errors import InputError


RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
REQUIRED_PROFILE_FIELDS = {"businessName", "offering", "audience"}


class CamelModel(BaseModel):
    """Immutable model serialized with camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class PlanModel(CamelModel):
    """Plan component: every field required, no extra keys."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# Enums
# =============================================================================

class PlanSource(str, Enum):
    """Provenance of a returned plan."""
    MODEL = "model"
    FALLBACK = "fallback"


class HistoryRole(str, Enum):
    """Speaker of a conversation history entry."""
    AGENT = "agent"
    USER = "user"


# =============================================================================
# Input Schemas
# =============================================================================

class HistoryMessage(CamelModel):
    """One prior chat turn, used only as contextual text."""
    role: HistoryRole
    content: str


class LeadProfile(CamelModel):
    """Business profile submitted by the caller."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "businessName": "Acme",
                "offering": "CRM software",
                "audience": "sales teams",
                "goals": "more leads, shorter sales cycles",
                "tone": "friendly",
            }
        }
    )

    business_name: RequiredText = Field(..., description="Company or brand name")
    offering: RequiredText = Field(..., description="Product or service being sold")
    audience: RequiredText = Field(..., description="Who the business sells to")
    tone: str | None = Field(default=None, description="Preferred voice for copy")
    goals: str | None = Field(default=None, description="Comma or newline separated goals")
    differentiators: str | None = Field(default=None, description="Comma or newline separated differentiators")
    budget: str | None = Field(default=None, description="Free-text budget guidance")
    history: list[HistoryMessage] = Field(default_factory=list)

    @field_validator("tone", "goals", "differentiators", "budget", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


# =============================================================================
# Plan Schemas
# =============================================================================

class IcpSnapshot(PlanModel):
    """Ideal customer profile summary."""
    title: str
    bullets: list[str] = Field(..., min_length=3)


class CampaignIdea(PlanModel):
    """One channel campaign with its touch sequence and success metrics."""
    channel: str
    objective: str
    primary_offer: str
    sequence: list[str] = Field(..., min_length=3)
    metrics: list[str] = Field(..., min_length=3)


class EmailTemplate(PlanModel):
    """Outbound email copy."""
    subject: str
    body: str


class Messaging(PlanModel):
    """Copy for email, social and paid channels."""
    email: list[EmailTemplate] = Field(..., min_length=2)
    social: list[str] = Field(..., min_length=3)
    ads: list[str] = Field(..., min_length=3)


class Plan(PlanModel):
    """Lead generation plan returned to the caller."""
    strategy_summary: str
    icp_snapshot: IcpSnapshot
    campaign_ideas: list[CampaignIdea] = Field(..., min_length=3)
    messaging: Messaging
    follow_up_cadence: list[str] = Field(..., min_length=3)
    automation_suggestions: list[str] = Field(..., min_length=3)
    data_signals: list[str] = Field(..., min_length=3)
    next_steps: list[str] = Field(..., min_length=3)

    def to_markdown(self) -> str:
        """Render plan as markdown."""
        md = "# Lead Generation Plan\n\n"
        md += f"## Strategy Summary\n{self.strategy_summary}\n\n"
        md += f"## Ideal Customer Profile: {self.icp_snapshot.title}\n"
        for bullet in self.icp_snapshot.bullets:
            md += f"- {bullet}\n"
        md += "\n## Campaign Ideas\n"
        for idea in self.campaign_ideas:
            md += f"\n### {idea.channel}\n"
            md += f"**Objective:** {idea.objective}\n\n"
            md += f"**Primary offer:** {idea.primary_offer}\n\n"
            for i, touch in enumerate(idea.sequence, 1):
                md += f"{i}. {touch}\n"
            md += f"\nMetrics: {', '.join(idea.metrics)}\n"
        md += "\n## Messaging\n\n### Email\n"
        for email in self.messaging.email:
            md += f"\n**Subject:** {email.subject}\n\n{email.body}\n"
        md += "\n### Social\n"
        for post in self.messaging.social:
            md += f"- {post}\n"
        md += "\n### Ads\n"
        for ad in self.messaging.ads:
            md += f"- {ad}\n"
        for heading, items in (
            ("Follow-up Cadence", self.follow_up_cadence),
            ("Automation Suggestions", self.automation_suggestions),
            ("Data Signals", self.data_signals),
        ):
            md += f"\n## {heading}\n"
            for item in items:
                md += f"- {item}\n"
        md += "\n## Next Steps\n"
        for i, step in enumerate(self.next_steps, 1):
            md += f"{i}. {step}\n"
        return md


# =============================================================================
# API Request/Response Schemas
# =============================================================================

class PlanResponse(CamelModel):
    """API response carrying a plan and its provenance."""
    plan: Plan
    source: PlanSource


class ErrorResponse(BaseModel):
    """API error body."""
    error: str


# =============================================================================
# LLM Schemas
# =============================================================================

class LLMMessage(BaseModel):
    """A single instruction sent to the completion service."""
    role: Literal["system", "user", "assistant"] = Field(...)
    content: str = Field(...)


class TextBlock(BaseModel):
    """Content block carrying the answer as text."""
    type: Literal["output_text", "text"]
    text: str | None = None


class JsonBlock(BaseModel):
    """Content block carrying the answer as structured JSON."""
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["json"]
    data: Any = Field(default=None, alias="json")


class OtherBlock(BaseModel):
    """Any content block we do not read from (refusals, annotations...)."""
    type: str | None = None


def _block_kind(value: Any) -> str:
    if isinstance(value, dict):
        block_type = value.get("type")
    else:
        block_type = getattr(value, "type", None)
    if block_type in ("output_text", "text"):
        return "text"
    if block_type == "json":
        return "json"
    return "other"


ContentBlock = Annotated[
    Union[
        Annotated[TextBlock, Tag("text")],
        Annotated[JsonBlock, Tag("json")],
        Annotated[OtherBlock, Tag("other")],
    ],
    Discriminator(_block_kind),
]


class OutputItem(BaseModel):
    """One item of the completion service ``output`` array."""
    type: str | None = None
    role: str | None = None
    content: list[ContentBlock] | None = None


class LLMResponse(BaseModel):
    """Response from the completion service."""
    model: str
    status: str | None = None
    output: list[OutputItem] = Field(default_factory=list)
    output_text: str | None = Field(default=None, description="Aggregated text of all output blocks")
    usage: dict[str, Any] = Field(default_factory=dict)
    finish_reason: str | None = None
    raw_response: dict[str, Any] | None = None


# =============================================================================
# Helpers
# =============================================================================

def load_profile(data: Any) -> LeadProfile:
    """Validate raw input into a profile.

    Raises:
        InputError: if the data is not an object or a required field is
            missing or blank.
    """
    try:
        return LeadProfile.model_validate(data)
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        if not fields or REQUIRED_PROFILE_FIELDS.intersection(fields):
            raise InputError("businessName, offering, and audience are required.") from e
        raise InputError(f"Invalid profile fields: {', '.join(fields)}") from e

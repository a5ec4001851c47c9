"""Prompt templates for the plan request.

The system prompt carries the plan schema so the model sees the contract
even when the provider ignores the attached response format.
"""

from __future__ import annotations

from leadplan.schemas import HistoryMessage, LeadProfile


# =============================================================================
# System Prompts
# =============================================================================

SYSTEM_PROMPT = """You are an elite B2B and B2C demand generation strategist.
Always respond with valid JSON that matches this schema (no markdown, no prose outside JSON):
{schema}"""


# =============================================================================
# Plan Prompts
# =============================================================================

PLAN_PROMPT = """Use the following context to craft a lead-generation blueprint. Respond with JSON that matches the provided schema.

{context}

Conversation memory: {history}"""

HISTORY_SEPARATOR = " | "
EMPTY_HISTORY = "N/A"


# =============================================================================
# Helper Functions
# =============================================================================

def format_system_prompt(schema_text: str) -> str:
    """Format the system prompt with the plan schema."""
    return SYSTEM_PROMPT.format(schema=schema_text)


def build_context(profile: LeadProfile) -> str:
    """Render the profile as labeled lines, skipping empty optional fields."""
    lines = [
        f"Business: {profile.business_name}",
        f"Offering: {profile.offering}",
        f"Audience: {profile.audience}",
    ]
    if profile.goals:
        lines.append(f"Goals: {profile.goals}")
    if profile.differentiators:
        lines.append(f"Differentiators: {profile.differentiators}")
    if profile.budget:
        lines.append(f"Budget guidance: {profile.budget}")
    if profile.tone:
        lines.append(f"Preferred tone: {profile.tone}")
    return "\n".join(lines)


def format_history(history: list[HistoryMessage]) -> str:
    """Flatten conversation history into ``role: content`` pairs."""
    if not history:
        return EMPTY_HISTORY
    return HISTORY_SEPARATOR.join(f"{m.role.value}: {m.content}" for m in history)


def format_plan_prompt(profile: LeadProfile) -> str:
    """Format the user prompt with profile context and history."""
    return PLAN_PROMPT.format(
        context=build_context(profile),
        history=format_history(profile.history),
    )

"""Deterministic plan synthesis.

Builds a complete plan from the profile alone by interpolating it into
fixed templates. Used when no model credential is configured or when the
model path fails for any reason. Never raises for a valid profile.
"""

from __future__ import annotations

from typing import Sequence

from leadplan.normalize import parse_list
from leadplan.schemas import (
    CampaignIdea,
    EmailTemplate,
    IcpSnapshot,
    LeadProfile,
    Messaging,
    Plan,
)


DEFAULT_BRAND = "Your brand"
DEFAULT_OFFER = "your offer"
DEFAULT_AUDIENCE = "target buyers"
DEFAULT_TONE = "consultative"
DEFAULT_BUDGET = "allocate spend across high-impact channels based on CAC targets"

DEFAULT_GOALS = ["Grow pipeline", "Increase demos", "Shorten sales cycles"]
DEFAULT_DIFFERENTIATORS = [
    "Faster onboarding than competitors",
    "Documented ROI within 60 days",
    "Dedicated success manager",
]

FOLLOW_UP_CADENCE = [
    "Run a 5-touch cadence over 10 days mixing email, call, and LinkedIn.",
    "Reconnect on day 14 with a value share (toolkit, benchmark, or invite).",
    "Move still-cold contacts into nurture with a monthly live workshop CTA.",
]

AUTOMATION_SUGGESTIONS = [
    "Enrich accounts in Clay or Apollo with hiring, tech stack, and trigger events.",
    "Sync hand-raisers to the CRM automatically and apply lead scoring rules.",
    "Send Slack alerts on high-intent actions (pricing page visits, calculator downloads).",
]

DATA_SIGNALS = [
    "Net-new funding, hiring for related roles, or tooling migrations.",
    "Tech stack fit (e.g. HubSpot or Salesforce connected apps).",
    "Engagement with industry reports, webinars, or comparison pages.",
]

NEXT_STEPS = [
    "Finalize ICP attributes and intent signals inside your CRM/CDP.",
    "Load the lead magnet and nurture emails into your automation platform.",
    "Launch the outbound sequence with 20 pilot accounts and monitor replies.",
    "Review results weekly and iterate messaging based on objections.",
]


def _item(items: Sequence[str], index: int, default: str) -> str:
    return items[index] if len(items) > index else default


def build_fallback_plan(profile: LeadProfile) -> Plan:
    """Synthesize a complete plan from the profile without external calls."""
    brand = profile.business_name or DEFAULT_BRAND
    offer = profile.offering or DEFAULT_OFFER
    audience = profile.audience or DEFAULT_AUDIENCE
    tone = profile.tone or DEFAULT_TONE
    budget = profile.budget or DEFAULT_BUDGET

    goals = parse_list(profile.goals, DEFAULT_GOALS)
    diffs = parse_list(profile.differentiators, DEFAULT_DIFFERENTIATORS)
    headline_goal = _item(parse_list(profile.goals), 0, "New revenue")

    first_goal = goals[0].lower()
    first_diff = diffs[0].lower()

    campaign_ideas = [
        CampaignIdea(
            channel="Outbound multi-touch",
            objective="Book qualified meetings",
            primary_offer=f"Personalized walkthrough of how {brand} accelerates results for {audience}.",
            sequence=[
                "Day 0: Triggered LinkedIn profile view plus a soft intro DM tied to mutual context.",
                "Day 1: Email with a problem-first hook and a proof point tied to the key metric.",
                "Day 3: Phone call or voice drop referencing a recent industry change.",
                "Day 5: Case-study email with a micro CTA (15-minute agenda).",
            ],
            metrics=["Open rate", "Positive reply rate", "SQO conversion", "Pipeline value booked"],
        ),
        CampaignIdea(
            channel="Paid demand (LinkedIn + retargeting)",
            objective="Capture in-market demand",
            primary_offer=(
                f"Lead magnet showcasing {_item(diffs, 1, 'operational wins')} using {offer}."
            ),
            sequence=[
                "Sponsored thought-leadership carousel driving to an ungated insight.",
                "Retarget with a lead gen form offering an ROI worksheet or benchmark tool.",
                "30-day nurture via retargeting video featuring a customer testimonial.",
            ],
            metrics=["Lead quality score", "Cost per MQL", "View-through conversions", "Demo requests"],
        ),
        CampaignIdea(
            channel="Lifecycle + marketing automation",
            objective="Nurture and accelerate deals",
            primary_offer=f"Automated nurture that educates the buying committee on {offer}.",
            sequence=[
                "Welcome email with the core promise and a quick-win resource.",
                "Day 3: Use-case drip aligned to role-based pain points.",
                "Day 7: Customer proof email with quantifiable outcomes.",
                "Day 10: Live session invite or interactive ROI calculator CTA.",
            ],
            metrics=[
                "Email engagement depth",
                "Speed to second touch",
                "Meeting acceptance",
                "Expansion opportunities",
            ],
        ),
    ]

    emails = [
        EmailTemplate(
            subject=f"{brand} | {headline_goal} in the next 90 days",
            body=(
                "Hi {{first_name}},\n\n"
                f"I noticed {audience} teams are navigating {first_goal}. "
                f"{brand} removes the {first_diff} gap by delivering {offer.lower()}.\n\n"
                f"Clients typically see {_item(diffs, 1, 'faster adoption').lower()} within 30 days. "
                "Up for comparing playbooks next week?\n\n"
                f"- {brand} team"
            ),
        ),
        EmailTemplate(
            subject=f"Quick win: {offer} benchmark for {audience}",
            body=(
                "Hey {{first_name}},\n\n"
                f"Sharing a short benchmark that maps where {audience} usually hit friction "
                f"and how teams solved it. It's pulled from recent {brand} rollouts.\n\n"
                "Happy to walk you through the numbers and flag fast wins if useful."
            ),
        ),
    ]

    return Plan(
        strategy_summary=(
            f"{brand} should focus on the {audience} segment with {offer}, leaning into "
            f"{', '.join(diffs)} and executing a {tone} voice across outbound, paid, and "
            f"lifecycle touchpoints. Budget guidance: {budget}."
        ),
        icp_snapshot=IcpSnapshot(
            title=audience,
            bullets=[
                f"{audience} experiencing pressure to {first_goal}.",
                f"Decision-makers prioritizing solutions that deliver {first_diff}.",
                f"Buying triggers include teams evaluating {offer.lower()} alternatives or showing "
                "intent signals (hiring, tech stack updates).",
            ],
        ),
        campaign_ideas=campaign_ideas,
        messaging=Messaging(
            email=emails,
            social=[
                f"Hook: \"{audience} still fighting to {first_goal}? Here's how {brand} makes it routine.\"",
                f"Problem spotlight reel featuring {first_diff}.",
                f"Customer quote snippet highlighting measurable wins after adopting {offer}.",
            ],
            ads=[
                f"{goals[0]} without burning SDR hours with {brand}.",
                f"Prove ROI on {offer} in 30 days with {brand}'s {first_diff}.",
                f"{audience}: a ready-made system to {_item(goals, 1, 'scale pipeline').lower()}.",
            ],
        ),
        follow_up_cadence=list(FOLLOW_UP_CADENCE),
        automation_suggestions=list(AUTOMATION_SUGGESTIONS),
        data_signals=list(DATA_SIGNALS),
        next_steps=list(NEXT_STEPS),
    )

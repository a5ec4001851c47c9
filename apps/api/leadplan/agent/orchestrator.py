"""LangGraph workflow choosing between the model and the local synthesizer.

Graph structure:
START ─┬─ (credential) ──→ request_model ─┬─ (plan) ───→ END
       │                                  └─ (failure) ─→ synthesize → END
       └─ (no credential) ───────────────────────────────→ synthesize → END

The workflow never fails for model-related reasons: every error on the
model path is logged and answered with a synthesized plan.
"""

from __future__ import annotations

import logging
from typing import Literal, TypedDict

from langgraph.graph import END, START, StateGraph

from leadplan.agent.fallback import build_fallback_plan
from leadplan.agent.requester import ModelPlanRequester
from leadplan.config import Settings
from leadplan.errors import LeadPlanError
from leadplan.llm.openai import OpenAIResponsesAdapter
from leadplan.schemas import LeadProfile, Plan, PlanResponse, PlanSource


logger = logging.getLogger(__name__)


# =============================================================================
# State Definition
# =============================================================================

class PlanState(TypedDict, total=False):
    """State for the plan workflow.

    Attributes:
        profile: The caller's business profile
        plan: The resulting plan, once produced
        source: Provenance of ``plan``
        error: Description of the model path failure, if any
    """
    profile: LeadProfile
    plan: Plan
    source: PlanSource
    error: str


class PlanOrchestrator:
    """Produces a plan for a profile, tagged with its provenance."""

    def __init__(self, settings: Settings, requester: ModelPlanRequester | None = None):
        self.settings = settings

        if settings.has_credential and requester is None:
            requester = ModelPlanRequester(OpenAIResponsesAdapter(settings), settings)

        # Without a credential the model path is never taken.
        self.requester = requester if settings.has_credential else None
        self.workflow = self._build_workflow().compile()

    # =========================================================================
    # Node Functions
    # =========================================================================

    async def request_model_node(self, state: PlanState) -> PlanState:
        """Ask the completion service for a plan."""
        profile = state["profile"]
        try:
            plan = await self.requester.request_plan(profile)
        except LeadPlanError as e:
            logger.warning(f"Model plan failed for {profile.business_name!r}, falling back: {e}")
            return {"error": str(e)}
        except Exception as e:
            logger.exception(f"Unexpected error requesting plan for {profile.business_name!r}")
            return {"error": f"{type(e).__name__}: {e}"}

        return {"plan": plan, "source": PlanSource.MODEL}

    async def synthesize_node(self, state: PlanState) -> PlanState:
        """Build the plan locally from the profile."""
        return {"plan": build_fallback_plan(state["profile"]), "source": PlanSource.FALLBACK}

    # =========================================================================
    # Routing Functions
    # =========================================================================

    def route_start(self, state: PlanState) -> Literal["request_model", "synthesize"]:
        if self.requester is None:
            logger.info("No model credential configured, synthesizing plan")
            return "synthesize"
        return "request_model"

    def route_after_request(self, state: PlanState) -> Literal["done", "synthesize"]:
        return "done" if state.get("plan") is not None else "synthesize"

    # =========================================================================
    # Workflow Builder
    # =========================================================================

    def _build_workflow(self) -> StateGraph:
        workflow = StateGraph(PlanState)

        workflow.add_node("request_model", self.request_model_node)
        workflow.add_node("synthesize", self.synthesize_node)

        workflow.add_conditional_edges(
            START,
            self.route_start,
            {
                "request_model": "request_model",
                "synthesize": "synthesize",
            },
        )
        workflow.add_conditional_edges(
            "request_model",
            self.route_after_request,
            {
                "done": END,
                "synthesize": "synthesize",
            },
        )
        workflow.add_edge("synthesize", END)

        return workflow

    # =========================================================================
    # Public API
    # =========================================================================

    async def generate(self, profile: LeadProfile) -> PlanResponse:
        """Run the workflow for one profile."""
        state = await self.workflow.ainvoke({"profile": profile})
        logger.info(f"Plan for {profile.business_name!r} produced by {state['source'].value}")
        return PlanResponse(plan=state["plan"], source=state["source"])

    async def close(self) -> None:
        if self.requester is not None:
            await self.requester.close()

    async def model_reachable(self) -> bool | None:
        """Probe the completion service, or None when no credential is set."""
        if self.requester is None:
            return None
        return await self.requester.adapter.health_check()

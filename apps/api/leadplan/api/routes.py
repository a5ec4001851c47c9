"""FastAPI routes for the LeadPlan API.

Endpoints:
- POST /plan    - Generate a lead generation plan for a business profile
- POST /agent   - Alias of /plan used by the chat UI
- GET  /schema  - JSON schema every plan satisfies
- GET  /health  - Health check
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from leadplan.agent.orchestrator import PlanOrchestrator
from leadplan.config import Settings
from leadplan.plan_schema import PLAN_SCHEMA_NAME, plan_json_schema
from leadplan.schemas import ErrorResponse, LeadProfile, PlanResponse


logger = logging.getLogger(__name__)
router = APIRouter()


def get_app_settings(request: Request) -> Settings:
    """Dependency returning the settings the app was built with."""
    return request.app.state.settings


def get_orchestrator(request: Request) -> PlanOrchestrator:
    """Dependency returning the shared plan orchestrator."""
    return request.app.state.orchestrator


# =============================================================================
# Health Check
# =============================================================================

@router.get("/health")
async def health(
    settings: Settings = Depends(get_app_settings),
    orchestrator: PlanOrchestrator = Depends(get_orchestrator),
) -> dict:
    """Health check endpoint.

    ``modelReachable`` is null when no credential is configured.
    """
    return {
        "status": "ok",
        "version": settings.app_version,
        "environment": settings.environment,
        "modelConfigured": settings.has_credential,
        "modelReachable": await orchestrator.model_reachable(),
    }


# =============================================================================
# Plan Endpoints
# =============================================================================

@router.post(
    "/plan",
    response_model=PlanResponse,
    responses={400: {"model": ErrorResponse}},
)
@router.post(
    "/agent",
    response_model=PlanResponse,
    responses={400: {"model": ErrorResponse}},
    include_in_schema=False,
)
async def create_plan(
    profile: LeadProfile,
    orchestrator: PlanOrchestrator = Depends(get_orchestrator),
) -> PlanResponse:
    """Generate a plan for a business profile.

    Model failures never surface here: the plan is synthesized locally
    instead and ``source`` is set to ``fallback``.
    """
    logger.info(f"Plan requested for {profile.business_name!r}")
    return await orchestrator.generate(profile)


@router.get("/schema")
async def get_plan_schema() -> dict:
    """Return the strict JSON schema of a plan."""
    return {"name": PLAN_SCHEMA_NAME, "schema": plan_json_schema()}

"""CLI entrypoint (Typer).

- ``leadplan plan --business ... --offering ... --audience ...`` prints a plan
- ``leadplan serve`` runs the HTTP API
"""

from __future__ import annotations

import asyncio
import json
import logging
from enum import Enum
from typing import Optional

import typer

from leadplan.agent.fallback import build_fallback_plan
from leadplan.agent.orchestrator import PlanOrchestrator
from leadplan.config import get_settings
from leadplan.errors import InputError
from leadplan.schemas import LeadProfile, PlanResponse, PlanSource, load_profile


logger = logging.getLogger(__name__)

app = typer.Typer(help="LeadPlan Agent CLI: lead generation plans for small businesses.")


class OutputFormat(str, Enum):
    JSON = "json"
    MARKDOWN = "markdown"


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log routing decisions")):
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def _generate(profile: LeadProfile) -> PlanResponse:
    orchestrator = PlanOrchestrator(get_settings())
    try:
        return await orchestrator.generate(profile)
    finally:
        await orchestrator.close()


@app.command()
def plan(
    business: str = typer.Option(..., "--business", "-b", help="Business name"),
    offering: str = typer.Option(..., "--offering", "-o", help="What you sell"),
    audience: str = typer.Option(..., "--audience", "-a", help="Who you sell to"),
    tone: Optional[str] = typer.Option(None, help="Preferred voice"),
    goals: Optional[str] = typer.Option(None, help="Comma separated goals"),
    differentiators: Optional[str] = typer.Option(None, help="Comma separated differentiators"),
    budget: Optional[str] = typer.Option(None, help="Budget guidance"),
    output_format: OutputFormat = typer.Option(OutputFormat.JSON, "--format", "-f"),
    offline: bool = typer.Option(False, "--offline", help="Skip the model and synthesize locally"),
):
    """Generate a lead generation plan."""
    try:
        profile = load_profile(
            {
                "businessName": business,
                "offering": offering,
                "audience": audience,
                "tone": tone,
                "goals": goals,
                "differentiators": differentiators,
                "budget": budget,
            }
        )
    except InputError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    if offline:
        result = PlanResponse(plan=build_fallback_plan(profile), source=PlanSource.FALLBACK)
    else:
        result = asyncio.run(_generate(profile))

    if output_format == OutputFormat.MARKDOWN:
        typer.echo(result.plan.to_markdown())
        typer.echo(f"_source: {result.source.value}_")
    else:
        typer.echo(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2))


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind host (defaults to API_HOST)"),
    port: Optional[int] = typer.Option(None, help="Bind port (defaults to API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "leadplan.api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload or settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    app()

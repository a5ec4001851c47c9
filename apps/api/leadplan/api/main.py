"""FastAPI application entry point."""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from leadplan.agent.orchestrator import PlanOrchestrator
from leadplan.api.routes import router
from leadplan.config import Settings, get_settings
from leadplan.schemas import REQUIRED_PROFILE_FIELDS


logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "Invalid JSON payload."
MISSING_FIELDS_MESSAGE = "businessName, offering, and audience are required."


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _unparsed_body(body: Any) -> bool:
    """True when FastAPI could not read the body as JSON at all."""
    if body is None:
        return True
    if isinstance(body, (bytes, str)):
        try:
            json.loads(body)
        except ValueError:
            return True
    return False


def describe_validation_error(exc: RequestValidationError) -> str:
    """Map request validation failures onto the API's error messages."""
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        return INVALID_JSON_MESSAGE

    for err in errors:
        loc = tuple(err.get("loc", ()))
        # ("body",) alone means an empty, non-JSON or non-object body.
        if loc == ("body",):
            return INVALID_JSON_MESSAGE if _unparsed_body(exc.body) else MISSING_FIELDS_MESSAGE
        if len(loc) >= 2 and loc[1] in REQUIRED_PROFILE_FIELDS:
            return MISSING_FIELDS_MESSAGE

    first = errors[0] if errors else {}
    where = ".".join(str(part) for part in first.get("loc", ())[1:]) or "body"
    return f"Invalid request: {where}: {first.get('msg', 'invalid value')}"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around an explicit settings object."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        configure_logging(settings)
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")
        app.state.orchestrator = PlanOrchestrator(settings)
        if not settings.has_credential:
            logger.info("OPENAI_API_KEY not set, plans will be synthesized locally")

        yield

        # Shutdown
        logger.info("Shutting down...")
        await app.state.orchestrator.close()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="LeadPlan Agent API - Lead generation plans for small businesses",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = describe_validation_error(exc)
        logger.info(f"Rejected {request.url.path}: {message}")
        return JSONResponse(status_code=400, content={"error": message})

    # Include routes
    app.include_router(router, prefix="/api")

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(
        "leadplan.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )

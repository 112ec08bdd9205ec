"""SolarQuote Estimator - FastAPI Application.

Backend for the rooftop solar wizard: locate a property, outline its roof,
tune assumptions and get a sizing/ROI estimate with a Gemini-written
expert analysis.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from solarquote.config import get_settings
from solarquote.routes import estimates, health, locations, roofs, wizard
from solarquote.services.wizard_service import WizardStateError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

APP_VERSION = get_settings().app_version


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application startup and shutdown lifecycle."""
    settings = get_settings()
    logger.info(
        "☀️ SolarQuote Estimator starting — port %d, version %s",
        settings.port,
        APP_VERSION,
    )
    integrations = health.integration_status(settings)
    logger.info("Gemini API: %s", "configured" if integrations.gemini else "NOT SET")
    logger.info("Maps API: %s", "configured" if integrations.maps else "NOT SET")

    yield

    logger.info("SolarQuote Estimator shutting down")


app = FastAPI(
    title="SolarQuote Estimator",
    description=(
        "Rooftop solar sizing and return-on-investment estimates. Locate a property, "
        "outline the roof on a satellite map, adjust rates and get a system size, "
        "cost, production and payback estimate with an AI expert analysis."
    ),
    version=APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount routes
app.include_router(health.router)
app.include_router(estimates.router)
app.include_router(roofs.router)
app.include_router(locations.router)
app.include_router(wizard.router)


@app.exception_handler(WizardStateError)
async def wizard_state_handler(request: Request, exc: WizardStateError) -> JSONResponse:  # noqa: ARG001
    """Map illegal wizard transitions to 409 Conflict."""
    logger.warning("Rejected wizard transition: %s", exc)
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # noqa: ARG001
    """Catch-all exception handler with structured logging."""
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An internal error occurred",
            "version": APP_VERSION,
        },
    )


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "solarquote.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )

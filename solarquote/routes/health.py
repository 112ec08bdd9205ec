"""Liveness and integration status."""

from __future__ import annotations

import datetime as dt
import logging

from fastapi import APIRouter, Depends

from solarquote.config import Settings, get_settings
from solarquote.models import HealthResponse, IntegrationStatus

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


def integration_status(settings: Settings) -> IntegrationStatus:
    """Which Google integrations have credentials configured."""
    return IntegrationStatus(
        gemini=bool(settings.google_gemini_api_key),
        maps=bool(settings.google_maps_api_key),
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Report the running build and which Google integrations are live.

    A missing key never makes the service unhealthy: the narrative and
    geocoding fall back to fixed text and mock coordinates.
    """
    integrations = integration_status(settings)
    if not (integrations.gemini and integrations.maps):
        logger.debug("Health check with fallbacks active: %s", integrations)

    return HealthResponse(
        service=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        integrations=integrations,
        timestamp=dt.datetime.now(dt.UTC).isoformat(),
    )

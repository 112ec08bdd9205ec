"""Solar estimate and report routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from solarquote.models import (
    EstimateRequest,
    EstimationConfig,
    EstimationResult,
    SolarReport,
)
from solarquote.services.estimation_service import compute_estimate, default_config
from solarquote.services.gemini_service import GeminiService, get_gemini_service
from solarquote.services.report_service import build_report

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/estimates", tags=["estimates"])


@router.get("/defaults", response_model=EstimationConfig)
async def get_defaults() -> EstimationConfig:
    """Return the starting assumptions shown on the rates form."""
    return default_config()


@router.post("", response_model=EstimationResult)
async def create_estimate(request: EstimateRequest) -> EstimationResult:
    """Size a panel array for a measured roof and project its payback.

    Out-of-range inputs (negative values, zero wattage, NaN) are rejected
    with 422 before the calculation runs.
    """
    logger.info(
        "Estimating %.1f m² roof at %.0f W/panel",
        request.roof.area_m2,
        request.config.panel_wattage,
    )

    try:
        return compute_estimate(request.roof, request.config)
    except Exception as e:
        logger.error("Estimation failed: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Estimation failed: {e}") from e


@router.post("/report", response_model=SolarReport)
async def create_report(
    request: EstimateRequest,
    gemini: GeminiService = Depends(get_gemini_service),
) -> SolarReport:
    """Compute an estimate and return the full report with expert analysis.

    The estimate is computed first and passed unchanged to Gemini for
    the narrative; a Gemini outage yields a fallback message, not an error.
    """
    try:
        result = compute_estimate(request.roof, request.config)
    except Exception as e:
        logger.error("Estimation failed: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Estimation failed: {e}") from e

    analysis = await gemini.get_expert_analysis(request.roof, request.config, result)
    return build_report(request.roof, request.config, result, analysis)

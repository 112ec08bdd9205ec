"""Step-by-step wizard routes.

Every route receives the client's current ``WizardState`` and returns the
next one. Illegal transitions surface as 409 via ``WizardStateError``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from solarquote.models import (
    StepMetadata,
    StepProgress,
    WizardConfigRequest,
    WizardLocationRequest,
    WizardReportResponse,
    WizardRoofRequest,
    WizardState,
    WizardStateRequest,
)
from solarquote.routes.locations import resolve_location
from solarquote.services import wizard_service
from solarquote.services.gemini_service import GeminiService, get_gemini_service
from solarquote.services.geocoding_service import GeocodingService, get_geocoding_service
from solarquote.services.geometry_service import measure_roof
from solarquote.services.report_service import build_report

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/wizard", tags=["wizard"])


@router.get("/steps", response_model=list[StepMetadata])
async def get_steps() -> list[StepMetadata]:
    """Return the wizard steps in display order."""
    return wizard_service.STEP_METADATA


@router.post("/progress", response_model=StepProgress)
async def get_progress(request: WizardStateRequest) -> StepProgress:
    """Return how far along the wizard the given state is."""
    return wizard_service.progress(request.state.step)


@router.post("/start", response_model=WizardState)
async def start(request: WizardStateRequest | None = None) -> WizardState:
    """Leave the welcome screen and ask for the property location."""
    return wizard_service.start(request.state if request else None)


@router.post("/location", response_model=WizardState)
async def submit_location(
    request: WizardLocationRequest,
    maps: GeocodingService = Depends(get_geocoding_service),
) -> WizardState:
    """Locate the property and move on to outlining the roof."""
    location = await resolve_location(request, maps)
    return wizard_service.submit_location(request.state, location, request.address)


@router.post("/roof", response_model=WizardState)
async def confirm_roof(request: WizardRoofRequest) -> WizardState:
    """Measure the drawn outline and move on to the rates form."""
    try:
        roof = measure_roof(request.points, request.orientation, request.edits)
    except IndexError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return wizard_service.confirm_roof(request.state, roof)


@router.post("/config", response_model=WizardState)
async def update_config(request: WizardConfigRequest) -> WizardState:
    """Replace the assumptions used for the estimate."""
    return wizard_service.update_config(request.state, request.config)


@router.post("/calculate", response_model=WizardReportResponse)
async def calculate(
    request: WizardStateRequest,
    gemini: GeminiService = Depends(get_gemini_service),
) -> WizardReportResponse:
    """Compute the estimate, then fetch the expert narrative for it."""
    state = wizard_service.calculate(request.state)
    logger.info(
        "Wizard estimate: %d panels, %.2f kW, ROI %.1f yrs",
        state.result.panel_count,
        state.result.system_size_kw,
        state.result.roi_years,
    )

    analysis = await gemini.get_expert_analysis(state.roof, state.config, state.result)
    state = wizard_service.attach_analysis(state, analysis)

    return WizardReportResponse(
        state=state,
        report=build_report(state.roof, state.config, state.result, analysis),
    )


@router.post("/back", response_model=WizardState)
async def back(request: WizardStateRequest) -> WizardState:
    """Return to the previous step."""
    return wizard_service.back(request.state)


@router.post("/reset", response_model=WizardState)
async def reset() -> WizardState:
    """Start over from the welcome screen."""
    return wizard_service.reset()

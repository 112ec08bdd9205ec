"""Roof outline measurement routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from solarquote.models import RoofGeometryResult, RoofMeasureRequest
from solarquote.services.geometry_service import measure_roof

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/roofs", tags=["roofs"])


@router.post("/measure", response_model=RoofGeometryResult)
async def measure(request: RoofMeasureRequest) -> RoofGeometryResult:
    """Measure the area of a roof outline drawn on the satellite map.

    Vertex edits (moving or inserting a point) are replayed in order
    before the final area is computed.
    """
    try:
        return measure_roof(request.points, request.orientation, request.edits)
    except IndexError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

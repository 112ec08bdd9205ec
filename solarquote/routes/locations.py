"""Property location routes."""

from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from solarquote.models import GeocodeRequest, Location
from solarquote.services.geocoding_service import (
    GeocodingService,
    MapsNotConfiguredError,
    get_geocoding_service,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/locations", tags=["locations"])


async def resolve_location(request: GeocodeRequest, maps: GeocodingService) -> Location:
    """Use device coordinates when given, otherwise geocode the address."""
    if request.lat is not None and request.lng is not None:
        return Location(lat=request.lat, lng=request.lng, address=request.address or None)
    if not request.address.strip():
        raise HTTPException(status_code=422, detail="Provide an address or lat/lng coordinates")
    return await maps.geocode(request.address.strip())


@router.post("/geocode", response_model=Location)
async def geocode(
    request: GeocodeRequest,
    maps: GeocodingService = Depends(get_geocoding_service),
) -> Location:
    """Locate a property from a typed address or the device's GPS fix."""
    return await resolve_location(request, maps)


@router.get("/satellite")
async def satellite_image(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    zoom: int = Query(20, ge=1, le=21),
    maps: GeocodingService = Depends(get_geocoding_service),
) -> Response:
    """Return the satellite tile centred on a property as PNG bytes."""
    logger.info("Satellite image: (%.4f, %.4f) zoom %d", lat, lng, zoom)

    try:
        image = await maps.get_satellite_image(lat, lng, zoom=zoom)
    except MapsNotConfiguredError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    except httpx.HTTPError as e:
        logger.error("Satellite image request failed: %s", e)
        raise HTTPException(
            status_code=502, detail=f"Satellite imagery unavailable: {e}"
        ) from e

    return Response(content=image, media_type="image/png")

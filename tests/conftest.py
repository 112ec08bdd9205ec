from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from solarquote.config import get_settings
from solarquote.main import app
from solarquote.models import EstimationConfig, LatLng, Orientation, RoofGeometryResult
from solarquote.services.gemini_service import get_gemini_service
from solarquote.services.geocoding_service import GeocodingService, get_geocoding_service

STUB_ANALYSIS = "## Great roof\n\nThis system looks well sized."


class StubGemini:
    """Stands in for GeminiService; records what it was asked to describe."""

    def __init__(self, text: str = STUB_ANALYSIS) -> None:
        self.text = text
        self.calls: list[tuple] = []

    async def get_expert_analysis(self, roof, config, result) -> str:  # noqa: ANN001
        self.calls.append((roof, config, result))
        return self.text


@pytest.fixture(autouse=True)
def _no_google_keys(monkeypatch):
    """Keep tests off the network regardless of the developer's environment."""
    monkeypatch.setenv("GOOGLE_GEMINI_API_KEY", "")
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def stub_gemini() -> StubGemini:
    return StubGemini()


@pytest.fixture()
def client(stub_gemini):
    """TestClient with external collaborators replaced."""
    app.dependency_overrides[get_gemini_service] = lambda: stub_gemini
    app.dependency_overrides[get_geocoding_service] = lambda: GeocodingService(api_key="")
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def default_config() -> EstimationConfig:
    return EstimationConfig(
        panel_wattage=400,
        panel_efficiency=0.18,
        electricity_rate=0.25,
        cost_per_panel=1200,
        avg_sun_hours=4.5,
    )


@pytest.fixture()
def south_roof() -> RoofGeometryResult:
    return RoofGeometryResult(area_m2=100, orientation=Orientation.SOUTH)


@pytest.fixture()
def small_square() -> list[LatLng]:
    """Roughly 10 m x 10 m square in San Francisco."""
    return [
        LatLng(lat=37.7749, lng=-122.4194),
        LatLng(lat=37.7749, lng=-122.4193),
        LatLng(lat=37.7750, lng=-122.4193),
        LatLng(lat=37.7750, lng=-122.4194),
    ]

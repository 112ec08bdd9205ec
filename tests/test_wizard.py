"""Tests for wizard state transitions and routes."""

from __future__ import annotations

import httpx
import pytest

from solarquote.main import app
from solarquote.models import (
    Location,
    RoofGeometryResult,
    WizardState,
    WizardStep,
)
from solarquote.services import wizard_service
from solarquote.services.estimation_service import compute_estimate
from solarquote.services.geocoding_service import GeocodingService, get_geocoding_service
from solarquote.services.wizard_service import WizardStateError

HOME = Location(lat=37.7749, lng=-122.4194, address="42 Sunny Lane")


def _at_config(roof: RoofGeometryResult) -> WizardState:
    state = wizard_service.start()
    state = wizard_service.submit_location(state, HOME)
    return wizard_service.confirm_roof(state, roof)


# ─── Service ───────────────────────────────────────────────────────────────────


def test_full_flow(south_roof) -> None:
    state = wizard_service.reset()
    assert state.step == WizardStep.WELCOME

    state = wizard_service.start(state)
    assert state.step == WizardStep.LOCATION
    assert state.config is not None

    state = wizard_service.submit_location(state, HOME, "42 sunny ln")
    assert state.step == WizardStep.DRAWING
    assert state.address_input == "42 sunny ln"
    assert state.location.address == "42 Sunny Lane"

    state = wizard_service.confirm_roof(state, south_roof)
    assert state.step == WizardStep.CONFIG

    state = wizard_service.calculate(state)
    assert state.step == WizardStep.RESULTS
    assert state.result == compute_estimate(south_roof, state.config)

    state = wizard_service.attach_analysis(state, "Nice roof.")
    assert state.expert_analysis == "Nice roof."


def test_empty_roof_cannot_be_confirmed() -> None:
    state = wizard_service.submit_location(wizard_service.start(), HOME)
    with pytest.raises(WizardStateError):
        wizard_service.confirm_roof(state, RoofGeometryResult(area_m2=0))


def test_calculate_requires_config_step() -> None:
    state = wizard_service.start()
    with pytest.raises(WizardStateError):
        wizard_service.calculate(state)


def test_updating_config_clears_stale_result(south_roof, default_config) -> None:
    state = wizard_service.calculate(_at_config(south_roof))
    state = wizard_service.update_config(
        state, default_config.model_copy(update={"electricity_rate": 0.4})
    )

    assert state.step == WizardStep.CONFIG
    assert state.result is None
    assert state.config.electricity_rate == 0.4


def test_back_keeps_entered_data(south_roof) -> None:
    state = wizard_service.back(_at_config(south_roof))
    assert state.step == WizardStep.DRAWING
    assert state.roof == south_roof

    with pytest.raises(WizardStateError):
        wizard_service.back(wizard_service.reset())


def test_start_keeps_tuned_config(south_roof, default_config) -> None:
    tuned = default_config.model_copy(update={"cost_per_panel": 900})
    state = wizard_service.update_config(_at_config(south_roof), tuned)
    assert wizard_service.start(state).config.cost_per_panel == 900


@pytest.mark.parametrize(
    ("step", "index", "fraction"),
    [
        (WizardStep.WELCOME, 0, 0.0),
        (WizardStep.DRAWING, 2, 0.5),
        (WizardStep.RESULTS, 4, 1.0),
    ],
)
def test_progress(step: WizardStep, index: int, fraction: float) -> None:
    progress = wizard_service.progress(step)
    assert progress.index == index
    assert progress.fraction == fraction


# ─── Routes ────────────────────────────────────────────────────────────────────


def _points(square) -> list[dict]:  # noqa: ANN001
    return [{"lat": p.lat, "lng": p.lng} for p in square]


def test_steps_endpoint(client) -> None:
    response = client.get("/api/v1/wizard/steps")
    assert response.status_code == 200
    assert [s["label"] for s in response.json()] == [
        "Start", "Location", "Roof Area", "Rates", "Report",
    ]


def test_wizard_round_trip(client, stub_gemini, small_square) -> None:
    state = client.post("/api/v1/wizard/start").json()
    assert state["step"] == "location"
    assert state["config"]["panelWattage"] == 400

    state = client.post(
        "/api/v1/wizard/location", json={"state": state, "address": "42 Sunny Lane"}
    ).json()
    assert state["step"] == "drawing"
    assert state["location"]["lat"] == 37.7749

    state = client.post(
        "/api/v1/wizard/roof", json={"state": state, "points": _points(small_square)}
    ).json()
    assert state["step"] == "config"
    assert state["roof"]["orientation"] == "South"
    assert state["roof"]["areaM2"] > 90

    config = dict(state["config"], electricityRate=0.3)
    state = client.post("/api/v1/wizard/config", json={"state": state, "config": config}).json()
    assert state["config"]["electricityRate"] == 0.3

    response = client.post("/api/v1/wizard/calculate", json={"state": state})
    assert response.status_code == 200
    body = response.json()

    assert body["state"]["step"] == "results"
    assert body["state"]["expertAnalysis"] == stub_gemini.text
    assert body["report"]["result"] == body["state"]["result"]
    assert body["report"]["result"]["panelCount"] > 0

    roof, config, result = stub_gemini.calls[0]
    assert result == compute_estimate(roof, config)


def test_location_keeps_typed_address(client) -> None:
    """The geocoder's formatted address never replaces what the user typed."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={
            "status": "OK",
            "results": [{
                "formatted_address": "1600 Amphitheatre Pkwy, Mountain View, CA 94043, USA",
                "geometry": {"location": {"lat": 37.422, "lng": -122.084}},
            }],
        })

    maps = GeocodingService(api_key="maps-key", transport=httpx.MockTransport(handler))
    app.dependency_overrides[get_geocoding_service] = lambda: maps

    state = client.post("/api/v1/wizard/start").json()
    state = client.post(
        "/api/v1/wizard/location", json={"state": state, "address": "1600 amphitheatre"}
    ).json()

    assert state["addressInput"] == "1600 amphitheatre"
    assert state["location"]["address"] == "1600 Amphitheatre Pkwy, Mountain View, CA 94043, USA"
    assert state["location"]["lat"] == 37.422


def test_location_from_device_coordinates(client) -> None:
    state = client.post("/api/v1/wizard/start").json()
    response = client.post(
        "/api/v1/wizard/location", json={"state": state, "lat": 51.5, "lng": -0.12}
    )
    assert response.status_code == 200
    assert response.json()["location"]["lat"] == 51.5


def test_illegal_transition_returns_409(client) -> None:
    state = client.post("/api/v1/wizard/start").json()
    response = client.post("/api/v1/wizard/calculate", json={"state": state})

    assert response.status_code == 409
    assert "location" in response.json()["detail"]


def test_unclosed_outline_returns_409(client, small_square) -> None:
    state = client.post("/api/v1/wizard/start").json()
    state = client.post(
        "/api/v1/wizard/location", json={"state": state, "address": "42 Sunny Lane"}
    ).json()
    response = client.post(
        "/api/v1/wizard/roof", json={"state": state, "points": _points(small_square[:2])}
    )
    assert response.status_code == 409


def test_reset_returns_welcome(client) -> None:
    response = client.post("/api/v1/wizard/reset")
    assert response.json()["step"] == "welcome"


def test_progress_endpoint(client) -> None:
    state = client.post("/api/v1/wizard/start").json()
    response = client.post("/api/v1/wizard/progress", json={"state": state})
    assert response.json() == {"step": "location", "index": 1, "fraction": 0.25}

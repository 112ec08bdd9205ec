"""Pydantic models for the SolarQuote estimator API."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Input ceilings; every combination below them gives a finite estimate.
# A polygon covering the whole globe measures about 5.1e14 m².
MAX_ROOF_AREA_M2 = 1e15
MAX_PANEL_WATTAGE = 100_000
MAX_ELECTRICITY_RATE = 1_000
MAX_COST_PER_PANEL = 10_000_000


class CamelModel(BaseModel):
    """Base model serialized with the camelCase keys the wizard frontend uses."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )


# ─── Enums ─────────────────────────────────────────────────────────────────────


class Orientation(str, Enum):
    """Compass direction a roof section faces."""

    NORTH = "North"
    SOUTH = "South"
    EAST = "East"
    WEST = "West"
    UNKNOWN = "Unknown"


class WizardStep(str, Enum):
    """Steps of the estimation wizard, in display order."""

    WELCOME = "welcome"
    LOCATION = "location"
    DRAWING = "drawing"
    CONFIG = "config"
    RESULTS = "results"


class PolygonEditKind(str, Enum):
    """Vertex edits a user can make on a drawn polygon."""

    SET_AT = "set_at"
    INSERT_AT = "insert_at"


# ─── Geometry & Location ──────────────────────────────────────────────────────


class LatLng(CamelModel):
    """A single geographic coordinate."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class Location(CamelModel):
    """A located property."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    address: str | None = None


class RoofGeometryResult(CamelModel):
    """Roof outline measured on the satellite map."""

    area_m2: float = Field(
        ..., ge=0, le=MAX_ROOF_AREA_M2, description="Total drawn roof area in square meters"
    )
    orientation: Orientation = Orientation.UNKNOWN
    polygon_points: list[LatLng] = Field(default_factory=list)


class PolygonEdit(CamelModel):
    """A vertex edit applied to a drawn polygon."""

    kind: PolygonEditKind
    index: int = Field(..., ge=0)
    point: LatLng


# ─── Estimation Models ─────────────────────────────────────────────────────────


class EstimationConfig(CamelModel):
    """User-adjustable financial and technical assumptions."""

    panel_wattage: float = Field(
        ..., gt=0, le=MAX_PANEL_WATTAGE, description="Nominal rating of one panel (W)"
    )
    panel_efficiency: float = Field(..., ge=0, le=1, description="Panel efficiency (reserved)")
    electricity_rate: float = Field(
        ..., ge=0, le=MAX_ELECTRICITY_RATE, description="Cost per kWh"
    )
    cost_per_panel: float = Field(
        ..., ge=0, le=MAX_COST_PER_PANEL, description="Fully installed cost per panel"
    )
    avg_sun_hours: float = Field(..., ge=0, le=24, description="Average daily peak sun hours")


class EstimationResult(CamelModel):
    """System sizing and financial outlook for one roof/config pair."""

    model_config = ConfigDict(frozen=True)

    system_size_kw: float
    panel_count: int = Field(..., ge=0)
    total_cost: float = Field(..., ge=0)
    annual_production_kwh: float = Field(..., ge=0)
    monthly_savings: float
    roi_years: float


# ─── Report Models ─────────────────────────────────────────────────────────────


class ResultCard(CamelModel):
    """A headline figure shown at the top of the report."""

    label: str
    value: str
    unit: str = ""
    description: str = ""


class FinancialSummary(CamelModel):
    """Breakdown of the investment."""

    total_cost: float = Field(..., ge=0)
    tax_credit: float
    net_investment: float
    annual_production_kwh: float = Field(..., ge=0)


class EnvironmentalImpact(CamelModel):
    """Yearly emissions avoided by the system."""

    co2_tons_per_year: float
    tree_equivalent: int


class SavingsProjection(CamelModel):
    """Cumulative savings after a number of years."""

    label: str
    years: int
    savings: float


class SolarReport(CamelModel):
    """Complete report: estimate, narrative and presentation data."""

    roof: RoofGeometryResult
    config: EstimationConfig
    result: EstimationResult
    expert_analysis: str = ""
    cards: list[ResultCard] = Field(default_factory=list)
    financial_summary: FinancialSummary
    environmental_impact: EnvironmentalImpact
    savings_projection: list[SavingsProjection] = Field(default_factory=list)


# ─── Wizard Models ─────────────────────────────────────────────────────────────


class StepMetadata(CamelModel):
    """Display metadata for one wizard step."""

    id: WizardStep
    label: str


class StepProgress(CamelModel):
    """Position of a step within the wizard."""

    step: WizardStep
    index: int
    fraction: float


class WizardState(CamelModel):
    """Explicit wizard state, held by the client and passed with every call."""

    step: WizardStep = WizardStep.WELCOME
    address_input: str = ""
    location: Location | None = None
    roof: RoofGeometryResult | None = None
    config: EstimationConfig | None = None
    result: EstimationResult | None = None
    expert_analysis: str = ""


# ─── Request Models ────────────────────────────────────────────────────────────


class EstimateRequest(CamelModel):
    """Request to compute an estimate for a measured roof."""

    roof: RoofGeometryResult
    config: EstimationConfig


class RoofMeasureRequest(CamelModel):
    """Request to measure a roof outline drawn on the map."""

    points: list[LatLng] = Field(default_factory=list)
    orientation: Orientation = Orientation.SOUTH
    edits: list[PolygonEdit] = Field(default_factory=list)


class GeocodeRequest(CamelModel):
    """Request to locate a property by address or device coordinates."""

    address: str = ""
    lat: float | None = Field(None, ge=-90, le=90)
    lng: float | None = Field(None, ge=-180, le=180)


class WizardStateRequest(CamelModel):
    """Request carrying only the current wizard state."""

    state: WizardState


class WizardLocationRequest(GeocodeRequest):
    """Request to submit the property location."""

    state: WizardState


class WizardRoofRequest(RoofMeasureRequest):
    """Request to confirm the drawn roof outline."""

    state: WizardState


class WizardConfigRequest(CamelModel):
    """Request to replace the estimation assumptions."""

    state: WizardState
    config: EstimationConfig


# ─── Response Models ───────────────────────────────────────────────────────────


class WizardReportResponse(CamelModel):
    """Wizard state after calculation together with the rendered report."""

    state: WizardState
    report: SolarReport


class IntegrationStatus(BaseModel):
    """Whether each Google integration runs live or on its fallback."""

    gemini: bool = False
    maps: bool = False


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    service: str = "solarquote-estimator"
    version: str = ""
    environment: str = ""
    integrations: IntegrationStatus = Field(default_factory=IntegrationStatus)
    timestamp: str = ""

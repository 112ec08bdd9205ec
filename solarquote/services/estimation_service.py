"""Solar system sizing and return-on-investment estimation."""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal

from solarquote.config import get_settings
from solarquote.models import EstimationConfig, EstimationResult, RoofGeometryResult

logger = logging.getLogger(__name__)

# ─── Engineering Assumptions ──────────────────────────────────────────────────

PANEL_SIZE_M2 = 1.75  # Standard panel footprint
ROOF_UTILIZATION_FACTOR = 0.85  # Edges, setbacks and panel spacing
SYSTEM_EFFICIENCY_LOSS = 0.85  # Inverter and system derate

DAYS_PER_YEAR = 365
MONTHS_PER_YEAR = 12


def _round_tenths(value: float) -> float:
    """Round to one decimal, ties away from zero on the exact binary value."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def compute_estimate(
    roof: RoofGeometryResult, config: EstimationConfig
) -> EstimationResult:
    """Size a panel array for a roof and project its financial outlook.

    Sizing is panel-discretized: every downstream figure derives from the
    whole number of panels that fit, never from the raw roof area.

    Model:
        Panels     = floor(area × utilization / panel_size)
        System kW  = panels × wattage / 1000
        Production = kW × sun_hours × 365 × system_loss
        Savings    = production × rate  (monthly = production / 12 × rate)
        ROI        = cost / annual_savings, or 0 when nothing is saved

    Inputs are assumed validated by the models; ``panel_efficiency`` and
    ``orientation`` are carried but not used.
    """
    usable_area = roof.area_m2 * ROOF_UTILIZATION_FACTOR
    panel_count = math.floor(usable_area / PANEL_SIZE_M2)

    system_size_kw = (panel_count * config.panel_wattage) / 1000

    annual_production_kwh = (
        system_size_kw * config.avg_sun_hours * DAYS_PER_YEAR * SYSTEM_EFFICIENCY_LOSS
    )

    total_cost = panel_count * config.cost_per_panel
    monthly_savings = (annual_production_kwh / MONTHS_PER_YEAR) * config.electricity_rate
    annual_savings = annual_production_kwh * config.electricity_rate

    # No savings reports as immediate break-even rather than "never"
    roi_years = total_cost / annual_savings if annual_savings > 0 else 0.0

    logger.debug(
        "Estimate: %.1f m² -> %d panels, %.2f kW, %.0f kWh/yr, ROI %.1f yrs",
        roof.area_m2, panel_count, system_size_kw, annual_production_kwh, roi_years,
    )

    return EstimationResult(
        system_size_kw=system_size_kw,
        panel_count=panel_count,
        total_cost=total_cost,
        annual_production_kwh=annual_production_kwh,
        monthly_savings=monthly_savings,
        roi_years=_round_tenths(roi_years),
    )


def default_config() -> EstimationConfig:
    """Build the starting assumptions from application settings."""
    settings = get_settings()
    return EstimationConfig(
        panel_wattage=settings.default_panel_wattage,
        panel_efficiency=settings.default_panel_efficiency,
        electricity_rate=settings.default_electricity_rate,
        cost_per_panel=settings.default_cost_per_panel,
        avg_sun_hours=settings.default_avg_sun_hours,
    )

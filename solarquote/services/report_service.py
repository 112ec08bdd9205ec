"""Report assembly: headline cards, financial summary and impact figures."""

from __future__ import annotations

from solarquote.models import (
    EnvironmentalImpact,
    EstimationConfig,
    EstimationResult,
    FinancialSummary,
    ResultCard,
    RoofGeometryResult,
    SavingsProjection,
    SolarReport,
)

TAX_CREDIT_RATE = 0.30  # Federal residential clean energy credit
CO2_TONS_PER_MWH = 0.7  # Grid emissions displaced per MWh produced
KWH_PER_TREE = 40  # Yearly absorption of one tree, in kWh of grid power
PROJECTION_YEARS = (1, 5, 10, 20)


def build_cards(config: EstimationConfig, result: EstimationResult) -> list[ResultCard]:
    """Headline figures, formatted for display."""
    return [
        ResultCard(
            label="System Size",
            value=f"{result.system_size_kw:.1f}",
            unit="kW",
            description="Peak power output capacity",
        ),
        ResultCard(
            label="Panel Count",
            value=str(result.panel_count),
            unit="Modules",
            description=f"Using {config.panel_wattage:g}W panels",
        ),
        ResultCard(
            label="Est. Monthly Saving",
            value=f"${result.monthly_savings:.0f}",
            description="Reduction in electricity bills",
        ),
        ResultCard(
            label="Break Even",
            value=f"{result.roi_years:g}",
            unit="Years",
            description="Estimated ROI period",
        ),
    ]


def build_financial_summary(result: EstimationResult) -> FinancialSummary:
    tax_credit = result.total_cost * TAX_CREDIT_RATE
    return FinancialSummary(
        total_cost=result.total_cost,
        tax_credit=tax_credit,
        net_investment=result.total_cost - tax_credit,
        annual_production_kwh=result.annual_production_kwh,
    )


def build_environmental_impact(result: EstimationResult) -> EnvironmentalImpact:
    return EnvironmentalImpact(
        co2_tons_per_year=(result.annual_production_kwh * CO2_TONS_PER_MWH) / 1000,
        tree_equivalent=round(result.annual_production_kwh / KWH_PER_TREE),
    )


def build_savings_projection(result: EstimationResult) -> list[SavingsProjection]:
    """Cumulative savings at fixed horizons; no rate escalation or degradation."""
    return [
        SavingsProjection(
            label=f"Year {years}",
            years=years,
            savings=result.monthly_savings * 12 * years,
        )
        for years in PROJECTION_YEARS
    ]


def build_report(
    roof: RoofGeometryResult,
    config: EstimationConfig,
    result: EstimationResult,
    expert_analysis: str = "",
) -> SolarReport:
    """Assemble the full report for a computed estimate."""
    return SolarReport(
        roof=roof,
        config=config,
        result=result,
        expert_analysis=expert_analysis,
        cards=build_cards(config, result),
        financial_summary=build_financial_summary(result),
        environmental_impact=build_environmental_impact(result),
        savings_projection=build_savings_projection(result),
    )

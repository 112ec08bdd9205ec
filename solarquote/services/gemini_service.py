"""Gemini AI service for the expert narrative that accompanies an estimate."""

from __future__ import annotations

import logging

from google import genai
from google.genai import types

from solarquote.config import get_settings
from solarquote.models import EstimationConfig, EstimationResult, RoofGeometryResult

logger = logging.getLogger(__name__)

EMPTY_ANALYSIS_FALLBACK = "Unable to generate analysis at this time."
UNAVAILABLE_ANALYSIS_FALLBACK = "The expert analysis is currently unavailable."


def build_analysis_prompt(
    roof: RoofGeometryResult,
    config: EstimationConfig,
    result: EstimationResult,
) -> str:
    """Render the consultant prompt for a computed estimate."""
    return f"""Act as a professional solar energy consultant. Based on the following data for a residential property, provide a concise, encouraging 3-paragraph summary of the project's potential.

Property Details:
- Roof Area: {roof.area_m2:.1f} m²
- Suggested System Size: {result.system_size_kw:.1f} kW
- Panel Count: {result.panel_count}
- Orientation: {roof.orientation.value}

Financial Outlook:
- Estimated ROI: {result.roi_years} years
- Monthly Savings: ${result.monthly_savings:.2f}
- Local Electricity Rate: ${config.electricity_rate}/kWh

In your response:
1. Comment on the system size appropriateness for the roof area.
2. Give advice on best placement (e.g., if South-facing is better, etc).
3. Provide a concluding thought on the long-term environmental impact.

Keep it professional and readable. Use markdown."""


class GeminiService:
    """Service for Google Gemini AI interactions."""

    def __init__(self, api_key: str | None = None, client: genai.Client | None = None) -> None:
        settings = get_settings()
        self.api_key = api_key or settings.google_gemini_api_key
        self.model = settings.gemini_model
        self.temperature = settings.gemini_temperature
        if client is not None:
            self.client = client
        elif self.api_key:
            self.client = genai.Client(api_key=self.api_key)
        else:
            self.client = None

    async def get_expert_analysis(
        self,
        roof: RoofGeometryResult,
        config: EstimationConfig,
        result: EstimationResult,
    ) -> str:
        """Ask Gemini for a markdown narrative of the estimate.

        Never raises: service failures are logged and mapped to a fixed
        fallback message so the report can still be shown.
        """
        if self.client is None:
            logger.warning("Gemini API key not set, skipping expert analysis")
            return UNAVAILABLE_ANALYSIS_FALLBACK

        prompt = build_analysis_prompt(roof, config, result)
        logger.info(
            "Requesting expert analysis: %.2f kW, %d panels (model=%s)",
            result.system_size_kw, result.panel_count, self.model,
        )

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=self.temperature,
                ),
            )
            text = response.text
        except Exception as e:
            logger.error("Gemini analysis failed: %s", e)
            return UNAVAILABLE_ANALYSIS_FALLBACK

        if not text:
            logger.warning("Gemini returned an empty analysis")
            return EMPTY_ANALYSIS_FALLBACK

        return text


def get_gemini_service() -> GeminiService:
    """FastAPI dependency providing the narrative service."""
    return GeminiService()

"""Wizard state transitions.

The wizard keeps no server-side state: each transition takes the client's
``WizardState`` and returns a new one.
"""

from __future__ import annotations

import logging

from solarquote.models import (
    EstimationConfig,
    Location,
    RoofGeometryResult,
    StepMetadata,
    StepProgress,
    WizardState,
    WizardStep,
)
from solarquote.services.estimation_service import compute_estimate, default_config

logger = logging.getLogger(__name__)

STEP_METADATA: list[StepMetadata] = [
    StepMetadata(id=WizardStep.WELCOME, label="Start"),
    StepMetadata(id=WizardStep.LOCATION, label="Location"),
    StepMetadata(id=WizardStep.DRAWING, label="Roof Area"),
    StepMetadata(id=WizardStep.CONFIG, label="Rates"),
    StepMetadata(id=WizardStep.RESULTS, label="Report"),
]

STEP_ORDER: list[WizardStep] = [meta.id for meta in STEP_METADATA]


class WizardStateError(ValueError):
    """Raised when a transition is not allowed from the current state."""


def _require_step(state: WizardState, *allowed: WizardStep) -> None:
    if state.step not in allowed:
        expected = ", ".join(step.value for step in allowed)
        raise WizardStateError(
            f"Cannot perform this action from step '{state.step.value}' (expected {expected})"
        )


def progress(step: WizardStep) -> StepProgress:
    """Index of a step and how far along the wizard it is (0.0 - 1.0)."""
    index = STEP_ORDER.index(step)
    return StepProgress(step=step, index=index, fraction=index / (len(STEP_ORDER) - 1))


def reset() -> WizardState:
    """Fresh wizard, as shown on the welcome screen."""
    return WizardState()


def start(state: WizardState | None = None) -> WizardState:
    """Leave the welcome screen, keeping any assumptions already tuned."""
    config = state.config if state and state.config else default_config()
    return WizardState(step=WizardStep.LOCATION, config=config)


def submit_location(
    state: WizardState, location: Location, address_input: str = ""
) -> WizardState:
    """Record the located property; the typed address is kept as entered."""
    _require_step(state, WizardStep.LOCATION)
    logger.info("Wizard location set: (%.4f, %.4f)", location.lat, location.lng)
    return state.model_copy(update={
        "step": WizardStep.DRAWING,
        "address_input": address_input,
        "location": location,
    })


def confirm_roof(state: WizardState, roof: RoofGeometryResult) -> WizardState:
    """Accept the drawn outline; an empty outline cannot be confirmed."""
    _require_step(state, WizardStep.DRAWING)
    if state.location is None:
        raise WizardStateError("A location must be chosen before outlining the roof")
    if roof.area_m2 <= 0:
        raise WizardStateError("Draw a roof outline before confirming")
    return state.model_copy(update={
        "step": WizardStep.CONFIG,
        "roof": roof,
        "config": state.config or default_config(),
    })


def update_config(state: WizardState, config: EstimationConfig) -> WizardState:
    """Replace the assumptions; any previous result is now stale."""
    _require_step(state, WizardStep.CONFIG, WizardStep.RESULTS)
    return state.model_copy(update={
        "step": WizardStep.CONFIG,
        "config": config,
        "result": None,
        "expert_analysis": "",
    })


def calculate(state: WizardState) -> WizardState:
    """Run the estimate for the confirmed roof and current assumptions."""
    _require_step(state, WizardStep.CONFIG)
    if state.roof is None:
        raise WizardStateError("No roof outline has been confirmed")
    config = state.config or default_config()
    result = compute_estimate(state.roof, config)
    return state.model_copy(update={
        "step": WizardStep.RESULTS,
        "config": config,
        "result": result,
        "expert_analysis": "",
    })


def attach_analysis(state: WizardState, analysis: str) -> WizardState:
    _require_step(state, WizardStep.RESULTS)
    return state.model_copy(update={"expert_analysis": analysis})


def back(state: WizardState) -> WizardState:
    """Return to the previous step without discarding entered data."""
    index = STEP_ORDER.index(state.step)
    if index == 0:
        raise WizardStateError("Already at the first step")
    return state.model_copy(update={"step": STEP_ORDER[index - 1]})

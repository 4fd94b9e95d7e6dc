from __future__ import annotations

import logging
from typing import List

from app.core.errors import InvalidTransition, WizardValidationError
from app.itinerary.item_store import ItineraryItemStore
from app.itinerary.trip_store import TripMetadataStore
from app.models.domain import WizardStep

logger = logging.getLogger(__name__)


class WizardController:
    """
    Linear four-step authoring flow: Details -> Day Planner -> Pricing -> Review.

    Forward moves go one step at a time and only Details checks its fields
    before letting the author through. Backward moves are always allowed.
    Review has no forward move; leaving it means going back or materializing.
    """

    def __init__(self, trip: TripMetadataStore, items: ItineraryItemStore) -> None:
        self.trip = trip
        self.items = items
        self._step = WizardStep.details

    @property
    def step(self) -> WizardStep:
        return self._step

    @property
    def is_terminal(self) -> bool:
        return self._step is WizardStep.review

    def validate_current(self) -> None:
        if self._step is WizardStep.details:
            missing = self.trip.missing_required_fields()
            if missing:
                raise WizardValidationError(
                    "Please fill in the required fields: " + ", ".join(missing),
                    missing_fields=missing,
                )

    def next(self) -> WizardStep:
        if self.is_terminal:
            raise InvalidTransition("Review is the last step")
        try:
            self.validate_current()
        except WizardValidationError as exc:
            logger.warning("Blocked leaving %s: %s", self._step.name, exc)
            raise
        self._step = WizardStep(self._step + 1)
        logger.info("Wizard advanced to %s", self._step.name)
        return self._step

    def back(self) -> WizardStep:
        if self._step is not WizardStep.details:
            self._step = WizardStep(self._step - 1)
        return self._step

    def go_to(self, step: int) -> WizardStep:
        try:
            target = WizardStep(step)
        except ValueError as exc:
            raise InvalidTransition(f"Unknown wizard step {step}") from exc
        if target <= self._step:
            self._step = target
            return self._step
        if target == self._step + 1:
            return self.next()
        raise InvalidTransition(
            f"Cannot skip from {self._step.name} to {target.name}"
        )

    def start_at(self, step: WizardStep) -> None:
        """Jump without validation; used when a saved package is loaded for editing."""
        self._step = WizardStep(step)

    def warnings(self) -> List[str]:
        """Non-blocking hints for the current state of the trip."""
        notes: List[str] = []
        if self._step >= WizardStep.pricing and not len(self.items):
            notes.append("Itinerary has no items")
        duration = self.trip.duration
        orphaned = [item for item in self.items if item.day > duration]
        if orphaned:
            notes.append(
                f"{len(orphaned)} item(s) scheduled after day {duration}"
            )
        for item in self.items:
            missing = [
                name for name in item.profile.required_fields
                if not str(getattr(item, name) or "").strip()
            ]
            if missing:
                notes.append(
                    f"{item.profile.label} on day {item.day} is missing: {', '.join(missing)}"
                )
        return notes

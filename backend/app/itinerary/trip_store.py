from __future__ import annotations

import dataclasses
from typing import Any, Optional

from app.core.config import settings
from app.models.domain import TripDetails

_TRIP_FIELDS = {f.name for f in dataclasses.fields(TripDetails)}


def default_trip_details(start_date: str = "") -> TripDetails:
    return TripDetails(
        start_date=start_date,
        duration=settings.default_trip_duration,
        cover_image=settings.default_cover_image,
        adults=settings.default_adults,
        children=settings.default_children,
    )


class TripMetadataStore:
    """Trip-level descriptive state; ``duration`` bounds the day buckets shown in the planner."""

    def __init__(self, details: Optional[TripDetails] = None) -> None:
        self._details = details or default_trip_details()

    @property
    def details(self) -> TripDetails:
        return dataclasses.replace(self._details)

    @property
    def duration(self) -> int:
        return self._details.duration

    def update(self, **changes: Any) -> TripDetails:
        unknown = set(changes) - _TRIP_FIELDS
        if unknown:
            raise TypeError(f"Unknown trip fields: {', '.join(sorted(unknown))}")
        if "duration" in changes:
            changes["duration"] = max(1, int(changes["duration"]))
        for key in ("adults", "children"):
            if key in changes:
                changes[key] = max(0, int(changes[key]))
        # Shrinking duration keeps items on later days; see ItinerarySession.orphaned_items.
        self._details = dataclasses.replace(self._details, **changes)
        return self.details

    def replace(self, details: TripDetails) -> None:
        self._details = dataclasses.replace(details)

    def day_numbers(self) -> list[int]:
        return list(range(1, self._details.duration + 1))

    def missing_required_fields(self) -> list[str]:
        missing = []
        if not (self._details.title or "").strip():
            missing.append("title")
        if not (self._details.destination or "").strip():
            missing.append("destination")
        return missing

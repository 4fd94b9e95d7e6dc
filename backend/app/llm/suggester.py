import logging
from typing import Any, List, Optional
from uuid import uuid4

from app.core.errors import SuggestionError
from app.llm.client import LLMClient, SuggestionBackend, SuggestionContext
from app.models.domain import ItemType, ItineraryItem, SuggestedActivity, SuggestedDay
from app.pricing.rules import coerce_amount

logger = logging.getLogger(__name__)

SUGGESTED_MARKUP_PERCENT = 15.0
SUGGESTED_DURATION = "2 Hours"


class MockSuggestionBackend(SuggestionBackend):
    """
    Deterministic stand-in for the model: an arrival day, sightseeing days
    and a departure day for any destination.
    """

    _middle_days = [
        [
            ("09:00 AM", "{dest} Old Town: guided heritage walk", 1500.0),
            ("01:00 PM", "Local Kitchen: lunch with regional specialities", 800.0),
            ("04:00 PM", "{dest} Market: free time for shopping", 0.0),
        ],
        [
            ("08:30 AM", "Countryside Excursion: day trip outside {dest}", 3500.0),
            ("07:00 PM", "Sunset Point: evening views and photographs", 500.0),
        ],
    ]

    def generate(self, context: SuggestionContext) -> List[SuggestedDay]:
        dest = context.destination
        days: List[SuggestedDay] = []
        for day in range(1, context.duration + 1):
            if day == 1:
                plan = [
                    ("12:00 PM", f"Arrival in {dest}: hotel check-in and rest", 0.0),
                    ("06:00 PM", f"{dest} Promenade: relaxed evening stroll", 0.0),
                ]
            elif day == context.duration:
                plan = [("10:00 AM", f"Departure: check-out and transfer from {dest}", 1200.0)]
            else:
                template = self._middle_days[(day - 2) % len(self._middle_days)]
                plan = [(t, d.format(dest=dest), c) for t, d, c in template]
            days.append(
                SuggestedDay(
                    day=day,
                    activities=[
                        SuggestedActivity(time=t, description=d, cost=c) for t, d, c in plan
                    ],
                )
            )
        logger.info("Mock suggestions for %s: %d days", dest, len(days))
        return days


def parse_suggestions(data: Any) -> List[SuggestedDay]:
    """Validate a raw ``{"days": [...]}`` payload into suggestion values."""
    if not isinstance(data, dict) or not isinstance(data.get("days"), list):
        raise SuggestionError("Suggestion response has no 'days' list")
    days: List[SuggestedDay] = []
    for raw_day in data["days"]:
        try:
            day_number = int(raw_day["day"])
            raw_activities = raw_day.get("activities") or []
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise SuggestionError(f"Malformed day entry: {raw_day!r}") from exc
        if not isinstance(raw_activities, list):
            raise SuggestionError(f"Day {day_number} activities must be a list")
        if day_number < 1:
            raise SuggestionError(f"Day numbers start at 1, got {day_number}")
        activities = [
            SuggestedActivity(
                time=str(act.get("time") or ""),
                description=str(act.get("description") or ""),
                cost=coerce_amount(act.get("cost")),
            )
            for act in raw_activities
            if isinstance(act, dict)
        ]
        days.append(SuggestedDay(day=day_number, activities=activities, title=raw_day.get("title")))
    return days


def suggestion_title(description: str) -> str:
    return description.split(":", 1)[0].strip() or "Activity"


def items_from_suggestions(days: List[SuggestedDay]) -> List[ItineraryItem]:
    items: List[ItineraryItem] = []
    for day in days:
        for activity in day.activities:
            items.append(
                ItineraryItem(
                    id=f"AI-{uuid4().hex[:12]}",
                    type=ItemType.activity,
                    day=day.day,
                    title=suggestion_title(activity.description),
                    description=activity.description,
                    time=activity.time or None,
                    duration=SUGGESTED_DURATION,
                    net_cost=activity.cost or 0,
                    base_markup_percent=SUGGESTED_MARKUP_PERCENT,
                    extra_markup_flat=0,
                    quantity=1,
                )
            )
    return items


class ItinerarySuggester:
    def __init__(self, backend: Optional[SuggestionBackend] = None):
        self.client = LLMClient(backend=backend or MockSuggestionBackend())

    def suggest_items(self, context: SuggestionContext) -> List[ItineraryItem]:
        try:
            days = self.client.suggest(context)
        except SuggestionError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error("Suggestion backend failed: %s", exc)
            raise SuggestionError(str(exc)) from exc
        return items_from_suggestions(days)

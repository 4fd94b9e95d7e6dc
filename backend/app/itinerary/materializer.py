from __future__ import annotations

import dataclasses
import logging
from typing import List, Optional
from uuid import uuid4

from app.core.config import settings
from app.core.errors import WizardValidationError
from app.itinerary.catalog_adapter import note_placeholder
from app.itinerary.session import ItinerarySession
from app.models.domain import (
    Highlight,
    ItemType,
    ItineraryItem,
    PackageDay,
    PackageDocument,
    TripDetails,
    WizardStep,
)
from app.pricing.rules import round2

logger = logging.getLogger(__name__)


def describe_item(item: ItineraryItem) -> str:
    time_part = f"{item.time}: " if item.time else ""
    desc_part = f" - {item.description}" if item.description else ""
    return f"• {time_part}{item.title}{desc_part}"


def default_day_title(day: int, day_items: List[ItineraryItem]) -> str:
    for item in day_items:
        if item.type is ItemType.activity:
            return item.title
    return "Arrival" if day == 1 else f"Day {day} Itinerary"


class PackageMaterializer:
    """
    Folds an authoring session into a package document.

    The package price is the trip's net cost plus a separate package-level
    markup. It is not the Pricing step's grand total, which is built from
    per-item markups and tax.
    """

    def __init__(self, leisure_day_text: Optional[str] = None) -> None:
        self.leisure_day_text = leisure_day_text or settings.leisure_day_text

    @staticmethod
    def total_cost(session: ItinerarySession) -> float:
        return session.items.total_cost()

    @staticmethod
    def markup_amount(session: ItinerarySession) -> float:
        markup = session.package_markup
        return PackageMaterializer.total_cost(session) * markup.percent / 100 + markup.flat

    def final_price(self, session: ItinerarySession) -> float:
        return round2(self.total_cost(session) + self.markup_amount(session))

    def build_days(self, session: ItinerarySession) -> List[PackageDay]:
        days: List[PackageDay] = []
        for day in session.trip.day_numbers():
            day_items = session.get_items_for_day(day)
            meta = session.get_day_meta(day)
            if day_items:
                desc = "\n".join(describe_item(item) for item in day_items)
            else:
                desc = self.leisure_day_text
            days.append(
                PackageDay(
                    day=day,
                    title=meta.title or default_day_title(day, day_items),
                    desc=desc,
                    items=list(day_items),
                    image=meta.image,
                )
            )
        return days

    def materialize(
        self, session: ItinerarySession, package_id: Optional[str] = None
    ) -> PackageDocument:
        trip = session.trip.details
        if not trip.title.strip():
            raise WizardValidationError("Title is missing!", missing_fields=["title"])
        guests = trip.guest_count
        document = PackageDocument(
            id=package_id or f"pkg-{uuid4().hex[:12]}",
            title=trip.title,
            days=trip.duration,
            group_size=str(guests),
            location=trip.destination or "Custom",
            description=f"Custom itinerary created for {guests or 'Valued Guests'}.",
            price=self.final_price(session),
            image=trip.cover_image,
            theme="Custom",
            overview=f"A {trip.duration}-day journey to {trip.destination or 'Paradise'}.",
            highlights=[Highlight(icon="star", label=item.title) for item in session.items.items[:4]],
            itinerary=self.build_days(session),
            gallery=[trip.cover_image] if trip.cover_image else [],
            start_date=trip.start_date or None,
            adults=trip.adults,
            children=trip.children,
            total_cost=self.total_cost(session),
            markup_percent=session.package_markup.percent,
            markup_flat=session.package_markup.flat,
        )
        logger.info(
            "Materialized package %s (%s) at %.2f from session %s",
            document.id,
            document.title,
            document.price,
            session.session_id,
        )
        return document

    def load(self, package: PackageDocument) -> ItinerarySession:
        """Rebuild an editing session from a saved package, starting at the day planner."""
        trip = TripDetails(
            title=package.title,
            start_date=package.start_date or "",
            duration=max(1, package.days),
            destination="" if package.location == "Custom" else package.location,
            cover_image=package.image,
            adults=package.adults or _parse_group_size(package.group_size),
            children=package.children,
        )
        items: List[ItineraryItem] = []
        for day in package.itinerary:
            if day.items:
                items.extend(dataclasses.replace(item) for item in day.items)
            elif day.desc and day.desc != self.leisure_day_text:
                items.append(note_placeholder(day.day, text=day.desc))
        session = ItinerarySession(trip=trip, items=items)
        for day in package.itinerary:
            if day.image:
                session.update_day_meta(day.day, image=day.image)
        session.set_package_markup(package.markup_percent, package.markup_flat)
        session.source_package_id = package.id
        session.wizard.start_at(WizardStep.day_planner)
        logger.info("Loaded package %s into session %s", package.id, session.session_id)
        return session

    def share_summary(self, session: ItinerarySession) -> str:
        trip = session.trip.details
        lines = [
            f"Trip to {trip.destination or 'Paradise'}",
            f"{trip.duration} Days | {trip.guest_count} Guests",
            session.format_currency(self.final_price(session)),
            "",
            "Itinerary:",
        ]
        for day in session.trip.day_numbers():
            for item in session.get_items_for_day(day):
                lines.append(f"Day {day}: {item.title}")
        return "\n".join(lines)


def _parse_group_size(value: str) -> int:
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, TypeVar

from app.models.domain import (
    CatalogRecord,
    MasterActivity,
    MasterHotel,
    MasterTransport,
    RecordStatus,
)

RecordT = TypeVar("RecordT", MasterHotel, MasterActivity, MasterTransport)


def _active(records: Iterable[RecordT], search: str = "") -> List[RecordT]:
    needle = search.strip().lower()
    return [
        r
        for r in records
        if r.status is RecordStatus.active and needle in r.name.lower()
    ]


class MasterCatalog:
    """
    Read-only view of the hotel, activity and transport masters used as a
    source of default item attributes. Seeded with a small demo set.
    """

    def __init__(
        self,
        hotels: Optional[Iterable[MasterHotel]] = None,
        activities: Optional[Iterable[MasterActivity]] = None,
        transports: Optional[Iterable[MasterTransport]] = None,
    ) -> None:
        self.hotels: Dict[str, MasterHotel] = {h.id: h for h in (hotels or [])}
        self.activities: Dict[str, MasterActivity] = {a.id: a for a in (activities or [])}
        self.transports: Dict[str, MasterTransport] = {t.id: t for t in (transports or [])}

    @classmethod
    def seeded(cls) -> "MasterCatalog":
        return cls(
            hotels=[
                MasterHotel(
                    id="htl-goa-01",
                    name="Seaside Palms Resort",
                    location_id="goa",
                    rating=4.5,
                    price_per_night=6500.0,
                    amenities=("Pool", "Spa", "Breakfast"),
                ),
                MasterHotel(
                    id="htl-mnl-01",
                    name="Snow Valley Cottages",
                    location_id="manali",
                    rating=4.0,
                    price_per_night=4200.0,
                    amenities=("Heater", "Mountain View"),
                ),
                MasterHotel(
                    id="htl-jpr-01",
                    name="Pink City Haveli",
                    location_id="jaipur",
                    rating=3.5,
                    price_per_night=3800.0,
                    amenities=("Courtyard", "Rooftop Dining"),
                    status=RecordStatus.inactive,
                ),
            ],
            activities=[
                MasterActivity(
                    id="act-goa-01",
                    name="Dudhsagar Falls Jeep Safari",
                    category="Adventure",
                    cost=2800.0,
                    duration="6 Hours",
                    location_id="goa",
                ),
                MasterActivity(
                    id="act-mnl-01",
                    name="Solang Valley Paragliding",
                    category="Adventure",
                    cost=3500.0,
                    duration="3 Hours",
                    location_id="manali",
                ),
                MasterActivity(
                    id="act-jpr-01",
                    name="Amber Fort Guided Tour",
                    category="Cultural",
                    cost=1200.0,
                    duration="4 Hours",
                    location_id="jaipur",
                ),
            ],
            transports=[
                MasterTransport(
                    id="trn-sedan-01",
                    name="Airport Sedan Transfer",
                    type="Sedan",
                    capacity=4,
                    base_rate=1800.0,
                ),
                MasterTransport(
                    id="trn-tt-01",
                    name="Tempo Traveller Day Hire",
                    type="Tempo Traveller",
                    capacity=12,
                    base_rate=5500.0,
                ),
            ],
        )

    def active_hotels(self, search: str = "") -> List[MasterHotel]:
        return _active(self.hotels.values(), search)

    def active_activities(self, search: str = "") -> List[MasterActivity]:
        return _active(self.activities.values(), search)

    def active_transports(self, search: str = "") -> List[MasterTransport]:
        return _active(self.transports.values(), search)

    def find(self, record_id: str) -> Optional[CatalogRecord]:
        for table in (self.hotels, self.activities, self.transports):
            if record_id in table:
                return table[record_id]
        return None

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, List, Optional, Tuple, Union

from app.pricing.rules import coerce_amount, coerce_quantity, compute_sell_price


class ItemType(str, Enum):
    flight = "flight"
    hotel = "hotel"
    activity = "activity"
    transport = "transport"
    note = "note"
    visa = "visa"
    guide = "guide"
    other = "other"


class Currency(str, Enum):
    INR = "INR"
    USD = "USD"
    AED = "AED"
    EUR = "EUR"
    GBP = "GBP"


class WizardStep(IntEnum):
    details = 1
    day_planner = 2
    pricing = 3
    review = 4


class RecordStatus(str, Enum):
    active = "Active"
    inactive = "Inactive"


@dataclass(frozen=True)
class ItemTypeProfile:
    label: str
    icon: str
    default_markup_percent: float
    required_fields: Tuple[str, ...] = ("title",)


ITEM_TYPE_PROFILES: Dict[ItemType, ItemTypeProfile] = {
    ItemType.flight: ItemTypeProfile("Flight", "plane", 10.0, ("title", "time")),
    ItemType.hotel: ItemTypeProfile("Hotel", "hotel", 15.0),
    ItemType.activity: ItemTypeProfile("Activity", "bike", 15.0),
    ItemType.transport: ItemTypeProfile("Transport", "car", 15.0),
    ItemType.note: ItemTypeProfile("Note", "sticky-note", 0.0),
    ItemType.visa: ItemTypeProfile("Visa", "stamp", 15.0),
    ItemType.guide: ItemTypeProfile("Guide", "user", 15.0),
    ItemType.other: ItemTypeProfile("Other", "circle", 15.0),
}


# Master catalog records. Frozen so a copy taken into an itinerary item is a
# true snapshot of the record at selection time.
@dataclass(frozen=True)
class MasterHotel:
    id: str
    name: str
    location_id: str
    rating: float
    price_per_night: float
    amenities: Tuple[str, ...] = ()
    image: Optional[str] = None
    status: RecordStatus = RecordStatus.active


@dataclass(frozen=True)
class MasterActivity:
    id: str
    name: str
    category: str
    cost: float
    duration: str
    description: str = ""
    location_id: Optional[str] = None
    image: Optional[str] = None
    status: RecordStatus = RecordStatus.active


@dataclass(frozen=True)
class MasterTransport:
    id: str
    name: str
    type: str
    capacity: int
    base_rate: float
    image: Optional[str] = None
    status: RecordStatus = RecordStatus.active


CatalogRecord = Union[MasterHotel, MasterActivity, MasterTransport]


@dataclass(frozen=True)
class ItineraryItem:
    """
    One line of a trip. Instances are immutable; the item store swaps in new
    instances built with ``dataclasses.replace``. ``sell_price`` is not an
    init argument: it is derived in ``__post_init__`` from the four pricing
    inputs, so every construction path reprices the item.
    """

    id: str
    type: ItemType
    day: int
    title: str
    description: Optional[str] = None
    time: Optional[str] = None
    duration: Optional[str] = None
    net_cost: float = 0.0
    base_markup_percent: float = 0.0
    extra_markup_flat: float = 0.0
    quantity: int = 1
    order: Optional[int] = None
    master_id: Optional[str] = None
    master_data: Optional[CatalogRecord] = None
    room_type_id: Optional[str] = None
    meal_plan_id: Optional[str] = None
    sell_price: float = field(default=0.0, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", ItemType(self.type))
        if int(self.day) < 1:
            raise ValueError(f"day must be >= 1, got {self.day}")
        object.__setattr__(self, "day", int(self.day))
        object.__setattr__(self, "net_cost", coerce_amount(self.net_cost))
        object.__setattr__(
            self, "base_markup_percent", coerce_amount(self.base_markup_percent)
        )
        object.__setattr__(self, "extra_markup_flat", coerce_amount(self.extra_markup_flat))
        object.__setattr__(self, "quantity", coerce_quantity(self.quantity))
        object.__setattr__(
            self,
            "sell_price",
            compute_sell_price(
                self.net_cost,
                self.base_markup_percent,
                self.extra_markup_flat,
                self.quantity,
            ),
        )

    @property
    def cost_at_quantity(self) -> float:
        return self.net_cost * self.quantity

    @property
    def margin(self) -> float:
        return self.sell_price - self.cost_at_quantity

    @property
    def profile(self) -> ItemTypeProfile:
        return ITEM_TYPE_PROFILES[self.type]


@dataclass
class TripDetails:
    title: str = ""
    start_date: str = ""
    duration: int = 3
    destination: str = ""
    cover_image: str = ""
    adults: int = 2
    children: int = 0

    @property
    def guest_count(self) -> int:
        return (self.adults or 0) + (self.children or 0)


@dataclass(frozen=True)
class TaxConfig:
    cgst_percent: float = 0.0
    sgst_percent: float = 0.0
    igst_percent: float = 0.0
    tcs_percent: float = 0.0
    gst_on_total: bool = True

    @property
    def gst_percent(self) -> float:
        return self.cgst_percent + self.sgst_percent + self.igst_percent


@dataclass
class DayMeta:
    image: Optional[str] = None
    title: Optional[str] = None


@dataclass(frozen=True)
class PricingTotals:
    subtotal: float
    tax_amount: float
    grand_total: float
    total_cost: float
    margin: float


@dataclass
class PackageMarkup:
    percent: float = 0.0
    flat: float = 0.0


@dataclass
class PackageDay:
    day: int
    title: str
    desc: str
    # Priced items behind the text, kept so the package can be reopened for editing
    items: List[ItineraryItem] = field(default_factory=list)
    image: Optional[str] = None


@dataclass
class Highlight:
    icon: str
    label: str


@dataclass
class PackageDocument:
    id: str
    title: str
    days: int
    group_size: str
    location: str
    description: str
    price: float
    image: str
    theme: str
    overview: str
    highlights: List[Highlight] = field(default_factory=list)
    itinerary: List[PackageDay] = field(default_factory=list)
    gallery: List[str] = field(default_factory=list)
    status: str = RecordStatus.active.value
    start_date: Optional[str] = None
    adults: int = 0
    children: int = 0
    total_cost: float = 0.0
    markup_percent: float = 0.0
    markup_flat: float = 0.0


@dataclass
class SuggestedActivity:
    time: str
    description: str
    cost: float = 0.0


@dataclass
class SuggestedDay:
    day: int
    activities: List[SuggestedActivity] = field(default_factory=list)
    title: Optional[str] = None

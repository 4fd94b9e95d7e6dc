import dataclasses
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from app.models.domain import (
    Currency,
    DayMeta,
    ItemType,
    ItineraryItem,
    MasterActivity,
    MasterHotel,
    MasterTransport,
    PackageDay,
    PackageDocument,
    TaxConfig,
    TripDetails,
)
from app.pricing import currency as fx
from app.pricing.rules import coerce_amount, coerce_quantity


class TripDetailsSchema(BaseModel):
    title: str
    start_date: str
    duration: int
    destination: str
    cover_image: str
    adults: int
    children: int

    @classmethod
    def from_domain(cls, obj: TripDetails) -> "TripDetailsSchema":
        return cls(**dataclasses.asdict(obj))


class TripUpdate(BaseModel):
    title: Optional[str] = None
    start_date: Optional[str] = None
    duration: Optional[int] = Field(None, ge=1)
    destination: Optional[str] = None
    cover_image: Optional[str] = None
    adults: Optional[int] = Field(None, ge=0)
    children: Optional[int] = Field(None, ge=0)


class ItineraryItemSchema(BaseModel):
    id: str
    type: ItemType
    day: int
    order: Optional[int] = None
    title: str
    description: Optional[str] = None
    time: Optional[str] = None
    duration: Optional[str] = None
    net_cost: float
    base_markup_percent: float
    extra_markup_flat: float
    quantity: int
    sell_price: float
    margin: float
    master_id: Optional[str] = None
    master_data: Optional[Dict[str, Any]] = None
    room_type_id: Optional[str] = None
    meal_plan_id: Optional[str] = None

    @classmethod
    def from_domain(cls, obj: ItineraryItem) -> "ItineraryItemSchema":
        return cls(
            id=obj.id,
            type=obj.type,
            day=obj.day,
            order=obj.order,
            title=obj.title,
            description=obj.description,
            time=obj.time,
            duration=obj.duration,
            net_cost=obj.net_cost,
            base_markup_percent=obj.base_markup_percent,
            extra_markup_flat=obj.extra_markup_flat,
            quantity=obj.quantity,
            sell_price=obj.sell_price,
            margin=obj.margin,
            master_id=obj.master_id,
            master_data=dataclasses.asdict(obj.master_data) if obj.master_data else None,
            room_type_id=obj.room_type_id,
            meal_plan_id=obj.meal_plan_id,
        )


class _PricingInputs(BaseModel):
    """Pricing inputs are coerced, never rejected: junk becomes 0 (or 1 for quantity)."""

    @field_validator(
        "net_cost", "base_markup_percent", "extra_markup_flat", mode="before", check_fields=False
    )
    @classmethod
    def _coerce_amount(cls, value: Any) -> Any:
        return None if value is None else coerce_amount(value)

    @field_validator("quantity", mode="before", check_fields=False)
    @classmethod
    def _coerce_quantity(cls, value: Any) -> Any:
        return None if value is None else coerce_quantity(value)


class ItemCreate(_PricingInputs):
    type: ItemType
    day: int = Field(..., ge=1)
    title: str
    description: Optional[str] = None
    time: Optional[str] = None
    duration: Optional[str] = None
    net_cost: float = 0.0
    base_markup_percent: Optional[float] = None
    extra_markup_flat: float = 0.0
    quantity: int = 1
    order: Optional[int] = None
    room_type_id: Optional[str] = None
    meal_plan_id: Optional[str] = None


class ItemUpdate(_PricingInputs):
    type: Optional[ItemType] = None
    day: Optional[int] = Field(None, ge=1)
    title: Optional[str] = None
    description: Optional[str] = None
    time: Optional[str] = None
    duration: Optional[str] = None
    net_cost: Optional[float] = None
    base_markup_percent: Optional[float] = None
    extra_markup_flat: Optional[float] = None
    quantity: Optional[int] = None
    room_type_id: Optional[str] = None
    meal_plan_id: Optional[str] = None


class CatalogItemCreate(BaseModel):
    record_id: str
    day: int = Field(..., ge=1)


class PlaceholderCreate(BaseModel):
    type: ItemType
    day: int = Field(..., ge=1)


class MoveRequest(BaseModel):
    direction: Literal["up", "down"]


class ReorderRequest(BaseModel):
    ordered_ids: List[str]


class DayMetaSchema(BaseModel):
    image: Optional[str] = None
    title: Optional[str] = None

    @classmethod
    def from_domain(cls, obj: DayMeta) -> "DayMetaSchema":
        return cls(image=obj.image, title=obj.title)


class TaxConfigSchema(BaseModel):
    cgst_percent: float
    sgst_percent: float
    igst_percent: float
    tcs_percent: float
    gst_on_total: bool

    @classmethod
    def from_domain(cls, obj: TaxConfig) -> "TaxConfigSchema":
        return cls(**dataclasses.asdict(obj))


class TaxConfigUpdate(BaseModel):
    cgst_percent: Optional[float] = None
    sgst_percent: Optional[float] = None
    igst_percent: Optional[float] = None
    tcs_percent: Optional[float] = None
    gst_on_total: Optional[bool] = None

    @field_validator("cgst_percent", "sgst_percent", "igst_percent", "tcs_percent", mode="before")
    @classmethod
    def _coerce_rate(cls, value: Any) -> Any:
        return None if value is None else coerce_amount(value)


class CurrencyRequest(BaseModel):
    currency: Currency


class PackageMarkupRequest(BaseModel):
    percent: float = 0.0
    flat: float = 0.0

    @field_validator("percent", "flat", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> float:
        return coerce_amount(value)


class TotalsSchema(BaseModel):
    currency: Currency
    subtotal: float
    tax_amount: float
    grand_total: float
    total_cost: float
    margin: float
    display: Dict[str, str]


class SessionSchema(BaseModel):
    session_id: str
    step: int
    step_name: str
    trip: TripDetailsSchema
    items: List[ItineraryItemSchema]
    tax_config: TaxConfigSchema
    currency: Currency
    currency_symbol: str
    totals: TotalsSchema
    package_markup: PackageMarkupRequest
    package_price: float
    orphaned_item_ids: List[str]
    warnings: List[str]
    day_meta: Dict[int, DayMetaSchema] = Field(default_factory=dict)
    source_package_id: Optional[str] = None

    @classmethod
    def from_session(cls, session, package_price: float) -> "SessionSchema":
        totals = session.totals()
        return cls(
            session_id=session.session_id,
            step=int(session.step),
            step_name=session.step.name,
            trip=TripDetailsSchema.from_domain(session.trip.details),
            items=[ItineraryItemSchema.from_domain(i) for i in session.items],
            tax_config=TaxConfigSchema.from_domain(session.tax_config),
            currency=session.currency,
            currency_symbol=fx.CURRENCY_SYMBOLS[session.currency],
            totals=TotalsSchema(
                currency=session.currency,
                subtotal=totals.subtotal,
                tax_amount=totals.tax_amount,
                grand_total=totals.grand_total,
                total_cost=totals.total_cost,
                margin=totals.margin,
                display=session.display_totals(),
            ),
            package_markup=PackageMarkupRequest(
                percent=session.package_markup.percent,
                flat=session.package_markup.flat,
            ),
            package_price=package_price,
            orphaned_item_ids=[i.id for i in session.orphaned_items()],
            warnings=session.wizard.warnings(),
            day_meta={
                day: DayMetaSchema.from_domain(session.get_day_meta(day))
                for day in session.trip.day_numbers()
            },
            source_package_id=session.source_package_id,
        )


class PackageDaySchema(BaseModel):
    day: int
    title: str
    desc: str
    image: Optional[str] = None
    items: List[ItineraryItemSchema] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, obj: PackageDay) -> "PackageDaySchema":
        return cls(
            day=obj.day,
            title=obj.title,
            desc=obj.desc,
            image=obj.image,
            items=[ItineraryItemSchema.from_domain(i) for i in obj.items],
        )


class HighlightSchema(BaseModel):
    icon: str
    label: str


class PackageSchema(BaseModel):
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
    highlights: List[HighlightSchema]
    itinerary: List[PackageDaySchema]
    gallery: List[str]
    status: str
    start_date: Optional[str] = None

    @classmethod
    def from_domain(cls, obj: PackageDocument) -> "PackageSchema":
        return cls(
            id=obj.id,
            title=obj.title,
            days=obj.days,
            group_size=obj.group_size,
            location=obj.location,
            description=obj.description,
            price=obj.price,
            image=obj.image,
            theme=obj.theme,
            overview=obj.overview,
            highlights=[HighlightSchema(icon=h.icon, label=h.label) for h in obj.highlights],
            itinerary=[PackageDaySchema.from_domain(d) for d in obj.itinerary],
            gallery=list(obj.gallery),
            status=obj.status,
            start_date=obj.start_date,
        )


class PackageListResponse(BaseModel):
    packages: List[PackageSchema]


class ShareResponse(BaseModel):
    text: str


class HotelSchema(BaseModel):
    id: str
    name: str
    location_id: str
    rating: float
    price_per_night: float
    amenities: List[str]
    image: Optional[str] = None

    @classmethod
    def from_domain(cls, obj: MasterHotel) -> "HotelSchema":
        return cls(
            id=obj.id,
            name=obj.name,
            location_id=obj.location_id,
            rating=obj.rating,
            price_per_night=obj.price_per_night,
            amenities=list(obj.amenities),
            image=obj.image,
        )


class ActivitySchema(BaseModel):
    id: str
    name: str
    category: str
    cost: float
    duration: str
    description: str

    @classmethod
    def from_domain(cls, obj: MasterActivity) -> "ActivitySchema":
        return cls(
            id=obj.id,
            name=obj.name,
            category=obj.category,
            cost=obj.cost,
            duration=obj.duration,
            description=obj.description,
        )


class TransportSchema(BaseModel):
    id: str
    name: str
    type: str
    capacity: int
    base_rate: float

    @classmethod
    def from_domain(cls, obj: MasterTransport) -> "TransportSchema":
        return cls(
            id=obj.id,
            name=obj.name,
            type=obj.type,
            capacity=obj.capacity,
            base_rate=obj.base_rate,
        )

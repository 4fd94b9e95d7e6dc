from fastapi import APIRouter, Depends, Response

from app.api import domain_errors, get_authoring_service
from app.itinerary.catalog_adapter import new_item_id
from app.itinerary.session import ItinerarySession
from app.models.domain import ITEM_TYPE_PROFILES, ItineraryItem
from app.models.schemas import (
    CatalogItemCreate,
    CurrencyRequest,
    DayMetaSchema,
    ItemCreate,
    ItemUpdate,
    ItineraryItemSchema,
    MoveRequest,
    PackageMarkupRequest,
    PackageSchema,
    PlaceholderCreate,
    ReorderRequest,
    SessionSchema,
    ShareResponse,
    TaxConfigUpdate,
    TripUpdate,
)
from app.services.authoring_service import AuthoringService

router = APIRouter()


def _snapshot(session: ItinerarySession, service: AuthoringService) -> SessionSchema:
    return SessionSchema.from_session(session, service.materializer.final_price(session))


@router.post("/", response_model=SessionSchema, status_code=201)
def start_session(service: AuthoringService = Depends(get_authoring_service)) -> SessionSchema:
    return _snapshot(service.start_session(), service)


@router.get("/{session_id}", response_model=SessionSchema)
def get_session(
    session_id: str, service: AuthoringService = Depends(get_authoring_service)
) -> SessionSchema:
    with domain_errors():
        return _snapshot(service.get_session(session_id), service)


@router.delete("/{session_id}", status_code=204)
def discard_session(
    session_id: str, service: AuthoringService = Depends(get_authoring_service)
) -> Response:
    with domain_errors():
        service.discard_session(session_id)
    return Response(status_code=204)


@router.patch("/{session_id}/trip", response_model=SessionSchema)
def update_trip(
    session_id: str,
    payload: TripUpdate,
    service: AuthoringService = Depends(get_authoring_service),
) -> SessionSchema:
    with domain_errors():
        session = service.get_session(session_id)
        session.update_trip(**payload.model_dump(exclude_unset=True, exclude_none=True))
        return _snapshot(session, service)


# Wizard navigation


@router.post("/{session_id}/wizard/next", response_model=SessionSchema)
def wizard_next(
    session_id: str, service: AuthoringService = Depends(get_authoring_service)
) -> SessionSchema:
    with domain_errors():
        session = service.get_session(session_id)
        session.wizard.next()
        return _snapshot(session, service)


@router.post("/{session_id}/wizard/back", response_model=SessionSchema)
def wizard_back(
    session_id: str, service: AuthoringService = Depends(get_authoring_service)
) -> SessionSchema:
    with domain_errors():
        session = service.get_session(session_id)
        session.wizard.back()
        return _snapshot(session, service)


@router.post("/{session_id}/wizard/goto/{step}", response_model=SessionSchema)
def wizard_goto(
    session_id: str, step: int, service: AuthoringService = Depends(get_authoring_service)
) -> SessionSchema:
    with domain_errors():
        session = service.get_session(session_id)
        session.wizard.go_to(step)
        return _snapshot(session, service)


# Items


@router.post("/{session_id}/items", response_model=ItineraryItemSchema, status_code=201)
def add_item(
    session_id: str,
    payload: ItemCreate,
    service: AuthoringService = Depends(get_authoring_service),
) -> ItineraryItemSchema:
    data = payload.model_dump()
    if data["base_markup_percent"] is None:
        data["base_markup_percent"] = ITEM_TYPE_PROFILES[payload.type].default_markup_percent
    with domain_errors():
        session = service.get_session(session_id)
        item = session.add_item(ItineraryItem(id=new_item_id(payload.type), **data))
    return ItineraryItemSchema.from_domain(item)


@router.post(
    "/{session_id}/items/from-catalog", response_model=ItineraryItemSchema, status_code=201
)
def add_catalog_item(
    session_id: str,
    payload: CatalogItemCreate,
    service: AuthoringService = Depends(get_authoring_service),
) -> ItineraryItemSchema:
    with domain_errors():
        item = service.add_catalog_item(session_id, payload.record_id, payload.day)
    return ItineraryItemSchema.from_domain(item)


@router.post(
    "/{session_id}/items/placeholder", response_model=ItineraryItemSchema, status_code=201
)
def add_placeholder_item(
    session_id: str,
    payload: PlaceholderCreate,
    service: AuthoringService = Depends(get_authoring_service),
) -> ItineraryItemSchema:
    with domain_errors():
        item = service.add_placeholder_item(session_id, payload.type, payload.day)
    return ItineraryItemSchema.from_domain(item)


@router.patch("/{session_id}/items/{item_id}", response_model=SessionSchema)
def update_item(
    session_id: str,
    item_id: str,
    payload: ItemUpdate,
    service: AuthoringService = Depends(get_authoring_service),
) -> SessionSchema:
    with domain_errors():
        session = service.get_session(session_id)
        session.update_item(item_id, **payload.model_dump(exclude_unset=True, exclude_none=True))
        return _snapshot(session, service)


@router.delete("/{session_id}/items/{item_id}", response_model=SessionSchema)
def remove_item(
    session_id: str, item_id: str, service: AuthoringService = Depends(get_authoring_service)
) -> SessionSchema:
    with domain_errors():
        session = service.get_session(session_id)
        session.remove_item(item_id)
        return _snapshot(session, service)


@router.post("/{session_id}/items/{item_id}/move", response_model=SessionSchema)
def move_item(
    session_id: str,
    item_id: str,
    payload: MoveRequest,
    service: AuthoringService = Depends(get_authoring_service),
) -> SessionSchema:
    with domain_errors():
        session = service.get_session(session_id)
        session.move_item(item_id, payload.direction)
        return _snapshot(session, service)


@router.put("/{session_id}/days/{day}/order", response_model=SessionSchema)
def reorder_day(
    session_id: str,
    day: int,
    payload: ReorderRequest,
    service: AuthoringService = Depends(get_authoring_service),
) -> SessionSchema:
    with domain_errors():
        session = service.get_session(session_id)
        session.reorder_items(day, payload.ordered_ids)
        return _snapshot(session, service)


@router.put("/{session_id}/days/{day}/meta", response_model=DayMetaSchema)
def update_day_meta(
    session_id: str,
    day: int,
    payload: DayMetaSchema,
    service: AuthoringService = Depends(get_authoring_service),
) -> DayMetaSchema:
    with domain_errors():
        session = service.get_session(session_id)
        meta = session.update_day_meta(day, **payload.model_dump(exclude_unset=True))
    return DayMetaSchema.from_domain(meta)


@router.post("/{session_id}/suggestions", response_model=SessionSchema)
def generate_suggestions(
    session_id: str, service: AuthoringService = Depends(get_authoring_service)
) -> SessionSchema:
    with domain_errors():
        return _snapshot(service.generate_suggestions(session_id), service)


# Pricing


@router.patch("/{session_id}/tax", response_model=SessionSchema)
def update_tax(
    session_id: str,
    payload: TaxConfigUpdate,
    service: AuthoringService = Depends(get_authoring_service),
) -> SessionSchema:
    with domain_errors():
        session = service.get_session(session_id)
        session.update_tax_config(**payload.model_dump(exclude_unset=True, exclude_none=True))
        return _snapshot(session, service)


@router.put("/{session_id}/currency", response_model=SessionSchema)
def set_currency(
    session_id: str,
    payload: CurrencyRequest,
    service: AuthoringService = Depends(get_authoring_service),
) -> SessionSchema:
    with domain_errors():
        session = service.get_session(session_id)
        session.set_currency(payload.currency)
        return _snapshot(session, service)


@router.put("/{session_id}/package-markup", response_model=SessionSchema)
def set_package_markup(
    session_id: str,
    payload: PackageMarkupRequest,
    service: AuthoringService = Depends(get_authoring_service),
) -> SessionSchema:
    with domain_errors():
        session = service.get_session(session_id)
        session.set_package_markup(payload.percent, payload.flat)
        return _snapshot(session, service)


# Review


@router.get("/{session_id}/share", response_model=ShareResponse)
def share_text(
    session_id: str, service: AuthoringService = Depends(get_authoring_service)
) -> ShareResponse:
    with domain_errors():
        session = service.get_session(session_id)
        return ShareResponse(text=service.materializer.share_summary(session))


@router.post("/{session_id}/materialize", response_model=PackageSchema, status_code=201)
def materialize(
    session_id: str, service: AuthoringService = Depends(get_authoring_service)
) -> PackageSchema:
    with domain_errors():
        return PackageSchema.from_domain(service.materialize(session_id))

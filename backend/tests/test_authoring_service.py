from unittest.mock import MagicMock

import pytest

from app.core.errors import (
    CatalogRecordNotFound,
    InvalidTransition,
    PackageNotFound,
    SessionNotFound,
    SuggestionError,
    WizardValidationError,
)
from app.llm.suggester import ItinerarySuggester
from app.models.domain import ItemType, WizardStep
from app.services.authoring_service import AuthoringService
from app.storage.repository import InMemoryRepository


@pytest.fixture
def service() -> AuthoringService:
    return AuthoringService(repository=InMemoryRepository(), suggester=ItinerarySuggester())


def _ready(service: AuthoringService):
    session = service.start_session()
    session.update_trip(title="Goa Getaway", destination="Goa", duration=3)
    return session


def test_start_session_uses_defaults(service):
    session = service.start_session()
    assert session.step is WizardStep.details
    assert session.trip.duration == 3
    assert session.tax_config.gst_percent == 5.0
    assert service.get_session(session.session_id) is session


def test_unknown_ids(service):
    with pytest.raises(SessionNotFound):
        service.get_session("nope")
    with pytest.raises(PackageNotFound):
        service.edit_package("nope")
    session = service.start_session()
    with pytest.raises(CatalogRecordNotFound):
        service.add_catalog_item(session.session_id, "htl-missing", day=1)


def test_add_catalog_item(service):
    session = service.start_session()
    item = service.add_catalog_item(session.session_id, "trn-tt-01", day=2)
    assert item.type is ItemType.transport
    assert session.get_items_for_day(2) == [item]


def test_suggestions_replace_items(service):
    session = _ready(service)
    service.add_placeholder_item(session.session_id, ItemType.note, day=1)
    service.generate_suggestions(session.session_id)
    assert all(i.id.startswith("AI-") for i in session.items)
    assert {i.day for i in session.items} == {1, 2, 3}


def test_suggestions_need_destination(service):
    session = service.start_session()
    with pytest.raises(WizardValidationError):
        service.generate_suggestions(session.session_id)


def test_suggestion_failure_leaves_items_untouched():
    suggester = MagicMock()
    suggester.suggest_items.side_effect = SuggestionError("model offline")
    service = AuthoringService(repository=InMemoryRepository(), suggester=suggester)
    session = _ready(service)
    kept = service.add_placeholder_item(session.session_id, ItemType.flight, day=1)
    before = session.items.items

    with pytest.raises(SuggestionError):
        service.generate_suggestions(session.session_id)

    assert session.items.items == before
    assert session.items.get(kept.id) is not None


def test_materialize_only_from_review(service):
    session = _ready(service)
    with pytest.raises(InvalidTransition):
        service.materialize(session.session_id)


def test_materialize_saves_and_closes_session(service):
    session = _ready(service)
    service.add_catalog_item(session.session_id, "act-goa-01", day=2)
    session.wizard.start_at(WizardStep.review)

    package = service.materialize(session.session_id)

    assert service.get_package(package.id) is package
    assert package.price == 2800.0
    with pytest.raises(SessionNotFound):
        service.get_session(session.session_id)


def test_edit_package_overwrites_same_id(service):
    session = _ready(service)
    session.wizard.start_at(WizardStep.review)
    package = service.materialize(session.session_id)

    editing = service.edit_package(package.id)
    assert editing.step is WizardStep.day_planner
    editing.update_trip(title="Goa Getaway v2")
    editing.wizard.start_at(WizardStep.review)
    updated = service.materialize(editing.session_id)

    assert updated.id == package.id
    assert service.repository.list_packages() == [updated]
    assert updated.title == "Goa Getaway v2"


def test_discard_session(service):
    session = service.start_session()
    service.discard_session(session.session_id)
    with pytest.raises(SessionNotFound):
        service.discard_session(session.session_id)


def test_session_timestamp_is_timezone_aware(service):
    assert service.start_session().created_at.tzinfo is not None

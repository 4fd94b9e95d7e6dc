import logging
from typing import Optional

from app.core.config import settings
from app.core.errors import (
    CatalogRecordNotFound,
    InvalidTransition,
    PackageNotFound,
    SessionNotFound,
    SuggestionError,
    WizardValidationError,
)
from app.itinerary.catalog_adapter import item_from_record, placeholder_item
from app.itinerary.materializer import PackageMaterializer
from app.itinerary.session import ItinerarySession
from app.llm.backends.ollama_backend import OllamaSuggestionBackend
from app.llm.client import SuggestionContext
from app.llm.suggester import ItinerarySuggester, MockSuggestionBackend
from app.models.domain import ItemType, ItineraryItem, PackageDocument, WizardStep
from app.storage.catalog import MasterCatalog
from app.storage.repository import InMemoryRepository

logger = logging.getLogger(__name__)


def default_suggester() -> ItinerarySuggester:
    backend = (
        OllamaSuggestionBackend()
        if settings.llm_provider.lower() == "ollama"
        else MockSuggestionBackend()
    )
    return ItinerarySuggester(backend=backend)


class AuthoringService:
    def __init__(
        self,
        repository: InMemoryRepository,
        catalog: Optional[MasterCatalog] = None,
        suggester: Optional[ItinerarySuggester] = None,
        materializer: Optional[PackageMaterializer] = None,
    ):
        self.repository = repository
        self.catalog = catalog or MasterCatalog.seeded()
        self.suggester = suggester or default_suggester()
        self.materializer = materializer or PackageMaterializer()

    def start_session(self) -> ItinerarySession:
        session = self.repository.save_session(ItinerarySession())
        logger.info("Started authoring session %s", session.session_id)
        return session

    def get_session(self, session_id: str) -> ItinerarySession:
        session = self.repository.get_session(session_id)
        if session is None:
            raise SessionNotFound(f"Session {session_id} not found")
        return session

    def discard_session(self, session_id: str) -> None:
        if not self.repository.discard_session(session_id):
            raise SessionNotFound(f"Session {session_id} not found")
        logger.info("Discarded session %s without saving", session_id)

    def edit_package(self, package_id: str) -> ItinerarySession:
        package = self.repository.get_package(package_id)
        if package is None:
            raise PackageNotFound(f"Package {package_id} not found")
        return self.repository.save_session(self.materializer.load(package))

    def add_catalog_item(self, session_id: str, record_id: str, day: int) -> ItineraryItem:
        session = self.get_session(session_id)
        record = self.catalog.find(record_id)
        if record is None:
            raise CatalogRecordNotFound(f"Catalog record {record_id} not found")
        return session.add_item(item_from_record(record, day))

    def add_placeholder_item(self, session_id: str, item_type: ItemType, day: int) -> ItineraryItem:
        session = self.get_session(session_id)
        return session.add_item(placeholder_item(item_type, day))

    def generate_suggestions(self, session_id: str) -> ItinerarySession:
        """
        Replace the session's items with a generated day-by-day plan.

        On any generator failure the items are left exactly as they were.
        """
        session = self.get_session(session_id)
        trip = session.trip.details
        if not trip.destination:
            raise WizardValidationError(
                "Please select a destination in Step 1 first.",
                missing_fields=["destination"],
            )
        context = SuggestionContext(
            destination=trip.destination,
            duration=trip.duration,
            travelers=f"{trip.adults} Adults, {trip.children} Children",
            start_date=trip.start_date,
        )
        try:
            items = self.suggester.suggest_items(context)
        except SuggestionError as exc:
            logger.warning("Suggestions failed for session %s: %s", session_id, exc)
            raise
        session.replace_all_items(items)
        logger.info("Session %s replaced with %d suggested items", session_id, len(items))
        return session

    def materialize(self, session_id: str) -> PackageDocument:
        session = self.get_session(session_id)
        if session.step is not WizardStep.review:
            raise InvalidTransition("Packages are saved from the Review step")
        package = self.materializer.materialize(session, package_id=session.source_package_id)
        self.repository.save_package(package)
        self.repository.discard_session(session_id)
        return package

    def get_package(self, package_id: str) -> PackageDocument:
        package = self.repository.get_package(package_id)
        if package is None:
            raise PackageNotFound(f"Package {package_id} not found")
        return package

from __future__ import annotations

from typing import List, Optional


class ItineraryError(Exception):
    """Base class for recoverable authoring errors."""


class WizardValidationError(ItineraryError):
    def __init__(self, message: str, missing_fields: Optional[List[str]] = None):
        super().__init__(message)
        self.missing_fields = missing_fields or []


class InvalidTransition(ItineraryError):
    pass


class SuggestionError(ItineraryError):
    """Raised when the itinerary suggestion backend fails or returns junk."""


class SessionNotFound(ItineraryError):
    pass


class PackageNotFound(ItineraryError):
    pass


class CatalogRecordNotFound(ItineraryError):
    pass

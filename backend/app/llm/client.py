from dataclasses import dataclass
from typing import List, Protocol

from app.models.domain import SuggestedDay


@dataclass
class SuggestionContext:
    destination: str
    duration: int
    travelers: str
    start_date: str


class SuggestionBackend(Protocol):
    def generate(self, context: SuggestionContext) -> List[SuggestedDay]:
        ...


class LLMClient:
    """
    Pluggable client for day-by-day itinerary suggestions. The default
    backend is deterministic; a model-backed one implements
    SuggestionBackend.generate.
    """

    def __init__(self, backend: SuggestionBackend):
        self.backend = backend

    def suggest(self, context: SuggestionContext) -> List[SuggestedDay]:
        return self.backend.generate(context)

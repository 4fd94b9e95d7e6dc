from __future__ import annotations

from typing import Dict, List, Optional

from app.itinerary.session import ItinerarySession
from app.models.domain import PackageDocument


class InMemoryRepository:
    """Open authoring sessions and saved packages, keyed by id."""

    def __init__(self) -> None:
        self.sessions: Dict[str, ItinerarySession] = {}
        self.packages: Dict[str, PackageDocument] = {}

    def save_session(self, session: ItinerarySession) -> ItinerarySession:
        self.sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> Optional[ItinerarySession]:
        return self.sessions.get(session_id)

    def discard_session(self, session_id: str) -> bool:
        return self.sessions.pop(session_id, None) is not None

    def save_package(self, package: PackageDocument) -> PackageDocument:
        self.packages[package.id] = package
        return package

    def get_package(self, package_id: str) -> Optional[PackageDocument]:
        return self.packages.get(package_id)

    def list_packages(self) -> List[PackageDocument]:
        return list(self.packages.values())

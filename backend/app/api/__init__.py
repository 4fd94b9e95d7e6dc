from contextlib import contextmanager
from typing import Iterator

from fastapi import Depends, HTTPException
from starlette.requests import Request

from app.core.errors import (
    CatalogRecordNotFound,
    InvalidTransition,
    ItineraryError,
    PackageNotFound,
    SessionNotFound,
    SuggestionError,
    WizardValidationError,
)
from app.services.authoring_service import AuthoringService
from app.storage.catalog import MasterCatalog
from app.storage.repository import InMemoryRepository

_STATUS_BY_ERROR = (
    (SessionNotFound, 404),
    (PackageNotFound, 404),
    (CatalogRecordNotFound, 404),
    (WizardValidationError, 422),
    (InvalidTransition, 409),
    (SuggestionError, 502),
)


def get_repository(request: Request) -> InMemoryRepository:
    repository = getattr(request.app.state, "repository", None)
    if repository is None:
        raise HTTPException(status_code=500, detail="Repository not initialized")
    return repository


def get_catalog(request: Request) -> MasterCatalog:
    catalog = getattr(request.app.state, "catalog", None)
    if catalog is None:
        raise HTTPException(status_code=500, detail="Catalog not initialized")
    return catalog


def get_authoring_service(
    repository: InMemoryRepository = Depends(get_repository),
    catalog: MasterCatalog = Depends(get_catalog),
) -> AuthoringService:
    return AuthoringService(repository=repository, catalog=catalog)


@contextmanager
def domain_errors() -> Iterator[None]:
    """Translate authoring errors into HTTP responses with a user-facing message."""
    try:
        yield
    except ItineraryError as exc:
        status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(exc, cls)), 400)
        detail = {"message": str(exc)}
        if isinstance(exc, WizardValidationError):
            detail["missing_fields"] = exc.missing_fields
        raise HTTPException(status_code=status, detail=detail) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail={"message": str(exc)}) from exc

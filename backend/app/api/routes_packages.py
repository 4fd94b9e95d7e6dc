from fastapi import APIRouter, Depends

from app.api import domain_errors, get_authoring_service
from app.models.schemas import PackageListResponse, PackageSchema, SessionSchema
from app.services.authoring_service import AuthoringService

router = APIRouter()


@router.get("/", response_model=PackageListResponse)
def list_packages(service: AuthoringService = Depends(get_authoring_service)) -> PackageListResponse:
    return PackageListResponse(
        packages=[PackageSchema.from_domain(p) for p in service.repository.list_packages()]
    )


@router.get("/{package_id}", response_model=PackageSchema)
def get_package(
    package_id: str, service: AuthoringService = Depends(get_authoring_service)
) -> PackageSchema:
    with domain_errors():
        return PackageSchema.from_domain(service.get_package(package_id))


@router.post("/{package_id}/edit", response_model=SessionSchema, status_code=201)
def edit_package(
    package_id: str, service: AuthoringService = Depends(get_authoring_service)
) -> SessionSchema:
    with domain_errors():
        session = service.edit_package(package_id)
    return SessionSchema.from_session(session, service.materializer.final_price(session))

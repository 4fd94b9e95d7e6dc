from typing import List

from fastapi import APIRouter, Depends

from app.api import get_catalog
from app.models.schemas import ActivitySchema, HotelSchema, TransportSchema
from app.storage.catalog import MasterCatalog

router = APIRouter()


@router.get("/hotels", response_model=List[HotelSchema])
def list_hotels(search: str = "", catalog: MasterCatalog = Depends(get_catalog)) -> List[HotelSchema]:
    return [HotelSchema.from_domain(h) for h in catalog.active_hotels(search)]


@router.get("/activities", response_model=List[ActivitySchema])
def list_activities(
    search: str = "", catalog: MasterCatalog = Depends(get_catalog)
) -> List[ActivitySchema]:
    return [ActivitySchema.from_domain(a) for a in catalog.active_activities(search)]


@router.get("/transports", response_model=List[TransportSchema])
def list_transports(
    search: str = "", catalog: MasterCatalog = Depends(get_catalog)
) -> List[TransportSchema]:
    return [TransportSchema.from_domain(t) for t in catalog.active_transports(search)]

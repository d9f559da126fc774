from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cruise_catalog.dependencies import get_db
from cruise_catalog.schemas.media_response import CabinImagesResponse, ShipDecksResponse, ShipImagesResponse
from cruise_catalog.services.media_service import ShipMediaService
from cruise_catalog.repositories.ships_repo import ShipsRepository

router = APIRouter(tags=["ships"])

@router.get("/ships/{ship_id}/images", response_model=ShipImagesResponse)
def ship_images_endpoint(ship_id: str,
                         page: Optional[int] = Query(default=None),
                         page_size: Optional[int] = Query(default=None, ge=1, alias="pageSize"),
                         db: Session = Depends(get_db)) -> ShipImagesResponse:
    svc = ShipMediaService(repo=ShipsRepository(db))
    return svc.get_ship_images(ship_id, page=page, page_size=page_size)

@router.get("/ships/{ship_id}/decks", response_model=ShipDecksResponse)
def ship_decks_endpoint(ship_id: str, db: Session = Depends(get_db)) -> ShipDecksResponse:
    return ShipMediaService(repo=ShipsRepository(db)).get_ship_decks(ship_id)

@router.get("/cabin-types/{cabin_type_id}/images", response_model=CabinImagesResponse)
def cabin_images_endpoint(cabin_type_id: str, db: Session = Depends(get_db)) -> CabinImagesResponse:
    return ShipMediaService(repo=ShipsRepository(db)).get_cabin_images(cabin_type_id)

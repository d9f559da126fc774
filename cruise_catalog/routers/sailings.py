from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cruise_catalog.dependencies import get_db
from cruise_catalog.schemas.detail_response import AlternateSailingsResponse, SailingDetailResponse
from cruise_catalog.services.detail_service import DetailService
from cruise_catalog.repositories.sailings_repo import SailingsRepository

router = APIRouter(prefix="/sailings", tags=["sailings"])

@router.get("/{sailing_id}", response_model=SailingDetailResponse)
def sailing_detail_endpoint(sailing_id: str, db: Session = Depends(get_db)) -> SailingDetailResponse:
    svc = DetailService(repo=SailingsRepository(db))
    return svc.get_sailing_detail(sailing_id)

@router.get("/{sailing_id}/alternates", response_model=AlternateSailingsResponse)
def alternate_sailings_endpoint(sailing_id: str, db: Session = Depends(get_db)) -> AlternateSailingsResponse:
    svc = DetailService(repo=SailingsRepository(db))
    return svc.get_alternate_sailings(sailing_id)

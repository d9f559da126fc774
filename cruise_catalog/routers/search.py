from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cruise_catalog.core.sync_status import SyncStatusProvider
from cruise_catalog.dependencies import get_db, get_sync_status_provider
from cruise_catalog.schemas.filters_response import SailingFiltersResponse
from cruise_catalog.schemas.search_request import FilterSpec, SailingSearchRequest
from cruise_catalog.schemas.search_response import SailingSearchResponse
from cruise_catalog.services.search_service import SearchService
from cruise_catalog.repositories.sailings_repo import SailingsRepository

router = APIRouter(tags=["search"])

@router.get("/sailings", response_model=SailingSearchResponse)
def search_endpoint(params: Annotated[SailingSearchRequest, Query()],
                    db: Session = Depends(get_db),
                    sync_status: SyncStatusProvider = Depends(get_sync_status_provider)) -> SailingSearchResponse:
    repo = SailingsRepository(db)
    svc = SearchService(repo=repo, sync_status=sync_status)        # inject repository, not database
    return svc.execute(params)

@router.get("/filters", response_model=SailingFiltersResponse)
def filters_endpoint(params: Annotated[FilterSpec, Query()],
                     db: Session = Depends(get_db),
                     sync_status: SyncStatusProvider = Depends(get_sync_status_provider)) -> SailingFiltersResponse:
    svc = SearchService(repo=SailingsRepository(db), sync_status=sync_status)
    return svc.filter_options(params)

from datetime import date
from typing import Any, Dict, List, Optional

from cruise_catalog.schemas.common import CamelModel, Pagination


class ShipSummary(CamelModel):
    id: str
    name: str
    image_url: Optional[str] = None


class LineSummary(CamelModel):
    id: str
    name: str
    logo_url: Optional[str] = None


class PortRef(CamelModel):
    id: Optional[str] = None
    name: str


class PriceSummary(CamelModel):
    inside: Optional[int] = None
    oceanview: Optional[int] = None
    balcony: Optional[int] = None
    suite: Optional[int] = None


class SailingHit(CamelModel):
    id: str
    name: str
    sail_date: date
    end_date: date
    nights: int
    ship: ShipSummary
    cruise_line: LineSummary
    embark_port: PortRef
    disembark_port: PortRef
    prices: PriceSummary
    last_synced_at: str
    prices_updating: bool


class SyncInfo(CamelModel):
    sync_in_progress: bool
    # Deprecated alias of sync_in_progress kept for older clients.
    prices_updating: bool
    last_synced_at: Optional[str] = None


class SailingSearchResponse(CamelModel):
    items: List[SailingHit]
    pagination: Pagination
    sync: SyncInfo
    filters: Dict[str, Any] = {}

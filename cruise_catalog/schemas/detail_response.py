from datetime import date, time
from typing import Any, Dict, List, Optional

from pydantic import Field

from cruise_catalog.schemas.common import CamelModel


class ItineraryStop(CamelModel):
    day_number: int
    port_name: str
    port_id: Optional[str] = None
    is_sea_day: bool
    arrival_time: Optional[time] = None
    departure_time: Optional[time] = None


class CabinPrice(CamelModel):
    cabin_code: str
    cabin_category: str
    occupancy: int
    base_price_cents: int
    taxes_cents: int
    total_price_cents: int
    is_per_person: bool


class ShipImageInfo(CamelModel):
    url: Optional[str] = None
    url_hd: Optional[str] = None
    url_2k: Optional[str] = Field(default=None, alias="url2k")
    caption: Optional[str] = None
    is_default: bool = False


class ShipDetail(CamelModel):
    id: str
    name: str
    ship_class: Optional[str] = None
    image_url: Optional[str] = None
    year_built: Optional[int] = None
    tonnage: Optional[int] = None
    passenger_capacity: Optional[int] = None
    crew_count: Optional[int] = None
    amenities: Optional[List[str]] = None
    images: Optional[List[ShipImageInfo]] = None


class CruiseLineDetail(CamelModel):
    id: str
    name: str
    logo_url: Optional[str] = None
    website_url: Optional[str] = None


class PortDetail(CamelModel):
    id: str
    name: str
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class RegionInfo(CamelModel):
    id: str
    name: str
    is_primary: bool = False


class DetailPriceSummary(CamelModel):
    cheapest_inside: Optional[int] = None
    cheapest_oceanview: Optional[int] = None
    cheapest_balcony: Optional[int] = None
    cheapest_suite: Optional[int] = None


class SailingDetailResponse(CamelModel):
    id: str
    provider: str
    provider_identifier: str
    name: str
    sail_date: date
    end_date: date
    nights: int
    ship: ShipDetail
    cruise_line: CruiseLineDetail
    embark_port: Optional[PortDetail] = None
    embark_port_name: Optional[str] = None
    disembark_port: Optional[PortDetail] = None
    disembark_port_name: Optional[str] = None
    regions: List[RegionInfo] = []
    itinerary: List[ItineraryStop] = []
    price_summary: DetailPriceSummary
    prices: List[CabinPrice] = []
    last_synced_at: str
    prices_updating: bool
    market_id: Optional[int] = None
    no_fly: Optional[bool] = None
    depart_uk: Optional[bool] = None
    metadata: Optional[Dict[str, Any]] = None
    created_at: str
    updated_at: str


class AlternateShip(CamelModel):
    id: str
    name: str


class AlternateSailingInfo(CamelModel):
    id: str
    name: str
    nights: int
    ship: AlternateShip


class AlternateSailing(CamelModel):
    id: str
    alternate_sailing_id: Optional[str] = None
    provider_identifier: str
    alternate_sail_date: Optional[date] = None
    alternate_nights: Optional[int] = None
    alternate_lead_price_cents: Optional[int] = None
    # None means the alternate has not been imported yet.
    sailing: Optional[AlternateSailingInfo] = None


class AlternateSailingsResponse(CamelModel):
    sailing_id: str
    alternates: List[AlternateSailing] = []

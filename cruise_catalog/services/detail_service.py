"""
Sailing detail aggregation.

One sailing is merged with its ship, line, ports, regions, itinerary and
cabin prices into a single response. Reference rows that are missing never
fail the request: the sailing row is the only hard requirement.
"""

import logging
from datetime import datetime
from typing import Any, Callable, List, Mapping, Optional

from cruise_catalog.core.errors import SailingNotFound
from cruise_catalog.core.pagination import iso_utc
from cruise_catalog.core.staleness import is_stale, utcnow
from cruise_catalog.domain.ship_images import normalize_ship_images
from cruise_catalog.repositories.sailings_repo import UNKNOWN_PORT, SailingsRepository
from cruise_catalog.schemas.detail_response import (
    AlternateSailing, AlternateSailingInfo, AlternateSailingsResponse, AlternateShip, CabinPrice,
    CruiseLineDetail, DetailPriceSummary, ItineraryStop, PortDetail, RegionInfo,
    SailingDetailResponse, ShipDetail, ShipImageInfo,
)

logger = logging.getLogger(__name__)


def _as_int(value: Any) -> Optional[int]:
    """Metadata numbers arrive as ints, floats or numeric strings."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class DetailService:
    def __init__(self, repo: SailingsRepository, clock: Callable[[], datetime] = utcnow):
        self.repo = repo
        self.clock = clock

    def get_sailing_detail(self, sailing_id: str) -> SailingDetailResponse:
        row = self.repo.get_sailing_row(sailing_id)
        if row is None:
            logger.warning("Sailing detail requested for unknown id %s", sailing_id)
            raise SailingNotFound(sailing_id)

        now = self.clock()
        return SailingDetailResponse(
            id=row.id,
            provider=row.provider,
            provider_identifier=row.provider_identifier,
            name=row.name,
            sail_date=row.sail_date,
            end_date=row.end_date,
            nights=row.nights,
            ship=self._ship(row),
            cruise_line=self._line(row),
            embark_port=self._port(row.embark_port_id),
            embark_port_name=row.embark_port_name,
            disembark_port=self._port(row.disembark_port_id),
            disembark_port_name=row.disembark_port_name,
            regions=self._regions(sailing_id),
            itinerary=self._itinerary(sailing_id),
            price_summary=DetailPriceSummary(
                cheapest_inside=row.cheapest_inside_cents,
                cheapest_oceanview=row.cheapest_oceanview_cents,
                cheapest_balcony=row.cheapest_balcony_cents,
                cheapest_suite=row.cheapest_suite_cents,
            ),
            prices=self._prices(sailing_id),
            last_synced_at=iso_utc(row.last_synced_at or now),
            prices_updating=is_stale(row.last_synced_at, now),
            market_id=row.market_id,
            no_fly=row.no_fly,
            depart_uk=row.depart_uk,
            metadata=row.sailing_meta,
            created_at=iso_utc(row.created_at or now),
            updated_at=iso_utc(row.updated_at or now),
        )

    def _ship(self, row) -> ShipDetail:
        meta: Mapping[str, Any] = row.ship_meta or {}
        images = normalize_ship_images(meta)
        amenities = meta.get("amenities")
        return ShipDetail(
            id=row.ship_ref_id or "",
            name=row.ship_name or "Unknown Ship",
            ship_class=row.ship_class,
            image_url=row.ship_image_url,
            year_built=_as_int(meta.get("year_built")),
            tonnage=_as_int(meta.get("tonnage")),
            passenger_capacity=_as_int(meta.get("passenger_capacity")),
            crew_count=_as_int(meta.get("crew_count")),
            amenities=[str(a) for a in amenities] if isinstance(amenities, list) else None,
            images=None if images is None else [
                ShipImageInfo(url=i.url, url_hd=i.url_hd, url_2k=i.url_2k,
                              caption=i.caption, is_default=i.is_default)
                for i in images
            ],
        )

    def _line(self, row) -> CruiseLineDetail:
        meta: Mapping[str, Any] = row.line_meta or {}
        return CruiseLineDetail(
            id=row.line_ref_id or "",
            name=row.line_name or "Unknown Line",
            logo_url=meta.get("logo_url") or None,
            website_url=meta.get("website") or None,
        )

    def _port(self, port_id: Optional[str]) -> Optional[PortDetail]:
        if not port_id:
            return None
        port = self.repo.get_port(port_id)
        if port is None:
            return None
        meta: Mapping[str, Any] = port.meta or {}
        return PortDetail(
            id=port.id,
            name=port.name,
            country=meta.get("country") or None,
            latitude=_as_float(meta.get("latitude")),
            longitude=_as_float(meta.get("longitude")),
        )

    def _regions(self, sailing_id: str) -> List[RegionInfo]:
        # dangling join rows carry no region and are dropped
        return [
            RegionInfo(id=r.id, name=r.name, is_primary=bool(r.is_primary))
            for r in self.repo.get_regions(sailing_id)
            if r.id is not None and r.name is not None
        ]

    def _itinerary(self, sailing_id: str) -> List[ItineraryStop]:
        return [
            ItineraryStop(
                day_number=s.day_number,
                port_name=s.port_name or UNKNOWN_PORT,
                port_id=s.port_id,
                is_sea_day=bool(s.is_sea_day),
                arrival_time=s.arrival_time,
                departure_time=s.departure_time,
            )
            for s in self.repo.get_stops(sailing_id)
        ]

    def _prices(self, sailing_id: str) -> List[CabinPrice]:
        return [
            CabinPrice(
                cabin_code=p.cabin_code,
                cabin_category=p.cabin_category,
                occupancy=p.occupancy,
                base_price_cents=p.base_price_cents,
                taxes_cents=p.taxes_cents,
                total_price_cents=p.base_price_cents + p.taxes_cents,
                is_per_person=p.is_per_person == 1,
            )
            for p in self.repo.get_cabin_prices(sailing_id)
        ]

    def get_alternate_sailings(self, sailing_id: str) -> AlternateSailingsResponse:
        if not self.repo.sailing_exists(sailing_id):
            logger.warning("Alternates requested for unknown sailing %s", sailing_id)
            raise SailingNotFound(sailing_id)

        alternates = []
        for alt in self.repo.get_alternates(sailing_id):
            resolved = None
            if alt.resolved_sailing_id:
                resolved = AlternateSailingInfo(
                    id=alt.resolved_sailing_id,
                    name=alt.resolved_sailing_name or "Unknown",
                    nights=alt.resolved_sailing_nights or 0,
                    ship=AlternateShip(id=alt.resolved_ship_id or "", name=alt.resolved_ship_name or "Unknown"),
                )
            alternates.append(AlternateSailing(
                id=alt.id,
                alternate_sailing_id=alt.alternate_sailing_id,
                provider_identifier=alt.alternate_provider_identifier,
                alternate_sail_date=alt.alternate_sail_date,
                alternate_nights=alt.alternate_nights,
                alternate_lead_price_cents=alt.alternate_lead_price_cents,
                sailing=resolved,
            ))
        return AlternateSailingsResponse(sailing_id=sailing_id, alternates=alternates)

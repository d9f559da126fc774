import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session

from cruise_catalog.core.pagination import PageWindow
from cruise_catalog.domain.facets import FacetContext, facet_registry
from cruise_catalog.repositories.query_builder import (
    CompiledFilters, apply_filters, apply_sorting, compile_filters, sailing_search_from,
)
from cruise_catalog.repositories.tables import (
    cruise_alternate_sailings as alternates,
    cruise_lines as lines,
    cruise_ports as ports,
    cruise_regions as regions,
    cruise_sailing_cabin_prices as cabin_prices,
    cruise_sailing_regions as sailing_regions,
    cruise_sailing_stops as stops,
    cruise_sailings as sailings,
    cruise_ships as ships,
)
from cruise_catalog.schemas.search_request import SailingSearchRequest

logger = logging.getLogger(__name__)

UNKNOWN_PORT = "Unknown"

embark_port = ports.alias("embark_port")
disembark_port = ports.alias("disembark_port")


def resolve_port_name(canonical: Optional[str], denormalized: Optional[str]) -> str:
    """ Canonical port row name, else the sailing's stored name, else "Unknown". """
    return canonical or denormalized or UNKNOWN_PORT


class SailingsRepository:
    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------ search

    def search_sailings(self, filters: SailingSearchRequest,
                        window: PageWindow) -> Tuple[List[Dict[str, Any]], int]:
        """
        Count and fetch one page of active sailings matching the filters.
        Returns: (items, total_count)
        """
        compiled = compile_filters(filters)
        logger.debug("Compiled %d sailing predicates (region join: %s)",
                     len(compiled.conditions), bool(compiled.region_id))

        total_count = self._count_total(compiled)

        query = apply_filters(self._build_search_query(), compiled, from_clause=self._search_from())
        query = apply_sorting(query, filters.sort_by, filters.sort_dir)
        query = query.limit(window.page_size).offset(window.offset)

        rows = list(self.db.execute(query).all())
        return self._hydrate_items(rows), total_count

    def _search_from(self):
        return (
            sailing_search_from()
            .outerjoin(embark_port, sailings.c.embark_port_id == embark_port.c.id)
            .outerjoin(disembark_port, sailings.c.disembark_port_id == disembark_port.c.id)
        )

    def _build_search_query(self):
        return select(
            sailings.c.id, sailings.c.name, sailings.c.sail_date, sailings.c.end_date, sailings.c.nights,
            sailings.c.embark_port_id, sailings.c.embark_port_name,
            sailings.c.disembark_port_id, sailings.c.disembark_port_name,
            sailings.c.cheapest_inside_cents, sailings.c.cheapest_oceanview_cents,
            sailings.c.cheapest_balcony_cents, sailings.c.cheapest_suite_cents,
            sailings.c.last_synced_at,
            ships.c.id.label("ship_id"), ships.c.name.label("ship_name"),
            ships.c.image_url.label("ship_image_url"),
            lines.c.id.label("line_id"), lines.c.name.label("line_name"),
            lines.c.meta.label("line_meta"),
            embark_port.c.name.label("embark_port_actual_name"),
            disembark_port.c.name.label("disembark_port_actual_name"),
        )

    def _count_total(self, compiled: CompiledFilters) -> int:
        count_query = apply_filters(select(func.count(func.distinct(sailings.c.id))), compiled)
        return int(self.db.execute(count_query).scalar_one() or 0)

    def _hydrate_items(self, rows: List[Row]) -> List[Dict[str, Any]]:
        return [
            {
                "id": r.id,
                "name": r.name,
                "sail_date": r.sail_date,
                "end_date": r.end_date,
                "nights": r.nights,
                "ship": {
                    "id": r.ship_id or "",
                    "name": r.ship_name or "Unknown Ship",
                    "image_url": r.ship_image_url,
                },
                "cruise_line": {
                    "id": r.line_id or "",
                    "name": r.line_name or "Unknown Line",
                    "logo_url": (r.line_meta or {}).get("logo_url") or None,
                },
                "embark_port": {
                    "id": r.embark_port_id,
                    "name": resolve_port_name(r.embark_port_actual_name, r.embark_port_name),
                },
                "disembark_port": {
                    "id": r.disembark_port_id,
                    "name": resolve_port_name(r.disembark_port_actual_name, r.disembark_port_name),
                },
                "prices": {
                    "inside": r.cheapest_inside_cents,
                    "oceanview": r.cheapest_oceanview_cents,
                    "balcony": r.cheapest_balcony_cents,
                    "suite": r.cheapest_suite_cents,
                },
                "last_synced_at": r.last_synced_at,
            }
            for r in rows
        ]

    # ------------------------------------------------------------------ facets

    def compute_facets(self, cruise_line_id: Optional[str] = None) -> Dict[str, Any]:
        """Compute option lists and absolute catalog ranges for the search UI."""
        from cruise_catalog.services.facets import date_range, nights_range, price_range

        context = FacetContext(db=self.db, cruise_line_id=cruise_line_id)
        facets: Dict[str, Any] = dict(facet_registry.compute_all_facets(context))
        facets["date_range"] = date_range(self.db, sailings)
        facets["nights_range"] = nights_range(self.db, sailings)
        facets["price_range"] = price_range(self.db, sailings)
        return facets

    # ------------------------------------------------------------------ detail

    def get_sailing_row(self, sailing_id: str) -> Optional[Row]:
        query = (
            select(
                sailings,
                sailings.c.meta.label("sailing_meta"),
                ships.c.id.label("ship_ref_id"), ships.c.name.label("ship_name"),
                ships.c.ship_class, ships.c.image_url.label("ship_image_url"),
                ships.c.meta.label("ship_meta"),
                lines.c.id.label("line_ref_id"), lines.c.name.label("line_name"),
                lines.c.meta.label("line_meta"),
            )
            .select_from(sailing_search_from())
            .where(sailings.c.id == sailing_id)
            .limit(1)
        )
        return self.db.execute(query).first()

    def sailing_exists(self, sailing_id: str) -> bool:
        return self.db.execute(
            select(sailings.c.id).where(sailings.c.id == sailing_id).limit(1)
        ).first() is not None

    def get_port(self, port_id: str) -> Optional[Row]:
        return self.db.execute(
            select(ports.c.id, ports.c.name, ports.c.meta).where(ports.c.id == port_id).limit(1)
        ).first()

    def get_regions(self, sailing_id: str) -> List[Row]:
        return list(self.db.execute(
            select(regions.c.id, regions.c.name, sailing_regions.c.is_primary)
            .select_from(sailing_regions.outerjoin(regions, sailing_regions.c.region_id == regions.c.id))
            .where(sailing_regions.c.sailing_id == sailing_id)
            .order_by(sailing_regions.c.is_primary.desc(), regions.c.name)
        ).all())

    def get_stops(self, sailing_id: str) -> List[Row]:
        return list(self.db.execute(
            select(stops)
            .where(stops.c.sailing_id == sailing_id)
            .order_by(stops.c.sequence_order)
        ).all())

    def get_cabin_prices(self, sailing_id: str) -> List[Row]:
        return list(self.db.execute(
            select(cabin_prices)
            .where(cabin_prices.c.sailing_id == sailing_id)
            .order_by(cabin_prices.c.cabin_category, cabin_prices.c.base_price_cents)
        ).all())

    def get_alternates(self, sailing_id: str) -> List[Row]:
        """Alternate records with the catalog sailing they resolve to, if it was imported."""
        query = (
            select(
                alternates.c.id, alternates.c.alternate_sailing_id,
                alternates.c.alternate_provider_identifier,
                alternates.c.alternate_sail_date, alternates.c.alternate_nights,
                alternates.c.alternate_lead_price_cents,
                sailings.c.id.label("resolved_sailing_id"),
                sailings.c.name.label("resolved_sailing_name"),
                sailings.c.nights.label("resolved_sailing_nights"),
                ships.c.id.label("resolved_ship_id"),
                ships.c.name.label("resolved_ship_name"),
            )
            .select_from(
                alternates
                .outerjoin(sailings, alternates.c.alternate_sailing_id == sailings.c.id)
                .outerjoin(ships, sailings.c.ship_id == ships.c.id)
            )
            .where(alternates.c.sailing_id == sailing_id)
            .order_by(alternates.c.alternate_sail_date, alternates.c.id)
        )
        return list(self.db.execute(query).all())

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from cruise_catalog.core.pagination import iso_utc, resolve_page_window
from cruise_catalog.core.staleness import is_stale, utcnow
from cruise_catalog.core.sync_status import SyncStatusProvider
from cruise_catalog.repositories.sailings_repo import SailingsRepository
from cruise_catalog.schemas.common import Pagination
from cruise_catalog.schemas.filters_response import DateRange, FilterOption, IntRange, SailingFiltersResponse
from cruise_catalog.schemas.search_request import FilterSpec, SailingSearchRequest
from cruise_catalog.schemas.search_response import SailingHit, SailingSearchResponse, SyncInfo

logger = logging.getLogger(__name__)

FACET_LISTS = ("cruise_lines", "ships", "regions", "embark_ports", "disembark_ports", "ports_of_call")


class SearchService:
    def __init__(self, repo: SailingsRepository, sync_status: SyncStatusProvider,
                 clock: Callable[[], datetime] = utcnow):
        self.repo = repo
        self.sync_status = sync_status
        self.clock = clock

    def execute(self, req: SailingSearchRequest) -> SailingSearchResponse:
        """Execute a sailing search and return one page with sync status."""
        window = resolve_page_window(req.page, req.page_size)

        # Use repository for all data access
        items, total = self.repo.search_sailings(filters=req, window=window)

        now = self.clock()
        hits = [self._to_hit(item, now) for item in items]
        in_progress = bool(self.sync_status.is_sync_in_progress())

        logger.info("Sailing search matched %d (page %d, size %d)", total, window.page, window.page_size)

        return SailingSearchResponse(
            items=hits,
            pagination=Pagination(**window.summary(total)),
            sync=SyncInfo(
                sync_in_progress=in_progress,
                prices_updating=in_progress,
                # first row only, not the oldest or newest on the page
                last_synced_at=hits[0].last_synced_at if hits else None,
            ),
            filters=req.applied_filters(),
        )

    def _to_hit(self, item: Dict[str, Any], now: datetime) -> SailingHit:
        synced: Optional[datetime] = item.get("last_synced_at")
        return SailingHit(
            **{k: v for k, v in item.items() if k != "last_synced_at"},
            last_synced_at=iso_utc(synced or now),
            prices_updating=is_stale(synced, now),
        )

    def filter_options(self, filters: FilterSpec) -> SailingFiltersResponse:
        """Facet option lists and catalog ranges; only the cruise line selection narrows them."""
        facets = self.repo.compute_facets(cruise_line_id=filters.cruise_line_id)

        logger.info("Computed sailing facets (cruise line: %s): %s", filters.cruise_line_id or "any",
                    ", ".join(f"{name}={len(facets.get(name, []))}" for name in FACET_LISTS))

        lists = {
            name: [FilterOption(id=o.id, name=o.name, count=o.count, all_ids=o.all_ids)
                   for o in facets.get(name, [])]
            for name in FACET_LISTS
        }
        return SailingFiltersResponse(
            **lists,
            date_range=DateRange(**facets["date_range"]),
            nights_range=IntRange(**facets["nights_range"]),
            price_range=IntRange(**facets["price_range"]),
        )

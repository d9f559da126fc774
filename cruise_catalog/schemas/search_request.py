from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from cruise_catalog.core.enums import SortDirection, SortField


class FilterSpec(BaseModel):
    """Validated sailing filters shared by search and facet requests."""
    model_config = ConfigDict(populate_by_name=True)

    q: Optional[str] = None
    cruise_line_id: Optional[str] = Field(default=None, alias="cruiseLineId")
    ship_id: Optional[str] = Field(default=None, alias="shipId")
    region_id: Optional[str] = Field(default=None, alias="regionId")
    embark_port_id: Optional[str] = Field(default=None, alias="embarkPortId")
    disembark_port_id: Optional[str] = Field(default=None, alias="disembarkPortId")
    port_of_call_ids: Optional[List[str]] = Field(default=None, alias="portOfCallIds")
    sail_date_from: Optional[date] = Field(default=None, alias="sailDateFrom")
    sail_date_to: Optional[date] = Field(default=None, alias="sailDateTo")
    nights_min: Optional[int] = Field(default=None, ge=1, alias="nightsMin")
    nights_max: Optional[int] = Field(default=None, le=365, alias="nightsMax")
    price_min_cents: Optional[int] = Field(default=None, ge=0, alias="priceMinCents")
    price_max_cents: Optional[int] = Field(default=None, ge=0, alias="priceMaxCents")
    # Free text on purpose: unknown categories fall back to inside.
    cabin_category: Optional[str] = Field(default=None, alias="cabinCategory")


class SailingSearchRequest(FilterSpec):
    sort_by: SortField = Field(default=SortField.sail_date, alias="sortBy")
    sort_dir: SortDirection = Field(default=SortDirection.asc, alias="sortDir")
    page: Optional[int] = None
    page_size: Optional[int] = Field(default=None, ge=1, alias="pageSize")

    def applied_filters(self) -> dict:
        """ Echo of the request for display; unset values are omitted. """
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"page", "page_size"}, mode="json")

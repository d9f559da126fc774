from datetime import date
from typing import List, Optional

from cruise_catalog.schemas.common import CamelModel


class FilterOption(CamelModel):
    id: str
    name: str
    count: int
    all_ids: Optional[List[str]] = None


class DateRange(CamelModel):
    min: Optional[date] = None
    max: Optional[date] = None


class IntRange(CamelModel):
    min: Optional[int] = None
    max: Optional[int] = None


class SailingFiltersResponse(CamelModel):
    cruise_lines: List[FilterOption] = []
    ships: List[FilterOption] = []
    regions: List[FilterOption] = []
    embark_ports: List[FilterOption] = []
    disembark_ports: List[FilterOption] = []
    ports_of_call: List[FilterOption] = []
    date_range: DateRange = DateRange()
    nights_range: IntRange = IntRange()
    price_range: IntRange = IntRange()

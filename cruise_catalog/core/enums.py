from enum import StrEnum
from typing import Optional


class CabinCategory(StrEnum):
    inside    = "inside"
    oceanview = "oceanview"
    balcony   = "balcony"
    suite     = "suite"

    def price_column(self) -> str:
        return {
            CabinCategory.inside:    "cheapest_inside_cents",
            CabinCategory.oceanview: "cheapest_oceanview_cents",
            CabinCategory.balcony:   "cheapest_balcony_cents",
            CabinCategory.suite:     "cheapest_suite_cents",
        }[self]

    @classmethod
    def resolve(cls, value: Optional[str]) -> "CabinCategory":
        """ Map a requested category to a member; anything unrecognised is inside. """
        if value is None:
            return cls.inside
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.inside


class SortField(StrEnum):
    sail_date = "sailDate"
    price     = "price"
    nights    = "nights"
    ship_name = "shipName"
    line_name = "lineName"


class SortDirection(StrEnum):
    asc  = "asc"
    desc = "desc"

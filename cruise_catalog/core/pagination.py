import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 50

DEFAULT_IMAGE_PAGE_SIZE = 10
MAX_IMAGE_PAGE_SIZE = 20


def iso_utc(dt: datetime) -> str:
    """ Convert datetime to ISO 8601 UTC string with 'Z' suffix. """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class PageWindow:
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def summary(self, total_items: int) -> dict:
        """ Pagination block for list responses. """
        total_pages = math.ceil(total_items / self.page_size) if self.page_size else 0
        return {
            "page": self.page,
            "page_size": self.page_size,
            "total_items": total_items,
            "total_pages": total_pages,
            "has_more": self.page < total_pages,
        }


def resolve_page_window(page: Optional[int], page_size: Optional[int],
                        default_size: int = DEFAULT_PAGE_SIZE,
                        max_size: int = MAX_PAGE_SIZE) -> PageWindow:
    """ Clamp a requested page/page size: page >= 1, size = min(requested or default, max). """
    effective_page = max(1, page if page is not None else 1)
    effective_size = min(page_size if page_size is not None else default_size, max_size)
    return PageWindow(page=effective_page, page_size=effective_size)

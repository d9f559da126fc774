import logging
from typing import Any, List, Mapping, Optional

from cruise_catalog.core.errors import CabinTypeNotFound, ShipNotFound
from cruise_catalog.core.pagination import DEFAULT_IMAGE_PAGE_SIZE, MAX_IMAGE_PAGE_SIZE, resolve_page_window
from cruise_catalog.repositories.ships_repo import ShipsRepository
from cruise_catalog.schemas.common import Pagination
from cruise_catalog.schemas.media_response import (
    CabinImage, CabinImagesResponse, CabinLocation, ShipDeck, ShipDecksResponse, ShipImage, ShipImagesResponse,
)

logger = logging.getLogger(__name__)

CABIN_LOCATIONS_KEY = "cabin_locations"


def cabin_locations(deck_metadata: Optional[Mapping[str, Any]]) -> List[CabinLocation]:
    """ Cabin hotspots drawn on a deck plan; malformed entries are skipped. """
    raw = (deck_metadata or {}).get(CABIN_LOCATIONS_KEY) or []
    out: List[CabinLocation] = []
    for loc in raw:
        if not isinstance(loc, Mapping) or loc.get("cabin_id") is None:
            logger.warning("Skipping cabin location entry %r", loc)
            continue
        out.append(CabinLocation(
            cabin_id=str(loc["cabin_id"]),
            x1=loc.get("x1", 0), y1=loc.get("y1", 0),
            x2=loc.get("x2", 0), y2=loc.get("y2", 0),
        ))
    return out


class ShipMediaService:
    def __init__(self, repo: ShipsRepository):
        self.repo = repo

    def get_ship_images(self, ship_id: str, page: Optional[int] = None,
                        page_size: Optional[int] = None) -> ShipImagesResponse:
        if not self.repo.ship_exists(ship_id):
            logger.warning("Ship media requested for unknown ship %s", ship_id)
            raise ShipNotFound(ship_id)

        window = resolve_page_window(page, page_size,
                                     default_size=DEFAULT_IMAGE_PAGE_SIZE, max_size=MAX_IMAGE_PAGE_SIZE)
        rows, total = self.repo.get_ship_images(ship_id, window)
        return ShipImagesResponse(
            images=[
                ShipImage(
                    id=r.id,
                    url=r.image_url,
                    thumbnail_url=r.thumbnail_url,
                    alt_text=r.alt_text,
                    image_type=r.image_type or "ship",
                    is_hero=bool(r.is_hero),
                )
                for r in rows
            ],
            pagination=Pagination(**window.summary(total)),
        )

    def get_ship_decks(self, ship_id: str) -> ShipDecksResponse:
        if not self.repo.ship_exists(ship_id):
            logger.warning("Ship media requested for unknown ship %s", ship_id)
            raise ShipNotFound(ship_id)

        return ShipDecksResponse(
            ship_id=ship_id,
            decks=[
                ShipDeck(
                    id=d.id,
                    name=d.name,
                    deck_number=d.deck_number,
                    deck_plan_url=d.deck_plan_url,
                    description=d.description,
                    display_order=d.display_order or 0,
                    cabin_locations=cabin_locations(d.deck_meta),
                )
                for d in self.repo.get_decks(ship_id)
            ],
        )

    def get_cabin_images(self, cabin_type_id: str) -> CabinImagesResponse:
        if not self.repo.cabin_type_exists(cabin_type_id):
            logger.warning("Images requested for unknown cabin type %s", cabin_type_id)
            raise CabinTypeNotFound(cabin_type_id)

        return CabinImagesResponse(
            cabin_type_id=cabin_type_id,
            images=[
                CabinImage(
                    id=i.id,
                    image_url=i.image_url,
                    image_url_hd=i.image_url_hd,
                    image_url_2k=i.image_url_2k,
                    caption=i.caption,
                    display_order=i.display_order or 0,
                    is_default=bool(i.is_default),
                )
                for i in self.repo.get_cabin_images(cabin_type_id)
            ],
        )

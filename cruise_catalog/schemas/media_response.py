from typing import List, Optional

from pydantic import Field

from cruise_catalog.schemas.common import CamelModel, Pagination


class ShipImage(CamelModel):
    id: str
    url: str
    thumbnail_url: Optional[str] = None
    alt_text: Optional[str] = None
    image_type: str = "ship"
    is_hero: bool = False


class ShipImagesResponse(CamelModel):
    images: List[ShipImage]
    pagination: Pagination


class CabinLocation(CamelModel):
    cabin_id: str
    x1: float
    y1: float
    x2: float
    y2: float


class ShipDeck(CamelModel):
    id: str
    name: str
    deck_number: Optional[int] = None
    deck_plan_url: Optional[str] = None
    description: Optional[str] = None
    display_order: int = 0
    cabin_locations: List[CabinLocation] = []


class ShipDecksResponse(CamelModel):
    ship_id: str
    decks: List[ShipDeck]


class CabinImage(CamelModel):
    id: str
    image_url: str
    image_url_hd: Optional[str] = None
    image_url_2k: Optional[str] = Field(default=None, alias="imageUrl2k")
    caption: Optional[str] = None
    display_order: int = 0
    is_default: bool = False


class CabinImagesResponse(CamelModel):
    cabin_type_id: str
    images: List[CabinImage]

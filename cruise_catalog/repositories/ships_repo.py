from typing import List, Tuple

from sqlalchemy import func, select
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session

from cruise_catalog.core.pagination import PageWindow
from cruise_catalog.repositories.tables import (
    cruise_cabin_images as cabin_images,
    cruise_ship_cabin_types as cabin_types,
    cruise_ship_decks as decks,
    cruise_ship_images as ship_images,
    cruise_ships as ships,
)


class ShipsRepository:
    def __init__(self, db: Session):
        self.db = db

    def ship_exists(self, ship_id: str) -> bool:
        return self.db.execute(
            select(ships.c.id).where(ships.c.id == ship_id).limit(1)
        ).first() is not None

    def cabin_type_exists(self, cabin_type_id: str) -> bool:
        return self.db.execute(
            select(cabin_types.c.id).where(cabin_types.c.id == cabin_type_id).limit(1)
        ).first() is not None

    def get_ship_images(self, ship_id: str, window: PageWindow) -> Tuple[List[Row], int]:
        """
        One page of gallery images, hero first then grouped by type.
        Returns: (rows, total_count)
        """
        total = self.db.execute(
            select(func.count()).select_from(ship_images).where(ship_images.c.ship_id == ship_id)
        ).scalar_one()
        rows = self.db.execute(
            select(ship_images)
            .where(ship_images.c.ship_id == ship_id)
            .order_by(ship_images.c.is_hero.desc(), ship_images.c.image_type,
                      ship_images.c.display_order, ship_images.c.id)
            .limit(window.page_size)
            .offset(window.offset)
        ).all()
        return list(rows), int(total or 0)

    def get_decks(self, ship_id: str) -> List[Row]:
        return list(self.db.execute(
            select(decks, decks.c.meta.label("deck_meta"))
            .where(decks.c.ship_id == ship_id)
            .order_by(decks.c.display_order, decks.c.deck_number, decks.c.id)
        ).all())

    def get_cabin_images(self, cabin_type_id: str) -> List[Row]:
        return list(self.db.execute(
            select(cabin_images)
            .where(cabin_images.c.cabin_type_id == cabin_type_id)
            .order_by(cabin_images.c.display_order, cabin_images.c.id)
        ).all())

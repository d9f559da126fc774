from typing import Dict, Any
from sqlalchemy import select, func
from sqlalchemy.orm import Session

# Absolute catalog bounds for the search UI. Only is_active applies; user filters never narrow them.

def date_range(db: Session, sailings) -> Dict[str, Any]:
    lo, hi = db.execute(
        select(func.min(sailings.c.sail_date), func.max(sailings.c.sail_date))
        .where(sailings.c.is_active.is_(True))
    ).one()
    return {"min": lo, "max": hi}

def nights_range(db: Session, sailings) -> Dict[str, Any]:
    lo, hi = db.execute(
        select(func.min(sailings.c.nights), func.max(sailings.c.nights))
        .where(sailings.c.is_active.is_(True))
    ).one()
    return {"min": lo, "max": hi}

def price_range(db: Session, sailings) -> Dict[str, Any]:
    # inside-cabin lead price; sailings without one are ignored
    lo, hi = db.execute(
        select(func.min(sailings.c.cheapest_inside_cents), func.max(sailings.c.cheapest_inside_cents))
        .where(sailings.c.is_active.is_(True), sailings.c.cheapest_inside_cents.isnot(None))
    ).one()
    return {"min": lo, "max": hi}

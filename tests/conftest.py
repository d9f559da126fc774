"""
Shared fixtures: an in-memory SQLite catalog built from the Core tables, plus
small insert helpers with sensible defaults so each test only states what it cares about.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cruise_catalog.repositories import tables as t


@pytest.fixture
def db():
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True,
                           connect_args={"check_same_thread": False}, poolclass=StaticPool)
    t.metadata.create_all(engine)
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


class CatalogBuilder:
    def __init__(self, session):
        self.db = session
        self._seq = 0

    def _next(self, prefix: str) -> str:
        self._seq += 1
        return f"{prefix}-{self._seq:03d}"

    def _insert(self, table, row: Dict[str, Any]) -> Dict[str, Any]:
        self.db.execute(table.insert().values(**row))
        self.db.commit()
        return row

    def line(self, name="Royal Caribbean", **kw):
        return self._insert(t.cruise_lines, {"id": kw.pop("id", self._next("line")), "name": name, **kw})

    def ship(self, line_id, name="Wonder of the Seas", **kw):
        return self._insert(t.cruise_ships,
                            {"id": kw.pop("id", self._next("ship")), "name": name, "cruise_line_id": line_id, **kw})

    def port(self, name="Miami", **kw):
        return self._insert(t.cruise_ports, {"id": kw.pop("id", self._next("port")), "name": name, **kw})

    def region(self, name="Caribbean", **kw):
        return self._insert(t.cruise_regions, {"id": kw.pop("id", self._next("region")), "name": name, **kw})

    def sailing(self, ship, name="7 Night Western Caribbean", sail_date=date(2026, 3, 1), nights=7, **kw):
        row = {
            "id": kw.pop("id", self._next("sailing")),
            "provider": "traveltek",
            "provider_identifier": kw.pop("provider_identifier", f"tt-{self._seq}"),
            "ship_id": ship["id"],
            "cruise_line_id": ship["cruise_line_id"],
            "name": name,
            "sail_date": sail_date,
            "end_date": sail_date + timedelta(days=nights),
            "nights": nights,
            "is_active": True,
            "last_synced_at": datetime.now(timezone.utc),
        }
        row.update(kw)
        return self._insert(t.cruise_sailings, row)

    def stop(self, sailing, day_number, port=None, is_sea_day=False, **kw):
        return self._insert(t.cruise_sailing_stops, {
            "id": kw.pop("id", self._next("stop")),
            "sailing_id": sailing["id"],
            "port_id": port["id"] if port else None,
            "port_name": kw.pop("port_name", port["name"] if port else "At Sea"),
            "is_sea_day": is_sea_day,
            "day_number": day_number,
            "sequence_order": kw.pop("sequence_order", day_number),
            **kw,
        })

    def sailing_region(self, sailing, region_id, is_primary=False):
        return self._insert(t.cruise_sailing_regions,
                            {"sailing_id": sailing["id"], "region_id": region_id, "is_primary": is_primary})


@pytest.fixture
def catalog(db):
    return CatalogBuilder(db)

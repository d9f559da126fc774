# features/environment.py
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterator, Optional

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cruise_catalog.core.sync_status import StaticSyncStatusProvider
from cruise_catalog.dependencies import get_db, get_sync_status_provider
from cruise_catalog.main import API_PREFIX, app
from cruise_catalog.repositories import tables as t

ACTIVE_SAILINGS = 30


def before_all(context):
    # SQLite in-memory DB
    context.engine = create_engine("sqlite+pysqlite:///:memory:", future=True, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    context.Session = sessionmaker(bind=context.engine, autoflush=False, autocommit=False, future=True)

    # Same Core tables the API queries
    t.metadata.create_all(context.engine)

    # Seed dataset
    seed(context)

    # Override DI to use our in-memory session
    def _get_db() -> Iterator:
        db = context.Session()
        try:
            yield db
        finally:
            db.close()
    app.dependency_overrides[get_db] = _get_db

    # HTTP client
    context.client = TestClient(app)

    # Shared test state
    context.api = API_PREFIX
    context.search_url = f"{API_PREFIX}/sailings"
    context.filters_url = f"{API_PREFIX}/filters"
    context.active_sailings = ACTIVE_SAILINGS


def before_scenario(context, scenario):
    context.sync_status = StaticSyncStatusProvider(in_progress=False)
    app.dependency_overrides[get_sync_status_provider] = lambda: context.sync_status
    context.current_filters = {}
    context.last_response = None


def after_all(context):
    app.dependency_overrides.clear()
    context.engine.dispose()


def seed(context):
    S = context.Session()
    now = datetime.now(timezone.utc)

    def add(table, **row):
        S.execute(table.insert().values(**row))
        return row

    add(t.cruise_lines, id="line-rc", name="Royal Caribbean",
        meta={"logo_url": "https://cdn.example/rc.png", "website": "https://rc.example"})
    add(t.cruise_lines, id="line-cel", name="Celebrity Cruises")

    add(t.cruise_ships, id="ship-wonder", name="Wonder of the Seas", cruise_line_id="line-rc", ship_class="Oasis",
        meta={"year_built": 2022, "ship_images": [{"url": "https://cdn.example/wonder-1.jpg", "is_default": True}]})
    add(t.cruise_ships, id="ship-icon", name="Icon of the Seas", cruise_line_id="line-rc", ship_class="Icon")
    add(t.cruise_ships, id="ship-edge", name="Celebrity Edge", cruise_line_id="line-cel", ship_class="Edge",
        meta={"ship_images": [{"imageurl": "https://cdn.example/edge-1.jpg", "default": "Y"}, "broken"]})

    # Miami exists twice, once with stray whitespace, as imported from two feeds
    for pid, name in (("port-mia", "Miami"), ("port-mia-dup", " Miami "), ("port-fll", "Fort Lauderdale"),
                      ("port-coz", "Cozumel"), ("port-nas", "Nassau")):
        add(t.cruise_ports, id=pid, name=name, meta={"country": "USA" if pid in ("port-mia", "port-fll") else None})

    add(t.cruise_regions, id="reg-carib", name="Caribbean")
    add(t.cruise_regions, id="reg-bah", name="Bahamas")

    # 30 active sailings, one every week; every third on Celebrity
    for i in range(ACTIVE_SAILINGS):
        ship_id, line_id = (("ship-edge", "line-cel") if i % 3 == 0 else
                            ("ship-wonder", "line-rc") if i % 3 == 1 else ("ship-icon", "line-rc"))
        nights = 3 + (i % 5)
        sail_date = date(2026, 1, 5) + timedelta(days=7 * i)
        home = "port-mia" if i % 2 == 0 else "port-fll"
        inside: Optional[int] = None if i == ACTIVE_SAILINGS - 1 else 50000 + i * 1000
        sid = f"sail-{i:03d}"
        add(t.cruise_sailings, id=sid, provider="traveltek", provider_identifier=f"tt-{i}",
            ship_id=ship_id, cruise_line_id=line_id, name=f"{nights} Night Caribbean Getaway {i}",
            sail_date=sail_date, end_date=sail_date + timedelta(days=nights), nights=nights,
            embark_port_id=home, embark_port_name="Miami, Florida" if home == "port-mia" else "Fort Lauderdale, FL",
            disembark_port_id=home, disembark_port_name=None,
            cheapest_inside_cents=inside,
            cheapest_oceanview_cents=None if inside is None else inside + 20000,
            cheapest_balcony_cents=None if inside is None else inside + 40000,
            cheapest_suite_cents=None if i % 4 == 0 or inside is None else inside + 100000,
            market_id=1, no_fly=False, depart_uk=False, meta={"cruise_code": f"CC{i:03d}"},
            last_synced_at=now - (timedelta(hours=1) if i % 2 == 0 else timedelta(days=2)),
            is_active=True, created_at=now - timedelta(days=30), updated_at=now - timedelta(days=1))

        add(t.cruise_sailing_regions, sailing_id=sid, region_id="reg-carib", is_primary=True)
        if i % 5 == 0:
            add(t.cruise_sailing_regions, sailing_id=sid, region_id="reg-bah", is_primary=False)

        stops = [(home, False), (None, True), ("port-coz" if i % 2 == 0 else "port-nas", False)]
        if i % 3 == 0:
            stops.append(("port-mia-dup", False))
        for seq, (port_id, sea_day) in enumerate(stops, start=1):
            add(t.cruise_sailing_stops, id=f"{sid}-stop-{seq}", sailing_id=sid, port_id=port_id,
                port_name="" if sea_day else {"port-mia": "Miami", "port-mia-dup": " Miami ", "port-fll": "Fort Lauderdale",
                                              "port-coz": "Cozumel", "port-nas": "Nassau"}[port_id],
                is_sea_day=sea_day, day_number=seq, sequence_order=seq,
                departure_time=None if sea_day else time(17, 0))

    add(t.cruise_sailings, id="sail-inactive", provider="traveltek", provider_identifier="tt-old",
        ship_id="ship-wonder", cruise_line_id="line-rc", name="Retired Itinerary",
        sail_date=date(2025, 1, 1), end_date=date(2025, 1, 8), nights=7, is_active=False)

    # cabin prices and alternates for the detail scenarios
    for code, category, base in (("4V", "inside", 50000), ("2D", "balcony", 90000), ("1A", "oceanview", 70000)):
        add(t.cruise_sailing_cabin_prices, id=f"price-{code}", sailing_id="sail-000", cabin_code=code,
            cabin_category=category, occupancy=2, base_price_cents=base, taxes_cents=15000, is_per_person=1)
    add(t.cruise_alternate_sailings, id="alt-1", sailing_id="sail-000", alternate_sailing_id="sail-003",
        alternate_provider_identifier="tt-3", alternate_sail_date=date(2026, 1, 26), alternate_nights=6,
        alternate_lead_price_cents=53000)
    add(t.cruise_alternate_sailings, id="alt-2", sailing_id="sail-000", alternate_sailing_id=None,
        alternate_provider_identifier="tt-not-imported", alternate_sail_date=date(2026, 8, 1))

    # 12 gallery images for Wonder, the hero stored last
    for i in range(12):
        add(t.cruise_ship_images, id=f"wonder-img-{i:02d}", ship_id="ship-wonder",
            image_url=f"https://cdn.example/wonder/{i}.jpg", image_type="exterior" if i < 6 else "interior",
            display_order=i, is_hero=(i == 11))

    add(t.cruise_ship_decks, id="deck-wonder-8", ship_id="ship-wonder", name="Deck 8", deck_number=8,
        deck_plan_url="https://cdn.example/wonder/deck8.png", display_order=1,
        meta={"cabin_locations": [{"cabin_id": "8201", "x1": 10, "y1": 20, "x2": 30, "y2": 40}]})
    add(t.cruise_ship_decks, id="deck-wonder-9", ship_id="ship-wonder", name="Deck 9", deck_number=9, display_order=2)

    add(t.cruise_ship_cabin_types, id="ct-wonder-balcony", ship_id="ship-wonder", cabin_code="2D",
        cabin_category="balcony", name="Ocean View Balcony")
    for i in range(2):
        add(t.cruise_cabin_images, id=f"ct-img-{i}", cabin_type_id="ct-wonder-balcony",
            image_url=f"https://cdn.example/cabins/2d-{i}.jpg", image_url_2k=f"https://cdn.example/cabins/2d-{i}-2k.jpg",
            display_order=i, is_default=(i == 0))

    S.commit()
    S.close()

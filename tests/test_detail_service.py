"""
Unit tests for DetailService.

Repository rows are stood in for by SimpleNamespace objects carrying the same
attribute names the SQL rows expose.
"""

import pytest
from types import SimpleNamespace
from unittest.mock import Mock
from datetime import date, datetime, time, timezone

from cruise_catalog.core.errors import NotFound, SailingNotFound
from cruise_catalog.services.detail_service import DetailService

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _sailing_row(**overrides):
    row = dict(
        id="sail-1", provider="traveltek", provider_identifier="tt-555",
        name="7 Night Western Caribbean", sail_date=date(2026, 4, 4), end_date=date(2026, 4, 11), nights=7,
        embark_port_id="port-mia", embark_port_name="Miami, Florida",
        disembark_port_id=None, disembark_port_name="Miami, Florida",
        cheapest_inside_cents=89900, cheapest_oceanview_cents=None,
        cheapest_balcony_cents=139900, cheapest_suite_cents=None,
        market_id=3, no_fly=False, depart_uk=None,
        sailing_meta={"cruise_code": "WN07"},
        last_synced_at=datetime(2026, 3, 1, 8, 0), created_at=None, updated_at=datetime(2026, 2, 1, 0, 0),
        ship_ref_id="ship-wonder", ship_name="Wonder of the Seas", ship_class="Oasis",
        ship_image_url="https://cdn.example/wonder.jpg",
        ship_meta={
            "year_built": 2022, "tonnage": "236857", "passenger_capacity": 5734.0, "crew_count": None,
            "amenities": ["FlowRider", "Zip line"],
            "ship_images": [{"url": "w1.jpg", "is_default": True}, {"imageurl": "w2.jpg", "default": "N"}],
        },
        line_ref_id="line-rc", line_name="Royal Caribbean",
        line_meta={"logo_url": "https://cdn.example/rc.png", "website": "https://rc.example"},
    )
    row.update(overrides)
    return SimpleNamespace(**row)


def _repo(row=None):
    repo = Mock()
    repo.get_sailing_row.return_value = row
    repo.get_port.return_value = SimpleNamespace(
        id="port-mia", name="Miami", meta={"country": "USA", "latitude": "25.77", "longitude": -80.19})
    repo.get_regions.return_value = [
        SimpleNamespace(id="reg-carib", name="Caribbean", is_primary=True),
        SimpleNamespace(id=None, name=None, is_primary=None),
        SimpleNamespace(id="reg-bah", name="Bahamas", is_primary=None),
    ]
    repo.get_stops.return_value = [
        SimpleNamespace(day_number=1, port_name="Miami", port_id="port-mia", is_sea_day=False,
                        arrival_time=None, departure_time=time(16, 30)),
        SimpleNamespace(day_number=2, port_name="", port_id=None, is_sea_day=True,
                        arrival_time=None, departure_time=None),
    ]
    repo.get_cabin_prices.return_value = [
        SimpleNamespace(cabin_code="4V", cabin_category="inside", occupancy=2,
                        base_price_cents=89900, taxes_cents=12050, is_per_person=1),
        SimpleNamespace(cabin_code="2D", cabin_category="balcony", occupancy=2,
                        base_price_cents=139900, taxes_cents=12050, is_per_person=0),
    ]
    return repo


class TestGetSailingDetail:
    def test_given_unknown_sailing_when_getting_detail_then_raises_sailing_not_found(self):
        """
        Given: The repository finds no sailing row
        When: Getting detail
        Then: SailingNotFound with the id in its message, and no further lookups
        """
        # Given
        repo = _repo(row=None)

        # When / Then
        with pytest.raises(SailingNotFound) as exc:
            DetailService(repo, clock=lambda: NOW).get_sailing_detail("missing-id")

        assert isinstance(exc.value, NotFound)
        assert str(exc.value) == "Sailing not found: missing-id"
        repo.get_stops.assert_not_called()

    def test_given_sailing_when_getting_detail_then_merges_ship_line_and_ports(self):
        """
        Given: A sailing with ship and line metadata and one resolvable port
        When: Getting detail
        Then: Ship/line fields come from metadata and the missing disembark port is null
        """
        # Given
        repo = _repo(_sailing_row())

        # When
        detail = DetailService(repo, clock=lambda: NOW).get_sailing_detail("sail-1")

        # Then
        assert detail.ship.id == "ship-wonder"
        assert detail.ship.year_built == 2022
        assert detail.ship.tonnage == 236857
        assert detail.ship.passenger_capacity == 5734
        assert detail.ship.crew_count is None
        assert detail.ship.amenities == ["FlowRider", "Zip line"]
        assert [(i.url, i.is_default) for i in detail.ship.images] == [("w1.jpg", True), ("w2.jpg", False)]
        assert detail.cruise_line.logo_url == "https://cdn.example/rc.png"
        assert detail.cruise_line.website_url == "https://rc.example"
        assert detail.embark_port.country == "USA"
        assert detail.embark_port.latitude == pytest.approx(25.77)
        assert detail.disembark_port is None
        assert detail.disembark_port_name == "Miami, Florida"
        repo.get_port.assert_called_once_with("port-mia")

    def test_given_dangling_region_rows_when_getting_detail_then_they_are_dropped(self):
        detail = DetailService(_repo(_sailing_row()), clock=lambda: NOW).get_sailing_detail("sail-1")

        assert [(r.id, r.is_primary) for r in detail.regions] == [("reg-carib", True), ("reg-bah", False)]

    def test_given_stops_and_prices_when_getting_detail_then_itinerary_and_totals_are_derived(self):
        """
        Given: A sea day with no port name and two cabin prices
        When: Getting detail
        Then: The sea day is named "Unknown", totals add taxes, and only stored 1 means per person
        """
        detail = DetailService(_repo(_sailing_row()), clock=lambda: NOW).get_sailing_detail("sail-1")

        assert [s.port_name for s in detail.itinerary] == ["Miami", "Unknown"]
        assert detail.itinerary[0].departure_time == time(16, 30)
        assert [p.total_price_cents for p in detail.prices] == [101950, 151950]
        assert [p.is_per_person for p in detail.prices] == [True, False]

    def test_given_timestamps_when_getting_detail_then_formats_and_falls_back_to_now(self):
        """
        Given: A recent naive lastSyncedAt and no createdAt
        When: Getting detail
        Then: Timestamps are ISO UTC, createdAt falls back to the clock, prices are fresh
        """
        detail = DetailService(_repo(_sailing_row()), clock=lambda: NOW).get_sailing_detail("sail-1")

        assert detail.last_synced_at == "2026-03-01T08:00:00Z"
        assert detail.prices_updating is False
        assert detail.created_at == "2026-03-01T12:00:00Z"
        assert detail.updated_at == "2026-02-01T00:00:00Z"

    def test_given_missing_ship_and_line_when_getting_detail_then_uses_unknown_fallbacks(self):
        """
        Given: A sailing whose ship and line rows are gone
        When: Getting detail
        Then: Names fall back, ids are empty, and ship images are null
        """
        row = _sailing_row(ship_ref_id=None, ship_name=None, ship_class=None, ship_image_url=None, ship_meta=None,
                           line_ref_id=None, line_name=None, line_meta=None, last_synced_at=None)

        detail = DetailService(_repo(row), clock=lambda: NOW).get_sailing_detail("sail-1")

        assert (detail.ship.id, detail.ship.name) == ("", "Unknown Ship")
        assert detail.ship.images is None
        assert (detail.cruise_line.id, detail.cruise_line.name) == ("", "Unknown Line")
        assert detail.cruise_line.logo_url is None
        assert detail.prices_updating is True

    def test_given_detail_when_dumping_by_alias_then_uses_wire_names(self):
        body = DetailService(_repo(_sailing_row()), clock=lambda: NOW).get_sailing_detail("sail-1").model_dump(
            by_alias=True, mode="json")

        assert body["priceSummary"] == {"cheapestInside": 89900, "cheapestOceanview": None,
                                        "cheapestBalcony": 139900, "cheapestSuite": None}
        assert body["ship"]["images"][0]["url2k"] is None
        assert body["itinerary"][0]["departureTime"] == "16:30:00"
        assert body["metadata"] == {"cruise_code": "WN07"}


class TestGetAlternateSailings:
    def test_given_unknown_sailing_when_getting_alternates_then_raises_sailing_not_found(self):
        repo = Mock()
        repo.sailing_exists.return_value = False

        with pytest.raises(SailingNotFound):
            DetailService(repo).get_alternate_sailings("missing-id")

        repo.get_alternates.assert_not_called()

    def test_given_resolved_and_unresolved_alternates_when_getting_then_only_resolved_carry_sailing(self):
        """
        Given: One alternate already imported and one not
        When: Getting alternates
        Then: The imported one carries sailing info with fallbacks, the other has sailing null
        """
        # Given
        repo = Mock()
        repo.sailing_exists.return_value = True
        repo.get_alternates.return_value = [
            SimpleNamespace(id="alt-1", alternate_sailing_id="sail-2", alternate_provider_identifier="tt-2",
                            alternate_sail_date=date(2026, 5, 2), alternate_nights=7,
                            alternate_lead_price_cents=99900, resolved_sailing_id="sail-2",
                            resolved_sailing_name=None, resolved_sailing_nights=None,
                            resolved_ship_id=None, resolved_ship_name=None),
            SimpleNamespace(id="alt-2", alternate_sailing_id=None, alternate_provider_identifier="tt-9",
                            alternate_sail_date=None, alternate_nights=None, alternate_lead_price_cents=None,
                            resolved_sailing_id=None, resolved_sailing_name=None, resolved_sailing_nights=None,
                            resolved_ship_id=None, resolved_ship_name=None),
        ]

        # When
        response = DetailService(repo).get_alternate_sailings("sail-1")

        # Then
        assert response.sailing_id == "sail-1"
        first, second = response.alternates
        assert first.provider_identifier == "tt-2"
        assert (first.sailing.name, first.sailing.nights) == ("Unknown", 0)
        assert (first.sailing.ship.id, first.sailing.ship.name) == ("", "Unknown")
        assert second.sailing is None

import pytest
from datetime import date
from fastapi.testclient import TestClient

from cruise_catalog.core.sync_status import StaticSyncStatusProvider
from cruise_catalog.dependencies import get_db, get_sync_status_provider
from cruise_catalog.main import API_PREFIX, app


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded(catalog):
    line = catalog.line("Royal Caribbean", id="line-rc")
    ship = catalog.ship(line["id"], "Wonder of the Seas", id="ship-wonder")
    for i in range(3):
        catalog.sailing(ship, id=f"sail-{i}", sail_date=date(2026, 3, 1 + i), cheapest_inside_cents=80000 + i)
    return ship


class TestHealthEndpoint:
    def test_given_health_endpoint_when_making_get_request_then_returns_200_with_ok_status(self):
        """
        Given: The health check endpoint (/healthz)
        When: Making a GET request
        Then: Returns 200 status code with {"status": "ok"} response
        """
        # Given
        client = TestClient(app)

        # When
        response = client.get("/healthz")

        # Then
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
        assert response.headers["content-type"] == "application/json"


class TestSearchRoutes:
    def test_given_seeded_catalog_when_searching_then_returns_camel_case_page(self, client, seeded):
        """
        Given: Three active sailings
        When: GET /sailings with pageSize=2
        Then: Two camelCase items, pagination over three, and the sync block
        """
        # When
        response = client.get(f"{API_PREFIX}/sailings", params={"pageSize": 2})

        # Then
        assert response.status_code == 200
        body = response.json()
        assert [i["id"] for i in body["items"]] == ["sail-0", "sail-1"]
        assert body["items"][0]["sailDate"] == "2026-03-01"
        assert body["pagination"] == {"page": 1, "pageSize": 2, "totalItems": 3, "totalPages": 2, "hasMore": True}
        assert body["sync"]["syncInProgress"] is False
        assert body["sync"]["lastSyncedAt"].endswith("Z")

    def test_given_repeated_port_of_call_params_when_searching_then_list_is_accepted(self, client, seeded):
        response = client.get(f"{API_PREFIX}/sailings", params=[("portOfCallIds", "p1"), ("portOfCallIds", "p2")])

        assert response.status_code == 200
        assert response.json()["filters"]["portOfCallIds"] == ["p1", "p2"]
        assert response.json()["items"] == []

    def test_given_sync_running_when_searching_then_sync_flag_is_reported(self, client, seeded):
        """
        Given: The sync status dependency reports an import in progress
        When: Searching
        Then: syncInProgress and its deprecated alias are both true
        """
        app.dependency_overrides[get_sync_status_provider] = lambda: StaticSyncStatusProvider(in_progress=True)

        sync = client.get(f"{API_PREFIX}/sailings").json()["sync"]

        assert sync["syncInProgress"] is True
        assert sync["pricesUpdating"] is True

    @pytest.mark.parametrize("params", [
        {"sortBy": "relevance"},
        {"sortDir": "sideways"},
        {"sailDateFrom": "next-tuesday"},
        {"page": "two"},
        {"pageSize": 0},
        {"nightsMin": 0},
        {"priceMinCents": -1},
    ])
    def test_given_invalid_params_when_searching_then_returns_422(self, client, params):
        response = client.get(f"{API_PREFIX}/sailings", params=params)

        assert response.status_code == 422

    def test_given_unknown_cabin_category_when_searching_then_accepted(self, client, seeded):
        response = client.get(f"{API_PREFIX}/sailings", params={"cabinCategory": "penthouse", "priceMaxCents": 80001})

        assert response.status_code == 200
        assert [i["id"] for i in response.json()["items"]] == ["sail-0", "sail-1"]

    def test_given_seeded_catalog_when_getting_filters_then_returns_options_and_ranges(self, client, seeded):
        body = client.get(f"{API_PREFIX}/filters", params={"cruiseLineId": "line-rc"}).json()

        assert body["cruiseLines"] == [{"id": "line-rc", "name": "Royal Caribbean", "count": 3, "allIds": None}]
        assert body["ships"][0]["id"] == "ship-wonder"
        assert body["dateRange"] == {"min": "2026-03-01", "max": "2026-03-03"}
        assert body["priceRange"] == {"min": 80000, "max": 80002}


class TestNotFoundHandling:
    @pytest.mark.parametrize("path,message", [
        ("/sailings/missing", "Sailing not found: missing"),
        ("/sailings/missing/alternates", "Sailing not found: missing"),
        ("/ships/missing/images", "Ship not found: missing"),
        ("/ships/missing/decks", "Ship not found: missing"),
        ("/cabin-types/missing/images", "Cabin type not found: missing"),
    ])
    def test_given_unknown_id_when_requesting_then_returns_404_with_detail(self, client, path, message):
        """
        Given: An id that does not exist
        When: Requesting any lookup endpoint
        Then: Returns 404 with the not-found message as detail
        """
        response = client.get(f"{API_PREFIX}{path}")

        assert response.status_code == 404
        assert response.json() == {"detail": message}

    def test_given_known_sailing_when_requesting_detail_then_returns_200(self, client, seeded):
        response = client.get(f"{API_PREFIX}/sailings/sail-1")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "sail-1"
        assert body["ship"]["name"] == "Wonder of the Seas"
        assert body["itinerary"] == []

    def test_given_known_ship_when_requesting_images_with_page_size_zero_then_returns_422(self, client, seeded):
        response = client.get(f"{API_PREFIX}/ships/ship-wonder/images", params={"pageSize": 0})

        assert response.status_code == 422

    def test_given_known_ship_without_images_when_requesting_then_empty_page(self, client, seeded):
        body = client.get(f"{API_PREFIX}/ships/ship-wonder/images").json()

        assert body == {"images": [], "pagination": {"page": 1, "pageSize": 10, "totalItems": 0,
                                                     "totalPages": 0, "hasMore": False}}

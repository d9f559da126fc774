# features/steps/search_steps.py
import json
from datetime import datetime
from typing import Any, Dict, List, Tuple
from behave import given, when, then

from cruise_catalog.core.sync_status import StaticSyncStatusProvider

def _parse_value(s: str):
    s = s.strip()
    if s.startswith("["):
        return json.loads(s)
    return s

def _params_from_table(table) -> List[Tuple[str, Any]]:
    """Query params as (name, value) pairs; JSON lists become repeated params."""
    params: List[Tuple[str, Any]] = []
    for row in table:
        key, val = row["param"].strip(), _parse_value(row["value"])
        if isinstance(val, list):
            params.extend((key, v) for v in val)
        else:
            params.append((key, val))
    return params

def _items(ctx) -> List[Dict[str, Any]]:
    return ctx.last_response.json()["items"]

def _search(ctx, params):
    ctx.last_params = params
    ctx.last_response = ctx.client.get(ctx.search_url, params=params)

# ---------------- Background ----------------
@given('a cruise catalog with sailings, ships, ports and regions loaded') # type: ignore[no-untyped-def]
def step_seeded(ctx):
    # environment.py already seeded the in-memory DB
    assert ctx.client is not None

@given('the search endpoint is available at "{path}"') # type: ignore[no-untyped-def]
def step_endpoint(ctx, path):
    ctx.search_url = path

@given('the catalog import is running') # type: ignore[no-untyped-def]
def step_import_running(ctx):
    # the dependency override in environment.py reads ctx.sync_status on every request
    ctx.sync_status = StaticSyncStatusProvider(in_progress=True)

# ---------------- Requests ----------------
@when('I search with no filters') # type: ignore[no-untyped-def]
def step_search_no_filters(ctx):
    _search(ctx, [])
    assert ctx.last_response.status_code == 200

@when('I search with') # type: ignore[no-untyped-def]
def step_search_with(ctx):
    _search(ctx, _params_from_table(ctx.table))
    assert ctx.last_response.status_code in (200, 422)

# ---------------- Shared assertions ----------------
@then('the response status is {status:d}') # type: ignore[no-untyped-def]
def step_status(ctx, status):
    assert ctx.last_response.status_code == status, ctx.last_response.text

@then('I receive {count:d} items') # type: ignore[no-untyped-def]
def step_item_count(ctx, count):
    assert len(_items(ctx)) == count

@then('the pagination reports {total:d} total items over {pages:d} pages') # type: ignore[no-untyped-def]
def step_pagination_totals(ctx, total, pages):
    p = ctx.last_response.json()["pagination"]
    assert p["totalItems"] == total, p
    assert p["totalPages"] == pages, p

@then('the error detail is "{detail}"') # type: ignore[no-untyped-def]
def step_error_detail(ctx, detail):
    assert ctx.last_response.json() == {"detail": detail}

# ---------------- Search assertions ----------------
@then('hits are sorted by sailDate asc then id') # type: ignore[no-untyped-def]
def step_sorted_by_date(ctx):
    pairs = [(h["sailDate"], h["id"]) for h in _items(ctx)]
    assert pairs == sorted(pairs), "hits not sorted by sailDate asc then id"

@then('no hit has id "{sailing_id}"') # type: ignore[no-untyped-def]
def step_no_hit(ctx, sailing_id):
    assert sailing_id not in {h["id"] for h in _items(ctx)}

@then('every hit belongs to cruise line "{line_id}"') # type: ignore[no-untyped-def]
def step_every_hit_line(ctx, line_id):
    items = _items(ctx)
    assert items
    for h in items:
        assert h["cruiseLine"]["id"] == line_id

@then('every hit id is unique') # type: ignore[no-untyped-def]
def step_unique_ids(ctx):
    ids = [h["id"] for h in _items(ctx)]
    assert len(ids) == len(set(ids))

@then('every hit has a balcony price of at most {cents:d}') # type: ignore[no-untyped-def]
def step_balcony_cap(ctx, cents):
    for h in _items(ctx):
        assert h["prices"]["balcony"] is not None and h["prices"]["balcony"] <= cents

@then('the first hit has an inside price of {cents:d}') # type: ignore[no-untyped-def]
def step_first_price(ctx, cents):
    assert _items(ctx)[0]["prices"]["inside"] == cents

@then('hits are sorted by inside price desc') # type: ignore[no-untyped-def]
def step_sorted_price_desc(ctx):
    prices = [h["prices"]["inside"] for h in _items(ctx) if h["prices"]["inside"] is not None]
    assert prices == sorted(prices, reverse=True)

@then('hit "{sailing_id}" is flagged as prices updating') # type: ignore[no-untyped-def]
def step_hit_stale(ctx, sailing_id):
    hit = next(h for h in _items(ctx) if h["id"] == sailing_id)
    assert hit["pricesUpdating"] is True

@then('hit "{sailing_id}" is not flagged as prices updating') # type: ignore[no-untyped-def]
def step_hit_fresh(ctx, sailing_id):
    hit = next(h for h in _items(ctx) if h["id"] == sailing_id)
    assert hit["pricesUpdating"] is False
    datetime.fromisoformat(hit["lastSyncedAt"].replace("Z", "+00:00"))

@then('the sync block reports an import in progress') # type: ignore[no-untyped-def]
def step_sync_running(ctx):
    sync = ctx.last_response.json()["sync"]
    assert sync["syncInProgress"] is True
    assert sync["pricesUpdating"] is True

@then('the sync block lastSyncedAt matches the first hit') # type: ignore[no-untyped-def]
def step_sync_first_hit(ctx):
    data = ctx.last_response.json()
    assert data["sync"]["lastSyncedAt"] == data["items"][0]["lastSyncedAt"]

@then('the sync block lastSyncedAt is null') # type: ignore[no-untyped-def]
def step_sync_null(ctx):
    assert ctx.last_response.json()["sync"]["lastSyncedAt"] is None

@then('the echoed filters include "{key}" = "{value}"') # type: ignore[no-untyped-def]
def step_echo(ctx, key, value):
    echoed = ctx.last_response.json()["filters"]
    assert str(echoed.get(key)) == value, echoed

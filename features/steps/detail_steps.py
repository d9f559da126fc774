# features/steps/detail_steps.py
from behave import when, then


def _body(ctx):
    return ctx.last_response.json()

def _get(ctx, path, **params):
    ctx.last_response = ctx.client.get(f"{ctx.api}{path}", params=params or None)

# ---------------- Requests ----------------
@when('I request sailing "{sailing_id}"') # type: ignore[no-untyped-def]
def step_request_sailing(ctx, sailing_id):
    _get(ctx, f"/sailings/{sailing_id}")

@when('I request alternates for sailing "{sailing_id}"') # type: ignore[no-untyped-def]
def step_request_alternates(ctx, sailing_id):
    _get(ctx, f"/sailings/{sailing_id}/alternates")

@when('I request images for ship "{ship_id}" page {page:d} with page size {size:d}') # type: ignore[no-untyped-def]
def step_request_ship_images(ctx, ship_id, page, size):
    _get(ctx, f"/ships/{ship_id}/images", page=page, pageSize=size)
    assert ctx.last_response.status_code == 200

@when('I request decks for ship "{ship_id}"') # type: ignore[no-untyped-def]
def step_request_decks(ctx, ship_id):
    _get(ctx, f"/ships/{ship_id}/decks")

@when('I request images for cabin type "{cabin_type_id}"') # type: ignore[no-untyped-def]
def step_request_cabin_images(ctx, cabin_type_id):
    _get(ctx, f"/cabin-types/{cabin_type_id}/images")

@when('I GET "{path}"') # type: ignore[no-untyped-def]
def step_get_path(ctx, path):
    ctx.last_response = ctx.client.get(path)

# ---------------- Detail ----------------
@then('the detail ship is "{name}" with {count:d} normalized image') # type: ignore[no-untyped-def]
def step_detail_ship(ctx, name, count):
    ship = _body(ctx)["ship"]
    assert ship["name"] == name
    assert len(ship["images"]) == count
    assert all(img["url"] for img in ship["images"])

@then('the detail embark port is "{name}" in "{country}"') # type: ignore[no-untyped-def]
def step_detail_embark(ctx, name, country):
    port = _body(ctx)["embarkPort"]
    assert (port["name"], port["country"]) == (name, country)

@then('the detail regions are "{names}"') # type: ignore[no-untyped-def]
def step_detail_regions(ctx, names):
    regions = _body(ctx)["regions"]
    assert [r["name"] for r in regions] == [n.strip() for n in names.split(",")]
    assert regions[0]["isPrimary"] is True

@then('the itinerary has {count:d} stops with the sea day named "{name}"') # type: ignore[no-untyped-def]
def step_itinerary(ctx, count, name):
    stops = _body(ctx)["itinerary"]
    assert len(stops) == count
    assert [s["dayNumber"] for s in stops] == sorted(s["dayNumber"] for s in stops)
    assert [s["portName"] for s in stops if s["isSeaDay"]] == [name]

@then('cabin price totals include taxes') # type: ignore[no-untyped-def]
def step_price_totals(ctx):
    for p in _body(ctx)["prices"]:
        assert p["totalPriceCents"] == p["basePriceCents"] + p["taxesCents"]
        assert p["isPerPerson"] is True

@then('cabin prices are ordered by category then base price') # type: ignore[no-untyped-def]
def step_price_order(ctx):
    keys = [(p["cabinCategory"], p["basePriceCents"]) for p in _body(ctx)["prices"]]
    assert keys == sorted(keys)

# ---------------- Alternates ----------------
@then('alternate "{alt_id}" resolves to sailing "{sailing_id}" on ship "{ship_name}"') # type: ignore[no-untyped-def]
def step_alternate_resolved(ctx, alt_id, sailing_id, ship_name):
    alt = next(a for a in _body(ctx)["alternates"] if a["id"] == alt_id)
    assert alt["sailing"]["id"] == sailing_id
    assert alt["sailing"]["ship"]["name"] == ship_name

@then('alternate "{alt_id}" is not resolved') # type: ignore[no-untyped-def]
def step_alternate_unresolved(ctx, alt_id):
    alt = next(a for a in _body(ctx)["alternates"] if a["id"] == alt_id)
    assert alt["sailing"] is None
    assert alt["alternateSailingId"] is None

# ---------------- Ship media ----------------
@then('I receive {count:d} images') # type: ignore[no-untyped-def]
def step_image_count(ctx, count):
    assert len(_body(ctx)["images"]) == count

@then('the first image is the hero "{image_id}"') # type: ignore[no-untyped-def]
def step_hero_first(ctx, image_id):
    first = _body(ctx)["images"][0]
    assert (first["id"], first["isHero"]) == (image_id, True)

@then('the image pagination reports {total:d} total items over {pages:d} pages') # type: ignore[no-untyped-def]
def step_image_pagination(ctx, total, pages):
    p = _body(ctx)["pagination"]
    assert (p["totalItems"], p["totalPages"], p["hasMore"]) == (total, pages, p["page"] < pages)

@then('deck "{deck_id}" has cabin "{cabin_id}" located at {x1:d}, {y1:d}, {x2:d}, {y2:d}') # type: ignore[no-untyped-def]
def step_deck_location(ctx, deck_id, cabin_id, x1, y1, x2, y2):
    deck = next(d for d in _body(ctx)["decks"] if d["id"] == deck_id)
    assert deck["cabinLocations"] == [{"cabinId": cabin_id, "x1": x1, "y1": y1, "x2": x2, "y2": y2}]

@then('deck "{deck_id}" has no cabin locations') # type: ignore[no-untyped-def]
def step_deck_empty(ctx, deck_id):
    deck = next(d for d in _body(ctx)["decks"] if d["id"] == deck_id)
    assert deck["cabinLocations"] == []

@then('I receive {count:d} cabin images with the default first') # type: ignore[no-untyped-def]
def step_cabin_images(ctx, count):
    images = _body(ctx)["images"]
    assert len(images) == count
    assert images[0]["isDefault"] is True
    assert images[0]["imageUrl2k"].endswith("-2k.jpg")

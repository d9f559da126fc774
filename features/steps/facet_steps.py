# features/steps/facet_steps.py
from behave import given, when, then


def _facet(ctx, name):
    return ctx.last_response.json()[name]


@given('the filters endpoint is available at "{path}"') # type: ignore[no-untyped-def]
def step_filters_endpoint(ctx, path):
    ctx.filters_url = path

@when('I request filter options with no filters') # type: ignore[no-untyped-def]
def step_options_plain(ctx):
    ctx.last_response = ctx.client.get(ctx.filters_url)
    assert ctx.last_response.status_code == 200

@when('I request filter options for cruise line "{line_id}"') # type: ignore[no-untyped-def]
def step_options_for_line(ctx, line_id):
    ctx.last_response = ctx.client.get(ctx.filters_url, params={"cruiseLineId": line_id})
    assert ctx.last_response.status_code == 200

@when('I request filter options with') # type: ignore[no-untyped-def]
def step_options_with(ctx):
    params = {row["param"].strip(): row["value"].strip() for row in ctx.table}
    ctx.last_response = ctx.client.get(ctx.filters_url, params=params)
    assert ctx.last_response.status_code == 200

@then('the "{facet}" facet lists "{names}"') # type: ignore[no-untyped-def]
def step_facet_names(ctx, facet, names):
    expected = [n.strip() for n in names.split(",")]
    assert [o["name"] for o in _facet(ctx, facet)] == expected

@then('the "{facet}" facet has a single "{name}" option counting {count:d} sailings') # type: ignore[no-untyped-def]
def step_single_option(ctx, facet, name, count):
    matches = [o for o in _facet(ctx, facet) if o["name"] == name]
    assert len(matches) == 1, matches
    ctx.option = matches[0]
    assert ctx.option["count"] == count

@then('that option carries ids "{ids}"') # type: ignore[no-untyped-def]
def step_option_ids(ctx, ids):
    assert ctx.option["allIds"] == [i.strip() for i in ids.split(",")]

@then('that option is represented by "{option_id}"') # type: ignore[no-untyped-def]
def step_option_id(ctx, option_id):
    assert ctx.option["id"] == option_id

@then('the nights range is {lo:d} to {hi:d}') # type: ignore[no-untyped-def]
def step_nights_range(ctx, lo, hi):
    assert _facet(ctx, "nightsRange") == {"min": lo, "max": hi}

@then('the price range is {lo:d} to {hi:d}') # type: ignore[no-untyped-def]
def step_price_range(ctx, lo, hi):
    assert _facet(ctx, "priceRange") == {"min": lo, "max": hi}

@then('the date range starts on "{day}"') # type: ignore[no-untyped-def]
def step_date_range(ctx, day):
    assert _facet(ctx, "dateRange")["min"] == day

# features/steps/error_handling_steps.py
from behave import when, then


@when('I search with raw parameter "{param}" set to "{value}"')
def step_raw_param(ctx, param, value):
    """Send a single unvalidated query parameter."""
    ctx.last_response = ctx.client.get(ctx.search_url, params={param: value})


@then('I receive a 422 validation error')
def step_422_error(ctx):
    """Verify 422 validation error."""
    assert ctx.last_response.status_code == 422


@then('the response includes validation details')
def step_validation_details(ctx):
    """Verify response includes validation information."""
    error_data = ctx.last_response.json()
    # FastAPI returns validation errors as a list under 'detail'
    assert isinstance(error_data.get("detail"), list) and error_data["detail"]


@when('I search with empty filters and sort by "{sort_field}" direction "{direction}"')
def step_sort_direction(ctx, sort_field, direction):
    """Test sorting with specific field and direction."""
    ctx.last_response = ctx.client.get(ctx.search_url, params={"sortBy": sort_field, "sortDir": direction, "pageSize": 50})
    assert ctx.last_response.status_code == 200


@then('I receive results sorted by ship name ascending')
def step_sorted_ship_asc(ctx):
    """Verify results are sorted in ascending order."""
    names = [item["ship"]["name"] for item in ctx.last_response.json()["items"]]
    assert len(names) > 1
    assert names == sorted(names), "Results not sorted ascending"

# features/steps/pagination_steps.py
from behave import when, then


@when('I request page {page:d} with page size {size:d}')
def step_request_page(ctx, page, size):
    """Request one page of the unfiltered search, keeping earlier pages for comparison."""
    ctx.last_response = ctx.client.get(ctx.search_url, params={"page": page, "pageSize": size})
    assert ctx.last_response.status_code == 200
    if not hasattr(ctx, "pages") or ctx.pages is None:
        ctx.pages = []
    ctx.pages.append(ctx.last_response.json())


@then('the two pages contain different sailings')
def step_different_sailings(ctx):
    """Verify second page has different sailings."""
    first_ids = {item["id"] for item in ctx.pages[-2]["items"]}
    second_ids = {item["id"] for item in ctx.pages[-1]["items"]}

    # Should be no overlap
    assert first_ids.isdisjoint(second_ids), "Pages should not share sailing IDs"


@then('the sailings are in correct sort order across pages')
def step_sort_order_across_pages(ctx):
    """Verify sailDate/id ordering continues from one page to the next."""
    first_items = ctx.pages[-2]["items"]
    second_items = ctx.pages[-1]["items"]

    if first_items and second_items:
        last_first = (first_items[-1]["sailDate"], first_items[-1]["id"])
        first_second = (second_items[0]["sailDate"], second_items[0]["id"])
        assert last_first < first_second, "Sort order not maintained across pages"


@then('hasMore is false')
def step_has_more_false(ctx):
    assert ctx.last_response.json()["pagination"]["hasMore"] is False


@then('the pagination page size is {size:d}')
def step_page_size(ctx, size):
    assert ctx.last_response.json()["pagination"]["pageSize"] == size


@then('the pagination page is {page:d}')
def step_page(ctx, page):
    assert ctx.last_response.json()["pagination"]["page"] == page

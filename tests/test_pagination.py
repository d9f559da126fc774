import pytest
from datetime import datetime, timezone, timedelta
from cruise_catalog.core.pagination import (
    DEFAULT_IMAGE_PAGE_SIZE, MAX_IMAGE_PAGE_SIZE, PageWindow, iso_utc, resolve_page_window,
)


class TestIsoUtc:
    def test_given_utc_sync_timestamp_when_converting_then_returns_iso_string_with_z_suffix(self):
        """
        Given: A lastSyncedAt datetime in UTC
        When: Converting to ISO UTC string
        Then: Returns ISO format with 'Z' suffix
        """
        # Given
        dt = datetime(2026, 3, 1, 6, 15, 0, tzinfo=timezone.utc)

        # When
        result = iso_utc(dt)

        # Then
        assert result == "2026-03-01T06:15:00Z"

    def test_given_naive_timestamp_from_sqlite_when_converting_then_assumes_utc(self):
        """
        Given: A naive datetime, as SQLite hands back timezone columns
        When: Converting to ISO UTC string
        Then: Assumes UTC and returns ISO format with 'Z' suffix
        """
        assert iso_utc(datetime(2026, 3, 1, 6, 15, 0)) == "2026-03-01T06:15:00Z"

    def test_given_offset_timestamp_when_converting_then_normalizes_to_utc(self):
        """
        Given: A datetime at +05:00
        When: Converting to ISO UTC string
        Then: Converts to UTC before formatting
        """
        dt = datetime(2026, 3, 1, 11, 15, 0, tzinfo=timezone(timedelta(hours=5)))
        assert iso_utc(dt) == "2026-03-01T06:15:00Z"


class TestResolvePageWindow:
    def test_given_no_paging_params_when_resolving_then_returns_first_page_of_twenty(self):
        """
        Given: Neither page nor pageSize
        When: Resolving the window
        Then: Page 1 with the default size 20, offset 0
        """
        # When
        window = resolve_page_window(None, None)

        # Then
        assert window == PageWindow(page=1, page_size=20)
        assert window.offset == 0

    def test_given_page_size_above_maximum_when_resolving_then_clamps_to_fifty(self):
        """
        Given: pageSize=100
        When: Resolving the window
        Then: Size is clamped to 50 rather than rejected
        """
        assert resolve_page_window(1, 100).page_size == 50

    @pytest.mark.parametrize("page", [0, -3])
    def test_given_page_below_one_when_resolving_then_uses_first_page(self, page):
        """
        Given: A page number below 1
        When: Resolving the window
        Then: Page 1 is used so the offset never goes negative
        """
        window = resolve_page_window(page, 10)
        assert window.page == 1
        assert window.offset == 0

    def test_given_third_page_when_resolving_then_offset_skips_two_pages(self):
        """
        Given: page=3, pageSize=15
        When: Resolving the window
        Then: Offset is (3 - 1) * 15
        """
        assert resolve_page_window(3, 15).offset == 30

    def test_given_image_limits_when_resolving_then_uses_image_defaults_and_cap(self):
        """
        Given: Ship-image paging limits
        When: Resolving with no size and with an oversized request
        Then: Default is 10 and the cap is 20
        """
        defaults = dict(default_size=DEFAULT_IMAGE_PAGE_SIZE, max_size=MAX_IMAGE_PAGE_SIZE)
        assert resolve_page_window(None, None, **defaults).page_size == 10
        assert resolve_page_window(None, 500, **defaults).page_size == 20


class TestPageWindowSummary:
    def test_given_partial_last_page_when_summarizing_then_rounds_total_pages_up(self):
        """
        Given: 45 matches at 20 per page
        When: Summarizing page 1
        Then: totalPages is 3 and there is more to fetch
        """
        # When
        summary = PageWindow(page=1, page_size=20).summary(45)

        # Then
        assert summary == {"page": 1, "page_size": 20, "total_items": 45, "total_pages": 3, "has_more": True}

    def test_given_last_page_when_summarizing_then_has_more_is_false(self):
        assert PageWindow(page=3, page_size=20).summary(45)["has_more"] is False

    def test_given_no_matches_when_summarizing_then_zero_pages_and_no_more(self):
        """
        Given: Zero matches
        When: Summarizing page 1
        Then: totalPages is 0 and hasMore is false
        """
        summary = PageWindow(page=1, page_size=20).summary(0)
        assert summary["total_pages"] == 0
        assert summary["has_more"] is False

    def test_given_page_beyond_end_when_summarizing_then_reports_no_more(self):
        """
        Given: Page 9 of a 2-page result
        When: Summarizing
        Then: The requested page is echoed and hasMore is false
        """
        summary = PageWindow(page=9, page_size=20).summary(30)
        assert summary["page"] == 9
        assert summary["has_more"] is False

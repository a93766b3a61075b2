"""Unit tests for listing parameter normalization."""

import pytest

from src.absence_api.core.pagination import (
    MAX_OFFSET,
    SORTABLE_FIELDS,
    Page,
    PageQuery,
    normalize_pagination,
)
from src.absence_api.runtime.config.config_data import PaginationConfig


class TestNormalizePagination:
    """Test that raw parameters are coerced, never rejected."""

    def test_defaults(self):
        query = normalize_pagination()

        assert query == PageQuery(page=1, limit=10, sort_by="created_at", sort_order="desc")

    def test_valid_values_are_kept(self):
        query = normalize_pagination("3", "25", "last_name", "asc")

        assert query.page == 3
        assert query.limit == 25
        assert query.sort_by == "last_name"
        assert query.sort_order == "asc"

    @pytest.mark.parametrize("page", [0, -4, "0", "abc", "", None])
    def test_page_falls_back_to_first(self, page):
        assert normalize_pagination(page=page).page == 1

    @pytest.mark.parametrize("limit", [0, -1, "zero", None])
    def test_limit_falls_back_to_default(self, limit):
        assert normalize_pagination(limit=limit).limit == 10

    @pytest.mark.parametrize("limit,expected", [(100, 100), (101, 100), ("5000", 100), (1, 1)])
    def test_limit_is_clamped(self, limit, expected):
        assert normalize_pagination(limit=limit).limit == expected

    def test_unknown_sort_field_falls_back(self):
        assert normalize_pagination(sort_by="password").sort_by == "created_at"

    @pytest.mark.parametrize("field", SORTABLE_FIELDS)
    def test_every_allowed_sort_field(self, field):
        assert normalize_pagination(sort_by=field).sort_by == field

    @pytest.mark.parametrize("order,expected", [("ASC", "asc"), ("Desc", "desc"), ("up", "desc")])
    def test_sort_order(self, order, expected):
        assert normalize_pagination(sort_order=order).sort_order == expected

    def test_configured_defaults(self):
        config = PaginationConfig(default_limit=20, max_limit=50, default_sort_order="asc")

        query = normalize_pagination(limit="75", sort_order="sideways", config=config)

        assert query.limit == 50
        assert query.sort_order == "asc"
        assert normalize_pagination(config=config).limit == 20


class TestPage:
    """Test page arithmetic."""

    def test_offset(self):
        assert PageQuery(page=3, limit=10, sort_by="created_at", sort_order="desc").offset == 20

    @pytest.mark.parametrize("total,pages", [(0, 0), (1, 1), (10, 1), (11, 2), (25, 3)])
    def test_total_pages(self, total, pages):
        query = PageQuery(page=1, limit=10, sort_by="created_at", sort_order="desc")
        page = Page[int](items=[], query=query, total_items=total)

        assert page.total_pages == pages


class TestPageBounds:
    """Test that huge page numbers still give a usable offset."""

    @pytest.mark.parametrize("limit", ["1", "10", "100"])
    def test_offset_fits_a_64_bit_integer(self, limit):
        query = normalize_pagination(page="99999999999999999999", limit=limit)

        assert query.page >= 1
        assert 0 <= query.offset <= MAX_OFFSET

    def test_reasonable_pages_are_untouched(self):
        assert normalize_pagination(page=123456, limit=100).page == 123456

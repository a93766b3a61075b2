"""Pagination and sorting of absence listings.

Query parameters are never rejected: anything out of range or unknown falls
back to a safe default.
"""

from __future__ import annotations

from math import ceil
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field, computed_field

from src.absence_api.runtime.config.config_data import PaginationConfig

SORTABLE_FIELDS = (
    "created_at",
    "updated_at",
    "start_date",
    "end_date",
    "first_name",
    "last_name",
)
SORT_ORDERS = ("asc", "desc")

# Largest OFFSET a signed 64-bit SQL integer can carry
MAX_OFFSET = 2**63 - 1

T = TypeVar("T")


class PageQuery(BaseModel):
    """A bounded, validated listing request."""

    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    sort_by: str
    sort_order: Literal["asc", "desc"]

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Page(BaseModel, Generic[T]):
    """One page of results plus the figures needed to navigate the rest."""

    items: list[T]
    query: PageQuery
    total_items: int

    @computed_field
    @property
    def total_pages(self) -> int:
        return ceil(self.total_items / self.query.limit)


def _as_int(value: int | str | None) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def normalize_pagination(
    page: int | str | None = None,
    limit: int | str | None = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
    config: PaginationConfig | None = None,
) -> PageQuery:
    """Coerce raw listing parameters into a :class:`PageQuery`.

    - page defaults to 1 and is reset to 1 when below 1
    - limit defaults to 10, is reset to 10 when below 1 and clamped to 100
    - page is capped so that the row offset fits a 64-bit integer
    - sort_by outside the allow-list falls back to ``created_at``
    - sort_order other than asc/desc (any case) falls back to ``desc``
    """
    config = config or PaginationConfig()

    page_number = _as_int(page)
    if page_number is None or page_number < 1:
        page_number = config.default_page

    page_size = _as_int(limit)
    if page_size is None or page_size < 1:
        page_size = config.default_limit
    elif page_size > config.max_limit:
        page_size = config.max_limit

    last_addressable_page = MAX_OFFSET // page_size
    if page_number > last_addressable_page:
        page_number = last_addressable_page

    sort_field = sort_by.strip() if isinstance(sort_by, str) else None
    if sort_field not in SORTABLE_FIELDS:
        sort_field = config.default_sort_by

    order = sort_order.strip().lower() if isinstance(sort_order, str) else None
    if order not in SORT_ORDERS:
        order = config.default_sort_order

    return PageQuery(
        page=page_number,
        limit=page_size,
        sort_by=sort_field,
        sort_order=order,
    )

"""Response envelopes shared by every absence endpoint."""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from src.absence_api.core.pagination import Page
from src.absence_api.entities._base import utcnow

T = TypeVar("T")


class SuccessResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str = "Opération réussie"
    data: T
    timestamp: datetime = Field(default_factory=utcnow)


class PaginationInfo(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int

    @classmethod
    def from_page(cls, page: Page) -> "PaginationInfo":
        return cls(
            current_page=page.query.page,
            total_pages=page.total_pages,
            total_items=page.total_items,
            items_per_page=page.query.limit,
        )


class PaginatedResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str = "Données récupérées avec succès"
    data: list[T]
    pagination: PaginationInfo
    timestamp: datetime = Field(default_factory=utcnow)


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    success: bool = False
    error: str
    errors: list[str] | None = None
    timestamp: datetime = Field(default_factory=utcnow)

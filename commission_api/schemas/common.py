"""Response envelope shared by every JSON endpoint."""

from decimal import Decimal
from typing import Annotated, Generic, List, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

# Period bounds for stored figures and for report and list filters
YEAR_MIN = 2020
YEAR_MAX = 2030

Year = Annotated[int, Field(ge=YEAR_MIN, le=YEAR_MAX)]
Month = Annotated[int, Field(ge=1, le=12)]

# Same precision as the Numeric(14, 2) money columns
Money = Annotated[Decimal, Field(ge=0, max_digits=14, decimal_places=2)]


class ApiResponse(BaseModel, Generic[T]):
    """Successful response: ``{"success": true, "data": ...}``."""

    success: bool = True
    data: T


class Pagination(BaseModel):
    """Page metadata for list endpoints."""

    page: int
    per_page: int
    total: int
    pages: int
    has_more: bool


class PaginatedResponse(ApiResponse[List[T]], Generic[T]):
    """Successful list response with page metadata."""

    pagination: Pagination


def paginate(total: int, page: int, per_page: int) -> Pagination:
    """Build page metadata from a total row count."""
    pages = (total + per_page - 1) // per_page if total else 0
    return Pagination(
        page=page,
        per_page=per_page,
        total=total,
        pages=pages,
        has_more=page < pages,
    )


class DeletedResponse(BaseModel):
    """Payload returned after a delete."""

    id: int
    message: str

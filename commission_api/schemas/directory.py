"""Representative and company schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class RepresentativeCreate(BaseModel):
    """Create a representative."""

    name: str = Field(..., min_length=2, max_length=100)
    email: Optional[str] = Field(
        None, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
    )
    phone: Optional[str] = Field(None, max_length=50, pattern=r"^[+]?[0-9\s\-()]+$")


class RepresentativeUpdate(RepresentativeCreate):
    """Replace a representative's details."""
    pass


class RepresentativeResponse(BaseModel):
    """Representative as returned by the API."""

    id: int
    name: str
    email: Optional[str]
    phone: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}


class CompanyCreate(BaseModel):
    """Create a company."""

    name: str = Field(..., min_length=1, max_length=100)


class CompanyUpdate(CompanyCreate):
    """Rename a company."""
    pass


class CompanyResponse(BaseModel):
    """Company as returned by the API."""

    id: int
    name: str
    created_at: datetime

    model_config = {"from_attributes": True}

"""Pydantic schemas for request/response validation."""

from commission_api.schemas.auth import LoginRequest, LoginResponse, ProfileResponse, TokenPayload
from commission_api.schemas.collection import CollectionCreate, CollectionResponse, CollectionUpdate
from commission_api.schemas.commission import CommissionCalculateRequest, CommissionCalculateResponse
from commission_api.schemas.commission_rule import (
    CommissionRuleCreate,
    CommissionRuleResponse,
    CommissionRuleUpdate,
)
from commission_api.schemas.common import ApiResponse, DeletedResponse, PaginatedResponse, Pagination
from commission_api.schemas.directory import (
    CompanyCreate,
    CompanyResponse,
    CompanyUpdate,
    RepresentativeCreate,
    RepresentativeResponse,
    RepresentativeUpdate,
)
from commission_api.schemas.report import FullReport, RepresentativeReport
from commission_api.schemas.sale import SaleCreate, SaleResponse, SaleUpdate

__all__ = [
    # Envelope
    "ApiResponse",
    "PaginatedResponse",
    "Pagination",
    "DeletedResponse",
    # Auth
    "LoginRequest",
    "LoginResponse",
    "ProfileResponse",
    "TokenPayload",
    # Rules
    "CommissionRuleCreate",
    "CommissionRuleUpdate",
    "CommissionRuleResponse",
    "CommissionCalculateRequest",
    "CommissionCalculateResponse",
    # Reference data
    "RepresentativeCreate",
    "RepresentativeUpdate",
    "RepresentativeResponse",
    "CompanyCreate",
    "CompanyUpdate",
    "CompanyResponse",
    # Figures
    "SaleCreate",
    "SaleUpdate",
    "SaleResponse",
    "CollectionCreate",
    "CollectionUpdate",
    "CollectionResponse",
    # Reports
    "RepresentativeReport",
    "FullReport",
]

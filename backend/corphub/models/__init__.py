"""
Request and response models for the API.
"""

from .company import (
    ApiResponse,
    CompanyProfileCreate,
    CompanyProfileResponse,
    CompanyProfileUpdate,
    CompanySearchResponse,
    CompanyStatsResponse,
    CompanySummary,
    Pagination,
    PaginationMeta,
    SearchFilters,
)

__all__ = [
    "ApiResponse",
    "CompanyProfileCreate",
    "CompanyProfileResponse",
    "CompanyProfileUpdate",
    "CompanySearchResponse",
    "CompanyStatsResponse",
    "CompanySummary",
    "Pagination",
    "PaginationMeta",
    "SearchFilters",
]

"""
Company profile API models.
"""

import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from corphub.database.models.company_profile import UPDATABLE_FIELDS

SOCIAL_PLATFORMS = ("facebook", "twitter", "linkedin", "instagram", "youtube", "website")

_COMPANY_NAME_RE = re.compile(r"^[a-zA-Z0-9\s&.,'-]+$")
_PLACE_RE = re.compile(r"^[a-zA-Z\s.-]+$")
_POSTAL_CODE_RE = re.compile(r"^[a-zA-Z0-9\s-]+$")
_URL_RE = re.compile(
    r"^https?://(www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b([-a-zA-Z0-9()@:%_+.~#?&/=]*)$"
)


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _check_pattern(value: Optional[str], pattern: re.Pattern, message: str) -> Optional[str]:
    if value is not None and not pattern.match(value):
        raise ValueError(message)
    return value


def _check_social_links(value: Optional[Dict[str, str]]) -> Optional[Dict[str, str]]:
    if value is None:
        return None
    links = {}
    for platform, url in value.items():
        key = platform.lower()
        if key not in SOCIAL_PLATFORMS:
            raise ValueError(f"Unsupported social platform: {platform}")
        if not isinstance(url, str) or not _URL_RE.match(url.strip()):
            raise ValueError(f"Invalid URL for {platform}")
        links[key] = url.strip()
    return links


class _CompanyFieldRules(BaseModel):
    """Validation shared by create and update payloads."""

    @field_validator("*", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return _strip(v)

    @field_validator("company_name", check_fields=False)
    @classmethod
    def check_company_name(cls, v: Optional[str]) -> Optional[str]:
        return _check_pattern(v, _COMPANY_NAME_RE, "Company name contains invalid characters")

    @field_validator("city", "state", "country", check_fields=False)
    @classmethod
    def check_place(cls, v: Optional[str]) -> Optional[str]:
        return _check_pattern(v, _PLACE_RE, "Name contains invalid characters")

    @field_validator("postal_code", check_fields=False)
    @classmethod
    def check_postal_code(cls, v: Optional[str]) -> Optional[str]:
        return _check_pattern(v, _POSTAL_CODE_RE, "Invalid postal code format")

    @field_validator("website", check_fields=False)
    @classmethod
    def check_website(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return None
        return _check_pattern(v, _URL_RE, "Please provide a valid website URL")

    @field_validator("founded_date", check_fields=False)
    @classmethod
    def check_founded_date(cls, v: Optional[date]) -> Optional[date]:
        if v is not None and v > date.today():
            raise ValueError("Founded date cannot be in the future")
        return v

    @field_validator("social_links", check_fields=False)
    @classmethod
    def check_social_links(cls, v: Optional[Dict[str, str]]) -> Optional[Dict[str, str]]:
        return _check_social_links(v)


class CompanyProfileCreate(_CompanyFieldRules):
    """Request model for registering a company profile."""
    company_name: str = Field(..., min_length=2, max_length=200)
    address: str = Field(..., min_length=5, max_length=500)
    city: str = Field(..., min_length=2, max_length=50)
    state: str = Field(..., min_length=2, max_length=50)
    country: str = Field(..., min_length=2, max_length=50)
    postal_code: str = Field(..., min_length=3, max_length=20)
    website: Optional[str] = Field(None, max_length=500)
    industry: str = Field(..., min_length=2, max_length=100)
    founded_date: Optional[date] = None
    description: Optional[str] = Field(None, max_length=1000)
    social_links: Optional[Dict[str, str]] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "company_name": "Bluestock Fintech",
                "address": "Plot 12, Baner Road",
                "city": "Pune",
                "state": "Maharashtra",
                "country": "India",
                "postal_code": "411045",
                "website": "https://bluestock.in",
                "industry": "Financial Technology",
                "founded_date": "2019-04-01",
                "description": "Investment research and education platform",
                "social_links": {"linkedin": "https://www.linkedin.com/company/bluestock"},
            }
        }
    )


class CompanyProfileUpdate(_CompanyFieldRules):
    """Request model for a partial profile update; omitted fields are left unchanged."""
    company_name: Optional[str] = Field(None, min_length=2, max_length=200)
    address: Optional[str] = Field(None, min_length=5, max_length=500)
    city: Optional[str] = Field(None, min_length=2, max_length=50)
    state: Optional[str] = Field(None, min_length=2, max_length=50)
    country: Optional[str] = Field(None, min_length=2, max_length=50)
    postal_code: Optional[str] = Field(None, min_length=3, max_length=20)
    website: Optional[str] = Field(None, max_length=500)
    industry: Optional[str] = Field(None, min_length=2, max_length=100)
    founded_date: Optional[date] = None
    description: Optional[str] = Field(None, max_length=1000)
    social_links: Optional[Dict[str, str]] = None

    @field_validator("company_name")
    @classmethod
    def company_name_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Company name cannot be empty")
        return v

    def changes(self) -> Dict[str, Any]:
        """Fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class SearchFilters(BaseModel):
    """Substring filters for company search."""
    search: Optional[str] = None
    industry: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class Pagination(BaseModel):
    """Paging and ordering options; out-of-range values are normalized by the query builder."""
    page: int = 1
    limit: int = 10
    sort_by: str = "created_at"
    sort_order: str = "DESC"


class CompanyProfileResponse(BaseModel):
    """Response model for a company profile."""
    id: str
    owner_id: str
    company_name: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None
    industry: Optional[str] = None
    founded_date: Optional[date] = None
    description: Optional[str] = None
    social_links: Optional[Dict[str, str]] = None
    created_at: datetime
    updated_at: datetime

    # Owner display fields
    owner_name: Optional[str] = None
    owner_email: Optional[str] = None
    owner_mobile: Optional[str] = None
    owner_email_verified: Optional[bool] = None
    owner_mobile_verified: Optional[bool] = None

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def profile_completion(self) -> int:
        """Percentage of profile fields that are filled in."""
        filled = sum(1 for name in UPDATABLE_FIELDS if getattr(self, name) not in (None, "", {}))
        return round(filled * 100 / len(UPDATABLE_FIELDS))


class CompanySummary(BaseModel):
    """Search result entry."""
    id: str
    company_name: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    industry: Optional[str] = None
    founded_date: Optional[date] = None
    description: Optional[str] = None
    created_at: datetime
    owner_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class PaginationMeta(BaseModel):
    current_page: int
    limit: int
    total_pages: int
    total_records: int
    has_next_page: bool
    has_prev_page: bool


class CompanySearchResponse(BaseModel):
    companies: List[CompanySummary]
    pagination: PaginationMeta


class CompanyStatsResponse(BaseModel):
    total_companies: int
    total_industries: int
    total_countries: int
    companies_last_30_days: int
    companies_with_logo: int
    companies_without_logo: int
    companies_with_banner: int
    companies_without_banner: int


class ApiResponse(BaseModel):
    """Envelope used by every company endpoint."""
    success: bool = True
    message: str
    data: Optional[Any] = None

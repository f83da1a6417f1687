"""
Company profile API endpoints.

Every route acts on the authenticated user's own profile, except search
and stats which read across all profiles.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from corphub.core.security import get_current_user_id
from corphub.exceptions import NotFoundError
from corphub.models.company import (
    ApiResponse,
    CompanyProfileCreate,
    CompanyProfileResponse,
    CompanyProfileUpdate,
    CompanySearchResponse,
    CompanyStatsResponse,
    Pagination,
    SearchFilters,
)
from corphub.services.company_profile_service import CompanyProfileService
from corphub.services.media_service import validate_image_upload
from corphub.utils.logging import get_logger
from corphub.api.deps import get_company_service

logger = get_logger("companies_api")

router = APIRouter()


@router.post("/register", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def register_company(
    data: CompanyProfileCreate,
    user_id: str = Depends(get_current_user_id),
    service: CompanyProfileService = Depends(get_company_service),
) -> ApiResponse:
    """Register the current user's company profile."""
    profile = await service.create_company_profile(user_id, data.model_dump())
    return ApiResponse(
        message="Company profile created successfully",
        data=CompanyProfileResponse.model_validate(profile),
    )


@router.get("/profile", response_model=ApiResponse)
async def get_profile(
    user_id: str = Depends(get_current_user_id),
    service: CompanyProfileService = Depends(get_company_service),
) -> ApiResponse:
    profile = await service.get_company_profile(user_id)
    if profile is None:
        raise NotFoundError("Company profile not found")

    return ApiResponse(
        message="Company profile retrieved successfully",
        data=CompanyProfileResponse.model_validate(profile),
    )


@router.put("/profile", response_model=ApiResponse)
async def update_profile(
    data: CompanyProfileUpdate,
    user_id: str = Depends(get_current_user_id),
    service: CompanyProfileService = Depends(get_company_service),
) -> ApiResponse:
    """Update only the fields present in the request body."""
    profile = await service.update_company_profile(user_id, data.changes())
    return ApiResponse(
        message="Company profile updated successfully",
        data=CompanyProfileResponse.model_validate(profile),
    )


@router.delete("/profile", response_model=ApiResponse)
async def delete_profile(
    user_id: str = Depends(get_current_user_id),
    service: CompanyProfileService = Depends(get_company_service),
) -> ApiResponse:
    await service.delete_company_profile(user_id)
    return ApiResponse(message="Company profile deleted successfully")


async def _upload_image(
    kind: str,
    file: UploadFile,
    user_id: str,
    service: CompanyProfileService,
) -> dict:
    content = await file.read()
    validate_image_upload(file.content_type, len(content))
    logger.info(f"Uploading {kind} for user {user_id} ({len(content)} bytes)")
    return await service.replace_company_image(user_id, kind, content)


@router.post("/upload-logo", response_model=ApiResponse)
async def upload_logo(
    file: UploadFile = File(...),
    user_id: str = Depends(get_current_user_id),
    service: CompanyProfileService = Depends(get_company_service),
) -> ApiResponse:
    """Upload a logo (JPEG, PNG or WebP, up to 5MB)."""
    result = await _upload_image("logo", file, user_id, service)
    return ApiResponse(message="Company logo uploaded successfully", data=result)


@router.post("/upload-banner", response_model=ApiResponse)
async def upload_banner(
    file: UploadFile = File(...),
    user_id: str = Depends(get_current_user_id),
    service: CompanyProfileService = Depends(get_company_service),
) -> ApiResponse:
    """Upload a banner (JPEG, PNG or WebP, up to 5MB)."""
    result = await _upload_image("banner", file, user_id, service)
    return ApiResponse(message="Company banner uploaded successfully", data=result)


@router.get("/search", response_model=ApiResponse)
async def search_companies(
    filters: SearchFilters = Depends(),
    pagination: Pagination = Depends(),
    user_id: str = Depends(get_current_user_id),
    service: CompanyProfileService = Depends(get_company_service),
) -> ApiResponse:
    """
    Search companies by name/description and location or industry.

    Invalid sort fields and out-of-range paging values are normalized
    rather than rejected.
    """
    result = await service.search_companies(filters, pagination)
    return ApiResponse(
        message="Companies retrieved successfully",
        data=CompanySearchResponse.model_validate(result, from_attributes=True),
    )


@router.get("/stats", response_model=ApiResponse)
async def get_stats(
    user_id: str = Depends(get_current_user_id),
    service: CompanyProfileService = Depends(get_company_service),
) -> ApiResponse:
    stats = await service.get_company_stats()
    return ApiResponse(
        message="Company statistics retrieved successfully",
        data=CompanyStatsResponse(**stats),
    )


@router.get("/name-available", response_model=ApiResponse)
async def check_name_available(
    company_name: str = Query(..., min_length=1, max_length=200),
    exclude_self: Optional[bool] = Query(True, description="Ignore the caller's own profile"),
    user_id: str = Depends(get_current_user_id),
    service: CompanyProfileService = Depends(get_company_service),
) -> ApiResponse:
    available = await service.is_company_name_available(
        company_name,
        exclude_owner_id=user_id if exclude_self else None,
    )
    return ApiResponse(
        message="Company name is available" if available else "Company name already exists",
        data={"company_name": company_name.strip(), "available": available},
    )

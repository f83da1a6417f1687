"""
FastAPI dependencies for the API routes.
"""

from typing import Optional

from corphub.database.session import get_db
from corphub.services.company_profile_service import CompanyProfileService

# Cache service instance
_company_service: Optional[CompanyProfileService] = None


def get_company_service() -> CompanyProfileService:
    """Get or create the shared company profile service."""
    global _company_service

    if _company_service is None:
        _company_service = CompanyProfileService()
    return _company_service


__all__ = ["get_company_service", "get_db"]

"""
Service layer for CorpHub.
"""

from .company_profile_service import CompanyProfileService
from .media_service import MediaService

__all__ = [
    "CompanyProfileService",
    "MediaService",
]

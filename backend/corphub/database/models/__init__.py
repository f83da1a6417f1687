"""
Database models package for CorpHub.
"""

from .company_profile import IMAGE_FIELDS, UPDATABLE_FIELDS, CompanyProfile
from .user import User

__all__ = [
    "User",
    "CompanyProfile",

    # Field sets
    "UPDATABLE_FIELDS",
    "IMAGE_FIELDS",
]

"""
Database repositories package for CorpHub.
"""

from .company_profile import CompanyProfileRepository, SearchResult, build_update_values

__all__ = [
    "CompanyProfileRepository",
    "SearchResult",
    "build_update_values",
]

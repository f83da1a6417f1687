"""
Query builder for company search with pagination.

Turns caller filters and paging options into a pair of statements
sharing one WHERE clause: a bounded data query and an unbounded count
query. Column names only ever come from the fixed maps below; caller
text is always a bound parameter.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import Select, and_, func, or_, select

from corphub.database.models.company_profile import CompanyProfile

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 50
DEFAULT_SORT_BY = "created_at"
DEFAULT_SORT_ORDER = "DESC"

SORTABLE_COLUMNS = {
    "company_name": CompanyProfile.company_name,
    "city": CompanyProfile.city,
    "state": CompanyProfile.state,
    "country": CompanyProfile.country,
    "industry": CompanyProfile.industry,
    "created_at": CompanyProfile.created_at,
    "updated_at": CompanyProfile.updated_at,
}

# Single-column substring filters; "search" is handled separately
FILTER_COLUMNS = {
    "industry": CompanyProfile.industry,
    "city": CompanyProfile.city,
    "state": CompanyProfile.state,
    "country": CompanyProfile.country,
}


def _as_dict(value: Any) -> Dict[str, Any]:
    if value is None:
        return {}
    if hasattr(value, "model_dump"):
        return value.model_dump()
    return dict(value)


def _coerce_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def normalize_sort_by(sort_by: Optional[str]) -> str:
    """Return ``sort_by`` if it is a sortable column, else the default."""
    if sort_by in SORTABLE_COLUMNS:
        return sort_by
    return DEFAULT_SORT_BY


def normalize_sort_order(sort_order: Optional[str]) -> str:
    if isinstance(sort_order, str) and sort_order.strip().upper() in ("ASC", "DESC"):
        return sort_order.strip().upper()
    return DEFAULT_SORT_ORDER


def normalize_page(page: Any) -> int:
    return max(_coerce_int(page, DEFAULT_PAGE), 1)


def normalize_limit(limit: Any) -> int:
    value = _coerce_int(limit, DEFAULT_LIMIT)
    if value < 1:
        return DEFAULT_LIMIT
    return min(value, MAX_LIMIT)


def build_pagination_meta(page: int, limit: int, total: int) -> Dict[str, Any]:
    """Page metadata for a result set of ``total`` rows."""
    total_pages = math.ceil(total / limit) if limit else 0
    return {
        "current_page": page,
        "limit": limit,
        "total_pages": total_pages,
        "total_records": total,
        "has_next_page": page < total_pages,
        "has_prev_page": page > 1,
    }


@dataclass(frozen=True)
class CompanySearchQuery:
    """Normalized search request."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort_by: str = DEFAULT_SORT_BY
    sort_order: str = DEFAULT_SORT_ORDER
    search: Optional[str] = None
    filters: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        filters: Optional[Mapping[str, Any]] = None,
        pagination: Optional[Mapping[str, Any]] = None,
    ) -> "CompanySearchQuery":
        """
        Validate and normalize raw filters and pagination options.

        Unknown sort fields fall back to ``created_at``, unknown orders
        to ``DESC``; page is at least 1 and limit is kept within 1..50.
        Blank filters are dropped.
        """
        raw_filters = _as_dict(filters)
        raw_pagination = _as_dict(pagination)

        search = (raw_filters.get("search") or "").strip() or None
        active = {}
        for name in FILTER_COLUMNS:
            value = (raw_filters.get(name) or "").strip()
            if value:
                active[name] = value

        return cls(
            page=normalize_page(raw_pagination.get("page")),
            limit=normalize_limit(raw_pagination.get("limit")),
            sort_by=normalize_sort_by(raw_pagination.get("sort_by")),
            sort_order=normalize_sort_order(raw_pagination.get("sort_order")),
            search=search,
            filters=active,
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def conditions(self) -> List[Any]:
        """Conjunctive predicates for the non-empty filters."""
        conditions = []
        if self.search:
            conditions.append(
                or_(
                    CompanyProfile.company_name.icontains(self.search, autoescape=True),
                    CompanyProfile.description.icontains(self.search, autoescape=True),
                )
            )
        for name, value in self.filters.items():
            conditions.append(FILTER_COLUMNS[name].icontains(value, autoescape=True))
        return conditions

    def _where(self, statement: Select) -> Select:
        conditions = self.conditions()
        if conditions:
            statement = statement.where(and_(*conditions))
        return statement

    def data_statement(self) -> Select:
        """Page of matching profiles ordered by the sort key, then id."""
        sort_column = SORTABLE_COLUMNS[self.sort_by]
        primary = sort_column.asc() if self.sort_order == "ASC" else sort_column.desc()
        return (
            self._where(select(CompanyProfile))
            .order_by(primary, CompanyProfile.id.asc())
            .limit(self.limit)
            .offset(self.offset)
        )

    def count_statement(self) -> Select:
        """Number of profiles matching the same filters."""
        return self._where(select(func.count(CompanyProfile.id)))

    def pagination_meta(self, total: int) -> Dict[str, Any]:
        return build_pagination_meta(self.page, self.limit, total)

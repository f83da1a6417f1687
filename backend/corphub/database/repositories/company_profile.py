"""
Company profile repository.
"""

import asyncio
from datetime import datetime, timedelta
from typing import Any, Dict, List, Mapping, NamedTuple, Optional

from sqlalchemy import delete, distinct, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from corphub.exceptions import ConflictError, InvalidArgumentError, NotFoundError
from corphub.database.models.company_profile import IMAGE_FIELDS, UPDATABLE_FIELDS, CompanyProfile
from corphub.database.search import CompanySearchQuery
from corphub.database.session import get_async_session
from corphub.utils.logging import get_logger

logger = get_logger("company_profile_repository")

# Optional columns stored as NULL when the caller sends an empty value
_NULLABLE_ON_CREATE = (
    "website",
    "logo_url",
    "banner_url",
    "founded_date",
    "description",
    "social_links",
)


class SearchResult(NamedTuple):
    rows: List[CompanyProfile]
    total: int


def build_update_values(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Column/value mapping for a partial update.

    Only keys from UPDATABLE_FIELDS are kept; anything else the caller
    sent is ignored. ``updated_at`` is always refreshed.
    """
    values = {name: fields[name] for name in UPDATABLE_FIELDS if name in fields}
    if not values:
        raise InvalidArgumentError("No valid fields provided for update")
    values["updated_at"] = datetime.utcnow()
    return values


def _raise_for_integrity_error(error: IntegrityError) -> None:
    # First line only; the detail line may echo the offending value
    message = str(error.orig).splitlines()[0].lower() if str(error.orig) else ""
    if "not null" in message or "not-null" in message:
        raise InvalidArgumentError("A required company field is missing") from error
    if "foreign key" in message:
        raise InvalidArgumentError("Owner does not exist") from error
    if "owner_id" in message:
        raise ConflictError("Company profile already exists for this user") from error
    if "company_name" in message:
        raise ConflictError("Company name already exists") from error
    raise ConflictError("Duplicate entry. This record already exists") from error


class CompanyProfileRepository:
    """Repository for CompanyProfile model operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        owner_id: str,
        fields: Mapping[str, Any],
    ) -> CompanyProfile:
        """Insert a profile and return the stored row with owner fields."""
        values = {name: fields.get(name) for name in UPDATABLE_FIELDS}
        for name in _NULLABLE_ON_CREATE:
            if not values.get(name):
                values[name] = None

        now = datetime.utcnow()
        profile = CompanyProfile(owner_id=owner_id, created_at=now, updated_at=now, **values)
        db.add(profile)
        try:
            await db.flush()
        except IntegrityError as e:
            _raise_for_integrity_error(e)

        logger.info(f"Created company profile: {profile.id} - {profile.company_name}")
        return await CompanyProfileRepository.find_by_id(db, profile.id)

    @staticmethod
    async def exists_for_owner(db: AsyncSession, owner_id: str) -> bool:
        result = await db.execute(
            select(CompanyProfile.id).filter(CompanyProfile.owner_id == owner_id)
        )
        return result.first() is not None

    @staticmethod
    async def find_by_owner(db: AsyncSession, owner_id: str) -> Optional[CompanyProfile]:
        """Get the owner's profile, joined with the owner's account."""
        result = await db.execute(
            select(CompanyProfile)
            .filter(CompanyProfile.owner_id == owner_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def find_by_id(db: AsyncSession, profile_id: str) -> Optional[CompanyProfile]:
        """Get a profile by primary key, joined with the owner's account."""
        result = await db.execute(
            select(CompanyProfile)
            .filter(CompanyProfile.id == profile_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def update(
        db: AsyncSession,
        owner_id: str,
        fields: Mapping[str, Any],
    ) -> CompanyProfile:
        """Apply an allow-listed partial update to the owner's profile."""
        values = build_update_values(fields)
        try:
            result = await db.execute(
                update(CompanyProfile)
                .where(CompanyProfile.owner_id == owner_id)
                .values(**values)
                .returning(CompanyProfile.id)
                .execution_options(synchronize_session=False)
            )
        except IntegrityError as e:
            _raise_for_integrity_error(e)

        profile_id = result.scalar_one_or_none()
        if profile_id is None:
            raise NotFoundError("Company profile not found")

        logger.debug(f"Updated company profile {profile_id}: {sorted(values)}")
        return await CompanyProfileRepository.find_by_id(db, profile_id)

    @staticmethod
    async def update_image_field(
        db: AsyncSession,
        owner_id: str,
        field: str,
        url: Optional[str],
    ) -> Dict[str, Any]:
        """Set logo_url or banner_url; returns ``{"id": ..., field: url}``."""
        if field not in IMAGE_FIELDS:
            raise InvalidArgumentError("Invalid image type")

        column = getattr(CompanyProfile, field)
        result = await db.execute(
            update(CompanyProfile)
            .where(CompanyProfile.owner_id == owner_id)
            .values({field: url, "updated_at": datetime.utcnow()})
            .returning(CompanyProfile.id, column)
            .execution_options(synchronize_session=False)
        )
        row = result.first()
        if row is None:
            raise NotFoundError("Company profile not found")
        return {"id": row[0], field: row[1]}

    @staticmethod
    async def delete(db: AsyncSession, owner_id: str) -> Dict[str, Optional[str]]:
        """Delete the owner's profile and return its image URLs."""
        result = await db.execute(
            select(CompanyProfile.logo_url, CompanyProfile.banner_url)
            .filter(CompanyProfile.owner_id == owner_id)
            .with_for_update()
        )
        row = result.first()
        if row is None:
            raise NotFoundError("Company profile not found")

        await db.execute(
            delete(CompanyProfile)
            .where(CompanyProfile.owner_id == owner_id)
            .execution_options(synchronize_session=False)
        )
        logger.info(f"Deleted company profile for owner: {owner_id}")
        return {"logo_url": row.logo_url, "banner_url": row.banner_url}

    @staticmethod
    async def name_available(
        db: AsyncSession,
        name: str,
        exclude_owner_id: Optional[str] = None,
    ) -> bool:
        """True if no other profile uses ``name`` (case-insensitive)."""
        query = select(CompanyProfile.id).filter(
            func.lower(CompanyProfile.company_name) == func.lower(name)
        )
        if exclude_owner_id:
            query = query.filter(CompanyProfile.owner_id != exclude_owner_id)

        result = await db.execute(query.limit(1))
        return result.first() is None

    @staticmethod
    async def stats(db: AsyncSession) -> Dict[str, int]:
        """Aggregate counts across all profiles."""
        since = datetime.utcnow() - timedelta(days=30)
        result = await db.execute(
            select(
                func.count(CompanyProfile.id).label("total_companies"),
                func.count(distinct(CompanyProfile.industry)).label("total_industries"),
                func.count(distinct(CompanyProfile.country)).label("total_countries"),
                func.count(CompanyProfile.id)
                .filter(CompanyProfile.created_at >= since)
                .label("companies_last_30_days"),
                func.count(CompanyProfile.id)
                .filter(CompanyProfile.logo_url.isnot(None))
                .label("companies_with_logo"),
                func.count(CompanyProfile.id)
                .filter(CompanyProfile.banner_url.isnot(None))
                .label("companies_with_banner"),
            )
        )
        row = result.one()
        total = row.total_companies or 0
        with_logo = row.companies_with_logo or 0
        with_banner = row.companies_with_banner or 0
        return {
            "total_companies": total,
            "total_industries": row.total_industries or 0,
            "total_countries": row.total_countries or 0,
            "companies_last_30_days": row.companies_last_30_days or 0,
            "companies_with_logo": with_logo,
            "companies_without_logo": total - with_logo,
            "companies_with_banner": with_banner,
            "companies_without_banner": total - with_banner,
        }

    @staticmethod
    async def search(
        session_factory: async_sessionmaker,
        query: CompanySearchQuery,
    ) -> SearchResult:
        """
        Run the page query and the count query concurrently.

        Each runs on its own session (and pooled connection) since an
        AsyncSession cannot serve two statements at once.
        """
        async def fetch_rows() -> List[CompanyProfile]:
            async with get_async_session(session_factory) as db:
                result = await db.execute(query.data_statement())
                return list(result.scalars().all())

        async def fetch_total() -> int:
            async with get_async_session(session_factory) as db:
                result = await db.execute(query.count_statement())
                return int(result.scalar_one())

        rows, total = await asyncio.gather(fetch_rows(), fetch_total())
        return SearchResult(rows=rows, total=total)

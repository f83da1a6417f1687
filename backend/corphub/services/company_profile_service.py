"""
Company profile service.

Owns the business rules around profiles: one profile per owner, unique
company names, partial updates, and removal of superseded hosted images
once the database change is committed.
"""

import asyncio
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Set

from sqlalchemy.ext.asyncio import async_sessionmaker

from corphub.database.models.company_profile import IMAGE_FIELDS, CompanyProfile
from corphub.database.repositories.company_profile import CompanyProfileRepository
from corphub.database.search import CompanySearchQuery
from corphub.database.session import get_async_session, get_session_factory, transaction
from corphub.exceptions import ConflictError, InvalidArgumentError, NotFoundError
from corphub.utils.logging import get_logger
from corphub.services.media_service import IMAGE_PRESETS, MediaService

logger = get_logger("company_profile_service")

ImageCleanup = Callable[[Iterable[Optional[str]]], Any]

_IMAGE_KINDS = {
    "logo": "logo_url",
    "banner": "banner_url",
    "logo_url": "logo_url",
    "banner_url": "banner_url",
}


def resolve_image_field(kind: str) -> str:
    """Map ``logo``/``banner`` (or the column name itself) to the column."""
    field = _IMAGE_KINDS.get((kind or "").lower())
    if field is None:
        raise InvalidArgumentError("Invalid image type")
    return field


def _default_image_cleanup(image_urls: Iterable[Optional[str]]) -> bool:
    from corphub.tasks.media_tasks import enqueue_image_cleanup

    return enqueue_image_cleanup(image_urls)


class CompanyProfileService:
    """Service for company profile operations."""

    def __init__(
        self,
        session_factory: Optional[async_sessionmaker] = None,
        image_cleanup: Optional[ImageCleanup] = None,
        media: Optional[MediaService] = None,
    ):
        self._session_factory = session_factory
        self._image_cleanup = image_cleanup or _default_image_cleanup
        self._media = media
        self._cleanup_tasks: Set[asyncio.Task] = set()

    @property
    def session_factory(self) -> async_sessionmaker:
        if self._session_factory is None:
            self._session_factory = get_session_factory()
        return self._session_factory

    @property
    def media(self) -> MediaService:
        if self._media is None:
            self._media = MediaService()
        return self._media

    def _schedule_image_cleanup(self, image_urls: Iterable[Optional[str]]) -> None:
        """
        Hand superseded images to the cleanup queue without waiting.

        The enqueue runs in a worker thread as a background task; the
        caller returns immediately and never sees a cleanup failure.
        """
        urls = [url for url in image_urls if url]
        if not urls:
            return
        task = asyncio.create_task(self._run_image_cleanup(urls))
        self._cleanup_tasks.add(task)
        task.add_done_callback(self._cleanup_tasks.discard)

    async def _run_image_cleanup(self, urls: List[str]) -> None:
        try:
            await asyncio.to_thread(self._image_cleanup, urls)
        except Exception as e:
            logger.error(f"Image cleanup scheduling failed for {urls}: {e}")

    async def wait_for_image_cleanup(self) -> None:
        """Wait for cleanup hand-offs still in flight (used on shutdown)."""
        if self._cleanup_tasks:
            await asyncio.gather(*self._cleanup_tasks, return_exceptions=True)

    async def create_company_profile(
        self,
        owner_id: str,
        fields: Mapping[str, Any],
    ) -> CompanyProfile:
        """
        Create the owner's company profile.

        The existence and name checks give friendly errors; the unique
        constraints on owner_id and lower(company_name) still reject a
        concurrent duplicate with ConflictError.
        """
        async with transaction(self.session_factory) as db:
            if await CompanyProfileRepository.exists_for_owner(db, owner_id):
                raise ConflictError("Company profile already exists for this user")

            company_name = fields.get("company_name")
            if company_name and not await CompanyProfileRepository.name_available(db, company_name):
                raise ConflictError("Company name already exists")

            profile = await CompanyProfileRepository.create(db, owner_id, fields)

        logger.info(f"Company profile {profile.id} registered by user {owner_id}")
        return profile

    async def get_company_profile(self, owner_id: str) -> Optional[CompanyProfile]:
        async with get_async_session(self.session_factory) as db:
            return await CompanyProfileRepository.find_by_owner(db, owner_id)

    async def get_company_profile_by_id(self, profile_id: str) -> Optional[CompanyProfile]:
        async with get_async_session(self.session_factory) as db:
            return await CompanyProfileRepository.find_by_id(db, profile_id)

    async def update_company_profile(
        self,
        owner_id: str,
        fields: Mapping[str, Any],
    ) -> CompanyProfile:
        """
        Apply a partial update to the owner's profile.

        Only allow-listed fields change. Renaming to a name held by
        another company raises ConflictError. Images replaced by the
        update are queued for deletion after commit.
        """
        async with transaction(self.session_factory) as db:
            existing = await CompanyProfileRepository.find_by_owner(db, owner_id)
            if existing is None:
                raise NotFoundError("Company profile not found")
            previous_images = existing.image_urls()

            company_name = fields.get("company_name")
            if company_name and not await CompanyProfileRepository.name_available(
                db, company_name, exclude_owner_id=owner_id
            ):
                raise ConflictError("Company name already exists")

            profile = await CompanyProfileRepository.update(db, owner_id, fields)

        superseded = [
            previous_images[field]
            for field in IMAGE_FIELDS
            if field in fields and previous_images[field] != getattr(profile, field)
        ]
        self._schedule_image_cleanup(superseded)
        return profile

    async def update_company_image(
        self,
        owner_id: str,
        kind: str,
        url: Optional[str],
    ) -> Dict[str, Any]:
        """Set the logo or banner URL with a single statement."""
        field = resolve_image_field(kind)
        async with transaction(self.session_factory) as db:
            return await CompanyProfileRepository.update_image_field(db, owner_id, field, url)

    async def replace_company_image(
        self,
        owner_id: str,
        kind: str,
        content: bytes,
    ) -> Dict[str, Any]:
        """
        Upload a new logo or banner and point the profile at it.

        The profile must exist before anything is uploaded. The previous
        image is queued for deletion once the new URL is stored.
        """
        field = resolve_image_field(kind)

        current = await self.get_company_profile(owner_id)
        if current is None:
            raise NotFoundError("Company profile not found. Please create a profile first.")
        old_url = getattr(current, field)

        preset = IMAGE_PRESETS[field]
        uploaded = await self.media.upload_image(
            content,
            folder=preset["folder"],
            transformation=preset["transformation"],
        )

        try:
            await self.update_company_image(owner_id, field, uploaded.url)
        except NotFoundError:
            # Profile vanished between the read and the write
            self._schedule_image_cleanup([uploaded.url])
            raise

        if old_url != uploaded.url:
            self._schedule_image_cleanup([old_url])

        return {field: uploaded.url, "public_id": uploaded.public_id}

    async def delete_company_profile(self, owner_id: str) -> Dict[str, Optional[str]]:
        """
        Delete the owner's profile.

        Returns the prior image URLs; the images themselves are queued
        for deletion after the transaction commits.
        """
        async with transaction(self.session_factory) as db:
            old_image_urls = await CompanyProfileRepository.delete(db, owner_id)

        self._schedule_image_cleanup(old_image_urls.values())
        return old_image_urls

    async def search_companies(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        pagination: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Filtered, sorted, paginated company listing."""
        query = CompanySearchQuery.build(filters, pagination)
        result = await CompanyProfileRepository.search(self.session_factory, query)
        return {
            "companies": result.rows,
            "pagination": query.pagination_meta(result.total),
        }

    async def get_company_stats(self) -> Dict[str, int]:
        async with get_async_session(self.session_factory) as db:
            return await CompanyProfileRepository.stats(db)

    async def is_company_name_available(
        self,
        company_name: str,
        exclude_owner_id: Optional[str] = None,
    ) -> bool:
        if not company_name or not company_name.strip():
            raise InvalidArgumentError("Company name is required")
        async with get_async_session(self.session_factory) as db:
            return await CompanyProfileRepository.name_available(
                db, company_name.strip(), exclude_owner_id=exclude_owner_id
            )

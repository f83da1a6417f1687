"""
Cloudinary-backed image hosting for company logos and banners.
"""

import asyncio
import io
import re
from typing import Any, Dict, List, NamedTuple, Optional

import cloudinary
import cloudinary.uploader

from corphub.core.config import Settings, get_settings
from corphub.exceptions import ConfigurationError, ExternalServiceError, InvalidArgumentError
from corphub.utils.logging import get_logger

logger = get_logger("media_service")

MAX_IMAGE_SIZE = 5 * 1024 * 1024  # 5MB
ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")
_DELETED_RESULTS = ("ok", "not found")

# Folder and transformation per image field
IMAGE_PRESETS: Dict[str, Dict[str, Any]] = {
    "logo_url": {
        "folder": "company-logos",
        "transformation": [
            {"width": 500, "height": 500, "crop": "limit", "quality": "auto:best"},
            {"fetch_format": "auto"},
        ],
    },
    "banner_url": {
        "folder": "company-banners",
        "transformation": [
            {"width": 1200, "height": 400, "crop": "limit", "quality": "auto:best"},
            {"fetch_format": "auto"},
        ],
    },
}

_PUBLIC_ID_PATTERN = re.compile(r"/upload/(?:[^/]+/)*?(?:v\d+/)(?P<public_id>.+)\.[^/.]+$")
_UNVERSIONED_PATTERN = re.compile(r"/upload/(?P<public_id>.+)\.[^/.]+$")


class UploadedImage(NamedTuple):
    url: str
    public_id: str


def validate_image_upload(content_type: Optional[str], size: int) -> None:
    """Reject anything but JPEG, PNG or WebP up to 5MB."""
    if not size:
        raise InvalidArgumentError("Please select an image to upload")
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise InvalidArgumentError("Only JPEG, PNG, and WebP images are allowed")
    if size > MAX_IMAGE_SIZE:
        raise InvalidArgumentError("Image size should not exceed 5MB")


def extract_public_id(image_url: str) -> Optional[str]:
    """
    Public ID of a Cloudinary delivery URL.

    ``https://res.cloudinary.com/demo/image/upload/v1712/company-logos/abc.png``
    gives ``company-logos/abc``. Transformation segments before the
    version are skipped.
    """
    if not image_url:
        return None
    path = image_url.split("?", 1)[0]
    match = _PUBLIC_ID_PATTERN.search(path) or _UNVERSIONED_PATTERN.search(path)
    if not match:
        return None
    return match.group("public_id")


class MediaService:
    """Upload and delete images on Cloudinary."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        if self.is_configured():
            cloudinary.config(
                cloud_name=self.settings.cloudinary_cloud_name,
                api_key=self.settings.cloudinary_api_key,
                api_secret=self.settings.cloudinary_api_secret,
                secure=True,
            )
        else:
            logger.warning(
                "Cloudinary configuration missing. Set CLOUDINARY_CLOUD_NAME, "
                "CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET."
            )

    def is_configured(self) -> bool:
        return bool(
            self.settings.cloudinary_cloud_name
            and self.settings.cloudinary_api_key
            and self.settings.cloudinary_api_secret
        )

    async def upload_image(
        self,
        content: bytes,
        folder: str,
        transformation: Optional[List[Dict[str, Any]]] = None,
    ) -> UploadedImage:
        """Upload image bytes; the SDK call runs in a worker thread."""
        if not self.is_configured():
            raise ConfigurationError("Image upload is not configured")

        options = {
            "resource_type": "image",
            "folder": folder,
            "unique_filename": True,
            "use_filename": False,
            "overwrite": False,
            "invalidate": True,
        }
        if transformation:
            options["transformation"] = transformation

        try:
            result = await asyncio.to_thread(cloudinary.uploader.upload, io.BytesIO(content), **options)
        except Exception as e:
            logger.error(f"Cloudinary upload error: {e}")
            raise ExternalServiceError("Failed to upload image to cloud storage") from e

        return UploadedImage(url=result["secure_url"], public_id=result["public_id"])

    async def delete_image(self, image_url: Optional[str]) -> Dict[str, Any]:
        """
        Remove an image by its delivery URL.

        Never raises: failures are logged and reported in the result.
        """
        if not image_url or "cloudinary.com" not in image_url:
            return {"result": "ok", "message": "No valid Cloudinary URL provided"}

        public_id = extract_public_id(image_url)
        if not public_id:
            logger.warning(f"Could not extract public_id from URL: {image_url}")
            return {"result": "error", "message": "Could not extract public_id from URL"}

        try:
            return await asyncio.to_thread(cloudinary.uploader.destroy, public_id)
        except Exception as e:
            logger.error(f"Cloudinary delete error for {public_id}: {e}")
            return {"result": "error", "message": str(e)}

    async def delete_images(self, image_urls: List[Optional[str]]) -> List[Dict[str, Any]]:
        """
        Delete several images concurrently; one result per URL.

        An image Cloudinary reports as ``not found`` is already gone and
        counts as deleted.
        """
        results = await asyncio.gather(*(self.delete_image(url) for url in image_urls))
        return [
            {"url": url, "success": result.get("result") in _DELETED_RESULTS, "result": result}
            for url, result in zip(image_urls, results)
        ]

"""
Tests for the Cloudinary media service and upload validation.
"""

import unittest
from unittest.mock import patch

import pytest

from corphub.core.config import Settings
from corphub.exceptions import ConfigurationError, ExternalServiceError, InvalidArgumentError
from corphub.services.media_service import (
    MAX_IMAGE_SIZE,
    MediaService,
    extract_public_id,
    validate_image_upload,
)

CONFIGURED = Settings(
    cloudinary_cloud_name="demo",
    cloudinary_api_key="key",
    cloudinary_api_secret="secret",
)


class TestExtractPublicId:

    def test_versioned_url(self):
        url = "https://res.cloudinary.com/demo/image/upload/v1712345678/company-logos/abc123.png"
        assert extract_public_id(url) == "company-logos/abc123"

    def test_transformation_segments_are_skipped(self):
        url = "https://res.cloudinary.com/demo/image/upload/c_limit,w_500/q_auto/v17/company-banners/xyz.webp"
        assert extract_public_id(url) == "company-banners/xyz"

    def test_unversioned_url(self):
        url = "https://res.cloudinary.com/demo/image/upload/company-logos/plain.jpg"
        assert extract_public_id(url) == "company-logos/plain"

    def test_query_string_ignored(self):
        url = "https://res.cloudinary.com/demo/image/upload/v1/company-logos/q.png?_a=abc"
        assert extract_public_id(url) == "company-logos/q"

    def test_not_a_delivery_url(self):
        assert extract_public_id("https://example.com/logo.png") is None
        assert extract_public_id("") is None


class TestValidateImageUpload:

    def test_accepts_supported_types(self):
        for content_type in ("image/jpeg", "image/png", "image/webp"):
            validate_image_upload(content_type, 1024)

    def test_rejects_empty_upload(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            validate_image_upload("image/png", 0)
        assert "select an image" in str(exc_info.value)

    def test_rejects_other_types(self):
        with pytest.raises(InvalidArgumentError):
            validate_image_upload("image/gif", 1024)
        with pytest.raises(InvalidArgumentError):
            validate_image_upload("application/pdf", 1024)

    def test_rejects_oversized_image(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            validate_image_upload("image/png", MAX_IMAGE_SIZE + 1)
        assert "5MB" in str(exc_info.value)


class TestMediaService(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.service = MediaService(CONFIGURED)

    def test_is_configured(self):
        self.assertTrue(self.service.is_configured())
        self.assertFalse(MediaService(Settings(cloudinary_cloud_name=None)).is_configured())

    @patch("corphub.services.media_service.cloudinary.uploader.upload")
    async def test_upload_image(self, mock_upload):
        mock_upload.return_value = {
            "secure_url": "https://res.cloudinary.com/demo/image/upload/v1/company-logos/n.png",
            "public_id": "company-logos/n",
        }

        uploaded = await self.service.upload_image(b"bytes", folder="company-logos")

        self.assertEqual(uploaded.public_id, "company-logos/n")
        self.assertEqual(mock_upload.call_args.kwargs["folder"], "company-logos")
        self.assertNotIn("transformation", mock_upload.call_args.kwargs)

    @patch("corphub.services.media_service.cloudinary.uploader.upload")
    async def test_upload_failure_raises_external_service_error(self, mock_upload):
        mock_upload.side_effect = RuntimeError("timeout")
        with self.assertRaises(ExternalServiceError):
            await self.service.upload_image(b"bytes", folder="company-logos")

    @patch("corphub.services.media_service.cloudinary.uploader.destroy")
    async def test_delete_image(self, mock_destroy):
        mock_destroy.return_value = {"result": "ok"}
        url = "https://res.cloudinary.com/demo/image/upload/v9/company-logos/gone.png"

        result = await self.service.delete_image(url)

        self.assertEqual(result, {"result": "ok"})
        mock_destroy.assert_called_once_with("company-logos/gone")

    @patch("corphub.services.media_service.cloudinary.uploader.destroy")
    async def test_delete_non_cloudinary_url_is_a_no_op(self, mock_destroy):
        result = await self.service.delete_image("https://example.com/logo.png")
        self.assertEqual(result["result"], "ok")
        mock_destroy.assert_not_called()

    @patch("corphub.services.media_service.cloudinary.uploader.destroy")
    async def test_delete_never_raises(self, mock_destroy):
        mock_destroy.side_effect = RuntimeError("api down")
        url = "https://res.cloudinary.com/demo/image/upload/v9/company-logos/x.png"

        result = await self.service.delete_image(url)

        self.assertEqual(result["result"], "error")
        self.assertIn("api down", result["message"])

    @patch("corphub.services.media_service.cloudinary.uploader.destroy")
    async def test_delete_images_reports_per_url(self, mock_destroy):
        mock_destroy.side_effect = lambda public_id: (
            {"result": "ok"} if public_id.startswith("company-logos") else {"result": "error"}
        )
        urls = [
            "https://res.cloudinary.com/demo/image/upload/v1/company-logos/a.png",
            "https://res.cloudinary.com/demo/image/upload/v1/company-banners/b.png",
        ]

        results = await self.service.delete_images(urls)

        self.assertEqual([r["url"] for r in results], urls)
        self.assertEqual(sum(1 for r in results if r["success"]), 1)

    @patch("corphub.services.media_service.cloudinary.uploader.destroy")
    async def test_delete_images_treats_missing_image_as_deleted(self, mock_destroy):
        mock_destroy.return_value = {"result": "not found"}

        results = await self.service.delete_images(
            ["https://res.cloudinary.com/demo/image/upload/v1/company-logos/gone.png"]
        )

        self.assertTrue(results[0]["success"])

    @patch("corphub.services.media_service.cloudinary.uploader.upload")
    async def test_upload_without_credentials(self, mock_upload):
        service = MediaService(Settings(cloudinary_cloud_name=None))
        with self.assertRaises(ConfigurationError):
            await service.upload_image(b"bytes", folder="company-logos")
        mock_upload.assert_not_called()

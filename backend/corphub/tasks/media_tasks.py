"""
Background tasks for hosted image cleanup.

Old logos and banners are removed only after the database change that
superseded them has committed. The request path enqueues and moves on.
"""

import asyncio
from typing import Iterable, List, Optional

from celery import Task

from corphub.core.celery_app import celery_app
from corphub.services.media_service import MediaService
from corphub.utils.logging import get_logger

logger = get_logger("media_tasks")


@celery_app.task(bind=True, max_retries=3, default_retry_delay=30)
def delete_images_task(self: Task, image_urls: List[str]) -> dict:
    """Delete hosted images; failed deletions are retried with a delay."""
    results = asyncio.run(MediaService().delete_images(image_urls))
    failed = [item["url"] for item in results if not item["success"]]

    if failed:
        logger.warning(f"Image cleanup failed for {len(failed)} of {len(image_urls)} images: {failed}")
        if self.request.retries < self.max_retries:
            raise self.retry(args=[failed])

    return {
        "status": "success" if not failed else "partial",
        "deleted": len(image_urls) - len(failed),
        "failed": failed,
    }


def enqueue_image_cleanup(image_urls: Iterable[Optional[str]]) -> bool:
    """
    Queue hosted images for deletion.

    Empty values are skipped. Returns False (and logs) if nothing was
    queued because the broker could not be reached; callers are never
    interrupted by a cleanup problem.
    """
    urls = [url for url in image_urls if url]
    if not urls:
        return False

    try:
        delete_images_task.delay(urls)
    except Exception as e:
        logger.error(f"Could not enqueue image cleanup for {urls}: {e}")
        return False

    logger.info(f"Queued cleanup of {len(urls)} image(s)")
    return True

"""
Celery application for post-commit background work.
"""

import logging
import ssl

from celery import Celery
from celery.signals import setup_logging as celery_setup_logging

from corphub.core.config.settings import get_settings
from corphub.utils.logging import get_logger, setup_logging

logger = get_logger("celery")


@celery_setup_logging.connect
def setup_celery_logging(**kwargs):
    """Use the Rich handler in Celery workers too."""
    settings = get_settings()
    setup_logging(settings.log_level, force=True)
    logging.getLogger("celery").setLevel(logging.INFO)


settings = get_settings()

broker_url = settings.celery_broker_url or settings.redis_url
backend_url = settings.celery_result_backend or settings.redis_url
use_ssl = broker_url.startswith("rediss://") or backend_url.startswith("rediss://")

celery_app = Celery(
    "corphub",
    broker=broker_url,
    backend=backend_url,
)

celery_config = {
    "task_serializer": "json",
    "accept_content": ["json"],
    "result_serializer": "json",
    "timezone": "UTC",
    "enable_utc": True,
    "imports": [
        "corphub.tasks.media_tasks",
    ],
    "task_ignore_result": True,
    # Connection resilience settings
    "broker_connection_retry": True,
    "broker_connection_retry_on_startup": True,
    "broker_connection_max_retries": 10,
    "broker_pool_limit": 10,
    "broker_transport_options": {
        "visibility_timeout": 3600,
        "socket_timeout": 5,
        "socket_connect_timeout": 5,
        "retry_on_timeout": True,
    },
    "task_acks_late": True,
    "task_reject_on_worker_lost": True,
    "worker_prefetch_multiplier": 1,
}

if use_ssl:
    logger.info("Configuring SSL (CERT_NONE) for rediss:// connections")
    celery_config["broker_use_ssl"] = {"ssl_cert_reqs": ssl.CERT_NONE}
    celery_config["redis_backend_use_ssl"] = {"ssl_cert_reqs": ssl.CERT_NONE}

celery_app.conf.update(celery_config)

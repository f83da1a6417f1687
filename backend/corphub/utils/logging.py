"""
Logging setup with Rich output.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGER = "corphub"
_configured = False


def setup_logging(level: str = "INFO", force: bool = False) -> None:
    """
    Configure the root logger with a Rich handler.

    Subsequent calls are no-ops unless ``force`` is set.
    """
    global _configured
    if _configured and not force:
        return

    console = Console(stderr=True)
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console,
                rich_tracebacks=True,
                show_path=False,
                markup=False,
            )
        ],
        force=True,
    )

    # Quiet down chatty libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("celery").setLevel(logging.INFO)
    logging.getLogger("kombu").setLevel(logging.WARNING)
    logging.getLogger("amqp").setLevel(logging.WARNING)

    _configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger namespaced under ``corphub``."""
    if not name:
        return logging.getLogger(_ROOT_LOGGER)
    if name.startswith(_ROOT_LOGGER):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER}.{name}")

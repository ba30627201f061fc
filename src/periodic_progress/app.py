"""Composition root: logging setup and progress store activation."""

import logging
import os
from collections.abc import Callable
from datetime import datetime

import structlog

from periodic_progress.config import Settings, get_settings
from periodic_progress.storage.backend import InMemoryBackend, JsonFileBackend, KeyValueBackend
from periodic_progress.storage.progress_store import ProgressStore

logger = structlog.get_logger()


def configure_logging(production: bool | None = None, level: str = "INFO") -> None:
    """Configure structlog.

    Args:
        production: JSON output when True, console output otherwise. Read
            from the ``ENV`` environment variable when omitted.
        level: Minimum log level name.
    """
    if production is None:
        production = os.getenv("ENV", "development").lower() == "production"

    if production:
        # Production: JSON format for machine parsing
        renderer = structlog.processors.JSONRenderer()
    else:
        # Development: console format for human readability
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def build_backend(settings: Settings) -> KeyValueBackend:
    if settings.storage_backend == "memory":
        return InMemoryBackend()
    return JsonFileBackend(settings.storage_dir)


def build_progress_store(
    settings: Settings, clock: Callable[[], datetime] | None = None
) -> ProgressStore:
    """Create a progress store wired to the configured backend."""
    return ProgressStore(
        build_backend(settings),
        key=settings.progress_key,
        clock=clock,
        raise_on_write_error=settings.raise_on_write_error,
    )


def activate(
    settings: Settings | None = None,
    now: datetime | None = None,
    clock: Callable[[], datetime] | None = None,
) -> ProgressStore:
    """Start a progress session for one app activation.

    Builds the store and counts the activation toward the daily streak.
    Call once per activation and hand the returned store to consumers.
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level)
    store = build_progress_store(settings, clock=clock)
    store.update_streak(now)
    logger.info(
        "progress_activated",
        backend=settings.storage_backend,
        streak=store.progress.current_streak_days,
    )
    return store

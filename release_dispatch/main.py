"""Dispatch Process Entry Point — startup and shutdown around a run of dispatch passes.

Invariants:
    - Logging configured from Settings before the first pass logs anything
    - The process-wide DatabaseSessionManager is built from Settings exactly once
      per startup and disposed on shutdown
    - startup() fails fast with DatabaseError when the database is unreachable

Design Decisions:
    - Async context manager lifecycle (same shape as an ASGI lifespan): the host
      scheduler wraps its pass loop in `async with lifespan():`
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from release_dispatch.config import Settings, get_settings
from release_dispatch.core.errors import DatabaseError
from release_dispatch.infrastructure.database import (
    DatabaseSessionManager, init_db_from_settings,
)
from release_dispatch.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def configure(settings: Settings | None = None) -> DatabaseSessionManager:
    """Set up logging and the session manager. No IO."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)
    return init_db_from_settings(settings)


async def startup(settings: Settings | None = None) -> DatabaseSessionManager:
    manager = configure(settings)
    if not await manager.health_check():
        await manager.dispose()
        raise DatabaseError("Database unreachable at startup", "connect")
    logger.info("Release dispatch started")
    return manager


@asynccontextmanager
async def lifespan(settings: Settings | None = None) -> AsyncIterator[DatabaseSessionManager]:
    """Startup/shutdown lifecycle."""
    manager = await startup(settings)
    try:
        yield manager
    finally:
        await manager.dispose()
        logger.info("Release dispatch shutting down")

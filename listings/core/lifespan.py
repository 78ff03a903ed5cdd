"""Application lifespan: startup and shutdown wiring.

No business logic here; only infrastructure (logging, cache, schema,
tracing, DB engine).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from listings.core.config import get_settings
from listings.infrastructure.cache.redis_cache import CacheService
from listings.infrastructure.persistence import database
from listings.shared.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
    setup_logging,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, Redis (if enabled; unreachable Redis leaves the cache
    off, it never blocks startup), schema creation (if database_auto_create),
    tracing (if enabled). Shutdown runs in reverse.
    """
    settings = get_settings()
    setup_logging()

    if settings.redis_enabled:
        cache = CacheService()
        await cache.connect()
        app.state.cache = cache
    else:
        app.state.cache = None
        logger.info("Redis disabled; every cache read is a miss")

    engine = database.get_engine()
    if settings.database_auto_create:
        await database.init_models(engine)
        logger.info("Database schema created from ORM metadata")

    if settings.telemetry_enabled:
        telemetry = TelemetryConfig.from_settings(settings)
        telemetry.start(settings, app, engine, with_redis=app.state.cache is not None)
        set_telemetry(telemetry)

    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    if app.state.cache is not None:
        await app.state.cache.disconnect()

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)

    await database.dispose_engine()
    logger.info("%s stopped", settings.app_name)

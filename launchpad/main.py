"""LaunchPad API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LaunchPadError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database engine and cache client created on startup, disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Database manager and cache client built once here; services receive them by
      constructor injection and never import the module singletons
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from launchpad.api.error_handlers import register_error_handlers
from launchpad.api.routes import health
from launchpad.config import get_settings
from launchpad.infrastructure.database import close_db, init_db
from launchpad.infrastructure.observability import setup_logging
from launchpad.infrastructure.redis_cache import close_cache, init_cache

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    init_cache(
        settings.redis_url,
        socket_timeout_seconds=settings.cache_socket_timeout_seconds,
    )
    logger.info("LaunchPad API started")
    yield
    await close_cache()
    await close_db()
    logger.info("LaunchPad API shutting down")


app = FastAPI(
    title="LaunchPad API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)

register_error_handlers(app)

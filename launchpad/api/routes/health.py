"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up (liveness)
    - GET /api/v1/health/ready raises StoreError if the database is unreachable:
      the error handler renders it as 503 with Retry-After (readiness)
    - An unreachable cache reports "degraded" but stays ready (the cache is fail-open)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - Module attributes read at call time: init_db/init_cache run after import
"""

import logging
from fastapi import APIRouter, status

from launchpad.core.errors import StoreError
from launchpad.infrastructure import database, redis_cache

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "launchpad-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — database required, cache optional."""
    db_ok = (
        await database.db_manager.health_check() if database.db_manager else False
    )
    cache_ok = (
        await redis_cache.cache.health_check() if redis_cache.cache else False
    )
    checks = {
        "database": "healthy" if db_ok else "unavailable",
        "cache": "healthy" if cache_ok else "degraded",
    }
    if not db_ok:
        logger.warning(f"Readiness failed: {checks}")
        raise StoreError("database unreachable", "health_check")
    return {"status": "ready", "checks": checks}

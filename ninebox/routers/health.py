"""
Health Check Router - Nine-Box Talent Review
ninebox/routers/health.py

Returns health status of the document store and the optional Redis cache.
The cache is optional: an unreachable Redis degrades the status but only an
unusable document store makes the service unhealthy.
"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Dict
from datetime import datetime, timezone

import redis

from ninebox.config import settings
from ninebox.core.dependencies import get_document_store
from ninebox.repositories.base import JsonDocumentStore
from ninebox.services.redis_cache import RedisCache

router = APIRouter(tags=["Health"])


#  Schemas


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    dependencies: Dict[str, str]


#  Dependency Health Checks


def check_store(store: JsonDocumentStore) -> str:
    """Check the JSON document can be read and parsed."""
    if store.is_healthy():
        return f"healthy (File: {store.path})"
    return f"unhealthy: {store.path} unreadable or corrupt"


def check_redis() -> str:
    """Check Redis connection health."""
    if not settings.CACHE_ENABLED:
        return "disabled"
    try:
        cache = RedisCache(settings.REDIS_URL)
        cache.ping()
        cache.client.close()
        return "healthy"
    except redis.RedisError as e:
        error_msg = str(e)[:100] + "..." if len(str(e)) > 100 else str(e)
        return f"unhealthy: {error_msg}"


#  Main Health Check Route


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        200: {"description": "Document store healthy (cache may be degraded)"},
        503: {"description": "Document store unusable"},
    },
    summary="Health check",
    description="Check health of the document store and the Redis cache.",
)
async def health_check(store: JsonDocumentStore = Depends(get_document_store)):
    dependencies = {
        "store": check_store(store),
        "redis": check_redis(),
    }

    store_healthy = dependencies["store"].startswith("healthy")
    cache_ok = dependencies["redis"] in ("healthy", "disabled")

    if not store_healthy:
        overall = "unhealthy"
    elif not cache_ok:
        overall = "degraded"
    else:
        overall = "healthy"

    response = HealthResponse(
        status=overall,
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        dependencies=dependencies,
    )

    if store_healthy:
        return response
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )


#  Individual Service Health Checks


@router.get("/health/store", summary="Check the document store")
async def health_store(store: JsonDocumentStore = Depends(get_document_store)):
    result = check_store(store)
    return {
        "service": "store",
        "status": result,
        "is_healthy": result.startswith("healthy"),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/redis", summary="Check Redis connection")
async def health_redis():
    result = check_redis()
    return {
        "service": "redis",
        "status": result,
        "is_healthy": result == "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

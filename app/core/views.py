"""
Liveness endpoint for load balancers and container health checks.
"""

import logging

from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import JsonResponse

logger = logging.getLogger(__name__)

CACHE_CHECK_KEY = "health:check"


def _database_ok() -> bool:
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError:
        logger.error("Database unreachable from health check", exc_info=True)
        return False
    return True


def _cache_ok() -> bool:
    # Redis errors are swallowed by the cache backend (IGNORE_EXCEPTIONS),
    # so a failed round-trip is the only signal.
    cache.set(CACHE_CHECK_KEY, "1", timeout=5)
    return cache.get(CACHE_CHECK_KEY) == "1"


def health_check(request):
    """
    Report database and cache reachability.

    Responds 200 when the database answers and 503 otherwise. The cache is
    reported but does not affect the status code.
    """
    database_ok = _database_ok()
    body = {
        "status": "healthy" if database_ok else "unhealthy",
        "database": "connected" if database_ok else "disconnected",
        "cache": "connected" if _cache_ok() else "disconnected",
    }
    return JsonResponse(body, status=200 if database_ok else 503)

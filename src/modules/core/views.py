"""Liveness endpoint used by the load balancer and the deploy pipeline."""

import time
from typing import Any, Callable, Dict

import structlog
from django.core.cache import cache
from django.db import connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger()

CACHE_CHECK_KEY = "_health_check"


def _check_database() -> None:
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()


def _check_cache() -> None:
    cache.set(CACHE_CHECK_KEY, "ok", 10)
    if cache.get(CACHE_CHECK_KEY) != "ok":
        raise ConnectionError("Cache read failed")


SERVICE_CHECKS: Dict[str, Callable[[], None]] = {
    "database": _check_database,
    "cache": _check_cache,
}


def _run_check(name: str, check: Callable[[], None]) -> Dict[str, Any]:
    start = time.monotonic()
    try:
        check()
    except Exception:
        logger.error("health_check.service_down", service=name)
        return {"status": "down"}
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    """GET /health: 200 when every backing service answers, 503 otherwise."""
    services = {name: _run_check(name, check) for name, check in SERVICE_CHECKS.items()}
    healthy = all(service["status"] == "up" for service in services.values())
    state = "healthy" if healthy else "unhealthy"

    logger.info("health_check.completed", status=state)

    return JsonResponse(
        {
            "status": state,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )

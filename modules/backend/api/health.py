"""
Health Check Endpoints.

Provides liveness and readiness checks.

Endpoints:
- /health: Liveness check (process running)
- /health/ready: Readiness check (database reachable)
"""

import asyncio
from typing import Any

from fastapi import APIRouter, HTTPException
from sqlalchemy import text

from modules.backend.core.config import get_app_config
from modules.backend.core.database import get_session_factory
from modules.backend.core.logging import get_logger
from modules.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)


async def check_database() -> dict[str, Any]:
    """
    Check database connectivity.

    Returns:
        Dict with status, latency, and optional error message
    """
    try:
        start = utc_now()
        async with get_session_factory()() as session:
            await session.execute(text("SELECT 1"))

        latency_ms = int((utc_now() - start).total_seconds() * 1000)

        return {
            "status": "healthy",
            "latency_ms": latency_ms,
        }

    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {
            "status": "unhealthy",
            "error": str(e),
        }


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 if the process is running.
    No dependency checks - this endpoint should always respond quickly.
    """
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check() -> dict[str, Any]:
    """
    Readiness check.

    Returns 200 if the database answers within the configured timeout,
    503 otherwise.
    """
    timeout = get_app_config().application.timeouts.database

    try:
        async with asyncio.timeout(timeout):
            db_result = await check_database()
    except TimeoutError:
        db_result = {"status": "unhealthy", "error": f"timed out after {timeout}s"}

    checks = {"database": db_result}

    if db_result.get("status") != "healthy":
        logger.warning("Readiness check failed", extra={"checks": checks})
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "checks": checks,
                "timestamp": utc_now().isoformat(),
            },
        )

    return {
        "status": "healthy",
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }

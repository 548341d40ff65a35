"""Health check endpoint — public, no auth required."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from lunara.config import get_settings
from lunara.cycle.config_loader import get_cycle_config

router = APIRouter(tags=["system"])
logger = logging.getLogger("lunara.health")


@router.get("/health")
async def health_check() -> dict:
    """Liveness check. Returns 200 if the API process is up.

    Also reports whether the cycle configuration loads.
    """
    settings = get_settings()
    config_version = None
    try:
        config_version = get_cycle_config().version
    except (FileNotFoundError, ValueError) as exc:
        logger.warning("Health check config load failed: %s", exc)

    return {
        "status": "healthy" if config_version else "degraded",
        "version": settings.app_version,
        "environment": settings.environment,
        "cycle_config": config_version or "unavailable",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

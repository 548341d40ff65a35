"""Lunara API — FastAPI application entry point.

Run locally:
    uvicorn lunara.main:app --reload --port 8000
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lunara.config import get_settings
from lunara.cycle.config_loader import get_cycle_config
from lunara.cycle.legend import check_legend_contrast, legend_items
from lunara.middleware.security import SecurityHeadersMiddleware
from lunara.routers import cycle, health

# ---------- Logging ----------

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger("lunara")


# ---------- Lifespan ----------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup / shutdown hooks."""
    settings = get_settings()
    logger.info(
        "Starting Lunara API v%s [%s]",
        settings.app_version,
        settings.environment,
    )
    config = get_cycle_config()
    check_legend_contrast(legend_items(config), config.legend.min_contrast_ratio)
    yield
    logger.info("Lunara API shut down")


# ---------- App factory ----------

def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Lunara API",
        description=(
            "Menstrual cycle calendar — phase projection, cycle status, "
            "and phase-based nutrition and exercise guidance."
        ),
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ---------- Middleware (order matters — outermost first) ----------

    # Security headers on every response
    app.add_middleware(SecurityHeadersMiddleware, settings=settings)

    # CORS — must be the innermost middleware so it can handle preflight
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # ---------- Health check (outside v1 prefix — always at /health) ----------
    app.include_router(health.router)

    # ---------- API v1 routes ----------
    app.include_router(cycle.router, prefix="/api/v1")

    return app


app = create_app()

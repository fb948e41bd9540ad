"""
SimpleGrid FastAPI application.

Entry point for the API server.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.config import settings
from backend.routes import grids as grid_routes

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log what is being served. Grid configs are built at import, so a bad one fails before this."""
    logger.info(
        "SimpleGrid starting (environment=%s, grids=%s, max_rows=%d)",
        settings.ENVIRONMENT,
        ", ".join(sorted(grid_routes.GRIDS)),
        settings.GRID_MAX_ROWS,
    )
    yield
    logger.info("SimpleGrid stopped")


app = FastAPI(
    title="SimpleGrid",
    lifespan=lifespan,
    docs_url="/docs" if settings.ENVIRONMENT == "development" else None,
    redoc_url=None,
)

# Register routes
app.include_router(grid_routes.router)


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}

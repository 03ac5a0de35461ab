"""
main.py — 5S tracker FastAPI application entry point.

Start with: uvicorn fives.main:app --reload --port 8000
(run from the repository root)
"""
import logging
import os
import subprocess
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fives.config import settings
from fives.database import get_db
from fives.errors import register_exception_handlers

# ---------------------------------------------------------------------------
# Logging — configured before anything else
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


def run_migrations() -> None:
    """Apply pending Alembic revisions (schema and the life-area catalog seed)."""
    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        capture_output=True,
        text=True,
        cwd=PACKAGE_DIR,
    )
    if result.returncode != 0:
        logger.error("Alembic migration failed:\n%s", result.stderr)
        raise RuntimeError(f"Alembic migration failed: {result.stderr}")
    logger.info("Alembic: %s", result.stdout.strip() or "No pending migrations")


@asynccontextmanager
async def lifespan(app: FastAPI):
    run_migrations()
    logger.info("5S tracker v%s starting up", settings.app_version)
    yield

    from fives.database import async_engine
    await async_engine.dispose()
    logger.info("5S tracker shutting down")


app = FastAPI(
    title="5S Self API",
    version=settings.app_version,
    description=(
        "Personal 5S tracker (Filter, Organize, Clean, Standardize, Sustain) "
        "for one life area at a time, keyed by an anonymous client session id."
    ),
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Handlers before routers
register_exception_handlers(app)


@app.get("/api/health", tags=["System"])
async def health_check(db: AsyncSession = Depends(get_db)) -> dict:
    """Service status plus a database round trip. Needs no session header."""
    try:
        await db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as exc:
        logger.warning("Health check database ping failed: %s", exc)
        database = "unavailable"
    return {
        "status": "ok" if database == "ok" else "degraded",
        "database": database,
        "version": settings.app_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ---------------------------------------------------------------------------
# Feature routers
# ---------------------------------------------------------------------------
from fives.daily.routes import router as daily_router
from fives.progress.routes import router as progress_router
from fives.review.routes import router as review_router
from fives.steps.routes import router as steps_router

app.include_router(progress_router)
app.include_router(steps_router)
app.include_router(daily_router)
app.include_router(review_router)

"""
main.py — Tax calculator FastAPI application.

Start with: uvicorn taxcalc.main:app --reload --port 5000

Startup applies pending Alembic migrations; shutdown closes the pool.
"""
import logging
import os
import subprocess
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taxcalc.config import settings
from taxcalc.errors import install_error_handlers

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


def _upgrade_schema() -> None:
    """alembic upgrade head, run from the package dir where alembic.ini lives."""
    migration = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        capture_output=True,
        text=True,
        cwd=_PACKAGE_DIR,
    )
    if migration.returncode != 0:
        logger.error("Schema upgrade failed:\n%s", migration.stderr)
        raise RuntimeError(f"Schema upgrade failed: {migration.stderr}")
    logger.info("Schema up to date %s", migration.stdout.strip())


@asynccontextmanager
async def lifespan(app: FastAPI):
    _upgrade_schema()
    logger.info("Tax calculator v%s ready", settings.app_version)
    yield

    from taxcalc.database import async_engine
    await async_engine.dispose()
    logger.info("Tax calculator stopped")


app = FastAPI(
    title="Income Tax Calculator API",
    version=settings.app_version,
    description=(
        "Old vs New regime income tax for FY 2023-24, with tax-saving "
        "suggestions and each user's last ten calculations."
    ),
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url=None,
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "x-auth-token"],
)

install_error_handlers(app)


@app.get("/api/health", tags=["System"])
async def health_check() -> dict:
    return {
        "status": "ok",
        "version": settings.app_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


from taxcalc.auth.routes import router as auth_router  # noqa: E402
from taxcalc.tax_engine.routes import router as tax_router  # noqa: E402

app.include_router(auth_router)
app.include_router(tax_router)

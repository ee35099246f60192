"""
Site Admin API - FastAPI Application

Main entry point for the visitor tracking and site administration backend.
"""

from contextlib import asynccontextmanager
from pathlib import Path

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from siteadmin.analytics import InvalidPeriod, InvalidTimeFilter
from siteadmin.api import router as api_router
from siteadmin.core.config import get_browser_list, get_settings
from siteadmin.db.base import Base
from siteadmin.db import models_registry  # noqa: F401 - Import to register models
from siteadmin.db.session import async_session_maker, engine
from siteadmin.services.user_service import UserService
from siteadmin.workers.log_retention import LogRetentionWorker

settings = get_settings()

scheduler: AsyncIOScheduler | None = None


async def init_database() -> None:
    """Initialize database tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized")


async def init_default_user() -> None:
    """Create default admin user if not exists."""
    async with async_session_maker() as db:
        user_service = UserService(db)
        existing = await user_service.get_by_username(settings.default_admin_username)
        if not existing:
            await user_service.create_user(
                username=settings.default_admin_username,
                password=settings.default_admin_password,
                is_superuser=True,
            )
            logger.info("Default admin user created")


async def start_background_services() -> None:
    """Start the scheduler for periodic tasks."""
    global scheduler

    if settings.log_retention_days <= 0:
        logger.info("Log retention disabled - scheduler not started")
        return

    scheduler = AsyncIOScheduler()

    # Log retention cleanup (daily at midnight)
    log_retention = LogRetentionWorker()
    scheduler.add_job(
        log_retention.run,
        "cron",
        hour=0,
        minute=0,
        id="log_retention",
    )

    scheduler.start()
    logger.info("Scheduler started")


async def stop_background_services() -> None:
    """Stop background services."""
    global scheduler

    if scheduler:
        scheduler.shutdown()
        scheduler = None
        logger.info("Scheduler stopped")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Starting Site Admin API...")

    # Ensure data directory exists
    Path(settings.data_save_folder).mkdir(parents=True, exist_ok=True)

    await init_database()
    await init_default_user()
    logger.info(f"Loaded {len(get_browser_list())} browser list entries")
    await start_background_services()

    logger.info(f"Site Admin API started on port {settings.port}")

    yield

    logger.info("Shutting down Site Admin API...")
    await stop_background_services()
    logger.info("Site Admin API stopped")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Site Admin API - Visitor Tracking and Metrics",
    lifespan=lifespan,
    docs_url="/swagger" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)


@app.exception_handler(InvalidPeriod)
@app.exception_handler(InvalidTimeFilter)
async def invalid_period_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Reject unknown time periods and time filter codes."""
    logger.warning(f"Rejected request to {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400,
        content={"Code": 400, "Message": str(exc)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"Code": 500, "Message": str(exc)},
    )


app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "siteadmin.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=settings.workers,
    )

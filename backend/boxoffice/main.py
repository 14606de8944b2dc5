"""
Box Office API - Main Application Entry Point

Walk-up cinema booking backend:
- Queue tickets numbered from durable history
- Multi-seat reservations committed all-or-nothing, never double-booked
- Redis caching of the show catalog
- Structured logging with request correlation
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from boxoffice.core.config import get_settings
from boxoffice.core.logging import setup_logging, get_logger
from boxoffice.core.metrics import metrics_endpoint
from boxoffice.api.router import api_router
from boxoffice.api.errors import register_exception_handlers
from boxoffice.api.middleware import RequestLoggingMiddleware
from boxoffice.db.base import Base
from boxoffice import models  # noqa: F401 - register tables on Base.metadata
from boxoffice.db.session import engine, SessionLocal, dispose_engine
from boxoffice.services.cache_service import get_redis, close_redis, get_cache_stats, invalidate_show_cache
from boxoffice.services.catalog_service import seed_catalog

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    # Alembic owns the schema in production; this only fills gaps in a fresh kiosk database
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if settings.SEED_DEMO_CATALOG and await seed_catalog(SessionLocal):
        await invalidate_show_cache()

    redis_client = await get_redis()
    if redis_client:
        logger.info("redis_ready")
    else:
        logger.warning("redis_unavailable", message="Running without cache")

    yield

    await close_redis()
    await dispose_engine()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Walk-up cinema booking API with conflict-safe seat reservations",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    cache_stats = await get_cache_stats()
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "cache": cache_stats,
    }


@app.get("/metrics", tags=["Health"], include_in_schema=False)
def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }

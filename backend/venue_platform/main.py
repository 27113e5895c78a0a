"""
Venue Platform API - Main Application Entry Point

A venue booking and content platform:
- Appointment booking with double-booking prevention
- Owner-or-admin authorization across every resource
- Background sweeper completing past appointments
- Redis caching of public venue listings
- Structured logging with request correlation and Prometheus metrics
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from venue_platform.core.config import get_settings
from venue_platform.core.logging import setup_logging, get_logger
from venue_platform.core.metrics import metrics_endpoint
from venue_platform.api.router import api_router
from venue_platform.api.errors import register_exception_handlers
from venue_platform.api.middleware import RequestLoggingMiddleware
from venue_platform.db.session import AsyncSessionLocal
from venue_platform.services.cache_service import get_redis, close_redis, get_cache_stats
from venue_platform.services.sweeper import AppointmentSweeper

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

    redis_client = await get_redis()
    if redis_client:
        logger.info("redis_ready")
    else:
        logger.warning("redis_unavailable", message="Running without cache")

    sweeper = AppointmentSweeper(AsyncSessionLocal, settings.SWEEPER_INTERVAL_SECONDS)
    app.state.sweeper = sweeper
    if settings.SWEEPER_ENABLED:
        sweeper.start()

    yield

    await sweeper.stop()
    await close_redis()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Venue booking and content platform API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
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
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "cache": await get_cache_stats(),
    }


@app.get("/metrics", include_in_schema=False)
async def metrics():
    return metrics_endpoint()


@app.get("/api", tags=["Root"])
async def api_root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "endpoints": {
            "auth": "/api/auth",
            "users": "/api/users",
            "venues": "/api/venues",
            "appointments": "/api/appointments",
            "blogs": "/api/blogs",
            "partners": "/api/partners",
            "reviews": "/api/reviews",
            "contacts": "/api/contacts",
            "dashboard": "/api/dashboard",
            "chat": "/api/chat",
        },
    }

"""
Court Booking API - Main Application Entry Point

Members reserve one-hour court slots, optionally with a coach, under dynamic
pricing:
- Serialized, availability-checked booking creation (no double-booking)
- Coach approval workflow and blackout slots
- Weekend surcharge and peak-hour multiplier pricing with frozen snapshots
- Structured logging with request correlation and Prometheus metrics
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from courtbook.api.middleware import RequestLoggingMiddleware
from courtbook.api.router import api_router
from courtbook.core.config import get_settings
from courtbook.core.logging import get_logger, setup_logging
from courtbook.core.metrics import metrics_endpoint
from courtbook.services.engine_factory import get_engine

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
        booking_store=settings.BOOKING_STORE,
    )

    engine = get_engine()
    await engine.store.initialize()
    logger.info(
        "engine_ready",
        courts=len(engine.catalog.list_courts()),
        coaches=len(engine.catalog.list_coaches()),
    )

    yield

    await engine.store.close()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Court booking API with dynamic pricing and coach approval",
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

app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "booking_store": settings.BOOKING_STORE,
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

"""Cabin Rentals — FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cabin_rentals.api.errors import setup_exception_handlers
from cabin_rentals.api.v1.auth import router as auth_router
from cabin_rentals.api.v1.cabins import router as cabins_router
from cabin_rentals.api.v1.pricing import router as pricing_router
from cabin_rentals.api.v1.reservations import router as reservations_router
from cabin_rentals.config import settings
from cabin_rentals.pricing import default_calendar

# Configure root logger so all cabin_rentals.* loggers output to stderr.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    # Startup: build the holiday calendar once for the whole process
    calendar = default_calendar()
    logger.info("Holiday calendar loaded: %d dates for years %s", len(calendar), calendar.years)
    yield
    # Shutdown: dispose engine connections
    from cabin_rentals.database import engine

    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Cabin inventory, availability, pricing and reservations.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

# Routers
app.include_router(auth_router)
app.include_router(cabins_router)
app.include_router(pricing_router)
app.include_router(reservations_router)


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }

"""eTuition API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ETuitionError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, charge provider, and identity provider initialized on startup,
      database engine disposed on shutdown, via the lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Identity provider init is best-effort: token routes work without it
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from etuition.api.error_handlers import register_error_handlers
from etuition.api.routes import (
    analytics, applications, auth, health, payments, tuitions, users,
)
from etuition.config import get_settings
from etuition.infrastructure.database import close_db, init_db
from etuition.infrastructure.identity_provider import init_identity_provider
from etuition.infrastructure.observability import log_requests, setup_logging
from etuition.infrastructure.payment_provider import init_charge_provider

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    init_charge_provider(
        settings.stripe_secret_key,
        max_retries=settings.payment_max_retries,
        base_delay_ms=settings.payment_base_delay_ms,
        max_delay_ms=settings.payment_max_delay_ms,
    )
    init_identity_provider(settings.firebase_service_key)
    logger.info("eTuition API started")
    yield
    await close_db()
    logger.info("eTuition API shutting down")


app = FastAPI(
    title="eTuition API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(log_requests)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(tuitions.router)
app.include_router(applications.router)
app.include_router(payments.router)
app.include_router(analytics.router)

register_error_handlers(app)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.port)

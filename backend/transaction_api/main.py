"""Partner Transaction API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers registered via api.error_handlers
    - Partner registry built at startup; an invalid registry fails startup
    - CORS only added when origins are configured

Run: uvicorn transaction_api.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from transaction_api.api.dependencies import get_partner_registry
from transaction_api.api.error_handlers import register_error_handlers
from transaction_api.api.routes import health, transactions
from transaction_api.config import get_settings
from transaction_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    registry = get_partner_registry()
    logger.info(f"Partner Transaction API started with {len(registry)} partner(s)")
    yield
    logger.info("Partner Transaction API shutting down")


app = FastAPI(
    title="Partner Transaction API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["POST", "GET"],
        allow_headers=["*"],
    )

app.include_router(health.router)
app.include_router(transactions.router)

register_error_handlers(app)

"""Vault API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map VaultError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan context manager owns startup (logging, DB) and shutdown
    - Error handlers live in api/error_handlers.py; this module only wires
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vault.api.error_handlers import register_error_handlers
from vault.api.routes import accounts, exchange, health
from vault.config import get_settings
from vault.infrastructure.database import init_db
from vault.infrastructure.observability import setup_logging

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
    logger.info("Vault API started")
    yield
    logger.info("Vault API shutting down")


app = FastAPI(
    title="Vault Exchange API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(exchange.router)
app.include_router(accounts.router)

register_error_handlers(app)

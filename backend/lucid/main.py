"""Lucid API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LucidError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan; SQLite tables created on first run
    - The shared provider HTTP client is closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Single-user local backend: it holds the user's key and calls providers directly
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from lucid.infrastructure.database import init_db
from lucid.infrastructure.observability import setup_logging
from lucid.config import get_settings
from lucid.api.dependencies import close_provider_hub
from lucid.api.error_handlers import register_error_handlers
from lucid.api.routes import catalog, config, daily, health, journal, readings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(settings.database_url)
    if settings.database_url.startswith("sqlite"):
        await manager.create_tables()
    logger.info("Lucid API started")
    yield
    logger.info("Lucid API shutting down")
    await close_provider_hub()
    await manager.dispose()


app = FastAPI(title="Lucid Tarot API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(config.router)
app.include_router(catalog.router)
app.include_router(readings.router)
app.include_router(daily.router)
app.include_router(journal.router)

# Static files: serves the web UI build when present
# Mounted AFTER API routes so /api/v1/* takes precedence
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")

"""Portfolio API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PortfolioError → {message, errors?} responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager, disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: cleaner cleanup
    - Error detail exposure decided once from settings.environment and stored on
      app.state (read by the catch-all handler)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio.api.error_handlers import register_error_handlers
from portfolio.api.routes import blog, contact, health
from portfolio.config import get_settings
from portfolio.infrastructure.database import init_db
from portfolio.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if not settings.admin_key:
        logger.warning("ADMIN_KEY not set: admin endpoints will reject every request")
    if not settings.mail_enabled:
        logger.warning("SMTP credentials not set: contact notifications disabled")
    logger.info(f"Portfolio API started ({settings.environment})")
    yield
    await manager.dispose()
    logger.info("Portfolio API shutting down")


app = FastAPI(title="Portfolio API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.state.expose_error_details = settings.is_development

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(blog.router)
app.include_router(contact.router)

register_error_handlers(app)

"""Employee API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map EmployeeAPIError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Upstream client created on startup and closed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py and are registered here
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from employee_api.api.error_handlers import register_error_handlers
from employee_api.api.routes import employees, health
from employee_api.config import get_settings
from employee_api.infrastructure.employee_client import (
    close_employee_client,
    init_employee_client,
)
from employee_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_employee_client(
        settings.employee_api_url,
        max_attempts=settings.upstream_max_attempts,
        base_delay_ms=settings.upstream_base_delay_ms,
        backoff_multiplier=settings.upstream_backoff_multiplier,
        max_delay_ms=settings.upstream_max_delay_ms,
        timeout_seconds=settings.upstream_timeout_seconds,
    )
    logger.info("Employee API started")
    yield
    close_employee_client()
    logger.info("Employee API shutting down")


app = FastAPI(
    title="Employee API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(employees.router)

register_error_handlers(app)

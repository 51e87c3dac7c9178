import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from employee_api import __version__
from employee_api.adapters.upstream_http import build_http_client
from employee_api.api.deps import get_settings
from employee_api.api.exception_handlers import register_exception_handlers
from employee_api.api.routes import employees
from employee_api.config import LoggingSettings

logger = logging.getLogger(__name__)


def configure_logging(settings: LoggingSettings) -> None:
    logging.basicConfig(level=settings.level, format=settings.format)
    # basicConfig is a no-op when the server already installed handlers
    logging.getLogger("employee_api").setLevel(settings.level)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    # Bad config fails the boot
    settings = get_settings()
    configure_logging(settings.logging)

    upstream = settings.upstream
    app.state.http_client = build_http_client(
        connect_timeout=upstream.connect_timeout_ms / 1000,
        read_timeout=upstream.read_timeout_ms / 1000,
    )
    logger.info("Configured upstream employee API at %s", upstream.base_url)

    try:
        yield
    finally:
        await app.state.http_client.aclose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Employee Directory API",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # --- Routers ---
    app.include_router(employees.router, prefix="/employees", tags=["Employees"])

    register_exception_handlers(app)

    @app.get("/health")
    def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "service": "employee-api"}

    return app


app = create_app()

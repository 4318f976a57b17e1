"""Products CRUD API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to the {message, code} envelope
    - Startup fails hard if the database does not answer within the connect timeout
    - Migrations applied once at startup, before the first request is served
    - Shutdown waits at most server_shutdown_timeout seconds for in-flight requests
"""

import asyncio
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from products_crud.api.error_handlers import register_error_handlers
from products_crud.api.routes import health, products
from products_crud.config import get_settings
from products_crud.infrastructure.database import init_db
from products_crud.infrastructure.migrations import run_migrations
from products_crud.infrastructure.observability import log_requests, setup_logging

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
    try:
        await manager.wait_until_ready(settings.database_connect_timeout)
        await asyncio.to_thread(run_migrations, settings.database_url)
        logger.info("Products API started")
        yield
        logger.info("Products API shutting down")
    finally:
        await manager.close()


app = FastAPI(
    title="Products CRUD API", version="1.0.0", lifespan=lifespan,
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
app.include_router(products.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the app with graceful shutdown."""
    settings = get_settings()
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.server_port,
        timeout_graceful_shutdown=settings.server_shutdown_timeout,
        log_config=None,
    )


if __name__ == "__main__":
    run()

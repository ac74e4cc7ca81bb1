"""
Shopping List FastAPI Application
Main entry point with middleware, configuration and store lifecycle
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio
from typing import Optional

from api.routes import health, products

from adapters import mongo_adapter

from app.config import settings

from api.middleware import (
    RequestLoggingMiddleware,
    validation_exception_handler,
    http_exception_handler,
    service_validation_exception_handler,
    not_found_exception_handler,
    store_exception_handler,
    general_exception_handler,
)
from app.exceptions import ServiceValidationError, NotFoundError, StoreError

# Setup logging with configured level and format
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()), format=settings.log_format
)
_logger = logging.getLogger("shoppinglist.main")


async def connect_store() -> None:
    """
    Open the process-wide MongoDB client, retrying transient failures.

    A missing connection string is fatal immediately; connection failures
    are retried ``db_init_attempts`` times before giving up.
    """
    if not settings.mongo_uri:
        _logger.critical("MONGO_URI is not set; cannot start without a product store")
        raise RuntimeError("MONGO_URI is not configured")

    last_exc: Optional[Exception] = None
    for attempt in range(1, settings.db_init_attempts + 1):
        try:
            # pymongo is blocking; keep the event loop free while it connects
            await anyio.to_thread.run_sync(
                lambda: mongo_adapter.connect(
                    settings.mongo_uri,
                    settings.mongo_db_name,
                    settings.mongo_collection,
                    settings.mongo_timeout_ms,
                )
            )
            _logger.info("MongoDB connection established")
            return
        except Exception as exc:
            last_exc = exc
            _logger.warning(
                "MongoDB connect attempt %d/%d failed: %s",
                attempt,
                settings.db_init_attempts,
                exc,
            )
            if attempt < settings.db_init_attempts:
                await anyio.sleep(settings.db_init_delay_sec)

    _logger.error(
        "MongoDB connection failed after %d attempts", settings.db_init_attempts
    )
    raise RuntimeError("Could not connect to MongoDB") from last_exc


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup and shutdown.
    Opens the store connection once and closes it on shutdown.
    """
    _logger.info(f"Starting {settings.app_name} in {settings.environment.value} mode")

    await connect_store()

    try:
        yield
    finally:
        _logger.info(f"Shutting down {settings.app_name}")
        mongo_adapter.close()


# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    version=settings.app_version,
    description=settings.api_description,
    lifespan=lifespan,
    debug=settings.debug,
    openapi_url=(
        f"{settings.api_prefix}/openapi.json" if not settings.is_production() else None
    ),
    docs_url=f"{settings.api_prefix}/docs" if not settings.is_production() else None,
    redoc_url=f"{settings.api_prefix}/redoc" if not settings.is_production() else None,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# Register exception handlers
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(ServiceValidationError, service_validation_exception_handler)
app.add_exception_handler(NotFoundError, not_found_exception_handler)
app.add_exception_handler(StoreError, store_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

app.include_router(health.router, prefix=settings.api_prefix)
app.include_router(products.router, prefix=settings.api_prefix)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )

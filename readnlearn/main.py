"""
FastAPI application setup for the ReadNLearn anchor service.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
import logging
import time
import uuid
from datetime import datetime, timezone
from contextlib import asynccontextmanager
from typing import Optional

from readnlearn.config import Settings, get_settings
from readnlearn.core.db import db_session, init_db
from readnlearn.core.error_handlers import setup_error_handlers
from readnlearn.core.exceptions import ServiceUnavailableError
from readnlearn.core.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup."""
    logger.info(f"Starting {app.title} v{app.version}")

    try:
        init_db()
        logger.info("Application startup complete")
    except Exception as e:
        logger.error(f"Application startup failed: {e}", exc_info=True)
        raise

    yield

    logger.info("Application shutdown complete")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Application settings (the current global settings if None)

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()

    configure_logging(
        level=settings.log_level.value,
        json_format=settings.log_json,
        fmt=settings.log_format,
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        **settings.get_cors_config()
    )

    app.state.error_handler = setup_error_handlers(app)

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log requests and responses with timing information."""
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()

        logger.info(
            f"Request {request_id} started: {request.method} {request.url.path}",
            extra={
                'request_id': request_id,
                'method': request.method,
                'path': request.url.path,
                'client_ip': request.client.host if request.client else 'unknown'
            }
        )

        response = await call_next(request)

        processing_time = (time.time() - start_time) * 1000

        logger.info(
            f"Request {request_id} completed: {response.status_code} ({processing_time:.2f}ms)",
            extra={
                'request_id': request_id,
                'status_code': response.status_code,
                'processing_time_ms': processing_time
            }
        )
        response.headers["X-Request-ID"] = request_id

        return response

    from readnlearn.api import phrase_router, reader_router
    app.include_router(reader_router)
    app.include_router(phrase_router)

    @app.get("/")
    async def root():
        """Root endpoint for basic health check."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "status": "running"
        }

    @app.get("/health")
    async def health_check():
        """Database connectivity and error statistics."""
        health_details = {"database": {"status": "unknown"}}

        try:
            with db_session() as session:
                session.execute(text("SELECT 1"))
            health_details["database"] = {"status": "healthy", "connection": "ok"}
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            health_details["database"] = {"status": "unhealthy", "error": str(e)}

        if health_details["database"]["status"] != "healthy":
            raise ServiceUnavailableError("database", health_details["database"])

        health_details["errors"] = app.state.error_handler.get_error_statistics()
        return {
            "status": "healthy",
            "version": settings.app_version,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "details": health_details
        }

    return app


# Create application instance
app = create_app()

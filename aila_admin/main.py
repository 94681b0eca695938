"""
FastAPI application bootstrap with: \n
- Lifespan-managed initialization (upload directory, tables of both databases) \n
- CORS configured for the dashboard \n
- Service error handlers rendering `{"detail": ...}` \n
- Health, account, book, directory, conversation routers; KYC router when enabled \n
- Static file serving of uploads under `/uploads` \n

Environment contract (from `settings`): \n
- CREATE_TABLES: create missing tables during startup. \n
- KYC_ENABLED: mount the KYC routes. \n
- FRONTEND_URL: allowed CORS origin. \n
- UPLOAD_DIR: directory served under `/uploads`. \n
- HOST / PORT: bind address used by `main()`. \n
"""

import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

import aila_admin.database.entities  # noqa: F401  registers every model on its metadata
from aila_admin.api.routers import accounts, books, conversations, directory, health, kyc
from aila_admin.database.config.config import settings
from aila_admin.database.config.connection_engine import (
    connection_engine,
    lawyer_connection_engine,
    lawyer_metadata,
    metadata,
)
from aila_admin.errors import ServiceError
from aila_admin.storage.files import UPLOADS_ROUTE

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)
"""Logger of the application bootstrap."""


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    App lifespan manager.

    Notes
    ------------
    - On startup (before yielding):
        * Ensure the upload directory exists.
        * If CREATE_TABLES: create missing tables on the main and lawyer databases.
    - On shutdown (after yielding):
        * Dispose of the engines' connection pools.
    """
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    if settings.CREATE_TABLES:
        metadata.create_all(connection_engine)
        lawyer_metadata.create_all(lawyer_connection_engine)
        logger.info("Database tables ready")
    else:
        logger.info("Skipping table creation (CREATE_TABLES=false)")

    try:
        yield
    finally:
        connection_engine.dispose()
        if lawyer_connection_engine is not connection_engine:
            lawyer_connection_engine.dispose()
        logger.info("App shutting down")


async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Server error"})


def create_app() -> FastAPI:
    """
    Build the FastAPI application.

    The KYC router is included only when `settings.KYC_ENABLED` is true.
    """
    app = FastAPI(title="AILA Admin API", lifespan=lifespan)

    # -----------------------
    # CORS configuration
    # -----------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # -----------------------
    # API routes
    # -----------------------
    app.include_router(health.router)
    app.include_router(accounts.router)
    app.include_router(books.router)
    app.include_router(directory.router)
    app.include_router(conversations.router)
    if settings.KYC_ENABLED:
        app.include_router(kyc.router)
    else:
        logger.info("KYC routes disabled (KYC_ENABLED=false)")

    # -----------------------
    # Uploaded files
    # -----------------------
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    app.mount(UPLOADS_ROUTE, StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")
    return app


app = create_app()
"""ASGI application served by uvicorn (`aila_admin.main:app`)."""


def main() -> None:
    """Run the API with uvicorn on HOST:PORT."""
    uvicorn.run("aila_admin.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()

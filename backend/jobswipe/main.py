"""
JobSwipe API - Main Application Entry Point

This module initializes the FastAPI application with:
- Logging configuration and database schema initialization
- CORS middleware for frontend communication
- Prometheus metrics middleware
- Domain error → HTTP response mapping
- API router registration

Architecture:
    FastAPI App
    ├── Lifespan Management (startup)
    ├── CORS Middleware
    ├── Prometheus Middleware (/metrics)
    └── API Router
        ├── /auth - Session login/logout
        ├── /profile - Profile and resume upserts
        ├── /swipe - Next job, decision, undo
        ├── /history - Swipe and application history
        └── /admin - Job catalogue and application status
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from jobswipe.config import get_settings
from jobswipe.database import init_db
from jobswipe.exceptions import JobSwipeError, StorageError
from jobswipe.api import api_router
from jobswipe.middleware import setup_metrics

logger = logging.getLogger(__name__)
settings = get_settings()


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle events.

    Startup:
        1. Configure logging
        2. Initialize database tables

    Yields:
        Control to the application during its runtime
    """
    configure_logging()
    await init_db()
    logger.info("JobSwipe API started")
    yield


app = FastAPI(
    title="JobSwipe API",
    description="Swipe-to-apply job feed API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_metrics(app)


@app.exception_handler(JobSwipeError)
async def jobswipe_error_handler(request: Request, exc: JobSwipeError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Storage error on {request.method} {request.url.path}: {exc}")
    error = StorageError("storage failure, please try again")
    return JSONResponse(status_code=error.status_code, content={"detail": error.message})


app.include_router(api_router)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}

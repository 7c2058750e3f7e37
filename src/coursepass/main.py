"""Main entry point for the CoursePass application."""

from __future__ import annotations

import logging
from datetime import timedelta

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from coursepass import __version__
from coursepass.api.v1 import (
    auth_router,
    courses_router,
    nonce_router,
    purchases_router,
    users_router,
)
from coursepass.core.errors import CoursePassError
from coursepass.core.settings import settings
from coursepass.db.session import create_tables
from coursepass.services.maintenance import ExpirySweeper
from coursepass.services.nonce_store import NonceStore

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description="Wallet-signature authentication and course access authorization",
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(nonce_router, prefix="/api/v1")
app.include_router(courses_router, prefix="/api/v1")
app.include_router(purchases_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")

# The nonce store lives for the whole process; its sweep starts with the app.
app.state.nonce_store = NonceStore(
    ttl=timedelta(seconds=settings.nonce_ttl_seconds),
    sweep_interval_seconds=settings.nonce_sweep_interval_seconds,
)
app.state.expiry_sweeper = None


@app.exception_handler(CoursePassError)
async def handle_coursepass_error(request: Request, exc: CoursePassError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    content = {"detail": "Internal server error"}
    if settings.debug:
        content["error"] = str(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


@app.on_event("startup")
async def on_startup() -> None:
    if settings.auto_create_tables:
        create_tables()
    await app.state.nonce_store.start()
    sweeper = ExpirySweeper(interval_seconds=settings.session_sweep_interval_seconds)
    await sweeper.start()
    app.state.expiry_sweeper = sweeper
    logger.info("%s %s started", settings.app_name, __version__)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    sweeper: ExpirySweeper | None = getattr(app.state, "expiry_sweeper", None)
    if sweeper:
        await sweeper.stop()
        app.state.expiry_sweeper = None
    await app.state.nonce_store.stop()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": f"{settings.app_name} API",
        "version": __version__,
        "description": "Wallet-signature authentication and course access authorization",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("coursepass.main:app", host="0.0.0.0", port=8000, reload=settings.debug)

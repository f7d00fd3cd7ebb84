"""
FastAPI entrypoint for the SoundVault backend application.
"""
import logging
import os
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from soundvault.core.config import settings
from soundvault.core.errors import ErrorKind, ServiceError, UNKNOWN_ERROR, status_code_for
from soundvault.core.logging_config import setup_logging
from soundvault.core.utils import format_error
from soundvault.api.router import api_router

setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="SoundVault API",
    description="Backend API for personal music streaming with collaborative playlists",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Serve uploaded user pictures at /static
static_dir = settings.UPLOAD_DIR
if os.path.exists(static_dir):
    app.mount("/static", StaticFiles(directory=static_dir), name="static")

# Include API routes
app.include_router(api_router, prefix="/api")


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Answer classified failures with their fixed code."""
    logger.error(f"{request.method} {request.url.path}: {exc.kind.value} {exc.code}")
    return JSONResponse(
        status_code=status_code_for(exc.kind, settings.ERROR_STATUS_MODE),
        content=format_error(exc.code)
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and path parameters answer UNKNOWN_ERROR like any other failure."""
    logger.error(f"{request.method} {request.url.path}: invalid request {exc.errors()}")
    return JSONResponse(
        status_code=status_code_for(ErrorKind.VALIDATION_ERROR, settings.ERROR_STATUS_MODE),
        content=format_error(UNKNOWN_ERROR)
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """Store failures are not classified: answer UNKNOWN_ERROR."""
    logger.error(f"{request.method} {request.url.path}: database error {exc}", exc_info=True)
    return JSONResponse(
        status_code=status_code_for(ErrorKind.UNKNOWN_ERROR, settings.ERROR_STATUS_MODE),
        content=format_error(UNKNOWN_ERROR)
    )


@app.exception_handler(Exception)
async def unknown_error_handler(request: Request, exc: Exception):
    """Catch-all for anything not classified."""
    logger.error(f"{request.method} {request.url.path}: unexpected error {exc}", exc_info=True)
    return JSONResponse(
        status_code=status_code_for(ErrorKind.UNKNOWN_ERROR, settings.ERROR_STATUS_MODE),
        content=format_error(UNKNOWN_ERROR)
    )


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "SoundVault API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}

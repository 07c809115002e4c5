"""FastAPI application factory for the document intake service"""

from __future__ import annotations

import os
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from intake import __version__
from intake.auth.service import AuthService
from intake.auth.store import IdentityRepository, InMemoryIdentityRepository
from intake.auth.tokens import TokenService
from intake.core.config import Settings
from intake.uploads.receiver import FileReceiver
from intake.uploads.service import UploadService
from intake.utils.exceptions import IntakeError
from intake.utils.logger import get_logger, setup_logging

from .auth_routes import router as auth_router
from .upload_routes import router as upload_router

logger = get_logger(__name__)


async def _intake_error_handler(request: Request, exc: IntakeError) -> JSONResponse:
    logger.info(
        "Request failed",
        path=request.url.path,
        status=exc.status_code,
        error=type(exc).__name__,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Framework errors (malformed body, unknown route) use the same body shape
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path)
    return JSONResponse(status_code=500, content={"error": "Unknown error occurred"})


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[IdentityRepository] = None,
) -> FastAPI:
    """
    Build the application.

    Settings default to Settings.from_env(), which raises ConfigError when
    the signing secret is missing, so a misconfigured process never starts.
    """
    settings = settings.check() if settings is not None else Settings.from_env()
    setup_logging(settings.log_level, settings.log_format)

    tokens = TokenService(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=settings.token_ttl,
    )
    receiver = FileReceiver(settings.upload_dir)
    receiver.ensure_directory()

    app = FastAPI(
        title="Document Intake",
        description="Signup, login and authenticated document upload",
        version=__version__,
    )
    app.state.settings = settings
    app.state.tokens = tokens
    app.state.auth = AuthService(
        repository or InMemoryIdentityRepository(),
        tokens,
        bcrypt_rounds=settings.bcrypt_rounds,
    )
    app.state.uploads = UploadService(receiver, enforce_options=settings.enforce_options)

    cors_origins = [o.strip() for o in (os.getenv("CORS_ORIGINS") or "*").split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(IntakeError, _intake_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    app.include_router(auth_router)
    app.include_router(upload_router)

    @app.get("/api/health")
    async def health_check():
        return {"status": "healthy"}

    # Stored files are served back by generated name
    app.mount("/uploads", StaticFiles(directory=receiver.upload_dir), name="uploads")

    logger.info("Intake app ready", upload_dir=str(receiver.upload_dir))
    return app

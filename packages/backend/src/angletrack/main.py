"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Settings is built once here (or passed in by tests) and the
token issuer, stores and services hang off app.state, so there is no
process-wide secret or file path anywhere else.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from angletrack import __version__
from angletrack.api import api_router
from angletrack.config import Settings
from angletrack.errors import AngleTrackError
from angletrack.services.record_service import RecordService
from angletrack.services.upload_service import PUBLIC_PREFIX

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    settings: Settings = app.state.settings
    logger.info(
        "angletrack.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
        data_dir=str(settings.data_dir),
    )
    yield
    logger.info("angletrack.shutdown")


async def angletrack_error_handler(request: Request, exc: AngleTrackError) -> JSONResponse:
    """Render domain errors as {"detail", "code"}.

    Server-side faults get a generic message; the cause is logged.
    """
    if exc.status_code >= 500:
        logger.error(
            "angletrack.server_error",
            code=exc.code,
            error=exc.message,
            cause=repr(exc.__cause__) if exc.__cause__ else None,
        )
        detail = "Internal server error"
    else:
        detail = exc.message

    headers = None
    if exc.status_code == 401:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": detail, "code": exc.code},
        headers=headers,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")}
        for e in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content={"detail": "Invalid request", "code": "validation_error", "errors": errors},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build and return the FastAPI application."""
    settings = settings or Settings()

    app = FastAPI(
        title="AngleTrack",
        description="Body-angle tracking backend — measurements, photos and goals per user",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.records = RecordService.from_settings(settings)
    app.state.tokens = app.state.records.tokens

    # ── Middleware stack ──────────────────────────────────────
    # Request flow: RequestId → Security → CORS → handler

    from angletrack.middleware.request_id import RequestIdMiddleware
    from angletrack.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware, uploads_prefix=PUBLIC_PREFIX)
    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(AngleTrackError, angletrack_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(api_router)

    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount(
        PUBLIC_PREFIX,
        StaticFiles(directory=settings.upload_dir),
        name="uploads",
    )

    return app


# uvicorn entry point: `uvicorn angletrack.main:create_app --factory`

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.failure_codes import INTERNAL_ERROR_MESSAGE, METHOD_NOT_ALLOWED_MESSAGE
from app.logging_utils import configure_logging

logger = logging.getLogger(__name__)


def _validate_env() -> None:
    """
    Validate all required environment variables at startup.

    Runs before any service or document store client is initialised.
    Raises RuntimeError listing every missing or invalid variable so the
    operator can fix all problems in one restart cycle.

    Rules:
    - APP_MODE must be 'cloud' or 'local'.
    - RANKING_API_KEY must be set; empty strings are not accepted.
    - Count source, sort direction and store backend must be recognised values.
    - The in-memory store backend is only permitted when APP_MODE=local.
    """

    from app.config import get_app_settings, get_ranking_settings
    from db.config import get_document_store_settings, load_env_files

    load_env_files()

    errors: list[str] = []

    # --- APP_MODE -------------------------------------------------------
    app_mode: str | None = None
    try:
        app_mode = get_app_settings().mode
    except RuntimeError as exc:
        errors.append(str(exc))

    # --- Ranking settings -----------------------------------------------
    try:
        ranking = get_ranking_settings()
    except RuntimeError as exc:
        errors.append(str(exc))
    else:
        if not ranking.api_key:
            errors.append(
                "RANKING_API_KEY is not set. The HTTP trigger requires a shared secret. "
                "Empty strings are not permitted."
            )

    # --- Document store -------------------------------------------------
    try:
        store_settings = get_document_store_settings()
    except RuntimeError as exc:
        errors.append(str(exc))
    else:
        if store_settings.backend == "memory" and app_mode == "cloud":
            errors.append(
                "DOCUMENT_STORE_BACKEND=memory is only permitted when APP_MODE=local."
            )

    if errors:
        raise RuntimeError(
            "Startup validation failed: missing or invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Build the document store and optional scheduler on boot; shut them down on exit."""
    from app.config import get_ranking_settings, get_scheduler_settings
    from db.client import create_document_store

    if getattr(application.state, "document_store", None) is None:
        application.state.document_store = create_document_store()
        logger.info("Document store initialised")

    schedule = get_scheduler_settings()
    scheduler = None
    if schedule.enabled:
        from app.scheduler.jobs import build_scheduler

        scheduler = build_scheduler(
            application.state.document_store, get_ranking_settings(), schedule
        )
        scheduler.start()
        logger.info("Scheduler started with %d jobs", len(scheduler.get_jobs()))
    try:
        yield
    finally:
        if scheduler is not None:
            scheduler.shutdown(wait=True)
            logger.info("Scheduler shut down")


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render every HTTP error as ``{"message": ...}``."""
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = METHOD_NOT_ALLOWED_MESSAGE
    elif isinstance(exc.detail, str) and exc.detail:
        message = exc.detail
    else:
        message = INTERNAL_ERROR_MESSAGE
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Generic 500 for anything a route did not map itself."""
    logger.error("Unhandled exception on %s: %s", request.url.path, exc.__class__.__name__)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": INTERNAL_ERROR_MESSAGE},
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    configure_logging()

    from app.config import get_cors_settings

    application = FastAPI(
        title="Ranking Aggregation API",
        version="1.0.0",
        lifespan=_lifespan,
    )
    application.state.document_store = None

    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(get_cors_settings().allow_origins),
        allow_methods=["POST"],
        allow_headers=["*"],
    )
    application.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    application.add_exception_handler(Exception, _unhandled_exception_handler)

    from app.api.routers import callable_router, ranking_router

    application.include_router(ranking_router)
    application.include_router(callable_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()

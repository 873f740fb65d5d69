from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import CodecError, IoError, NotFoundError, StorageError, ValidationError
from .paths import resolve_data_paths
from .routers import pomodoro as pomodoro_router
from .routers import settings as settings_router
from .routers import todos as todos_router
from .settings import Settings, get_settings
from .store import DocumentStore

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "todos", "description": "List, create, update, delete and toggle Todo items."},
    {"name": "pomodoro", "description": "Pomodoro timer configuration and session history."},
    {"name": "settings", "description": "User settings and window geometry."},
]


def configure_logging(level: str) -> None:
    """Attach a stream handler to the root logger once and set the package level."""
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("focusdesk").setLevel(level)


# PUBLIC_INTERFACE
def open_store(settings: Settings) -> DocumentStore:
    """
    Resolve the data directories and bootstrap the document store.

    Raises:
        DirectoryResolutionError, IoError, CodecError: the store is unusable; startup must abort.
    """
    paths = resolve_data_paths(settings.data_root, app_name=settings.app_name)
    store = DocumentStore.initialize(paths)
    logger.info("Document store ready at %s", paths.data_dir)
    return store


def _error_response(status_code: int, exc: StorageError, detail: Any = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": type(exc).__name__,
            "message": str(exc),
            "detail": detail if detail is not None else str(exc),
        },
    )


# PUBLIC_INTERFACE
def create_app(store: Optional[DocumentStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        store: an already initialized DocumentStore. When omitted, one is opened from
            settings during application startup.
        settings: application settings; read from the environment when omitted.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Logging is configured by the running server, not by importing this module.
        configure_logging(settings.log_level)
        if getattr(app.state, "store", None) is None:
            app.state.store = open_store(settings)
        yield

    app = FastAPI(
        title="Focusdesk Backend",
        description="Local command API for the todo list, pomodoro timer and user settings.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.store = store

    # Configure CORS based on settings (CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return a consistent JSON structure for request validation errors.

        Response format:
            {
                "error": "ValidationError",
                "detail": [... pydantic/fastapi error details ...],
                "message": "Request validation failed"
            }
        """
        return JSONResponse(
            status_code=422,
            content={
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": exc.errors(),
            },
        )

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return _error_response(422, exc)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return _error_response(404, exc)

    @app.exception_handler(CodecError)
    @app.exception_handler(IoError)
    async def storage_failure_handler(request: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return _error_response(500, exc)

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check(request: Request):
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health and the data directory in use.
        """
        return {"message": "Healthy", "dataDir": str(request.app.state.store.data_dir)}

    app.include_router(todos_router.router)
    app.include_router(pomodoro_router.router)
    app.include_router(settings_router.router)
    return app


# ASGI entry point: `uvicorn focusdesk.main:app`
app = create_app()

"""
Main entrypoint for the Gym Management API.

``create_app`` builds the FastAPI application: it configures logging,
installs CORS for the browser client, mounts the member routes under
``/api`` and answers malformed requests with the standard envelope.
The application instance is created at import time as ``app`` so it can
be served directly::

    uvicorn gym_members_api.app.main:app --reload

The ``members`` table is created on startup if it does not exist yet.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .api.router import router as api_router
from .core.config import settings
from .core.db import init_db
from .core.logging_config import setup_logging
from .schemas.envelope import failure

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("%s %s started", settings.project_name, settings.api_version)
    yield


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured application instance ready to be served.
    """
    # Logging first so that everything below can log safely.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        detail = "; ".join(
            f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}" for error in errors
        )
        logger.warning("Invalid request to %s %s: %s", request.method, request.url.path, detail)
        return failure(status.HTTP_400_BAD_REQUEST, "Invalid request", detail)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    def liveness() -> str:
        return "Gym Management API is running"

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()

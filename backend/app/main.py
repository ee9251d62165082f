"""FastAPI application entrypoint."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.api import api_router
from app.core.config import Settings, get_settings
from app.core.exceptions import CredentialError, PersistenceError
from app.db.session import connect, init_database

logger = logging.getLogger(__name__)

static_dir = Path(__file__).parent.parent.parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    client = app.state.mongo_client
    owns_client = client is None
    if owns_client:
        try:
            client = await connect(settings)
        except PersistenceError as exc:
            logger.error("Startup aborted: %s", exc)
            raise
        app.state.mongo_client = client

    try:
        app.state.database = await init_database(client, settings.database_name)
        logger.info("%s started", settings.app_name)
        yield
    finally:
        if owns_client:
            client.close()
            app.state.mongo_client = None
        logger.info("%s stopped", settings.app_name)


async def credential_error_handler(_: Request, exc: CredentialError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        field = ".".join(str(part) for part in errors[0]["loc"] if part != "body")
        message = f"{field}: {errors[0]['msg']}" if field else errors[0]["msg"]
    else:
        message = "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})


def create_app(settings: Settings | None = None, mongo_client=None) -> FastAPI:
    """Build the application; ``mongo_client`` replaces the configured server when given."""

    settings = settings or get_settings()
    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.mongo_client = mongo_client

    app.add_exception_handler(CredentialError, credential_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    # Serve the built frontend if present; API routes are matched first
    if static_dir.exists() and static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")

    return app


app = create_app()

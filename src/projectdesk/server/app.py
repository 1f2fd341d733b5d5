"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from projectdesk import __version__
from projectdesk.config import Config
from projectdesk.exceptions import (
    IdentityProviderError,
    NotFoundError,
    ProjectDeskError,
    UnauthenticatedError,
)
from projectdesk.server.routers import projects, system, tasks
from projectdesk.server.services import Services, build_services
from projectdesk.utils.logger import get_logger

logger = get_logger()

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization"]


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _format_validation_errors(errors: list[dict]) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in errors
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map the error taxonomy onto HTTP responses of the form ``{error: message}``."""

    @app.exception_handler(UnauthenticatedError)
    async def unauthenticated_handler(request: Request, exc: UnauthenticatedError):
        return _error(401, str(exc))

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        logger.info("%s %s: %s", request.method, request.url.path, exc)
        return _error(404, str(exc))

    @app.exception_handler(IdentityProviderError)
    async def identity_error_handler(request: Request, exc: IdentityProviderError):
        logger.warning("identity provider error on %s: %s", request.url.path, exc)
        return _error(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error(422, _format_validation_errors(exc.errors()))

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return _error(422, _format_validation_errors(exc.errors()))

    @app.exception_handler(ProjectDeskError)
    async def store_error_handler(request: Request, exc: ProjectDeskError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
        return _error(500, str(exc))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
        return _error(500, str(exc))


def create_app(config: Config | None = None, services: Services | None = None) -> FastAPI:
    """Build the HTTP application.

    Args:
        config: Server configuration; defaults are used when omitted
        services: Pre-built services (tests pass fakes here); built from
            *config* when omitted

    Returns:
        Configured FastAPI application
    """
    config = config or Config()
    if services is None:
        services = build_services(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("server started with prefix %s", config.server.path_prefix)
        yield
        await services.close()
        logger.info("server stopped")

    app = FastAPI(title="Project Management API", version=__version__, lifespan=lifespan)
    app.state.services = services
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )
    register_exception_handlers(app)

    prefix = config.server.path_prefix.rstrip("/")
    for router in (system.router, projects.router, tasks.router):
        app.include_router(router, prefix=prefix)

    return app

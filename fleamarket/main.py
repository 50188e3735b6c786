"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from fleamarket.api import auth, items
from fleamarket.config import Settings, get_settings
from fleamarket.database import create_db_engine, create_session_factory
from fleamarket.errors import ConfigurationError, ErrorKind, ServiceError
from fleamarket.services.listings import InMemoryListingRepository

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def check_settings(settings: Settings) -> None:
    """Fail startup when the process cannot sign tokens."""
    if not settings.jwt_secret:
        raise ConfigurationError("JWT_SECRET must be set")


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Map a classified service error to its status code."""
    status_code = STATUS_BY_KIND[exc.kind]
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    headers = {"WWW-Authenticate": "Bearer"} if exc.kind is ErrorKind.UNAUTHENTICATED else None
    return JSONResponse(
        status_code=status_code, content={"detail": exc.public_message}, headers=headers
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed requests with 400 without echoing validator output."""
    logger.info(f"Invalid request to {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"detail": "Invalid request"}
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Hide store failures behind a generic 500."""
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": "Unexpected error"}
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application for the given settings."""
    settings = settings or get_settings()
    check_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Handle application startup and shutdown events."""
        logger.info(
            f"Starting fleamarket ({settings.environment}, listings: {settings.listing_backend})"
        )
        yield
        app.state.engine.dispose()

    app = FastAPI(
        title="Fleamarket API",
        description="Classifieds marketplace: accounts and item listings",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = create_db_engine(settings.database_url)
    app.state.session_factory = create_session_factory(app.state.engine)
    # The in-memory backend is one store per process; the database backend
    # gets a fresh repository per request session.
    app.state.listing_repository = (
        InMemoryListingRepository() if settings.listing_backend == "memory" else None
    )

    # CORS middleware for development
    if settings.is_development:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)

    # Register routers
    app.include_router(auth.router)
    app.include_router(items.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "environment": settings.environment}

    return app


logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()

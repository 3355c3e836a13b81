"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from discuss.config import Settings
from discuss.interface.api.routes import comments, health
from discuss.util.di.container import create_container, setup_di
from discuss.util.error import ConfigurationError
from discuss.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; the production container by default

    Raises:
        ConfigurationError: If production runs with the default JWT secret
    """
    settings = Settings()

    if (
        settings.environment == "production"
        and settings.auth.jwt_secret == "CHANGE_ME_IN_PRODUCTION"
    ):
        raise ConfigurationError("AUTH__JWT_SECRET", "must be set in production")

    app_instance = FastAPI(
        title="Discussion API",
        description="Threaded comments for posts",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container or create_container(settings))

    app_instance.include_router(health.router)
    app_instance.include_router(comments.router)

    return app_instance

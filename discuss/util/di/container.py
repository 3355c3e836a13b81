"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from discuss.config import Settings
from discuss.util.di import PROVIDERS, get_provider


def create_container(settings: Settings | None = None) -> AsyncContainer:
    """Build production container (all prod implementations).

    Args:
        settings: Settings to serve; read from the environment when omitted

    Returns:
        Configured DI container with production providers
    """
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(
        *provider_instances,
        FastapiProvider(),
        context={Settings: settings or Settings()},
    )


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app so DishkaRoute handlers can resolve.

    Args:
        app: FastAPI application
        container: DI container
    """
    setup_dishka(container, app)

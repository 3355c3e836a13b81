"""Logfire setup for the discussion service.

Everything in ``discuss`` logs through logfire directly; this module only
configures where that output goes and hooks the libraries we trace.
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from discuss.config import ObservabilitySettings, Settings


def should_send(observability: ObservabilitySettings) -> bool:
    """Decide whether telemetry leaves the process.

    An explicit OBSERVABILITY__SEND_TO_LOGFIRE wins; otherwise a token
    implies sending and no token keeps output on the console.
    """
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def logfire_options(settings: Settings) -> dict[str, Any]:
    """Build the keyword arguments passed to ``logfire.configure``."""
    observability = settings.observability
    options: dict[str, Any] = {
        "service_name": observability.service_name,
        "service_version": settings.version,
        "environment": settings.environment,
        "send_to_logfire": should_send(observability),
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }
    if observability.logfire_token:
        options["token"] = observability.logfire_token
    return options


def configure_logfire(settings: Settings) -> None:
    """Configure logfire once per process, before the app is built.

    Args:
        settings: Application settings
    """
    options = logfire_options(settings)
    logfire.configure(**options)

    logfire.info(
        "Observability configured",
        service_name=options["service_name"],
        version=settings.version,
        environment=settings.environment,
        send_to_logfire=options["send_to_logfire"],
        has_token="token" in options,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace incoming requests (headers carry the session cookie, so skip them)."""
    logfire.instrument_fastapi(app, capture_headers=False)
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries on the async engine.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
    logfire.info("SQLAlchemy instrumented")


def instrument_httpx() -> None:
    """Trace calls made by ``HttpCommentRepository``."""
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")

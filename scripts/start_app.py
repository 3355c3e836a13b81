#!/usr/bin/env python3
"""Serve the comments API, reporting startup failures to Logfire."""

import sys

import logfire
import uvicorn

from discuss.config import Settings
from discuss.util.logging import setup_logging
from discuss.util.observability import configure_logfire, instrument_httpx


def main() -> int:
    """Configure observability, then hand over to uvicorn."""
    settings = Settings()

    # Before the app is imported, so config errors are reported too
    configure_logfire(settings)
    setup_logging(settings)
    instrument_httpx()

    with logfire.span(
        "start_app",
        environment=settings.environment,
        git_sha=settings.git_sha,
        port=settings.port,
    ):
        try:
            uvicorn.run(
                "discuss.interface.api.app:create_app",
                factory=True,
                host=settings.host,
                port=settings.port,
                log_level="debug" if settings.debug else "info",
            )
        except Exception as e:
            logfire.error(
                "Application startup failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise

    return 0


if __name__ == "__main__":
    sys.exit(main())

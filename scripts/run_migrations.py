#!/usr/bin/env python3
"""Apply the comments schema migrations, reporting failures to Logfire."""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from discuss.config import Settings
from discuss.util.logging import setup_logging
from discuss.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def main(revision: str = "head") -> int:
    """Upgrade the database to ``revision``."""
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    with logfire.span("run_migrations", revision=revision):
        try:
            command.upgrade(Config(str(ALEMBIC_INI)), revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Re-raise so the container doesn't start with a broken schema
            raise

    logfire.info("Database migrations completed", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))

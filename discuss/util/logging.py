"""Stdlib logging setup.

Application code logs through Logfire. This only routes the records of
libraries that use ``logging`` directly (uvicorn, alembic, sqlalchemy) to
stdout at a level matching the environment.
"""

import logging
import sys

from discuss.config import Settings

# Chatty at INFO; raised to WARNING outside debug mode
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "sqlalchemy.engine")


def log_level_for(settings: Settings) -> int:
    """Pick the stdlib level for an environment.

    Debug always wins; production only reports warnings and above.
    """
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "production":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure application logging.

    Args:
        settings: Application settings
    """
    level = log_level_for(settings)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    if not settings.debug:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("discuss").setLevel(level)
    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )

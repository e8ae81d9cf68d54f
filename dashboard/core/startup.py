"""Startup checks run from the application lifespan."""

from __future__ import annotations

import logging
from typing import Any

from dashboard.core.config import Config, get_config
from dashboard.core.logging_config import configure_logging
from dashboard.database.db import get_active_database_url, verify_database_connection

logger = logging.getLogger(__name__)


def describe_database(config: Config) -> dict[str, Any]:
    """Loggable summary of the bound database. Never includes credentials."""
    scheme = get_active_database_url().split("://", 1)[0]
    summary: dict[str, Any] = {
        "database_url_scheme": scheme,
        "db_connectivity_required": config.DB_CONNECTIVITY_REQUIRED,
    }
    if scheme.startswith("postgresql"):
        summary["database_ssl"] = config.DATABASE_SSL
        summary["db_pool_size"] = config.DB_POOL_SIZE
    return summary


async def validate_startup_config() -> None:
    """Check the database is reachable. Raise when connectivity is required."""
    config = get_config()
    summary = describe_database(config)

    if not await verify_database_connection():
        if config.DB_CONNECTIVITY_REQUIRED:
            raise RuntimeError("Database connectivity check failed.")
        logger.warning(
            "startup.database.unreachable",
            extra={"event": "startup.database.unreachable", **summary},
        )

    logger.info(
        "startup.config.validated",
        extra={"event": "startup.config.validated", "env": config.ENV, **summary},
    )


async def bootstrap() -> None:
    configure_logging()
    await validate_startup_config()

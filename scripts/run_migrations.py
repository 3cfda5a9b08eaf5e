#!/usr/bin/env python3
"""Run database migrations with Logfire error tracking."""

import sys
import logfire
from alembic import command
from alembic.config import Config

from concensor.util.di.container import load_settings
from concensor.util.logging import get_logger, setup_logging
from concensor.util.observability import configure_logfire

logger = get_logger(__name__)


def main() -> int:
    """Run migrations and log any errors to Logfire."""
    settings = load_settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info("Starting database migrations")

        alembic_cfg = Config("alembic.ini")
        alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)

        logger.info("Upgrading %s to head", settings.environment)
        command.upgrade(alembic_cfg, "head")

        logfire.info("Database migrations completed successfully")
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so a deploy fails instead of running against a broken schema
        raise


if __name__ == "__main__":
    sys.exit(main())

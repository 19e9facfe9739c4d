#!/usr/bin/env python3
"""Apply Alembic migrations up to head, reporting failures to Logfire."""

import sys

import logfire
from alembic import command
from alembic.config import Config

from journal.config import Settings
from journal.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    """Upgrade the schema to ``revision``."""
    settings = Settings()
    configure_logfire(settings)

    try:
        with logfire.span("run_migrations", revision=revision):
            # migrations/env.py reads the database URL from Settings
            command.upgrade(Config("alembic.ini"), revision)

        logfire.info("Database migrations completed", revision=revision)
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the deploy fails instead of serving a stale schema
        raise


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))

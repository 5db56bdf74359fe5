#!/usr/bin/env python3
"""Upgrade the discussion schema, reporting failures to Logfire.

Usage: ``python scripts/run_migrations.py [revision]`` (defaults to ``head``).
"""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from discuss.config import Settings
from discuss.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def main(argv: list[str]) -> int:
    settings = Settings()
    configure_logfire(settings)

    revision = argv[0] if argv else "head"
    alembic_cfg = Config(str(ALEMBIC_INI))

    with logfire.span("migrations.upgrade", revision=revision):
        try:
            command.upgrade(alembic_cfg, revision)
        except Exception as e:
            logfire.error(
                "Schema upgrade failed",
                revision=revision,
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # The deploy must stop rather than serve a half-migrated schema
            raise

    logfire.info("Schema upgraded", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))

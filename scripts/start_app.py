#!/usr/bin/env python3
"""Serve the discussion API with uvicorn."""

import sys

import logfire
import uvicorn

from discuss.config import Settings
from discuss.util.observability import configure_logfire


def main() -> int:
    settings = Settings()
    # Configured before uvicorn imports the app so import errors are reported
    configure_logfire(settings)

    reload = settings.environment == "development" and settings.debug
    logfire.info(
        "Starting discussion API",
        port=settings.port,
        environment=settings.environment,
        reload=reload,
    )

    try:
        uvicorn.run(
            "discuss.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            reload=reload,
            log_level="debug" if settings.debug else "info",
        )
    except Exception as e:
        logfire.error(
            "Discussion API failed to start",
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())

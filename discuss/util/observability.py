"""Logfire setup for the discussion API.

Services open their own spans (``with logfire.span("post_service.close", ...)``)
and emit structured events with ``logfire.info``/``logfire.warn``. This module
only wires the exporter and the framework instrumentation.
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from discuss.config import Settings

# Client-chosen idempotency keys can carry user text
_SCRUB_PATTERNS = ["idempotency[-_]key"]

# Path parameters copied onto the request span
_TRACED_PATH_PARAMS = ("slug", "forum_id", "post_id", "reply_id")


def _should_send(settings: Settings) -> bool:
    """Explicit flag wins, otherwise send only when a token is configured."""
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process.

    The git SHA from the deploy image is reported as the service version.
    Console output is verbose in debug mode only.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings)

    config_kwargs: dict[str, Any] = {
        "service_name": "discuss-api",
        "service_version": settings.git_sha,
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
        "scrubbing": logfire.ScrubbingOptions(extra_patterns=_SCRUB_PATTERNS),
    }
    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        git_sha=settings.git_sha,
        send_to_logfire=send_to_logfire,
        max_reply_depth=settings.forum.max_reply_depth,
    )


def _request_attributes(request, attributes: dict[str, Any]) -> dict[str, Any]:
    result = {**attributes}
    path_params = getattr(request, "path_params", None) or {}
    for name in _TRACED_PATH_PARAMS:
        if name in path_params:
            result[name] = path_params[name]
    if hasattr(request, "headers"):
        result["idempotent"] = "idempotency-key" in request.headers
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request, tagged with the forum, post or reply it targets.

    Headers are not captured: the auth cookie rides on every request.
    """
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
        excluded_urls="/health",
    )
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL statements issued by the repositories."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
    logfire.info("SQLAlchemy instrumented")

"""Production container for the discussion API."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka

from discuss.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the container with PostgreSQL persistence.

    Settings are read from the environment when the config provider first
    resolves them.
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app, container: AsyncContainer) -> None:
    """Attach the container to a FastAPI app so routes can use FromDishka."""
    setup_dishka(container, app)

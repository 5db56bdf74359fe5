"""Timeouts and retries for PostgreSQL repository calls.

Every repository call runs under a bounded timeout. Timeouts and
connection-level driver errors surface as UnavailableError. Reads are
retried with exponential backoff as long as the request transaction has
not written anything yet; writes are never retried here, clients retry
them with an idempotency key instead.
"""

import asyncio
import functools
from typing import Awaitable, Callable, TypeVar

import logfire
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.config import DatabaseSettings
from discuss.domain.error import UnavailableError

T = TypeVar("T")


class OperationGuard:
    """Applies timeout and retry policy to the calls of one session."""

    def __init__(self, session: AsyncSession, settings: DatabaseSettings) -> None:
        """Initialize guard.

        Args:
            session: Request-scoped database session
            settings: Database settings (timeout and retry policy)
        """
        self.session = session
        self.settings = settings
        self.has_written = False

    async def read(self, name: str, operation: Callable[[], Awaitable[T]]) -> T:
        """Run a read, retrying transient failures.

        Args:
            name: Operation name for errors and logs
            operation: Factory producing a fresh awaitable per attempt

        Returns:
            Result of the operation

        Raises:
            UnavailableError: If every attempt failed
        """
        attempt = 0
        while True:
            try:
                return await self._bounded(name, operation)
            except UnavailableError as e:
                # A rollback would discard earlier writes of this request
                if self.has_written or attempt >= self.settings.max_retries:
                    logfire.error(
                        "Database operation failed",
                        operation=name,
                        attempts=attempt + 1,
                        error=str(e),
                    )
                    raise

                delay = self.settings.retry_backoff_seconds * (2**attempt)
                attempt += 1
                logfire.warn(
                    "Retrying database read",
                    operation=name,
                    attempt=attempt,
                    max_retries=self.settings.max_retries,
                    delay=delay,
                )
                await self.session.rollback()
                await asyncio.sleep(delay)

    async def write(self, name: str, operation: Callable[[], Awaitable[T]]) -> T:
        """Run a write once under the timeout.

        Raises:
            UnavailableError: On timeout or connection failure
        """
        self.has_written = True
        return await self._bounded(name, operation)

    async def _bounded(self, name: str, operation: Callable[[], Awaitable[T]]) -> T:
        timeout = self.settings.operation_timeout_seconds
        try:
            return await asyncio.wait_for(operation(), timeout=timeout)
        except asyncio.TimeoutError:
            raise UnavailableError(name, f"timed out after {timeout}s")
        except (OperationalError, InterfaceError) as e:
            raise UnavailableError(name, str(e.orig or e)) from e
        except OSError as e:
            raise UnavailableError(name, str(e)) from e


def guarded_read(func):
    """Run a repository read method through ``self.guard``."""

    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        return await self.guard.read(
            func.__qualname__, lambda: func(self, *args, **kwargs)
        )

    return wrapper


def guarded_write(func):
    """Run a repository write method through ``self.guard``."""

    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        return await self.guard.write(
            func.__qualname__, lambda: func(self, *args, **kwargs)
        )

    return wrapper

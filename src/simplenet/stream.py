# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Cold single-value streams over one-shot coroutines.

A ``RequestStream`` does nothing until it is consumed. Every subscription (or
every ``async for``) starts a fresh call through the factory, so two consumers
never share an in-flight result. A subscription ends with exactly one of
value-then-completion or error; cancelling it stops the underlying call and
suppresses any delivery.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

ValueHandler = Callable[[T], None]
ErrorHandler = Callable[[BaseException], None]
CompletionHandler = Callable[[], None]

# the event loop only holds weak references to tasks
_running: set[asyncio.Task[None]] = set()


class Subscription:
    """Handle on one running subscription."""

    def __init__(self, task: asyncio.Task[None]):
        self._task = task

    @property
    def done(self) -> bool:
        return self._task.done()

    @property
    def cancelled(self) -> bool:
        return self._task.cancelled()

    def cancel(self) -> None:
        """Cancel the in-flight call; no value, error or completion is delivered afterwards."""
        self._task.cancel()

    async def wait(self) -> None:
        """Wait until the subscription has terminated (delivered, failed or cancelled)."""
        await asyncio.wait({self._task})
        if not self._task.cancelled() and self._task.exception() is not None:
            raise self._task.exception()  # type: ignore[misc]


class RequestStream(Generic[T]):
    """Cold stream emitting at most one value produced by ``factory``."""

    def __init__(self, factory: Callable[[], Awaitable[T]]):
        self._factory = factory

    def subscribe(
        self,
        on_value: ValueHandler[T],
        on_error: ErrorHandler | None = None,
        on_complete: CompletionHandler | None = None,
    ) -> Subscription:
        """
        Start a fresh call on the running event loop.

        Without ``on_error`` a failure is re-raised inside the subscription task and
        surfaces from ``Subscription.wait()``.
        """
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._deliver(on_value, on_error, on_complete))
        _running.add(task)
        task.add_done_callback(_running.discard)
        return Subscription(task)

    async def _deliver(
        self,
        on_value: ValueHandler[T],
        on_error: ErrorHandler | None,
        on_complete: CompletionHandler | None,
    ) -> None:
        try:
            value = await self._factory()
        except Exception as exc:
            if on_error is None:
                raise
            logger.debug("Stream subscription failed: %r", exc)
            on_error(exc)
            return
        on_value(value)
        if on_complete is not None:
            on_complete()

    async def first(self) -> T:
        """Run one fresh call and return its value."""
        return await self._factory()

    async def __aiter__(self) -> AsyncIterator[T]:
        yield await self._factory()


__all__ = ["RequestStream", "Subscription"]

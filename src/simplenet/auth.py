# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bearer-token providers for authenticated endpoints."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

logger = logging.getLogger(__name__)


class AuthProvider(Protocol):
    """Supplies the bearer credential for endpoints flagged ``is_authenticated``."""

    async def get_valid_token(self) -> str: ...

    async def refresh(self) -> str: ...


class SingleFlightTokenProvider(AuthProvider):
    """
    Cache a token and refresh it through ``fetch_token``.

    Concurrent callers that need a refresh share one in-flight fetch. A caller
    being cancelled does not cancel the shared fetch for the others.
    """

    def __init__(self, fetch_token: Callable[[], Awaitable[str]], *, token: str | None = None):
        self._fetch_token = fetch_token
        self._token = token
        self._refresh_task: asyncio.Task[str] | None = None
        self.fetch_count = 0

    @property
    def token(self) -> str | None:
        return self._token

    def invalidate(self) -> None:
        """Drop the cached token so the next request refreshes it."""
        self._token = None

    async def get_valid_token(self) -> str:
        if self._token is not None:
            return self._token
        return await self.refresh()

    async def refresh(self) -> str:
        task = self._refresh_task
        if task is None:
            task = asyncio.get_running_loop().create_task(self._fetch())
            self._refresh_task = task
            task.add_done_callback(self._clear_refresh_task)
        return await asyncio.shield(task)

    async def _fetch(self) -> str:
        self.fetch_count += 1
        logger.debug("Refreshing bearer token")
        token = await self._fetch_token()
        self._token = token
        return token

    def _clear_refresh_task(self, task: asyncio.Task[str]) -> None:
        if self._refresh_task is task:
            self._refresh_task = None


__all__ = ["AuthProvider", "SingleFlightTokenProvider"]

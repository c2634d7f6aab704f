# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process Transport implementations."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from .client import Transport
from .models import HttpRequest, HttpResponse

Handler = Callable[[HttpRequest], Awaitable[HttpResponse]]


class StubTransport(Transport):
    """Deterministic, programmable Transport for tests and offline use.

    Responses are registered per URL. When ``gate`` is set, every send waits on
    it before answering, which lets callers observe in-flight requests and
    cancellation.
    """

    def __init__(
        self,
        responses: dict[str, HttpResponse] | None = None,
        *,
        handler: Handler | None = None,
        gate: asyncio.Event | None = None,
    ):
        self._responses = responses or {}
        self._handler = handler
        self.gate = gate
        self.requests: list[HttpRequest] = []
        self.in_flight = 0
        self.cancelled = 0
        self.closed = False

    def add(self, url: str, response: HttpResponse) -> None:
        self._responses[url] = response

    async def send(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        self.in_flight += 1
        try:
            if self.gate is not None:
                await self.gate.wait()
            if self._handler is not None:
                return await self._handler(request)
            if request.url in self._responses:
                return self._responses[request.url]
            return HttpResponse(status_code=None, meta={"error_message": "No stubbed response configured"})
        except asyncio.CancelledError:
            self.cancelled += 1
            raise
        finally:
            self.in_flight -= 1

    async def aclose(self) -> None:
        self.closed = True

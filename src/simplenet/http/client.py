# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport abstraction and factory."""

from typing import Protocol

from ..config import HttpSettings, load_http_settings
from .models import HttpRequest, HttpResponse


class Transport(Protocol):
    """Minimal protocol for sending a concrete request and awaiting its response."""

    async def send(self, request: HttpRequest) -> HttpResponse: ...

    async def aclose(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_transport(settings: HttpSettings | None = None) -> Transport:
    """Factory for the default httpx-backed transport."""
    from .httpx_transport import HttpxTransport

    return HttpxTransport(settings or load_http_settings())

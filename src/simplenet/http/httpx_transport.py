# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed Transport implementation."""

from __future__ import annotations

import logging

import httpx

from ..config import HttpSettings, load_http_settings
from .client import Transport
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxTransport(Transport):
    """Asynchronous httpx client wrapper.

    Faults raised by httpx propagate to the caller untouched. A body larger than
    ``max_body_bytes`` is never handed back partially: reading stops and
    ``httpx.ReadError`` is raised.
    """

    def __init__(self, settings: HttpSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.AsyncClient(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    async def send(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers)
        if request.header("User-Agent") is None:
            headers["User-Agent"] = self.settings.user_agent

        max_body_bytes = self.settings.max_body_bytes
        if max_body_bytes <= 0:
            max_body_bytes = 16 * 1024 * 1024

        async with self._client.stream(
            request.method.value,
            request.url,
            headers=headers,
            content=request.body,
        ) as resp:
            content = bytearray()
            async for chunk in resp.aiter_bytes():
                if not chunk:
                    continue
                if len(content) + len(chunk) > max_body_bytes:
                    logger.debug("%s %s: body exceeds %d bytes", request.method.value, request.url, max_body_bytes)
                    raise httpx.ReadError(
                        f"Response body exceeds max_body_bytes ({max_body_bytes})",
                        request=resp.request,
                    )
                content.extend(chunk)

        logger.debug("%s %s -> %s (%d bytes)", request.method.value, request.url, resp.status_code, len(content))
        return HttpResponse(
            status_code=resp.status_code,
            headers=dict(resp.headers),
            content=bytes(content),
            url=str(resp.url),
            meta={
                "body_bytes_read": len(content),
                "body_bytes_limit": max_body_bytes,
            },
        )

    async def aclose(self) -> None:
        await self._client.aclose()

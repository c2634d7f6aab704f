# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request executor: materialize, send, classify, decode."""

from __future__ import annotations

import logging
from dataclasses import replace
from functools import partial
from typing import Any, TypeVar

from .auth import AuthProvider
from .codec import CastError, cast_json, decode, parse_generic
from .config import HttpSettings, load_http_settings
from .errors import (
    RequestError,
    RequestErrorKind,
    categorize_exception,
    http_error_for,
    is_success_status,
)
from .http.client import Transport, create_default_transport
from .http.endpoint import Endpoint, materialize
from .http.models import HttpRequest, HttpResponse
from .stream import RequestStream

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SimpleNetworkClient:
    """
    Turns endpoint descriptors into typed results.

    Every call is independent: no retries, no caching, no sharing of in-flight
    results. The ``*_stream`` variants wrap the awaited calls into cold
    single-value streams.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        *,
        settings: HttpSettings | None = None,
        auth_provider: AuthProvider | None = None,
    ):
        self.settings = settings or load_http_settings()
        self._owns_transport = transport is None
        self.transport = transport or create_default_transport(self.settings)
        self.auth_provider = auth_provider
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def request(self, endpoint: Endpoint, response_type: type[T] | Any) -> T:
        """Send ``endpoint`` and validate the JSON body into ``response_type``."""
        response = await self._send(endpoint)
        try:
            return decode(response.content, response_type)
        except ValueError as exc:
            raise RequestError(RequestErrorKind.DECODE) from exc

    async def request_raw(self, endpoint: Endpoint, response_type: Any = None) -> Any:
        """
        Send ``endpoint`` and return the body without schema decoding.

        ``None`` returns None without reading the body, ``bytes`` returns the body
        as-is, any other type must match the parsed JSON exactly.
        """
        response = await self._send(endpoint)
        if response_type is None or response_type is type(None):
            return None
        if response_type is bytes:
            return response.content
        try:
            return cast_json(parse_generic(response.content), response_type)
        except (ValueError, CastError) as exc:
            raise RequestError(RequestErrorKind.MISMATCH_ERROR_IN_RETURN_TYPE) from exc

    def request_stream(self, endpoint: Endpoint, response_type: type[T] | Any) -> RequestStream[T]:
        return RequestStream(partial(self._call_while_open, self.request, endpoint, response_type))

    def request_raw_stream(self, endpoint: Endpoint, response_type: Any = None) -> RequestStream[Any]:
        return RequestStream(partial(self._call_while_open, self.request_raw, endpoint, response_type))

    async def _call_while_open(self, call: Any, endpoint: Endpoint, response_type: Any) -> Any:
        if self._closed:
            raise RequestError(RequestErrorKind.UNKNOWN)
        return await call(endpoint, response_type)

    async def _send(self, endpoint: Endpoint) -> HttpResponse:
        request = materialize(endpoint)
        if request is None:
            raise RequestError(RequestErrorKind.INVALID_URL)
        request = await self._authorize(endpoint, request)

        logger.debug("Request: %s %s", request.method.value, request.url)
        try:
            response = await self.transport.send(request)
        except Exception as exc:
            logger.debug(
                "Transport fault (%s) for %s %s: %s",
                categorize_exception(exc).value,
                request.method.value,
                request.url,
                exc,
            )
            raise

        if response is None or response.status_code is None:
            raise RequestError(RequestErrorKind.NO_RESPONSE)
        if not is_success_status(response.status_code):
            raise http_error_for(response.status_code)
        return response

    async def _authorize(self, endpoint: Endpoint, request: HttpRequest) -> HttpRequest:
        if not endpoint.is_authenticated or self.auth_provider is None:
            return request
        if request.header("Authorization") is not None:
            return request
        token = await self.auth_provider.get_valid_token()
        return replace(request, headers={**request.headers, "Authorization": f"Bearer {token}"})

    async def aclose(self) -> None:
        self._closed = True
        if self._owns_transport:
            await self.transport.aclose()

    async def __aenter__(self) -> SimpleNetworkClient:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()


__all__ = ["SimpleNetworkClient"]

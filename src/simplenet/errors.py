# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers.

Two families reach callers of the request pipeline:

- ``RequestError`` for flow failures (bad URL, missing response, decoding).
- ``HTTPError`` for responses outside the 2xx band, keyed by status code.

Transport faults raised by the underlying HTTP library are not remapped;
``categorize_exception`` only classifies them for diagnostics.
"""

from __future__ import annotations

from enum import Enum

SUCCESS_STATUS_RANGE = range(200, 300)


class RequestErrorKind(str, Enum):
    DECODE = "DECODE"
    INVALID_URL = "INVALID_URL"
    NO_RESPONSE = "NO_RESPONSE"
    UNAUTHORIZED = "UNAUTHORIZED"
    UNEXPECTED_STATUS_CODE = "UNEXPECTED_STATUS_CODE"
    UNKNOWN = "UNKNOWN"
    MISMATCH_ERROR_IN_RETURN_TYPE = "MISMATCH_ERROR_IN_RETURN_TYPE"

    @property
    def message(self) -> str:
        if self is RequestErrorKind.DECODE:
            return "Decode error"
        if self is RequestErrorKind.UNAUTHORIZED:
            return "Session expired"
        return "Unknown error"


class HTTPErrorKind(str, Enum):
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    BAD_GATEWAY = "BAD_GATEWAY"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    GATEWAY_TIMEOUT = "GATEWAY_TIMEOUT"
    UNKNOWN = "UNKNOWN"

    @property
    def message(self) -> str:
        return _HTTP_ERROR_MESSAGES.get(self, "Unknown error")

    @classmethod
    def for_status(cls, status_code: int) -> HTTPErrorKind:
        return _STATUS_TO_HTTP_ERROR.get(status_code, cls.UNKNOWN)


_STATUS_TO_HTTP_ERROR: dict[int, HTTPErrorKind] = {
    400: HTTPErrorKind.BAD_REQUEST,
    401: HTTPErrorKind.UNAUTHORIZED,
    403: HTTPErrorKind.FORBIDDEN,
    404: HTTPErrorKind.NOT_FOUND,
    500: HTTPErrorKind.INTERNAL_SERVER_ERROR,
    502: HTTPErrorKind.BAD_GATEWAY,
    503: HTTPErrorKind.SERVICE_UNAVAILABLE,
    504: HTTPErrorKind.GATEWAY_TIMEOUT,
}

_HTTP_ERROR_MESSAGES: dict[HTTPErrorKind, str] = {
    HTTPErrorKind.BAD_REQUEST: "Bad request.",
    HTTPErrorKind.UNAUTHORIZED: "Unauthorized network call",
    HTTPErrorKind.FORBIDDEN: "Forbidden network call",
    HTTPErrorKind.NOT_FOUND: "Endpoint not found",
    HTTPErrorKind.INTERNAL_SERVER_ERROR: "Server not reachable",
    HTTPErrorKind.BAD_GATEWAY: "Bad gateway",
    HTTPErrorKind.SERVICE_UNAVAILABLE: "Service unavailable",
    HTTPErrorKind.GATEWAY_TIMEOUT: "Gateway timeout",
    HTTPErrorKind.UNKNOWN: "Unknown error",
}


class SimpleNetworkError(Exception):
    """Base class for every error raised by the request pipeline itself."""


class RequestError(SimpleNetworkError):
    def __init__(self, kind: RequestErrorKind):
        self.kind = kind
        super().__init__(kind.message)

    @property
    def message(self) -> str:
        return self.kind.message

    def __repr__(self) -> str:
        return f"RequestError({self.kind.value})"


class HTTPError(SimpleNetworkError):
    def __init__(self, kind: HTTPErrorKind, status_code: int | None = None):
        self.kind = kind
        self.status_code = status_code
        super().__init__(kind.message)

    @property
    def message(self) -> str:
        return self.kind.message

    def __repr__(self) -> str:
        return f"HTTPError({self.kind.value}, status_code={self.status_code})"


def is_success_status(status_code: int) -> bool:
    return status_code in SUCCESS_STATUS_RANGE


def http_error_for(status_code: int) -> HTTPError:
    """Build the HTTPError matching a non-2xx status code."""
    return HTTPError(HTTPErrorKind.for_status(status_code), status_code)


class TransportErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def categorize_exception(exc: BaseException) -> TransportErrorCategory:
    """
    Map Python/httpx exceptions to TransportErrorCategory.
    """
    import socket
    import ssl as ssl_module

    import httpx

    if isinstance(exc, httpx.TimeoutException):
        return TransportErrorCategory.TIMEOUT

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return TransportErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return TransportErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        cause = exc.__cause__ or exc.__context__
        if cause is not None and cause is not exc:
            nested = categorize_exception(cause)
            if nested is not TransportErrorCategory.UNKNOWN_ERROR:
                return nested
        return TransportErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return TransportErrorCategory.CONNECTION_ERROR

    return TransportErrorCategory.UNKNOWN_ERROR


__all__ = [
    "HTTPError",
    "HTTPErrorKind",
    "RequestError",
    "RequestErrorKind",
    "SUCCESS_STATUS_RANGE",
    "SimpleNetworkError",
    "TransportErrorCategory",
    "categorize_exception",
    "http_error_for",
    "is_success_status",
]

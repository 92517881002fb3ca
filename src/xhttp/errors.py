# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers.

Every failure of a request cycle is stored on ``Response.error`` as one of the
classes below; the underlying exception, if any, is chained as ``__cause__``.
"""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class XHttpError(Exception):
    """Base class for errors recorded on a Response."""


class RequestConstructionError(XHttpError):
    """The request could not be built (bad method/URL, resolver failure, body encoding)."""


class TransportError(XHttpError):
    """The transport failed to complete the call."""

    @property
    def category(self) -> ErrorCategory:
        cause = self.__cause__
        if isinstance(cause, Exception):
            return categorize_exception(cause)
        return ErrorCategory.UNKNOWN_ERROR


class StatusCodeError(XHttpError):
    """The call completed but the status code is not the success code."""

    def __init__(self, status_code: int, url: str | None = None):
        super().__init__(f"http error : url={url} , status_code={status_code}")
        self.status_code = status_code
        self.url = url


class BodyReadError(XHttpError):
    """Draining the response body failed."""


class DecodeError(XHttpError):
    """A binding rejected the payload."""

    def __init__(self, message: str, binding: str | None = None):
        super().__init__(f"{binding}: {message}" if binding else message)
        self.binding = binding


def categorize_exception(exc: Exception) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        cause = exc.__cause__ or exc.__context__
        if isinstance(cause, Exception) and cause is not exc:
            nested = categorize_exception(cause)
            if nested in (ErrorCategory.SSL_ERROR, ErrorCategory.DNS_ERROR):
                return nested
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.UNKNOWN_ERROR: "Network error",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Request failed due to network error")


__all__ = [
    "BodyReadError",
    "DecodeError",
    "ErrorCategory",
    "RequestConstructionError",
    "StatusCodeError",
    "TransportError",
    "XHttpError",
    "categorize_exception",
    "error_category_to_reason",
]

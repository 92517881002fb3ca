# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Stock middleware."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from ..errors import TransportError, error_category_to_reason
from ..log import REQUEST_LOGGER
from .headers import set_header
from .models import HttpRequest
from .pipeline import Handler, Middleware
from .response import Response


def _reason(error: Exception) -> str:
    if isinstance(error, TransportError):
        return error_category_to_reason(error.category)
    return type(error).__name__


def logging_middleware(logger: logging.Logger | None = None, level: int = logging.DEBUG) -> Middleware:
    """Log method, URL, status and duration once the wrapped handler returns."""
    log = logger or logging.getLogger(REQUEST_LOGGER)

    def middleware(handler: Handler) -> Handler:
        def handle(request: HttpRequest) -> Response:
            response = handler(request)
            if response.error is not None:
                log.log(
                    level,
                    "%s %s failed after %.3fs: %s (%s)",
                    request.method,
                    request.url,
                    response.duration,
                    response.error,
                    _reason(response.error),
                )
            else:
                log.log(
                    level,
                    "%s %s -> %s in %.3fs",
                    request.method,
                    request.url,
                    response.status_code,
                    response.duration,
                )
            return response

        return handle

    return middleware


def header_middleware(headers: Mapping[str, str]) -> Middleware:
    """Set ``headers`` on every outgoing request, e.g. for auth injection."""
    fixed = dict(headers)

    def middleware(handler: Handler) -> Handler:
        def handle(request: HttpRequest) -> Response:
            for name, value in fixed.items():
                set_header(request.headers, name, value)
            return handler(request)

        return handle

    return middleware


__all__ = ["header_middleware", "logging_middleware"]

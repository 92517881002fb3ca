# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transports that do not touch the network: a programmable stub and an in-process WSGI server."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx

from ..config import HttpSettings, load_http_settings
from .client import Client
from .models import Headers, HttpRequest, RawResponse
from .transport import HttpxTransport, Transport

WSGIApp = Callable[..., Any]


class StubTransport(Transport):
    """Deterministic, programmable Transport for tests.

    Registered responses are keyed by URL; unknown URLs fail like an
    unreachable host.
    """

    def __init__(self, responses: dict[str, tuple[int, Headers, bytes]] | None = None):
        self._responses = dict(responses or {})
        self.requests: list[HttpRequest] = []

    def add(self, url: str, status_code: int = 200, body: bytes = b"", headers: Headers | None = None) -> None:
        self._responses[url] = (status_code, dict(headers or {}), body)

    def send(self, request: HttpRequest) -> RawResponse:
        self.requests.append(request)
        if request.url not in self._responses:
            raise httpx.ConnectError(f"No stubbed response configured for {request.url}")
        status_code, headers, body = self._responses[request.url]
        return RawResponse(status_code=status_code, headers=dict(headers), url=request.url, stream=[body])

    def close(self) -> None:
        return None


def serve(app: WSGIApp, *, settings: HttpSettings | None = None) -> HttpxTransport:
    """
    Build a transport that dispatches requests synchronously to a WSGI ``app``.

    Nothing goes over a socket; the app sees the same method, URL, headers and
    body it would receive from a real server.
    """
    settings = settings or load_http_settings()
    client = httpx.Client(
        transport=httpx.WSGITransport(app=app),
        follow_redirects=settings.allow_redirects,
        timeout=settings.timeout,
    )
    return HttpxTransport(settings, client=client)


def serve_client(app: WSGIApp, **kwargs: Any) -> Client:
    """Client over ``serve(app)``; ``kwargs`` are passed to Client."""
    return Client(serve(app), **kwargs)


__all__ = ["StubTransport", "WSGIApp", "serve", "serve_client"]

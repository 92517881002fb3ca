# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport protocol and the httpx-backed default implementation."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol

import httpx

from ..config import HttpSettings, load_http_settings
from .headers import header_value, normalize_headers
from .models import HttpRequest, RawResponse


class Transport(Protocol):
    """Performs the network call for a fully-formed request.

    ``send`` raises on connection-level failure and returns a RawResponse whose
    body has not been read yet.
    """

    def send(self, request: HttpRequest) -> RawResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


class HttpxTransport(Transport):
    """Synchronous httpx transport."""

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def send(self, request: HttpRequest) -> RawResponse:
        headers = dict(request.headers or {})
        if not header_value(headers, "User-Agent"):
            headers["User-Agent"] = self.settings.user_agent

        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        built = self._client.build_request(
            request.method,
            request.url,
            headers=headers,
            content=request.body,
            timeout=timeout,
        )
        follow_redirects = (
            request.allow_redirects if request.allow_redirects is not None else self.settings.allow_redirects
        )
        resp = self._client.send(built, stream=True, follow_redirects=follow_redirects)
        return RawResponse(
            status_code=resp.status_code,
            headers=normalize_headers(resp.headers),
            url=str(resp.url),
            reason=resp.reason_phrase,
            stream=self._iter_body(resp),
            on_close=resp.close,
        )

    def _iter_body(self, resp: httpx.Response) -> Iterator[bytes]:
        limit = self.settings.max_body_bytes
        read = 0
        for chunk in resp.iter_bytes():
            read += len(chunk)
            if limit is not None and read > limit:
                raise ValueError(f"response body exceeds {limit} bytes")
            yield chunk

    def close(self) -> None:
        self._client.close()


__all__ = ["HttpxTransport", "Transport"]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response descriptors exchanged between the client, middleware and transports."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field

Headers = dict[str, str]

MIME_JSON = "application/json"
MIME_XML = "application/xml"
MIME_XML2 = "text/xml"
MIME_POST_FORM = "application/x-www-form-urlencoded"


@dataclass
class HttpRequest:
    """Fully-formed request handed to the pipeline and, finally, to a Transport.

    ``timeout`` and ``allow_redirects`` left as None use the transport defaults.
    """

    url: str
    method: str = "GET"
    headers: Headers = field(default_factory=dict)
    body: bytes | None = None
    timeout: float | None = None
    allow_redirects: bool | None = None


@dataclass
class RequestOptions:
    """Per-request options; ``header`` entries are set verbatim on the outgoing request."""

    header: Mapping[str, str] | None = None


RequestResolver = Callable[[], HttpRequest]


@dataclass
class RawResponse:
    """Transport-level response: status line, headers and a not-yet-read body stream."""

    status_code: int
    headers: Headers = field(default_factory=dict)
    url: str | None = None
    reason: str = ""
    stream: Iterable[bytes] = ()
    on_close: Callable[[], None] | None = None

    def iter_bytes(self) -> Iterator[bytes]:
        for chunk in self.stream:
            if chunk:
                yield chunk

    def close(self) -> None:
        if self.on_close is not None:
            self.on_close()


__all__ = [
    "Headers",
    "HttpRequest",
    "MIME_JSON",
    "MIME_POST_FORM",
    "MIME_XML",
    "MIME_XML2",
    "RawResponse",
    "RequestOptions",
    "RequestResolver",
]

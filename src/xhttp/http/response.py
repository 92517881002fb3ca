# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""The outcome record of one request and its decode-on-demand helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .. import binding as bindings
from ..binding import Binding
from ..errors import DecodeError, StatusCodeError, TransportError
from .headers import header_value, media_type
from .models import MIME_XML, MIME_XML2, Headers, HttpRequest, RawResponse

SUCCESS_STATUS = 200

XML_MEDIA_TYPES = frozenset({MIME_XML, MIME_XML2})


@dataclass
class Response:
    """
    Result of a single request cycle.

    The pipeline writes each field once; afterwards the record is read-only.
    When ``error`` is set, ``content`` and ``raw`` must not be trusted as complete.
    Decoding is deferred to ``result()``/``bind()`` so callers that only need the
    headers or an error body can still read them.
    """

    error: Exception | None = None
    content: bytes | None = None
    raw: RawResponse | None = None
    request: HttpRequest | None = None
    duration: float = 0.0

    @property
    def status_code(self) -> int | None:
        return self.raw.status_code if self.raw is not None else None

    @property
    def headers(self) -> Headers:
        return dict(self.raw.headers) if self.raw is not None else {}

    @property
    def ok(self) -> bool:
        return self.error is None and self.status_code == SUCCESS_STATUS

    @property
    def text(self) -> str:
        return (self.content or b"").decode("utf-8", errors="replace")

    def result(self) -> tuple[bytes | None, Exception | None]:
        """Return ``(content, None)`` on success, otherwise ``(None, error)``."""
        if self.error is not None:
            return None, self.error
        if self.raw is None:
            return None, TransportError("no response received")
        if self.raw.status_code != SUCCESS_STATUS:
            url = self.raw.url or (self.request.url if self.request else None)
            return None, StatusCodeError(self.raw.status_code, url)
        return self.content if self.content is not None else b"", None

    def bind(self, obj: Any) -> Exception | None:
        """Decode into ``obj`` using the binding selected by the Content-Type header."""
        content_type = header_value(self.raw.headers if self.raw else None, "Content-Type")
        if media_type(content_type).lower() in XML_MEDIA_TYPES:
            return self.bind_with(obj, bindings.XML)
        return self.bind_with(obj, bindings.JSON)

    def bind_json(self, obj: Any) -> Exception | None:
        return self.bind_with(obj, bindings.JSON)

    def bind_xml(self, obj: Any) -> Exception | None:
        return self.bind_with(obj, bindings.XML)

    def bind_with(self, obj: Any, binding: Binding) -> Exception | None:
        content, error = self.result()
        if error is not None:
            return error
        try:
            binding.bind(content or b"", obj)
        except DecodeError as exc:
            return exc
        return None


__all__ = ["Response", "SUCCESS_STATUS", "XML_MEDIA_TYPES"]

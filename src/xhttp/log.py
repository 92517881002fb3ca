# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for xhttp.

Library modules log through ``logging.getLogger(__name__)``; per-request lines
from ``logging_middleware`` go to ``REQUEST_LOGGER`` so they can be enabled
independently of the rest of the package.
"""

from __future__ import annotations

import logging
import os

REQUEST_LOGGER = "xhttp.requests"


def _default_level() -> str:
    return os.getenv("XHTTP_LOG_LEVEL", "WARNING")


def setup_logging(level: str | None = None, *, log_requests: bool = False) -> None:
    """Configure standard logging for applications embedding xhttp.

    ``level`` defaults to ``XHTTP_LOG_LEVEL`` (read at call time). With
    ``log_requests`` the request logger is lowered to DEBUG so the default
    ``logging_middleware`` output is visible.
    """
    effective_level = (level or _default_level()).upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if log_requests:
        logging.getLogger(REQUEST_LOGGER).setLevel(logging.DEBUG)


__all__ = ["REQUEST_LOGGER", "setup_logging"]

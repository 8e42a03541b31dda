# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for nagprobe."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("NAGPROBE_LOG_LEVEL", "WARNING").upper()

# httpx logs every request line at INFO.
HTTP_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str | None = None, *, http_level: str | None = None) -> None:
    """
    Configure standard logging for CLI/library use.

    The HTTP client loggers are kept at WARNING unless ``http_level`` (or
    ``NAGPROBE_HTTP_LOG_LEVEL``) asks for more.
    """
    effective_level = (level or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    effective_http_level = (http_level or os.getenv("NAGPROBE_HTTP_LOG_LEVEL") or "WARNING").upper()
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(getattr(logging, effective_http_level, logging.WARNING))


__all__ = ["HTTP_LOGGERS", "setup_logging"]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers for service endpoints."""

from __future__ import annotations

import posixpath
from collections.abc import Mapping
from urllib.parse import urlencode, urlsplit, urlunsplit


def generate_url(base_url: str, endpoint: str, params: Mapping[str, str] | None = None) -> str:
    """
    Join ``endpoint`` onto the path of ``base_url`` and replace its query with ``params``.

    Example:
      https://host/api + site-get, {"site": "x"} -> https://host/api/site-get?site=x
    """
    parts = urlsplit(str(base_url or "").strip())
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"invalid base URL: {base_url!r}")
    path = posixpath.join(parts.path or "/", endpoint)
    query = urlencode(sorted((params or {}).items()))
    return urlunsplit((parts.scheme, parts.netloc, path, query, ""))


def is_secure_url(url: str) -> bool:
    """Return True when the URL uses TLS."""
    return urlsplit(str(url or "")).scheme.lower() == "https"


__all__ = ["generate_url", "is_secure_url"]

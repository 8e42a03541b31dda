# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import httpx

from ..config import SiteAccountsSettings, load_site_accounts_settings
from ..errors import categorize_exception
from ..utils.context import get_probe_context
from .client import HttpClient
from .models import HttpRequest, HttpResponse


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper."""

    def __init__(self, settings: SiteAccountsSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_site_accounts_settings()
        self._client = client or httpx.Client(
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def _effective_timeout(self, request: HttpRequest) -> float:
        if request.timeout is not None:
            return request.timeout
        remaining = get_probe_context().remaining()
        return remaining if remaining is not None else self.settings.timeout

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        auth = httpx.BasicAuth(request.auth.username, request.auth.password) if request.auth else None

        try:
            resp = self._client.request(
                request.method,
                request.url,
                headers=headers,
                auth=auth,
                timeout=self._effective_timeout(request),
            )
            return HttpResponse(
                ok=True,
                status_code=resp.status_code,
                content=resp.content,
            )
        except Exception as exc:  # noqa: BLE001
            return HttpResponse(
                ok=False,
                error_message=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
                meta={"error_category": categorize_exception(exc)},
            )

    def close(self) -> None:
        self._client.close()

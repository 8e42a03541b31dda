# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Client for the site accounts service that hands out per-site test user credentials."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping

from ..config import SiteAccountsSettings, load_site_accounts_settings
from ..errors import (
    ErrorCategory,
    SiteAccountsConfigError,
    SiteAccountsRequestError,
    SiteAccountsResponseError,
)
from ..http.client import HttpClient, create_default_http_client
from ..http.models import BasicAuth, HttpRequest
from ..http.url import generate_url, is_secure_url
from .credentials import decrypt_credentials
from .models import Site

logger = logging.getLogger(__name__)

SITE_GET_ENDPOINT = "site-get"


class SiteAccountsClient:
    """
    Stateless lookup of site test user credentials.

    Every call performs exactly one request; nothing is cached and failures are
    never retried.
    """

    def __init__(self, settings: SiteAccountsSettings | None = None, http_client: HttpClient | None = None):
        self.settings = settings or load_site_accounts_settings()
        self._http_client = http_client
        self._owns_client = http_client is None

    @property
    def http_client(self) -> HttpClient:
        if self._http_client is None:
            self._http_client = create_default_http_client(self.settings)
        return self._http_client

    def _check_configured(self) -> None:
        if not self.settings.url:
            raise SiteAccountsConfigError("no site accounts service URL configured")
        if not self.settings.credentials_passphrase:
            raise SiteAccountsConfigError("no site accounts credentials passphrase configured")

    def _read_endpoint(self, url: str) -> bytes:
        if not is_secure_url(url):
            raise SiteAccountsConfigError(f"site accounts service must be reached via https: {url}")
        auth = BasicAuth(self.settings.username, self.settings.password)
        response = self.http_client.request(HttpRequest(url=url, auth=auth, headers={"Accept": "application/json"}))
        if not response.ok:
            category = response.meta.get("error_category", ErrorCategory.UNKNOWN_ERROR)
            raise SiteAccountsRequestError(
                f"error while reading site accounts endpoint: {response.error_message}",
                category=category,
            )
        if not response.is_success:
            raise SiteAccountsRequestError(
                f"site accounts endpoint returned HTTP {response.status_code}",
                category=ErrorCategory.HTTP_ERROR,
            )
        return response.content

    def query_site_test_user_credentials(self, site: str) -> Site:
        """Fetch ``site`` and return it with decrypted test client credentials."""
        self._check_configured()

        try:
            url = generate_url(self.settings.url, SITE_GET_ENDPOINT, {"site": site})
        except ValueError as exc:
            raise SiteAccountsConfigError(f"error while generating endpoint URL: {exc}") from exc

        logger.debug("Querying site accounts service for site %s", site)
        body = self._read_endpoint(url)

        try:
            payload = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise SiteAccountsResponseError(f"unable to unmarshal response: {exc}") from exc
        if not isinstance(payload, Mapping) or not payload.get("success"):
            raise SiteAccountsResponseError("invalid response received")
        data = payload.get("data")
        raw_site = data.get("site") if isinstance(data, Mapping) else None
        if not isinstance(raw_site, Mapping):
            raise SiteAccountsResponseError(f"no site data received for site {site}")

        record = Site.from_mapping(raw_site)
        credentials = decrypt_credentials(record.config.test_client_credentials, self.settings.credentials_passphrase)
        return record.with_credentials(credentials)

    def close(self) -> None:
        if self._owns_client and self._http_client is not None:
            self._http_client.close()
            self._http_client = None


__all__ = ["SITE_GET_ENDPOINT", "SiteAccountsClient"]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level facade used by the exporter's probe handler."""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import suppress

from prometheus_client import CollectorRegistry

from .config import NagiosModule, SiteAccountsSettings, load_probe_timeout, load_site_accounts_settings
from .http.client import HttpClient, create_default_http_client
from .nagios.arguments import ParamValue
from .nagios.prober import ProbeOptions, probe_nagios
from .siteacc.client import SiteAccountsClient


class NagiosProber:
    """
    Convenience wrapper that wires the site accounts client into every probe.

    The site accounts configuration is read once at startup (or passed in) and
    handed to each probe explicitly; probes themselves share no state.
    """

    def __init__(
        self,
        site_accounts_settings: SiteAccountsSettings | None = None,
        *,
        http_client: HttpClient | None = None,
        options: ProbeOptions | None = None,
        default_timeout: float | None = None,
    ):
        self.site_accounts_settings = site_accounts_settings or load_site_accounts_settings()
        self.http_client = http_client or create_default_http_client(self.site_accounts_settings)
        self.site_accounts = SiteAccountsClient(self.site_accounts_settings, self.http_client)
        self.options = options or ProbeOptions()
        self.default_timeout = default_timeout if default_timeout is not None else load_probe_timeout()

    def probe(
        self,
        target: str,
        module: NagiosModule,
        *,
        params: Mapping[str, ParamValue] | None = None,
        registry: CollectorRegistry | None = None,
        timeout: float | None = None,
    ) -> tuple[bool, CollectorRegistry]:
        """Run one probe; returns the verdict and the registry holding its metrics."""
        registry = registry if registry is not None else CollectorRegistry(auto_describe=True)
        success = probe_nagios(
            target,
            params,
            module,
            registry,
            site_accounts=self.site_accounts,
            options=self.options,
            timeout=timeout if timeout is not None else self.default_timeout,
        )
        return success, registry

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> NagiosProber:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()

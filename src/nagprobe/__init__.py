# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
nagprobe package entrypoint.

This package runs Nagios-compatible plugin binaries as probes and republishes
their results (status, message and performance data) as Prometheus metrics.
Per-site test credentials are fetched from a site accounts service over an
injectable HTTP client, and domain objects are modeled with typed dataclasses.
"""

from .config import NagiosModule, SiteAccountsSettings, load_site_accounts_settings
from .errors import (
    CheckExecutionError,
    CheckResolutionError,
    NagprobeError,
    SiteAccountsError,
)
from .http import HttpClient, HttpxClient, create_default_http_client
from .log import setup_logging
from .nagios import NagiosResult, NagiosStatus, ProbeOptions, probe_nagios
from .runtime import NagiosProber
from .siteacc import SiteAccountsClient
from .version import __version__

__all__ = [
    "CheckExecutionError",
    "CheckResolutionError",
    "HttpClient",
    "HttpxClient",
    "NagiosModule",
    "NagiosProber",
    "NagiosResult",
    "NagiosStatus",
    "NagprobeError",
    "ProbeOptions",
    "SiteAccountsClient",
    "SiteAccountsError",
    "SiteAccountsSettings",
    "create_default_http_client",
    "load_site_accounts_settings",
    "probe_nagios",
    "setup_logging",
    "__version__",
]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Site accounts service integration (credential broker)."""

from .client import SITE_GET_ENDPOINT, SiteAccountsClient
from .credentials import decrypt_credentials, encrypt_credentials
from .models import Site, SiteConfig, TestClientCredentials

__all__ = [
    "SITE_GET_ENDPOINT",
    "Site",
    "SiteAccountsClient",
    "SiteConfig",
    "TestClientCredentials",
    "decrypt_credentials",
    "encrypt_credentials",
]

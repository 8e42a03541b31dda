# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for nagprobe."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .version import __version__

DEFAULT_USER_AGENT = f"nagprobe/{__version__}"
DEFAULT_PROBE_TIMEOUT = 30.0


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


@dataclass(frozen=True)
class NagiosModule:
    """Per-module check configuration, owned by the exporter's config loader."""

    check: str = ""
    arguments: tuple[str, ...] = ()
    proxy_url: str = ""
    treat_warnings_as_failure: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> NagiosModule:
        """Build a module from a YAML-style mapping (``nagios:`` section)."""
        raw_args = data.get("arguments")
        if raw_args is None:
            raw_args = data.get("args")
        if isinstance(raw_args, str):
            raw_args = [raw_args]
        return cls(
            check=str(data.get("check") or ""),
            arguments=tuple(str(arg) for arg in (raw_args or ())),
            proxy_url=str(data.get("proxy_url") or ""),
            treat_warnings_as_failure=_as_bool(data.get("treat_warnings_as_failure", False)),
        )


@dataclass
class SiteAccountsSettings:
    """Connection settings for the site accounts service."""

    url: str = ""
    username: str = ""
    password: str = field(default="", repr=False)
    credentials_passphrase: str = field(default="", repr=False)
    timeout: float = 10.0
    verify_ssl: bool = True
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls) -> SiteAccountsSettings:
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            url=os.getenv("NAGPROBE_SITEACC_URL", cls.url),
            username=os.getenv("NAGPROBE_SITEACC_USERNAME", cls.username),
            password=os.getenv("NAGPROBE_SITEACC_PASSWORD", cls.password),
            credentials_passphrase=os.getenv("NAGPROBE_SITEACC_PASSPHRASE", cls.credentials_passphrase),
            timeout=_float_env("NAGPROBE_SITEACC_TIMEOUT", cls.timeout),
            verify_ssl=_bool_env("NAGPROBE_SITEACC_VERIFY_SSL", cls.verify_ssl),
            user_agent=os.getenv("NAGPROBE_USER_AGENT", cls.user_agent),
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SiteAccountsSettings:
        """Read the nested ``site_accounts:`` layout used by exporter config files."""
        auth = data.get("authentication") or {}
        security = data.get("security") or {}
        try:
            timeout = float(data.get("timeout", cls.timeout))
        except (TypeError, ValueError):
            timeout = cls.timeout
        return cls(
            url=str(data.get("url") or ""),
            username=str(auth.get("username") or ""),
            password=str(auth.get("password") or ""),
            credentials_passphrase=str(security.get("credentials_passphrase") or ""),
            timeout=timeout,
            verify_ssl=_as_bool(data.get("verify_ssl", cls.verify_ssl)),
        )


def load_site_accounts_settings() -> SiteAccountsSettings:
    """Load site accounts settings from environment with sensible defaults."""
    return SiteAccountsSettings.from_env()


def load_probe_timeout() -> float:
    """Default probe deadline in seconds; non-positive values fall back to the default."""
    timeout = _float_env("NAGPROBE_PROBE_TIMEOUT", DEFAULT_PROBE_TIMEOUT)
    return timeout if timeout > 0 else DEFAULT_PROBE_TIMEOUT

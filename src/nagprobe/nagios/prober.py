# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Nagios prober: resolve, template, run, classify and publish one check."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from prometheus_client import CollectorRegistry

from ..config import NagiosModule
from ..errors import CheckExecutionError, CheckResolutionError, SiteAccountsError
from ..siteacc.client import SiteAccountsClient
from ..utils.context import probe_context
from .arguments import ParamValue, build_arguments, build_placeholders, obfuscate_arguments
from .executor import run_check
from .metrics import NagiosMetrics
from .models import NagiosResult, NagiosStatus
from .output import classify_execution
from .resolver import resolve_check_binary

logger = logging.getLogger(__name__)

RESOLUTION_ERROR_MESSAGE = "Error resolving the Nagios check binary"


@dataclass(frozen=True)
class ProbeOptions:
    """Independent feature switches for a probe run."""

    perf_data: bool = True
    site_credentials: bool = True
    obfuscate_logs: bool = True


def _with_site_credentials(
    placeholders: dict[str, str],
    site_accounts: SiteAccountsClient | None,
) -> NagiosResult | None:
    """Add the test client placeholders for ``site``; returns an ERROR result on failure."""
    site = placeholders["site"]
    failure = NagiosResult(NagiosStatus.ERROR, f"Unable to retrieve test user credentials for site {site}")
    if site_accounts is None:
        logger.error("Site %s requested but no site accounts service is configured", site)
        return failure
    try:
        record = site_accounts.query_site_test_user_credentials(site)
    except SiteAccountsError as exc:
        logger.error("Unable to retrieve test user credentials for site %s: %s (%s)", site, exc, type(exc).__name__)
        return failure
    placeholders["testclient_id"] = record.config.test_client_credentials.id
    placeholders["testclient_secret"] = record.config.test_client_credentials.secret
    return None


def run_nagios_check(
    binary: str,
    target: str,
    params: Mapping[str, ParamValue] | None,
    module: NagiosModule,
    *,
    site_accounts: SiteAccountsClient | None = None,
    options: ProbeOptions | None = None,
) -> NagiosResult:
    """Build the command line for ``binary``, run it and classify its output."""
    options = options or ProbeOptions()
    placeholders = build_placeholders(target, params)
    if options.site_credentials and "site" in placeholders:
        failure = _with_site_credentials(placeholders, site_accounts)
        if failure is not None:
            return failure

    args = build_arguments(module.arguments, placeholders)
    if logger.isEnabledFor(logging.DEBUG):
        logged_args = obfuscate_arguments(args) if options.obfuscate_logs else args
        logger.debug("Running Nagios check %s %s", binary, " ".join(logged_args))

    try:
        execution = run_check(binary, args, proxy_url=module.proxy_url or None)
    except CheckExecutionError as exc:
        logger.error("Unable to run Nagios check %s: %s", binary, exc)
        return NagiosResult(NagiosStatus.UNKNOWN, f"Unable to run the Nagios check: {exc}")

    logger.debug(
        "Nagios check finished: exitcode=%s timed_out=%s output=%r",
        execution.exit_code,
        execution.timed_out,
        execution.text,
    )
    return classify_execution(execution, perf_data=options.perf_data)


def probe_nagios(
    target: str,
    params: Mapping[str, ParamValue] | None,
    module: NagiosModule,
    registry: CollectorRegistry,
    *,
    site_accounts: SiteAccountsClient | None = None,
    options: ProbeOptions | None = None,
    timeout: float | None = None,
) -> bool:
    """
    Run one Nagios probe and publish its result on ``registry``.

    Returns the success verdict: OK, or WARNING unless the module treats
    warnings as failures. A result metric is always published, also when the
    binary cannot be resolved or credentials cannot be fetched.
    """
    metrics = NagiosMetrics(registry)

    try:
        binary = resolve_check_binary(module.check)
    except CheckResolutionError as exc:
        logger.error("%s: %s (check=%s)", RESOLUTION_ERROR_MESSAGE, exc, module.check)
        metrics.publish_status(NagiosStatus.UNKNOWN, RESOLUTION_ERROR_MESSAGE)
        return False
    logger.debug("Successfully resolved the Nagios check binary %s (check=%s)", binary, module.check)

    with probe_context(timeout=timeout, target=target, check=module.check):
        result = run_nagios_check(
            binary,
            target,
            params,
            module,
            site_accounts=site_accounts,
            options=options,
        )

    logger.info("Nagios check %s finished: result=%s output=%s", module.check, result.status.name, result.message)
    metrics.publish(result)
    return result.is_success(treat_warnings_as_failure=module.treat_warnings_as_failure)


__all__ = ["RESOLUTION_ERROR_MESSAGE", "ProbeOptions", "probe_nagios", "run_nagios_check"]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""nagprobe CLI: run a single Nagios probe the way the exporter would."""

from __future__ import annotations

import argparse
import sys
from typing import Any

from prometheus_client import CollectorRegistry, generate_latest

from ..config import NagiosModule, SiteAccountsSettings, load_site_accounts_settings
from ..log import setup_logging
from ..nagios.metrics import PERFDATA_METRIC, RESULT_METRIC
from ..nagios.models import NagiosStatus
from ..runtime import NagiosProber


def _key_value(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got {raw!r}")
    return key, value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a Nagios-compatible check and report it as Prometheus metrics")
    parser.add_argument("check", help="Check binary (absolute path, name in ./checks or in PATH)")
    parser.add_argument("arguments", nargs="*", help="Argument templates, e.g. '-H $target_host$'")
    parser.add_argument("--target", required=True, help="Probe target (usually a URL)")
    parser.add_argument(
        "--param",
        action="append",
        default=[],
        type=_key_value,
        metavar="KEY=VALUE",
        help="Request parameter available as $key$ placeholder (repeatable)",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Probe deadline in seconds")
    parser.add_argument("--proxy-url", default="", help="Proxy exported to the check via *_PROXY variables")
    parser.add_argument(
        "--warnings-as-failure",
        action="store_true",
        help="Treat a WARNING result as a failed probe",
    )
    parser.add_argument(
        "--metrics",
        action="store_true",
        help="Print the Prometheus text exposition instead of a summary",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: $NAGPROBE_LOG_LEVEL or WARNING)")
    return parser


def _collect_result(registry: CollectorRegistry) -> dict[str, Any]:
    summary: dict[str, Any] = {"status": None, "output": "", "perf_data": {}}
    for family in registry.collect():
        for sample in family.samples:
            if sample.name == RESULT_METRIC:
                summary["status"] = NagiosStatus(int(sample.value))
                summary["output"] = sample.labels.get("output", "")
            elif sample.name == PERFDATA_METRIC:
                summary["perf_data"][sample.labels.get("key", "")] = sample.value
    return summary


def _pretty_print(summary: dict[str, Any], success: bool) -> None:
    status = summary.get("status")
    print(f"[nagprobe] Status: {status.name if status is not None else '-'} ({'success' if success else 'failure'})")
    print(f"Output: {summary.get('output') or '-'}")
    perf_data = summary.get("perf_data") or {}
    if perf_data:
        print("Performance data:")
        for key in sorted(perf_data):
            print(f"- {key}={perf_data[key]:g}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    module = NagiosModule(
        check=args.check,
        arguments=tuple(args.arguments),
        proxy_url=args.proxy_url,
        treat_warnings_as_failure=args.warnings_as_failure,
    )
    settings: SiteAccountsSettings = load_site_accounts_settings()

    with NagiosProber(settings) as prober:
        success, registry = prober.probe(
            args.target,
            module,
            params=dict(args.param),
            timeout=args.timeout,
        )

    if args.metrics:
        sys.stdout.write(generate_latest(registry).decode("utf-8"))
    else:
        _pretty_print(_collect_result(registry), success)

    return 0 if success else 1


if __name__ == "__main__":
    raise SystemExit(main())

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Prometheus metrics for one Nagios probe invocation."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Gauge

from .models import NagiosResult, NagiosStatus

RESULT_METRIC = "probe_nagios_result"
PERFDATA_METRIC = "probe_nagios_perfdata"


class NagiosMetrics:
    """
    Gauges registered on a per-probe registry.

    Registration happens in the constructor; constructing a second instance on
    the same registry raises ``ValueError`` (duplicated timeseries).
    """

    def __init__(self, registry: CollectorRegistry):
        self.registry = registry
        self.result = Gauge(
            RESULT_METRIC,
            "Returns the Nagios probe result (0=success, 1=warning, 2=error, 3=unknown)",
            ["output"],
            registry=registry,
        )
        self.perf_data = Gauge(
            PERFDATA_METRIC,
            "Holds Nagios probe performance data",
            ["key"],
            registry=registry,
        )

    def publish_status(self, status: NagiosStatus, message: str) -> None:
        self.result.labels(output=message).set(int(status))

    def publish(self, result: NagiosResult) -> None:
        self.publish_status(result.status, result.message)
        for key, value in result.perf_data.items():
            self.perf_data.labels(key=key).set(value)


__all__ = ["PERFDATA_METRIC", "RESULT_METRIC", "NagiosMetrics"]

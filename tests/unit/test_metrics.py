# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest
from prometheus_client import CollectorRegistry, generate_latest

from nagprobe.nagios.metrics import PERFDATA_METRIC, RESULT_METRIC, NagiosMetrics
from nagprobe.nagios.models import NagiosResult, NagiosStatus


def test_publish_sets_result_and_perf_data():
    registry = CollectorRegistry()
    metrics = NagiosMetrics(registry)
    metrics.publish(NagiosResult(NagiosStatus.WARNING, "Load high", {"load1": 3.2, "load5": 1.0}))

    assert registry.get_sample_value(RESULT_METRIC, {"output": "Load high"}) == 1.0
    assert registry.get_sample_value(PERFDATA_METRIC, {"key": "load1"}) == 3.2
    assert registry.get_sample_value(PERFDATA_METRIC, {"key": "load5"}) == 1.0


def test_exposition_uses_compatible_names_and_labels():
    registry = CollectorRegistry()
    NagiosMetrics(registry).publish(NagiosResult(NagiosStatus.OK, "fine", {"time": 0.5}))
    text = generate_latest(registry).decode("utf-8")
    assert 'probe_nagios_result{output="fine"} 0.0' in text
    assert 'probe_nagios_perfdata{key="time"} 0.5' in text


def test_publish_status_without_perf_data():
    registry = CollectorRegistry()
    NagiosMetrics(registry).publish_status(NagiosStatus.UNKNOWN, "broken")
    assert registry.get_sample_value(RESULT_METRIC, {"output": "broken"}) == 3.0
    assert "probe_nagios_perfdata{" not in generate_latest(registry).decode("utf-8")


def test_registering_twice_on_one_registry_fails_loudly():
    registry = CollectorRegistry()
    NagiosMetrics(registry)
    with pytest.raises(ValueError):
        NagiosMetrics(registry)

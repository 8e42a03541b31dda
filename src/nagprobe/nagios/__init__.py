# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Nagios plugin execution pipeline."""

from .arguments import build_arguments, build_placeholders, obfuscate_arguments
from .executor import run_check
from .metrics import NagiosMetrics
from .models import ExecutionResult, NagiosResult, NagiosStatus
from .output import classify, parse_perf_data, split_output
from .prober import ProbeOptions, probe_nagios, run_nagios_check
from .resolver import resolve_check_binary

__all__ = [
    "ExecutionResult",
    "NagiosMetrics",
    "NagiosResult",
    "NagiosStatus",
    "ProbeOptions",
    "build_arguments",
    "build_placeholders",
    "classify",
    "obfuscate_arguments",
    "parse_perf_data",
    "probe_nagios",
    "resolve_check_binary",
    "run_check",
    "run_nagios_check",
    "split_output",
]

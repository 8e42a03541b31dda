# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Parsing of Nagios plugin output.

Plugins print lines of the form ``<message> [| <performance data>]``; the
first line's message is the check output, later lines are long-form log
detail. Performance data is a whitespace separated list of
``key=value[;warn;crit;min;max]`` tokens.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from .models import ExecutionResult, NagiosResult, NagiosStatus

TIMEOUT_MESSAGE = "The process timed out"

_NON_NUMERIC_RE = re.compile(r"[^0-9.]+")
_STANDARD_CODES = frozenset(status.value for status in NagiosStatus)


def split_output(output: str) -> tuple[str, list[str], list[str]]:
    """Split raw plugin output into ``(message, perf_data, log_lines)``."""
    perf_data: list[str] = []
    log_lines: list[str] = []
    for line in output.split("\n"):
        if not line.strip():
            continue
        tokens = line.split("|")
        log_lines.append(tokens[0].strip())
        perf_data.extend(token.strip() for token in tokens[1:])

    message = log_lines[0] if log_lines else ""
    return message, perf_data, log_lines


def parse_perf_data(perf_data: Iterable[str]) -> dict[str, float]:
    """Extract numeric values; tokens whose value does not parse are skipped."""
    values: dict[str, float] = {}
    for line in perf_data:
        for token in line.split():
            key, sep, raw_value = token.partition("=")
            if not sep:
                continue
            number = _NON_NUMERIC_RE.sub("", raw_value.split(";", 1)[0])
            try:
                values[key] = float(number)
            except ValueError:
                continue
    return values


def classify(exit_code: int, output: str, *, perf_data: bool = True) -> NagiosResult:
    """Turn a plugin exit code and its output into a result."""
    if exit_code == -1:
        return NagiosResult(NagiosStatus.ERROR, TIMEOUT_MESSAGE)
    if exit_code in _STANDARD_CODES:
        message, raw_perf_data, _ = split_output(output)
        return NagiosResult(
            NagiosStatus(exit_code),
            message,
            parse_perf_data(raw_perf_data) if perf_data else {},
        )
    return NagiosResult(NagiosStatus.UNKNOWN, f"An unexpected exit code was returned: {exit_code}")


def classify_execution(execution: ExecutionResult, *, perf_data: bool = True) -> NagiosResult:
    return classify(execution.exit_code, execution.text, perf_data=perf_data)


__all__ = ["TIMEOUT_MESSAGE", "classify", "classify_execution", "parse_perf_data", "split_output"]

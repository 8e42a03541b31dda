# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Nagios result domain models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType


class NagiosStatus(IntEnum):
    OK = 0
    WARNING = 1
    ERROR = 2
    UNKNOWN = 3


@dataclass(frozen=True)
class NagiosResult:
    status: NagiosStatus
    message: str
    perf_data: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "perf_data", MappingProxyType(dict(self.perf_data)))

    def is_success(self, *, treat_warnings_as_failure: bool = False) -> bool:
        """OK always succeeds; WARNING succeeds unless warnings are treated as failures."""
        if self.status == NagiosStatus.OK:
            return True
        return self.status == NagiosStatus.WARNING and not treat_warnings_as_failure


@dataclass(frozen=True)
class ExecutionResult:
    """Raw outcome of one plugin run; ``exit_code`` is -1 when the process was killed."""

    exit_code: int
    output: bytes = b""
    timed_out: bool = False

    @property
    def text(self) -> str:
        return self.output.decode("utf-8", errors="replace")


__all__ = ["ExecutionResult", "NagiosResult", "NagiosStatus"]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Per-probe ambient context.

This module provides a ContextVar-backed ProbeContext that carries the probe
deadline. The process executor and the HTTP client read the remaining time from
this context when no explicit timeout is passed, so a credential lookup and the
plugin run share one budget.
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class ProbeContext:
    deadline: float | None = None
    target: str | None = None
    check: str | None = None

    def remaining(self) -> float | None:
        """Seconds left until the deadline (never negative), or None without a deadline."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0


_current_probe_context: ContextVar[ProbeContext | None] = ContextVar("nagprobe_probe_context", default=None)


def get_probe_context() -> ProbeContext:
    """Return the current ambient probe context."""
    return _current_probe_context.get() or ProbeContext()


@contextmanager
def probe_context(*, timeout: float | None = None, **overrides: Any) -> Iterator[ProbeContext]:
    """
    Context manager that layers overrides onto the ambient ProbeContext.

    ``timeout`` is converted into an absolute deadline; an outer deadline that
    expires sooner is kept. None-valued overrides are ignored to preserve outer
    context values.
    """
    current = get_probe_context()
    filtered = {key: value for key, value in overrides.items() if value is not None}
    if timeout is not None:
        deadline = time.monotonic() + max(0.0, timeout)
        if current.deadline is not None:
            deadline = min(deadline, current.deadline)
        filtered["deadline"] = deadline
    new_context = replace(current, **filtered) if filtered else current
    token = _current_probe_context.set(new_context)
    try:
        yield new_context
    finally:
        _current_probe_context.reset(token)


__all__ = ["ProbeContext", "get_probe_context", "probe_context"]

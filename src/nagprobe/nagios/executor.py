# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Run a Nagios plugin binary under the probe deadline."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Sequence

from ..errors import CheckExecutionError
from ..utils.context import get_probe_context
from .models import ExecutionResult

logger = logging.getLogger(__name__)

KILLED_EXIT_CODE = -1


def proxy_environment(proxy_url: str) -> dict[str, str]:
    return {
        "HTTPS_PROXY": proxy_url,
        "HTTP_PROXY": proxy_url,
        "https_proxy": proxy_url,
        "http_proxy": proxy_url,
        "USE_PROXY": "yes",
        "use_proxy": "yes",
    }


def build_environment(proxy_url: str | None) -> dict[str, str] | None:
    """Child environment: inherited as-is unless a proxy has to be injected."""
    if not proxy_url:
        return None
    env = dict(os.environ)
    env.update(proxy_environment(proxy_url))
    return env


def run_check(
    binary: str,
    args: Sequence[str],
    *,
    timeout: float | None = None,
    proxy_url: str | None = None,
) -> ExecutionResult:
    """
    Run ``binary`` with ``args`` and capture stdout and stderr as one stream.

    Without an explicit ``timeout`` the remaining time of the ambient probe
    context is used. When the deadline passes the child is killed and the
    result carries ``KILLED_EXIT_CODE``.
    """
    if timeout is None:
        timeout = get_probe_context().remaining()

    try:
        proc = subprocess.Popen(
            [binary, *args],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            env=build_environment(proxy_url),
        )
    except (OSError, ValueError) as exc:
        raise CheckExecutionError(f"unable to start {binary}: {exc}") from exc

    with proc:
        try:
            output, _ = proc.communicate(timeout=timeout)
            timed_out = False
        except subprocess.TimeoutExpired as exc:
            logger.debug("Killing %s after %.1fs", binary, timeout or 0.0)
            proc.kill()
            output = exc.output or b""
            # Retrying communicate() returns everything read so far; children
            # of the plugin may still hold the pipe open, so only wait briefly.
            try:
                output, _ = proc.communicate(timeout=1)
            except (subprocess.TimeoutExpired, OSError, ValueError):
                pass
            proc.wait()
            timed_out = True

    exit_code = proc.returncode
    if timed_out or exit_code is None or exit_code < 0:
        exit_code = KILLED_EXIT_CODE
    return ExecutionResult(exit_code=exit_code, output=output or b"", timed_out=timed_out)


__all__ = ["KILLED_EXIT_CODE", "build_environment", "proxy_environment", "run_check"]

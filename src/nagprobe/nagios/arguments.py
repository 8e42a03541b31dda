# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Argument templating for Nagios checks.

Module arguments are templates: an entry like ``"-H $target_host$"`` is split
into ``["-H", "$target_host$"]`` and every ``$name$`` placeholder is replaced
with the matching (case-insensitive) request parameter. Unknown placeholders
are passed through verbatim so plugins still see something recognizable.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from urllib.parse import urlsplit

PLACEHOLDER_RE = re.compile(r"\$\S*\$")
SENSITIVE_FLAGS = frozenset({"user", "username", "login", "pass", "password", "pwd"})
MASK = "*****"

_INLINE_VALUE_RE = re.compile(r"^(?P<flag>-+[^=: ]+)(?P<sep>[=: ])(?P<value>.+)$")

ParamValue = str | Sequence[str]


def split_arguments(templates: Iterable[str]) -> list[str]:
    """Split ``"-flag value"`` entries into two arguments at the first space."""
    args: list[str] = []
    for template in templates:
        if template.startswith("-"):
            args.extend(template.split(" ", 1))
        else:
            args.append(template)
    return args


def substitute_placeholders(args: Iterable[str], values: Mapping[str, str]) -> list[str]:
    """Replace all known ``$name$`` placeholders; unknown ones are left as-is."""

    def _replace(match: re.Match[str]) -> str:
        token = match.group(0)
        return values.get(token.strip("$").lower(), token)

    return [PLACEHOLDER_RE.sub(_replace, arg) for arg in args]


def build_arguments(templates: Iterable[str], values: Mapping[str, str]) -> list[str]:
    return substitute_placeholders(split_arguments(templates), values)


def _first_value(value: ParamValue) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, Sequence) and len(value) > 0:
        return str(value[0])
    return None


def _target_port(netloc: str) -> str:
    host = netloc.rpartition("@")[2]
    if host.startswith("["):
        host = host.partition("]")[2]
    _, sep, port = host.rpartition(":")
    return port if sep and port.isdigit() else ""


def build_placeholders(target: str, params: Mapping[str, ParamValue] | None = None) -> dict[str, str]:
    """
    Build the placeholder map for one probe.

    Request parameters are keyed by their lower-cased name (first value wins for
    repeated parameters); the ``target_*`` fields are derived from the target URL.
    """
    placeholders: dict[str, str] = {}
    for key, value in (params or {}).items():
        first = _first_value(value)
        if first is not None:
            placeholders[str(key).lower()] = first

    placeholders["target"] = target
    try:
        parts = urlsplit(target)
    except ValueError:
        return placeholders

    host = parts.netloc.rpartition("@")[2]
    placeholders["target_host"] = host
    placeholders["target_port"] = _target_port(parts.netloc)
    placeholders["target_scheme"] = parts.scheme
    placeholders["target_path"] = parts.path or "/"
    placeholders["target_base"] = f"{parts.scheme}://{host}"
    return placeholders


def _flag_name(arg: str) -> str:
    return arg.lstrip("-").rstrip(" :=").lower()


def obfuscate_arguments(args: Sequence[str]) -> list[str]:
    """
    Return a copy of ``args`` that is safe to log.

    Values of credential flags (``--pass secret``, ``-user=bob``, ``--pwd:x``)
    are replaced with a mask; everything else is kept.
    """
    masked: list[str] = []
    mask_next = False
    for arg in args:
        if mask_next and not arg.startswith("-"):
            masked.append(MASK)
            mask_next = False
            continue
        mask_next = False
        if arg.startswith("-"):
            inline = _INLINE_VALUE_RE.match(arg)
            if inline and _flag_name(inline.group("flag")) in SENSITIVE_FLAGS:
                masked.append(f"{inline.group('flag')}{inline.group('sep')}{MASK}")
                continue
            if _flag_name(arg) in SENSITIVE_FLAGS:
                mask_next = True
        masked.append(arg)
    return masked


__all__ = [
    "MASK",
    "SENSITIVE_FLAGS",
    "build_arguments",
    "build_placeholders",
    "obfuscate_arguments",
    "split_arguments",
    "substitute_placeholders",
]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Map a configured check name to an executable on disk."""

from __future__ import annotations

import os
import shutil

from ..errors import CheckResolutionError

CHECKS_DIR = "checks"


def resolve_check_binary(check: str, *, search_dir: str | None = None) -> str:
    """
    Resolve ``check`` to the path of its binary.

    Relative names are looked up in the ``checks`` folder of ``search_dir``
    (default: the current directory) first, so custom checks can be deployed
    alongside the exporter, and in ``PATH`` afterwards.
    """
    if not check:
        raise CheckResolutionError("no check specified")

    if os.path.isabs(check):
        if not os.path.exists(check):
            raise CheckResolutionError("file does not exist")
        return check

    base_dir = search_dir if search_dir is not None else os.getcwd()
    local_binary = os.path.join(base_dir, CHECKS_DIR, check)
    if os.path.exists(local_binary):
        return local_binary

    found = shutil.which(check)
    if found is None:
        raise CheckResolutionError(f'exec: "{check}": executable file not found in $PATH')
    return found


__all__ = ["CHECKS_DIR", "resolve_check_binary"]

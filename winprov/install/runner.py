# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/install/runner.py
from __future__ import annotations

import logging
import os
import subprocess
from typing import List, Optional

from ..core.exceptions import Fatal
from ..core.logger import Log
from ..core.logging_utils import log_step
from .msi import to_command_line
from .outcome import InstallOutcome, InstallResult, classify_exit_code


def run_installer(
    logger: logging.Logger,
    argv: List[str],
    *,
    name: str = "installer",
    timeout_s: Optional[float] = None,
    dry_run: bool = False,
) -> InstallResult:
    """
    Spawn one installer, wait for it, classify its exit code.

    A non-zero exit is not an exception here; the caller decides (the
    run-installer command turns FAILURE into the process exit code).
    """
    if not argv:
        raise Fatal(2, "run_installer: empty command")

    cmdline = to_command_line(argv)
    if dry_run:
        logger.info("DRY-RUN: would run %s", cmdline)
        return classify_exit_code(0)

    # On Windows hand CreateProcess the prepared string so MSI property
    # quoting survives; elsewhere keep the argv list.
    cmd = cmdline if os.name == "nt" else argv

    try:
        with log_step(logger, f"Running {name}"):
            proc = subprocess.run(cmd, timeout=timeout_s)
    except subprocess.TimeoutExpired as e:
        raise Fatal(124, f"{name} did not finish within {timeout_s:g}s", cause=e).with_context(command=cmdline) from e
    except OSError as e:
        raise Fatal(1, f"Cannot start {name}: {e}", cause=e).with_context(command=cmdline) from e

    result = classify_exit_code(proc.returncode)
    if result.outcome is InstallOutcome.SUCCESS:
        logger.info("%s succeeded", name)
    elif result.outcome is InstallOutcome.SUCCESS_REBOOT_REQUIRED:
        logger.warning("%s succeeded; a reboot is required (exit code %d)", name, result.exit_code)
    else:
        Log.fail(logger, f"{name} failed", exit_code=result.exit_code)
    return result

# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/install/__init__.py
from .outcome import (
    EXIT_SUCCESS,
    EXIT_SUCCESS_REBOOT_REQUIRED,
    InstallOutcome,
    InstallResult,
    classify_exit_code,
    raise_for_outcome,
)

__all__ = [
    "EXIT_SUCCESS",
    "EXIT_SUCCESS_REBOOT_REQUIRED",
    "InstallOutcome",
    "InstallResult",
    "classify_exit_code",
    "raise_for_outcome",
]

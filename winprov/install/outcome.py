# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/install/outcome.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..core.exceptions import InstallFailed

EXIT_SUCCESS = 0
EXIT_SUCCESS_REBOOT_REQUIRED = 3010  # ERROR_SUCCESS_REBOOT_REQUIRED


class InstallOutcome(Enum):
    SUCCESS = "success"
    SUCCESS_REBOOT_REQUIRED = "success-reboot-required"
    FAILURE = "failure"


@dataclass(frozen=True)
class InstallResult:
    exit_code: int
    outcome: InstallOutcome

    @property
    def ok(self) -> bool:
        return self.outcome is not InstallOutcome.FAILURE

    @property
    def reboot_required(self) -> bool:
        return self.outcome is InstallOutcome.SUCCESS_REBOOT_REQUIRED

    def process_exit_code(self, *, propagate_reboot: bool = False) -> int:
        """
        Exit code for this process: the installer's own code on failure,
        0 on success, and 0 or 3010 for a pending reboot depending on
        whether the caller (a task sequence) wants to see it.
        """
        if self.outcome is InstallOutcome.FAILURE:
            return self.exit_code
        if self.reboot_required and propagate_reboot:
            return EXIT_SUCCESS_REBOOT_REQUIRED
        return EXIT_SUCCESS


def classify_exit_code(code: int) -> InstallResult:
    code = int(code)
    if code == EXIT_SUCCESS:
        return InstallResult(code, InstallOutcome.SUCCESS)
    if code == EXIT_SUCCESS_REBOOT_REQUIRED:
        return InstallResult(code, InstallOutcome.SUCCESS_REBOOT_REQUIRED)
    return InstallResult(code, InstallOutcome.FAILURE)


def raise_for_outcome(result: InstallResult, name: str = "installer") -> InstallResult:
    if not result.ok:
        raise InstallFailed(code=result.exit_code, msg=f"{name} failed with exit code {result.exit_code}")
    return result

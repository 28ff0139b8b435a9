# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import pytest

from winprov.core.exceptions import InstallFailed, _clamp_exit_code
from winprov.install.outcome import InstallOutcome, classify_exit_code, raise_for_outcome


@pytest.mark.unit
class TestClassifyExitCode:
    def test_zero_is_success(self):
        r = classify_exit_code(0)
        assert r.outcome is InstallOutcome.SUCCESS
        assert r.ok and not r.reboot_required
        assert r.process_exit_code() == 0

    def test_3010_is_success_with_reboot(self):
        r = classify_exit_code(3010)
        assert r.outcome is InstallOutcome.SUCCESS_REBOOT_REQUIRED
        assert r.ok and r.reboot_required
        assert r.process_exit_code() == 0
        assert r.process_exit_code(propagate_reboot=True) == 3010

    @pytest.mark.parametrize("code", [1, 1603, 1618, 1641, -1, 2147942402])
    def test_anything_else_is_failure_and_propagates(self, code):
        r = classify_exit_code(code)
        assert r.outcome is InstallOutcome.FAILURE
        assert not r.ok
        assert r.process_exit_code() == code
        assert r.process_exit_code(propagate_reboot=True) == code

    def test_string_codes_are_accepted(self):
        assert classify_exit_code("3010").reboot_required


@pytest.mark.unit
class TestRaiseForOutcome:
    def test_success_passes_through(self):
        r = classify_exit_code(3010)
        assert raise_for_outcome(r) is r

    def test_failure_carries_installer_code(self):
        with pytest.raises(InstallFailed) as ei:
            raise_for_outcome(classify_exit_code(1603), "SQLSysClrTypes.msi")
        assert "1603" in str(ei.value)
        assert "SQLSysClrTypes.msi" in str(ei.value)

    def test_installer_code_survives_clamping_on_windows(self):
        assert _clamp_exit_code(1603, windows=True) == 1603
        assert _clamp_exit_code(3010, windows=True) == 3010
        assert _clamp_exit_code(1603, windows=False) == 255
        assert _clamp_exit_code(-5, windows=True) == 1

# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exit codes surfaced by the console entry point."""
from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from winprov.__main__ import run
from winprov.core.exceptions import WaitTimeout
from winprov.install.outcome import classify_exit_code


@pytest.mark.unit
class TestRunExitCodes:
    def test_missing_config_file_is_config_error(self, tmp_path):
        assert run(["--config", str(tmp_path / "absent.yaml"), "--cmd", "show-adapters"]) == 2

    def test_unknown_cmd_exits_from_validation(self):
        with pytest.raises(SystemExit):
            run(["--cmd", "format-disk"])

    def test_service_timeout_is_124(self):
        err = WaitTimeout(code=124, msg="Timed out after 1s waiting for WDSServer")
        with patch("winprov.modes.service_mode.wait_for_service_status", side_effect=err):
            assert run(["--cmd", "wait-service", "--service-name", "WDSServer", "--wait-timeout", "1"]) == 124

    def test_json_mode_prints_error_document(self, capsys):
        err = WaitTimeout(code=124, msg="Timed out after 1s waiting for WDSServer")
        with patch("winprov.modes.service_mode.wait_for_service_status", side_effect=err):
            rc = run(["--cmd", "wait-service", "--service-name", "WDSServer", "--json"])
        doc = json.loads(capsys.readouterr().out)
        assert rc == 124
        assert doc["error"] == {
            "type": "WaitTimeout",
            "code": 124,
            "message": "Timed out after 1s waiting for WDSServer",
            "context": {},
        }

    def test_missing_sc_exe_is_reported_not_unhandled(self, capsys):
        with patch("subprocess.run", side_effect=FileNotFoundError(2, "No such file", "sc.exe")):
            rc = run(["--cmd", "wait-service", "--service-name", "WDSServer", "--wait-timeout", "0"])
        err = capsys.readouterr().err
        assert rc == 1
        assert "sc.exe not available" in err
        assert "UNHANDLED" not in err

    def test_installer_failure_code_propagates(self, tmp_path, capsys):
        msi = tmp_path / "agent.msi"
        msi.write_bytes(b"")
        with patch("winprov.modes.install_mode.run_installer", return_value=classify_exit_code(1603)):
            rc = run(["--cmd", "run-installer", "--installer", str(msi), "--no-elevation-check", "--json"])
        assert rc == 1603

    def test_reboot_required_is_success_by_default(self, tmp_path, capsys):
        msi = tmp_path / "agent.msi"
        msi.write_bytes(b"")
        argv = ["--cmd", "run-installer", "--installer", str(msi), "--no-elevation-check", "--json"]
        with patch("winprov.modes.install_mode.run_installer", return_value=classify_exit_code(3010)):
            assert run(argv) == 0
            assert run(argv + ["--propagate-reboot"]) == 3010

    def test_unhandled_exception_is_one(self):
        with patch("winprov.orchestrator.Orchestrator.run", side_effect=RuntimeError("boom")):
            assert run(["--cmd", "show-adapters"]) == 1

    def test_interrupt_is_130(self):
        with patch("winprov.orchestrator.Orchestrator.run", side_effect=KeyboardInterrupt):
            assert run(["--cmd", "show-adapters"]) == 130

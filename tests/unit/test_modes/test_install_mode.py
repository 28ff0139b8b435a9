# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import argparse
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from fakes.fake_logger import FakeLogger
from winprov.core.exceptions import ConfigError
from winprov.install.outcome import classify_exit_code
from winprov.modes.install_mode import InstallMode, _parse_property_pairs


def _args(**kw):
    base = dict(
        installer=None,
        url=None,
        staging_dir=None,
        sha256=None,
        insecure=False,
        msi_property=None,
        msi_action=None,
        msi_log=None,
        installer_args=None,
        installer_timeout=None,
        propagate_reboot=False,
        dry_run=False,
        json_output=True,
        no_elevation_check=True,
    )
    base.update(kw)
    return argparse.Namespace(**base)


@pytest.fixture
def msi(tmp_path):
    p = tmp_path / "SQLSysClrTypes.msi"
    p.write_bytes(b"")
    return p


@pytest.mark.unit
class TestPropertyPairs:
    def test_pairs(self):
        assert _parse_property_pairs(["ALLUSERS=1", "INSTALLDIR=C:\\A=B"]) == {"ALLUSERS": "1", "INSTALLDIR": "C:\\A=B"}

    def test_missing_equals(self):
        with pytest.raises(ConfigError):
            _parse_property_pairs(["ALLUSERS"])


@pytest.mark.unit
class TestBuildArgv:
    def test_msi_uses_msiexec_with_merged_properties(self, msi):
        mode = InstallMode(
            FakeLogger(),
            _args(msi_property=["REBOOT=ReallySuppress"]),
            {"msi_properties": {"ALLUSERS": 1}},
        )
        argv = mode.build_argv(msi)
        assert argv[:3] == ["msiexec.exe", "/i", str(msi)]
        assert "/qn" in argv and "/norestart" in argv
        assert argv[-2:] == ["ALLUSERS=1", "REBOOT=ReallySuppress"]

    def test_exe_gets_installer_args(self, tmp_path):
        exe = tmp_path / "setup.exe"
        argv = InstallMode(FakeLogger(), _args(installer_args="/S /norestart")).build_argv(exe)
        assert argv == [str(exe), "/S", "/norestart"]


@pytest.mark.unit
class TestRun:
    @pytest.mark.parametrize(
        "code,propagate,expected,outcome",
        [
            (0, False, 0, "success"),
            (3010, False, 0, "success-reboot-required"),
            (3010, True, 3010, "success-reboot-required"),
            (1603, False, 1603, "failure"),
        ],
    )
    def test_exit_code_mapping(self, msi, capsys, code, propagate, expected, outcome):
        with patch("winprov.modes.install_mode.run_installer", return_value=classify_exit_code(code)) as ri:
            rc = InstallMode(FakeLogger(), _args(installer=str(msi), propagate_reboot=propagate)).run()
        assert rc == expected
        doc = json.loads(capsys.readouterr().out)
        assert doc["exit_code"] == code
        assert doc["outcome"] == outcome
        assert doc["process_exit_code"] == expected
        assert ri.call_args[1]["name"] == msi.name

    def test_missing_local_installer(self, tmp_path):
        from winprov.core.exceptions import PreconditionError

        with pytest.raises(PreconditionError):
            InstallMode(FakeLogger(), _args(installer=str(tmp_path / "nope.msi"))).run()

    def test_dry_run_url_does_not_download(self, tmp_path, capsys):
        logger = FakeLogger()
        with patch("winprov.modes.install_mode.download_file") as dl:
            rc = InstallMode(
                logger,
                _args(url="https://dl.example.com/pkg/agent.msi", staging_dir=str(tmp_path), dry_run=True),
            ).run()
        assert rc == 0
        dl.assert_not_called()
        doc = json.loads(capsys.readouterr().out)
        assert Path(doc["installer"]) == tmp_path / "agent.msi"
        assert doc["dry_run"] is True
        assert any("would download" in m for m in logger.messages("info"))

    def test_url_is_downloaded_then_run(self, tmp_path, capsys):
        staged = tmp_path / "agent.msi"
        with patch("winprov.modes.install_mode.download_file", return_value=staged) as dl, patch(
            "winprov.modes.install_mode.run_installer", return_value=classify_exit_code(0)
        ) as ri:
            InstallMode(
                FakeLogger(),
                _args(url="https://dl.example.com/agent.msi", staging_dir=str(tmp_path), sha256="ab" * 32),
            ).run()
        assert dl.call_args[1] == {"verify": True, "sha256": "ab" * 32}
        assert ri.call_args[0][1][:3] == ["msiexec.exe", "/i", str(staged)]

    def test_elevation_checked_unless_disabled(self, msi):
        with patch("winprov.modes.install_mode.U.require_elevated") as req, patch(
            "winprov.modes.install_mode.run_installer", return_value=classify_exit_code(0)
        ):
            InstallMode(FakeLogger(), _args(installer=str(msi), no_elevation_check=False, json_output=True)).run()
        req.assert_called_once()

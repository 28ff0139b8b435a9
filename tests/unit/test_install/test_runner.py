# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import logging
import subprocess
import unittest
from unittest.mock import Mock, patch

from winprov.core.exceptions import Fatal
from winprov.install.outcome import InstallOutcome
from winprov.install.runner import run_installer


class TestRunInstaller(unittest.TestCase):
    def setUp(self):
        self.logger = logging.getLogger("winprov.test.runner")
        self.argv = ["msiexec.exe", "/i", "app.msi", "/qn", "/norestart"]

    @patch("winprov.install.runner.subprocess.run")
    def test_success(self, mock_run):
        mock_run.return_value = Mock(returncode=0)
        r = run_installer(self.logger, self.argv, name="app.msi")
        self.assertIs(r.outcome, InstallOutcome.SUCCESS)

    @patch("winprov.install.runner.subprocess.run")
    def test_reboot_required(self, mock_run):
        mock_run.return_value = Mock(returncode=3010)
        r = run_installer(self.logger, self.argv)
        self.assertTrue(r.reboot_required)
        self.assertEqual(r.process_exit_code(), 0)

    @patch("winprov.install.runner.subprocess.run")
    def test_failure_is_returned_not_raised(self, mock_run):
        mock_run.return_value = Mock(returncode=1603)
        r = run_installer(self.logger, self.argv)
        self.assertFalse(r.ok)
        self.assertEqual(r.process_exit_code(), 1603)

    @patch("winprov.install.runner.os")
    @patch("winprov.install.runner.subprocess.run")
    def test_argv_list_off_windows(self, mock_run, mock_os):
        mock_os.name = "posix"
        mock_run.return_value = Mock(returncode=0)
        run_installer(self.logger, self.argv, timeout_s=600)
        self.assertEqual(mock_run.call_args[0][0], self.argv)
        self.assertEqual(mock_run.call_args[1]["timeout"], 600)

    @patch("winprov.install.runner.os")
    @patch("winprov.install.runner.subprocess.run")
    def test_command_string_on_windows(self, mock_run, mock_os):
        mock_os.name = "nt"
        mock_run.return_value = Mock(returncode=0)
        run_installer(self.logger, ["msiexec.exe", "/i", "app.msi", 'INSTALLDIR="C:\\Program Files\\App"'])
        self.assertEqual(mock_run.call_args[0][0], 'msiexec.exe /i app.msi INSTALLDIR="C:\\Program Files\\App"')

    @patch("winprov.install.runner.subprocess.run")
    def test_dry_run_spawns_nothing(self, mock_run):
        r = run_installer(self.logger, self.argv, dry_run=True)
        mock_run.assert_not_called()
        self.assertTrue(r.ok)

    @patch("winprov.install.runner.subprocess.run")
    def test_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="msiexec.exe", timeout=5)
        with self.assertRaises(Fatal) as cm:
            run_installer(self.logger, self.argv, timeout_s=5)
        self.assertEqual(cm.exception.code, 124)
        self.assertIn("msiexec.exe", cm.exception.context["command"])

    @patch("winprov.install.runner.subprocess.run")
    def test_missing_executable(self, mock_run):
        mock_run.side_effect = FileNotFoundError(2, "No such file", "setup.exe")
        with self.assertRaises(Fatal) as cm:
            run_installer(self.logger, ["setup.exe", "/quiet"])
        self.assertEqual(cm.exception.code, 1)
        self.assertEqual(cm.exception.context, {"command": "setup.exe /quiet"})

    def test_empty_argv(self):
        with self.assertRaises(Fatal):
            run_installer(self.logger, [])


if __name__ == "__main__":
    unittest.main()

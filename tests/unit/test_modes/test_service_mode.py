# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import argparse
import json
from unittest.mock import patch

import pytest

from fakes.fake_logger import FakeLogger
from winprov.core.exceptions import ConfigError, WaitTimeout
from winprov.modes.service_mode import ServiceMode
from winprov.services.status import ServiceState


def _args(**kw):
    base = dict(service_name="WDSServer", service_status="RUNNING", wait_timeout=30.0, wait_interval=1.0, json_output=True)
    base.update(kw)
    return argparse.Namespace(**base)


@pytest.mark.unit
class TestServiceMode:
    def test_reports_state(self, capsys):
        with patch("winprov.modes.service_mode.wait_for_service_status", return_value=ServiceState.RUNNING) as w:
            rc = ServiceMode(FakeLogger(), _args(wait_timeout=5.0, wait_interval=0.5)).run()
        assert rc == 0
        assert json.loads(capsys.readouterr().out) == {"service": "WDSServer", "state": "RUNNING"}
        assert w.call_args[0][1:] == ("WDSServer", ServiceState.RUNNING)
        assert w.call_args[1] == {"timeout_s": 5.0, "interval_s": 0.5}

    def test_zero_timeout_is_kept(self):
        with patch("winprov.modes.service_mode.wait_for_service_status", return_value=ServiceState.STOPPED) as w:
            ServiceMode(FakeLogger(), _args(service_status="stopped", wait_timeout=0.0)).run()
        assert w.call_args[0][2] is ServiceState.STOPPED
        assert w.call_args[1]["timeout_s"] == 0.0

    def test_timeout_propagates(self):
        err = WaitTimeout(code=124, msg="Timed out after 5s waiting for WDSServer")
        with patch("winprov.modes.service_mode.wait_for_service_status", side_effect=err):
            with pytest.raises(WaitTimeout) as ei:
                ServiceMode(FakeLogger(), _args()).run()
        assert ei.value.code == 124

    def test_missing_name(self):
        with pytest.raises(ConfigError):
            ServiceMode(FakeLogger(), _args(service_name=None)).run()

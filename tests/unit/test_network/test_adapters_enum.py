# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import json
import logging
from unittest.mock import patch

import pytest

from winprov.core.exceptions import Fatal
from winprov.network import adapters as mod
from winprov.network.adapters import enumerate_adapters, enumerate_sysfs, parse_powershell_adapters

LOG = logging.getLogger("winprov.test.adapters")


@pytest.mark.unit
class TestParsePowershell:
    def test_single_object(self):
        payload = json.dumps(
            {"Name": "Ethernet", "MacAddress": "00-15-5D-10-10-10", "Status": "Up", "ifIndex": 12, "InterfaceDescription": "Hyper-V"}
        )
        out = parse_powershell_adapters(payload)
        assert len(out) == 1
        assert out[0].name == "Ethernet"
        assert out[0].if_index == 12
        assert out[0].normalized_mac == "00155D101010"

    def test_list_keeps_order(self):
        payload = json.dumps(
            [
                {"Name": "B", "MacAddress": "00-15-5D-00-00-02", "ifIndex": 3},
                {"Name": "A", "MacAddress": "00-15-5D-00-00-01", "ifIndex": 2},
            ]
        )
        assert [a.name for a in parse_powershell_adapters(payload)] == ["B", "A"]

    def test_empty_output(self):
        assert parse_powershell_adapters("") == []
        assert parse_powershell_adapters("  \r\n") == []

    def test_skips_entries_without_mac(self):
        payload = json.dumps([{"Name": "WAN Miniport", "MacAddress": ""}, {"Name": "Eth", "MacAddress": "00-15-5D-00-00-01"}])
        assert [a.name for a in parse_powershell_adapters(payload)] == ["Eth"]

    def test_garbage(self):
        with pytest.raises(Fatal):
            parse_powershell_adapters("Get-NetAdapter : not recognized")


def _mk_nic(root, name, mac, *, state="up", physical=True, ifindex="2"):
    d = root / name
    d.mkdir()
    (d / "address").write_text(mac + "\n")
    (d / "operstate").write_text(state + "\n")
    (d / "ifindex").write_text(ifindex + "\n")
    if physical:
        (d / "device").mkdir()


@pytest.mark.unit
class TestSysfs:
    def test_physical_up_only(self, tmp_path):
        _mk_nic(tmp_path, "eth0", "00:15:5d:10:10:10", ifindex="2")
        _mk_nic(tmp_path, "eth1", "00:15:5d:10:10:11", state="down", ifindex="3")
        _mk_nic(tmp_path, "virbr0", "52:54:00:00:00:01", physical=False, ifindex="4")
        _mk_nic(tmp_path, "lo", "00:00:00:00:00:00", physical=False, ifindex="1")

        out = enumerate_sysfs(tmp_path)
        assert [a.name for a in out] == ["eth0"]
        assert out[0].if_index == 2
        assert out[0].status == "Up"

    def test_unknown_operstate_is_kept(self, tmp_path):
        _mk_nic(tmp_path, "eth0", "00:15:5d:10:10:10", state="unknown")
        assert len(enumerate_sysfs(tmp_path)) == 1

    def test_missing_root(self, tmp_path):
        assert enumerate_sysfs(tmp_path / "nope") == []


@pytest.mark.unit
class TestEnumerateAdapters:
    def test_powershell_backend(self):
        payload = json.dumps({"Name": "Ethernet", "MacAddress": "00-15-5D-10-10-10", "ifIndex": 5})
        with patch.object(mod.U, "powershell", return_value=payload) as ps:
            out = enumerate_adapters(LOG, "powershell")
        assert out[0].if_index == 5
        assert "Get-NetAdapter -Physical" in ps.call_args[0][1]

    def test_sysfs_backend(self):
        with patch.object(mod, "enumerate_sysfs", return_value=[]) as sysfs:
            assert enumerate_adapters(LOG, "sysfs") == []
        sysfs.assert_called_once()

    def test_unknown_backend(self):
        with pytest.raises(Fatal):
            enumerate_adapters(LOG, "wmi")

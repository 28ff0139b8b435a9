# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import logging
import unittest

from winprov.config.adapter_table import AdapterTable
from winprov.core.exceptions import AdapterNotMatched
from winprov.network.model import NetworkAdapter
from winprov.network.resolver import resolve_adapter

TSID = "b94dbbb4-2ede-4e95-8902-8a24a5a53543"


def _nic(name, mac, idx=None):
    return NetworkAdapter(name=name, mac=mac, if_index=idx)


class TestResolveAdapter(unittest.TestCase):
    def setUp(self):
        self.table = AdapterTable.from_mapping(
            {
                "00-15-5D-10-10-10": {"tsid": TSID},
                "00:15:5d:10:10:11": {"static": {"ip": "10.0.20.15", "mask": "255.255.255.0"}},
            }
        )

    def test_matches_across_separator_and_case(self):
        res = resolve_adapter([_nic("Ethernet", "00:15:5d:10:10:10")], self.table)
        self.assertEqual(res.adapter.name, "Ethernet")
        self.assertEqual(res.config.tsid, TSID)

    def test_first_enumerated_match_wins(self):
        adapters = [
            _nic("Ethernet 0", "AA-AA-AA-AA-AA-AA"),
            _nic("Ethernet 1", "00-15-5D-10-10-11"),
            _nic("Ethernet 2", "00-15-5D-10-10-10"),
        ]
        res = resolve_adapter(adapters, self.table)
        self.assertEqual(res.adapter.name, "Ethernet 1")
        self.assertEqual(res.config.kind, "static")

    def test_enumeration_order_not_table_order(self):
        adapters = [_nic("second", "00-15-5D-10-10-11"), _nic("first", "00-15-5D-10-10-10")]
        self.assertEqual(resolve_adapter(adapters, self.table).adapter.name, "second")

    def test_fails_closed_with_detected_macs(self):
        adapters = [_nic("a", "aa:bb:cc:dd:ee:01"), _nic("b", "aa:bb:cc:dd:ee:02")]
        with self.assertRaises(AdapterNotMatched) as cm:
            resolve_adapter(adapters, self.table)
        self.assertEqual(cm.exception.detected_macs, ["AA-BB-CC-DD-EE-01", "AA-BB-CC-DD-EE-02"])
        self.assertEqual(cm.exception.code, 2)
        self.assertIn("AA-BB-CC-DD-EE-01", str(cm.exception))

    def test_no_adapters_at_all(self):
        with self.assertRaises(AdapterNotMatched) as cm:
            resolve_adapter([], self.table)
        self.assertEqual(cm.exception.detected_macs, [])
        self.assertIn("<none>", str(cm.exception))

    def test_logs_with_logger(self):
        logger = logging.getLogger("winprov.test.resolver")
        with self.assertLogs(logger, level="INFO") as cm:
            resolve_adapter([_nic("Ethernet", "00155d101010")], self.table, logger)
        self.assertTrue(any("00-15-5D-10-10-10" in line for line in cm.output))


if __name__ == "__main__":
    unittest.main()

# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import base64
import logging
import unittest
from pathlib import Path
import tempfile
from unittest.mock import patch

from fakes.cert_factory import der, make_cert, pem
from fakes.fake_logger import FakeLogger
from winprov.certs import store as store_mod
from winprov.certs.model import CertificateRecord
from winprov.certs.store import DirectoryCertStore, WindowsCertStore, filter_by_issuer, parse_base64_lines
from winprov.core.exceptions import Fatal, PreconditionError


class TestWindowsCertStore(unittest.TestCase):
    def setUp(self):
        self.logger = logging.getLogger("winprov.test.certstore")

    def test_ps_path(self):
        self.assertEqual(WindowsCertStore(self.logger).ps_path, "Cert:\\LocalMachine\\My")
        self.assertEqual(WindowsCertStore(self.logger, "WebHosting", "CurrentUser").ps_path, "Cert:\\CurrentUser\\WebHosting")

    def test_rejects_injection_in_store_name(self):
        with self.assertRaises(Fatal):
            WindowsCertStore(self.logger, "My'; Remove-Item C:\\ -Recurse; '")
        with self.assertRaises(Fatal):
            WindowsCertStore(self.logger, "My", "Elsewhere")

    def test_load_parses_raw_data(self):
        a, b = make_cert("a", ["a.example.com"]), make_cert("b", ["b.example.com"])
        out = "\r\n".join(base64.b64encode(der(c)).decode("ascii") for c in (a, b))
        with patch.object(store_mod.U, "powershell", return_value=out) as ps:
            recs = WindowsCertStore(self.logger).load()
        self.assertEqual([r.san_dns_names for r in recs], [("a.example.com",), ("b.example.com",)])
        self.assertIn("RawData", ps.call_args[0][1])
        self.assertEqual(recs[0].source, "Cert:\\LocalMachine\\My")


class TestParseBase64Lines(unittest.TestCase):
    def test_undecodable_entries_are_skipped(self):
        logger = FakeLogger()
        good = base64.b64encode(der(make_cert("a", ["a"]))).decode("ascii")
        bad_der = base64.b64encode(b"not a certificate").decode("ascii")
        recs = parse_base64_lines(logger, ["", good, "%%%notbase64", bad_der], source="test")
        self.assertEqual(len(recs), 1)
        self.assertEqual(len(logger.messages("warning")), 2)


class TestDirectoryCertStore(unittest.TestCase):
    def setUp(self):
        self.logger = FakeLogger()
        self._td = tempfile.TemporaryDirectory()
        self.td = Path(self._td.name)

    def tearDown(self):
        self._td.cleanup()

    def test_loads_pem_and_der_sorted_by_name(self):
        (self.td / "b.cer").write_bytes(der(make_cert("b", ["b"])))
        (self.td / "a.pem").write_bytes(pem(make_cert("a", ["a"])))
        (self.td / "readme.txt").write_text("skip me")
        (self.td / "c.crt").write_bytes(b"garbage")
        recs = DirectoryCertStore(self.logger, self.td).load()
        self.assertEqual([r.san_dns_names for r in recs], [("a",), ("b",)])
        self.assertTrue(recs[0].source.endswith("a.pem"))
        self.assertEqual(len(self.logger.messages("warning")), 1)

    def test_missing_directory(self):
        with self.assertRaises(PreconditionError):
            DirectoryCertStore(self.logger, self.td / "nope").load()


class TestFilterByIssuer(unittest.TestCase):
    def test_case_sensitive_substring(self):
        contoso = CertificateRecord.from_der(der(make_cert("a", ["a"], issuer_org="Contoso Issuing CA")))
        other = CertificateRecord.from_der(der(make_cert("b", ["b"], issuer_org="Fabrikam CA")))
        self.assertEqual(filter_by_issuer([contoso, other], "Contoso"), [contoso])
        self.assertEqual(filter_by_issuer([contoso, other], "contoso"), [])
        self.assertEqual(filter_by_issuer([contoso, other], ""), [contoso, other])


if __name__ == "__main__":
    unittest.main()

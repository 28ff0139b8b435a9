# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/modes/cert_mode.py
from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..certs.matcher import match_certificates, select_certificate
from ..certs.model import CertificateRecord
from ..certs.store import DirectoryCertStore, WindowsCertStore, filter_by_issuer
from ..core.exceptions import PreconditionError
from ..core.file_ops import atomic_write
from ..core.host import resolve_fqdn
from ..core.logger import Log
from .output import create_console, print_json, print_table


class CertMode:
    """
    find-cert: pick the certificate whose SAN carries this host's FQDN.

    The thumbprint goes to stdout (and optionally `thumbprint_out`) for the
    binding step that follows.
    """

    def __init__(self, logger: logging.Logger, args: argparse.Namespace, conf: Optional[Dict[str, Any]] = None):
        self.logger = logger
        self.args = args
        self.conf = conf or {}

    def _fqdn(self) -> str:
        explicit = getattr(self.args, "fqdn", None)
        if explicit:
            return str(explicit).strip()
        return resolve_fqdn(getattr(self.args, "hostname", None), getattr(self.args, "dns_suffix", None))

    def _load(self) -> List[CertificateRecord]:
        cert_dir = getattr(self.args, "cert_dir", None)
        if cert_dir:
            return DirectoryCertStore(self.logger, Path(cert_dir)).load()
        if os.name != "nt":
            raise PreconditionError(1, "The Windows certificate store is only reachable on Windows; set `cert_dir:`")
        store = WindowsCertStore(
            self.logger,
            store=getattr(self.args, "cert_store", None) or "My",
            location=getattr(self.args, "cert_location", None) or "LocalMachine",
        )
        return store.load()

    def run(self) -> int:
        fqdn = self._fqdn()
        Log.step(self.logger, "Matching certificate SAN DNS names", fqdn=fqdn)

        issuer = getattr(self.args, "issuer_contains", None) or ""
        records = filter_by_issuer(self._load(), issuer)
        self.logger.info("%d candidate certificate(s)%s", len(records), f" issued by *{issuer}*" if issuer else "")

        matches = match_certificates(records, fqdn)
        selected = select_certificate(
            records,
            fqdn,
            policy=getattr(self.args, "cert_policy", None) or "unique",
            valid_only=bool(getattr(self.args, "valid_only", False)),
            logger=self.logger,
        )
        self.logger.info("Selected certificate %s (%s)", selected.thumbprint, selected.subject)

        out = getattr(self.args, "thumbprint_out", None)
        if out and not getattr(self.args, "dry_run", False):
            target = Path(out).expanduser()
            with atomic_write(target) as tmp:
                tmp.write_text(selected.thumbprint + "\n", encoding="utf-8")
            self.logger.info("Thumbprint written to %s", target)

        if getattr(self.args, "json_output", False):
            print_json(
                {
                    "fqdn": fqdn,
                    "selected": selected.to_dict(),
                    "candidates": [dict(m.record.to_dict(), matched=m.matched) for m in matches],
                }
            )
        elif create_console() is not None:
            print_table(
                f"Certificates for {fqdn}",
                ["Thumbprint", "Subject", "SAN DNS names", "Match", "Selected"],
                [
                    [
                        m.record.thumbprint,
                        m.record.subject,
                        ", ".join(m.record.san_dns_names),
                        "yes" if m.matched else "no",
                        "*" if m.record.thumbprint == selected.thumbprint else "",
                    ]
                    for m in matches
                ],
            )
        else:
            print(selected.thumbprint)
        return 0

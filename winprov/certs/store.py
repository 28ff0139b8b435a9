# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/certs/store.py
"""
Certificate sources.

WindowsCertStore reads Cert:\\<location>\\<store> through PowerShell and
re-parses every entry from its DER bytes, so SAN handling is identical to
certificates loaded from files by DirectoryCertStore.
"""
from __future__ import annotations

import base64
import binascii
import logging
import re
from pathlib import Path
from typing import Iterable, List

from ..core.exceptions import Fatal, PreconditionError
from ..core.utils import U
from .model import CertificateRecord

_STORE_NAME = re.compile(r"^[A-Za-z0-9_]+$")
_CERT_EXT = {".pem", ".crt", ".cer", ".der"}


class WindowsCertStore:
    def __init__(self, logger: logging.Logger, store: str = "My", location: str = "LocalMachine") -> None:
        if not _STORE_NAME.match(store) or location not in ("LocalMachine", "CurrentUser"):
            raise Fatal(2, f"Invalid certificate store: {location}\\{store}")
        self.logger = logger
        self.store = store
        self.location = location

    @property
    def ps_path(self) -> str:
        return f"Cert:\\{self.location}\\{self.store}"

    def _script(self) -> str:
        return (
            f"Get-ChildItem -Path '{self.ps_path}' "
            "| ForEach-Object { [Convert]::ToBase64String($_.RawData) }"
        )

    def load(self) -> List[CertificateRecord]:
        out = U.powershell(self.logger, self._script())
        return parse_base64_lines(self.logger, out.splitlines(), source=self.ps_path)


def parse_base64_lines(logger: logging.Logger, lines: Iterable[str], *, source: str) -> List[CertificateRecord]:
    records: List[CertificateRecord] = []
    for n, line in enumerate(lines, 1):
        line = line.strip()
        if not line:
            continue
        try:
            records.append(CertificateRecord.from_der(base64.b64decode(line, validate=True), source=source))
        except (binascii.Error, ValueError) as e:
            logger.warning("Skipping undecodable certificate #%d in %s: %s", n, source, e)
    logger.debug("Loaded %d certificate(s) from %s", len(records), source)
    return records


class DirectoryCertStore:
    """PEM/DER files in a directory (non-recursive), sorted by file name."""

    def __init__(self, logger: logging.Logger, path: Path) -> None:
        self.logger = logger
        self.path = Path(path).expanduser()

    def load(self) -> List[CertificateRecord]:
        if not self.path.is_dir():
            raise PreconditionError(1, f"Certificate directory not found: {self.path}")

        records: List[CertificateRecord] = []
        for f in sorted(self.path.iterdir(), key=lambda p: p.name):
            if f.suffix.lower() not in _CERT_EXT or not f.is_file():
                continue
            raw = f.read_bytes()
            try:
                if b"-----BEGIN CERTIFICATE-----" in raw:
                    records.extend(CertificateRecord.from_pem(raw, source=str(f)))
                else:
                    records.append(CertificateRecord.from_der(raw, source=str(f)))
            except ValueError as e:
                self.logger.warning("Skipping unreadable certificate %s: %s", f, e)
        self.logger.debug("Loaded %d certificate(s) from %s", len(records), self.path)
        return records


def filter_by_issuer(records: Iterable[CertificateRecord], substring: str) -> List[CertificateRecord]:
    """Issuer name contains `substring` (case-sensitive). Empty substring keeps everything."""
    if not substring:
        return list(records)
    return [r for r in records if substring in r.issuer]

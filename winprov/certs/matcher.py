# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/certs/matcher.py
"""
Pick the certificate whose SAN carries this host's FQDN.

Comparison is exact and case-sensitive: `web01.corp.example.com` does not
match `WEB01.corp.example.com`. Pass the FQDN in the case the issuing CA
uses.

Selection policies when several certificates match:
  unique  more than one distinct thumbprint is an error (default)
  last    the last match in store order wins (legacy behaviour)
  first   the first match in store order wins
"""
from __future__ import annotations

import datetime as _dt
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from ..core.exceptions import AmbiguousCertificate, CertificateNotFound, Fatal
from .model import CertificateRecord

POLICIES = ("unique", "last", "first")


@dataclass(frozen=True)
class CertMatch:
    record: CertificateRecord
    matched: bool


def san_matches(record: CertificateRecord, fqdn: str) -> bool:
    return any(name == fqdn for name in record.san_dns_names)


def match_certificates(records: Iterable[CertificateRecord], fqdn: str) -> List[CertMatch]:
    return [CertMatch(record=r, matched=san_matches(r, fqdn)) for r in records]


def select_certificate(
    records: Sequence[CertificateRecord],
    fqdn: str,
    *,
    policy: str = "unique",
    valid_only: bool = False,
    now: Optional[_dt.datetime] = None,
    logger: Optional[logging.Logger] = None,
) -> CertificateRecord:
    if policy not in POLICIES:
        raise Fatal(2, f"Unknown certificate policy: {policy} (expected one of {', '.join(POLICIES)})")

    matches: List[CertificateRecord] = []
    for m in match_certificates(records, fqdn):
        r = m.record
        if logger:
            logger.debug("Certificate %s SAN=%s match=%s", r.thumbprint, ",".join(r.san_dns_names), m.matched)
        if not m.matched:
            continue
        if valid_only and not r.is_valid_at(now):
            if logger:
                logger.warning("Ignoring %s: outside validity window (%s .. %s)", r.thumbprint, r.not_before, r.not_after)
            continue
        matches.append(r)

    if not matches:
        raise CertificateNotFound(4, f"No certificate has a SAN DNS name equal to {fqdn}")

    # The same certificate can show up twice (e.g. a PEM bundle next to its DER copy).
    distinct: List[str] = []
    for r in matches:
        if r.thumbprint not in distinct:
            distinct.append(r.thumbprint)

    if len(distinct) > 1:
        if policy == "unique":
            raise AmbiguousCertificate(fqdn, distinct)
        if logger:
            logger.warning("%d certificates match %s; policy=%s", len(distinct), fqdn, policy)

    return matches[-1] if policy == "last" else matches[0]

# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/certs/__init__.py
from .matcher import POLICIES, CertMatch, match_certificates, san_matches, select_certificate
from .model import CertificateRecord
from .store import DirectoryCertStore, WindowsCertStore, filter_by_issuer

__all__ = [
    "POLICIES",
    "CertMatch",
    "CertificateRecord",
    "DirectoryCertStore",
    "WindowsCertStore",
    "filter_by_issuer",
    "match_certificates",
    "san_matches",
    "select_certificate",
]

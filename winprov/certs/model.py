# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/certs/model.py
from __future__ import annotations

import datetime as _dt
import hashlib
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from cryptography import x509
from cryptography.hazmat.primitives.serialization import Encoding


def _name_str(name: x509.Name) -> str:
    # Windows shows names most-specific first ("CN=host, O=Org, C=US");
    # rfc4514_string() already emits that order.
    return name.rfc4514_string()


def _utc(dt: _dt.datetime) -> _dt.datetime:
    return dt if dt.tzinfo else dt.replace(tzinfo=_dt.timezone.utc)


def _not_before(cert: x509.Certificate) -> _dt.datetime:
    v = getattr(cert, "not_valid_before_utc", None)
    return v if v is not None else _utc(cert.not_valid_before)


def _not_after(cert: x509.Certificate) -> _dt.datetime:
    v = getattr(cert, "not_valid_after_utc", None)
    return v if v is not None else _utc(cert.not_valid_after)


def san_dns_names(cert: x509.Certificate) -> Tuple[str, ...]:
    try:
        ext = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName)
    except x509.ExtensionNotFound:
        return ()
    return tuple(ext.value.get_values_for_type(x509.DNSName))


def thumbprint(der: bytes) -> str:
    """SHA-1 over the DER encoding, upper-case hex, as certlm.msc shows it."""
    return hashlib.sha1(der).hexdigest().upper()


@dataclass(frozen=True)
class CertificateRecord:
    subject: str
    issuer: str
    thumbprint: str
    not_before: _dt.datetime
    not_after: _dt.datetime
    san_dns_names: Tuple[str, ...] = field(default_factory=tuple)
    source: Optional[str] = None

    @classmethod
    def from_x509(cls, cert: x509.Certificate, *, source: Optional[str] = None) -> "CertificateRecord":
        der = cert.public_bytes(Encoding.DER)
        return cls(
            subject=_name_str(cert.subject),
            issuer=_name_str(cert.issuer),
            thumbprint=thumbprint(der),
            not_before=_not_before(cert),
            not_after=_not_after(cert),
            san_dns_names=san_dns_names(cert),
            source=source,
        )

    @classmethod
    def from_der(cls, der: bytes, *, source: Optional[str] = None) -> "CertificateRecord":
        return cls.from_x509(x509.load_der_x509_certificate(der), source=source)

    @classmethod
    def from_pem(cls, pem: bytes, *, source: Optional[str] = None) -> List["CertificateRecord"]:
        """A PEM bundle may hold several certificates; all of them are returned."""
        return [cls.from_x509(c, source=source) for c in x509.load_pem_x509_certificates(pem)]

    def is_valid_at(self, when: Optional[_dt.datetime] = None) -> bool:
        now = _utc(when) if when is not None else _dt.datetime.now(_dt.timezone.utc)
        return self.not_before <= now <= self.not_after

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subject": self.subject,
            "issuer": self.issuer,
            "thumbprint": self.thumbprint,
            "not_before": self.not_before.isoformat(),
            "not_after": self.not_after.isoformat(),
            "san_dns_names": list(self.san_dns_names),
            "source": self.source,
        }

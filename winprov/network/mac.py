# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/network/mac.py
"""
MAC address normalization.

Windows reports `00-15-5D-10-10-10`, Linux `00:15:5d:10:10:10`, Cisco-style
inventories `0015.5d10.1010`. All of them normalize to `00155D101010`.
"""
from __future__ import annotations

import re

_SEPARATORS = re.compile(r"[\s:\-\.]")
_HEX12 = re.compile(r"^[0-9A-F]{12}$")


def normalize_mac(raw: str) -> str:
    """Drop separators and upper-case. Idempotent; does not validate."""
    return _SEPARATORS.sub("", str(raw or "")).upper()


def is_valid_mac(raw: str) -> bool:
    return bool(_HEX12.match(normalize_mac(raw)))


def format_mac(raw: str, sep: str = "-") -> str:
    """`00155D101010` -> `00-15-5D-10-10-10`. Invalid input is returned normalized."""
    n = normalize_mac(raw)
    if not _HEX12.match(n):
        return n
    return sep.join(n[i : i + 2] for i in range(0, 12, 2))

# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/core/host.py
from __future__ import annotations

import os
import socket
from typing import Optional


def computer_name() -> str:
    name = os.environ.get("COMPUTERNAME") or socket.gethostname()
    return name.split(".", 1)[0]


def dns_suffix() -> Optional[str]:
    """
    Primary DNS suffix of this host.

    USERDNSDOMAIN is set for domain-joined sessions; otherwise fall back to
    the domain part of the resolver's FQDN.
    """
    env = os.environ.get("USERDNSDOMAIN")
    if env and env.strip():
        return env.strip()
    fq = socket.getfqdn()
    if "." in fq:
        return fq.split(".", 1)[1]
    return None


def resolve_fqdn(hostname: Optional[str] = None, suffix: Optional[str] = None) -> str:
    """
    Computer name + "." + DNS suffix.

    Explicit arguments win over detection. A host with no suffix resolves to
    its bare computer name. Case is preserved; certificate matching is
    case-sensitive, so pass the suffix exactly as it appears in the SAN.
    """
    host = (hostname or computer_name()).strip().rstrip(".")
    sfx = suffix if suffix is not None else dns_suffix()
    sfx = (sfx or "").strip().strip(".")
    if not sfx:
        return host
    return f"{host}.{sfx}"

# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/network/adapters.py
"""
Enumerate enabled physical adapters on the host.

Backends:
  - powershell: Get-NetAdapter (full Windows and WinPE with the NetAdapter module)
  - sysfs:      /sys/class/net (Linux-based boot environments, lab hosts)

Enumeration order is the order the host reports; the resolver relies on it.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, List, Optional

from ..core.exceptions import Fatal
from ..core.utils import U
from .mac import is_valid_mac
from .model import NetworkAdapter

PS_LIST_ADAPTERS = (
    "Get-NetAdapter -Physical -ErrorAction SilentlyContinue "
    "| Where-Object { $_.Status -eq 'Up' } "
    "| Select-Object Name, MacAddress, Status, ifIndex, InterfaceDescription "
    "| ConvertTo-Json -Compress"
)

SYSFS_NET = Path("/sys/class/net")


def parse_powershell_adapters(payload: str) -> List[NetworkAdapter]:
    """
    ConvertTo-Json emits a bare object for one adapter, a list for several,
    and nothing at all for none.
    """
    payload = (payload or "").strip()
    if not payload:
        return []
    try:
        data: Any = json.loads(payload)
    except json.JSONDecodeError as e:
        raise Fatal(1, f"Cannot parse Get-NetAdapter output: {e}") from e
    if isinstance(data, dict):
        data = [data]

    out: List[NetworkAdapter] = []
    for item in data or []:
        mac = str(item.get("MacAddress") or "")
        if not is_valid_mac(mac):
            continue
        idx = item.get("ifIndex")
        out.append(
            NetworkAdapter(
                name=str(item.get("Name") or ""),
                mac=mac,
                status=str(item.get("Status") or "Up"),
                physical=True,
                if_index=int(idx) if idx is not None else None,
                description=str(item.get("InterfaceDescription") or ""),
            )
        )
    return out


def _read(p: Path) -> Optional[str]:
    try:
        return p.read_text(encoding="utf-8").strip()
    except OSError:
        return None


def enumerate_sysfs(root: Path = SYSFS_NET) -> List[NetworkAdapter]:
    out: List[NetworkAdapter] = []
    if not root.is_dir():
        return out
    for dev in sorted(root.iterdir(), key=lambda p: p.name):
        if dev.name == "lo":
            continue
        # Physical NICs have a backing device link; bridges, veths, tun do not.
        physical = (dev / "device").exists()
        if not physical:
            continue
        state = _read(dev / "operstate") or "unknown"
        if state not in ("up", "unknown"):
            continue
        mac = _read(dev / "address") or ""
        if not is_valid_mac(mac) or mac.replace(":", "") == "000000000000":
            continue
        idx = _read(dev / "ifindex")
        out.append(
            NetworkAdapter(
                name=dev.name,
                mac=mac,
                status="Up" if state == "up" else state,
                physical=True,
                if_index=int(idx) if idx and idx.isdigit() else None,
            )
        )
    return out


def enumerate_adapters(logger: logging.Logger, backend: str = "auto") -> List[NetworkAdapter]:
    if backend == "auto":
        backend = "powershell" if os.name == "nt" else "sysfs"

    if backend == "powershell":
        adapters = parse_powershell_adapters(U.powershell(logger, PS_LIST_ADAPTERS))
    elif backend == "sysfs":
        adapters = enumerate_sysfs()
    else:
        raise Fatal(2, f"Unknown adapter backend: {backend}")

    logger.debug("Enumerated %d adapter(s) via %s", len(adapters), backend)
    return adapters

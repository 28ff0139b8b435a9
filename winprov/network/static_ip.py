# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/network/static_ip.py
"""
Apply a static IPv4 profile to one adapter via the NetTCPIP cmdlets.

Only the selected interface is touched: all of its IPv4 addresses (the
configured one included) and its default route are removed, then the
address and optional default gateway are added. Rerunning the script for
the same profile converges. The DNS server list is replaced when one is
configured.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from ..core.exceptions import Fatal
from ..core.logging_utils import log_step
from ..core.utils import U
from .mac import format_mac
from .model import NetworkAdapter, StaticNetworkProfile


def _ps_quote(s: str) -> str:
    return "'" + str(s).replace("'", "''") + "'"


def build_static_ip_script(if_index: int, profile: StaticNetworkProfile) -> str:
    idx = int(if_index)
    lines = [
        "$ErrorActionPreference = 'Stop'",
        f"$idx = {idx}",
        f"$ip = {_ps_quote(profile.ip)}",
        "Set-NetIPInterface -InterfaceIndex $idx -AddressFamily IPv4 -Dhcp Disabled",
        "Get-NetIPAddress -InterfaceIndex $idx -AddressFamily IPv4 -ErrorAction SilentlyContinue "
        "| Remove-NetIPAddress -Confirm:$false -ErrorAction SilentlyContinue",
        "Get-NetRoute -InterfaceIndex $idx -DestinationPrefix '0.0.0.0/0' -ErrorAction SilentlyContinue "
        "| Remove-NetRoute -Confirm:$false -ErrorAction SilentlyContinue",
    ]
    add = f"New-NetIPAddress -InterfaceIndex $idx -IPAddress $ip -PrefixLength {profile.prefix_length}"
    if profile.gateway:
        add += f" -DefaultGateway {_ps_quote(profile.gateway)}"
    lines.append(add + " | Out-Null")
    if profile.dns_servers:
        servers = ",".join(_ps_quote(d) for d in profile.dns_servers)
        lines.append(f"Set-DnsClientServerAddress -InterfaceIndex $idx -ServerAddresses @({servers})")
    return "\n".join(lines)


def apply_static_profile(
    logger: logging.Logger,
    adapter: NetworkAdapter,
    profile: StaticNetworkProfile,
    *,
    dry_run: bool = False,
) -> Dict[str, Any]:
    if adapter.if_index is None:
        raise Fatal(1, f"Adapter {adapter.name} ({format_mac(adapter.mac)}) has no interface index")

    script = build_static_ip_script(adapter.if_index, profile)
    summary: Dict[str, Any] = {
        "adapter": adapter.name,
        "mac": format_mac(adapter.mac),
        "if_index": adapter.if_index,
        "profile": profile.to_dict(),
        "applied": False,
    }

    if dry_run:
        logger.info("DRY-RUN: would apply static profile to %s:\n%s", adapter.name, script)
        return summary

    with log_step(logger, f"Applying {profile.ip}/{profile.prefix_length} to {adapter.name}"):
        U.powershell(logger, script)
    summary["applied"] = True
    return summary

# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/network/model.py
"""
Adapter + deployment record model.

An adapter table entry is either:

1) a task-sequence identifier
   {"tsid": "b94dbbb4-2ede-4e95-8902-8a24a5a53543"}

2) a static IPv4 profile
   {"static": {"ip": "10.73.1.50", "mask": "255.255.255.0",
               "gateway": "10.73.1.1", "dns_servers": ["10.73.1.53"]}}

   The flat form {"ip": ..., "mask": ...} is accepted too.
   dns_servers accepts a list or a single string "10.73.1.53, 1.1.1.1".
"""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..core.exceptions import ConfigError
from .mac import format_mac, normalize_mac

_STATIC_KEYS = ("ip", "mask", "gateway", "dns_servers")


@dataclass(frozen=True)
class NetworkAdapter:
    """One enabled adapter as reported by the host."""

    name: str
    mac: str
    status: str = "Up"
    physical: bool = True
    if_index: Optional[int] = None
    description: str = ""

    @property
    def normalized_mac(self) -> str:
        return normalize_mac(self.mac)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "mac": format_mac(self.mac),
            "status": self.status,
            "physical": self.physical,
            "if_index": self.if_index,
            "description": self.description,
        }


def _dns_list(v: Any) -> List[str]:
    if v is None:
        return []
    if isinstance(v, (list, tuple)):
        return [str(x).strip() for x in v if str(x).strip()]
    if isinstance(v, str):
        return [x.strip() for x in re.split(r"[,\s;]+", v) if x.strip()]
    raise ConfigError(2, f"dns_servers must be a list or string, got {type(v).__name__}")


def _ipv4(value: Any, what: str) -> str:
    try:
        return str(ipaddress.IPv4Address(str(value).strip()))
    except ValueError as e:
        raise ConfigError(2, f"Invalid {what}: {value!r}", cause=e) from e


@dataclass(frozen=True)
class StaticNetworkProfile:
    ip: str
    mask: str
    gateway: Optional[str] = None
    dns_servers: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def prefix_length(self) -> int:
        return ipaddress.IPv4Network(f"0.0.0.0/{self.mask}").prefixlen

    @classmethod
    def from_mapping(cls, m: Mapping[str, Any]) -> "StaticNetworkProfile":
        if not m.get("ip") or not m.get("mask"):
            raise ConfigError(2, "Static profile needs both `ip` and `mask`")
        ip = _ipv4(m["ip"], "ip")
        mask = _ipv4(m["mask"], "mask")
        try:
            net = ipaddress.IPv4Network(f"0.0.0.0/{mask}")
        except ValueError as e:
            raise ConfigError(2, f"Invalid subnet mask: {mask}", cause=e) from e
        # ipaddress also accepts host masks such as 0.0.0.255
        if str(net.netmask) != mask:
            raise ConfigError(2, f"Invalid subnet mask: {mask}")
        gw = m.get("gateway")
        gateway = _ipv4(gw, "gateway") if gw else None
        dns = tuple(_ipv4(d, "dns server") for d in _dns_list(m.get("dns_servers")))
        return cls(ip=ip, mask=mask, gateway=gateway, dns_servers=dns)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ip": self.ip,
            "mask": self.mask,
            "prefix_length": self.prefix_length,
            "gateway": self.gateway,
            "dns_servers": list(self.dns_servers),
        }


@dataclass(frozen=True)
class AdapterConfig:
    """Deployment parameters for one MAC: exactly one of tsid / static."""

    tsid: Optional[str] = None
    static: Optional[StaticNetworkProfile] = None

    def __post_init__(self) -> None:
        if (self.tsid is None) == (self.static is None):
            raise ConfigError(2, "Adapter entry must define exactly one of `tsid` or `static`")

    @property
    def kind(self) -> str:
        return "tsid" if self.tsid is not None else "static"

    @classmethod
    def from_mapping(cls, m: Any) -> "AdapterConfig":
        if isinstance(m, str):
            # Shorthand: `00-15-5D-10-10-10: b94dbbb4-...`
            return cls(tsid=m.strip())
        if not isinstance(m, Mapping):
            raise ConfigError(2, f"Adapter entry must be a mapping, got {type(m).__name__}")

        tsid = m.get("tsid", m.get("TSID"))
        static = m.get("static")
        if static is None and any(k in m for k in _STATIC_KEYS):
            static = {k: m[k] for k in _STATIC_KEYS if k in m}

        if tsid is not None and static is not None:
            raise ConfigError(2, "Adapter entry must define exactly one of `tsid` or `static`")
        if tsid is not None:
            tsid = str(tsid).strip()
            if not tsid:
                raise ConfigError(2, "Adapter entry has an empty `tsid`")
            return cls(tsid=tsid)
        if isinstance(static, Mapping):
            return cls(static=StaticNetworkProfile.from_mapping(static))
        raise ConfigError(2, "Adapter entry must define exactly one of `tsid` or `static`")

    def to_dict(self) -> Dict[str, Any]:
        if self.tsid is not None:
            return {"tsid": self.tsid}
        assert self.static is not None
        return {"static": self.static.to_dict()}

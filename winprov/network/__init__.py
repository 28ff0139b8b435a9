# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/network/__init__.py
"""
Adapter discovery and MAC-keyed configuration.

Only the leaf modules are re-exported here; `resolver` depends on
`config.adapter_table`, which itself imports from this package.
"""
from .mac import format_mac, is_valid_mac, normalize_mac
from .model import AdapterConfig, NetworkAdapter, StaticNetworkProfile

__all__ = [
    "AdapterConfig",
    "NetworkAdapter",
    "StaticNetworkProfile",
    "format_mac",
    "is_valid_mac",
    "normalize_mac",
]

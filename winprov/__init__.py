# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winprov/__init__.py
"""
winprov - Windows deployment provisioning helpers

One-shot operations run while provisioning a Windows deployment server or a
WinPE client: pick the deployment record for this machine by MAC, find the
certificate whose SAN matches the host FQDN, run an installer and classify
its exit code, wait for a service.

Usage as a library:

    from winprov import AdapterTable, NetworkAdapter, resolve_adapter, write_tsid

    table = AdapterTable.from_mapping({"00-15-5D-10-10-10": {"tsid": "b94dbbb4-..."}})
    res = resolve_adapter([NetworkAdapter("Ethernet", "00:15:5d:10:10:10")], table)
    write_tsid(logger, r"X:\\Deploy\\Scripts\\Bootstrap.json", res.config.tsid)
"""

__version__ = "0.1.0"

# Adapter resolution (resolver first: it pulls in config.adapter_table)
from .network.resolver import Resolution, resolve_adapter
from .config.adapter_table import AdapterTable, load_adapter_table
from .network import AdapterConfig, NetworkAdapter, StaticNetworkProfile, normalize_mac

# Bootstrap config
from .bootstrap import BootstrapDocument, write_tsid

# Certificates
from .certs import CertificateRecord, select_certificate

# Installers
from .install import InstallOutcome, InstallResult, classify_exit_code

# Errors
from .core.exceptions import (
    AdapterNotMatched,
    AmbiguousCertificate,
    CertificateNotFound,
    Fatal,
    WaitTimeout,
    WinProvError,
)

__all__ = [
    # Version
    "__version__",
    # Adapters
    "AdapterConfig",
    "AdapterTable",
    "NetworkAdapter",
    "Resolution",
    "StaticNetworkProfile",
    "load_adapter_table",
    "normalize_mac",
    "resolve_adapter",
    # Bootstrap
    "BootstrapDocument",
    "write_tsid",
    # Certificates
    "CertificateRecord",
    "select_certificate",
    # Installers
    "InstallOutcome",
    "InstallResult",
    "classify_exit_code",
    # Errors
    "AdapterNotMatched",
    "AmbiguousCertificate",
    "CertificateNotFound",
    "Fatal",
    "WaitTimeout",
    "WinProvError",
]

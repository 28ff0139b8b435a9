# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/install/msi.py
"""
msiexec command line building.

    build_msi_args(r"C:\\stage\\SQLSysClrTypes.msi", {"IACCEPTSQLNCLILICENSETERMS": "YES"},
                   log_path=r"C:\\Windows\\Temp\\sqlclr.log")
    -> ["msiexec.exe", "/i", "C:\\stage\\SQLSysClrTypes.msi", "/qn", "/norestart",
        "/L*v", "C:\\Windows\\Temp\\sqlclr.log", "IACCEPTSQLNCLILICENSETERMS=YES"]

Public MSI properties are upper-case identifiers. Values with spaces are
wrapped in double quotes, which is how msiexec expects them on its command
line (`INSTALLDIR="C:\\Program Files\\App"`).
"""
from __future__ import annotations

import re
from pathlib import PureWindowsPath
from typing import List, Mapping, Optional, Union

from ..core.exceptions import ConfigError

_ACTIONS = {"install": "/i", "uninstall": "/x", "repair": "/fa"}
_PUBLIC_PROPERTY = re.compile(r"^[A-Z_][A-Z0-9_.]*$")


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    s = str(value)
    if s.startswith('"') and s.endswith('"') and len(s) >= 2:
        return s
    if not s or any(ch.isspace() for ch in s):
        return '"' + s.replace('"', '""') + '"'
    return s


def format_property(key: str, value: object) -> str:
    k = str(key).strip().upper()
    if not _PUBLIC_PROPERTY.match(k):
        raise ConfigError(2, f"Invalid MSI public property name: {key!r}")
    return f"{k}={_format_value(value)}"


def build_msi_args(
    msi: Union[str, PureWindowsPath],
    properties: Optional[Mapping[str, object]] = None,
    *,
    log_path: Optional[str] = None,
    quiet: bool = True,
    norestart: bool = True,
    action: str = "install",
) -> List[str]:
    if action not in _ACTIONS:
        raise ConfigError(2, f"Unknown msiexec action: {action} (expected one of {', '.join(_ACTIONS)})")

    args = ["msiexec.exe", _ACTIONS[action], str(msi)]
    args.append("/qn" if quiet else "/passive")
    if norestart:
        args.append("/norestart")
    if log_path:
        args.extend(["/L*v", str(log_path)])
    for k, v in (properties or {}).items():
        args.append(format_property(k, v))
    return args


def to_command_line(args: List[str]) -> str:
    """
    Join for CreateProcess without re-escaping quotes that format_property
    already placed. subprocess.list2cmdline would turn `KEY="a b"` into
    `"KEY=\\"a b\\""`, which msiexec does not understand.
    """
    parts: List[str] = []
    for a in args:
        if '"' in a or not a or not any(ch.isspace() for ch in a):
            parts.append(a if a else '""')
        else:
            parts.append(f'"{a}"')
    return " ".join(parts)

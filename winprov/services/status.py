# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/services/status.py
"""
Read-only Windows service status and a bounded wait on it.

`sc.exe query <name>` prints, among other lines:

    SERVICE_NAME: WDSServer
            TYPE               : 20  WIN32_SHARE_PROCESS
            STATE              : 4  RUNNING

Exit code 1060 means the service does not exist.
"""
from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Optional

from ..core.exceptions import Fatal, PreconditionError
from ..core.utils import U
from ..core.wait import DEFAULT_INTERVAL_S, DEFAULT_TIMEOUT_S, wait_until

ERROR_SERVICE_DOES_NOT_EXIST = 1060

_STATE_LINE = re.compile(r"^\s*STATE\s*:\s*(\d+)\s+(\w+)", re.MULTILINE)
_SERVICE_NAME = re.compile(r"^[A-Za-z0-9_.\-$]+$")


class ServiceState(Enum):
    STOPPED = 1
    START_PENDING = 2
    STOP_PENDING = 3
    RUNNING = 4
    CONTINUE_PENDING = 5
    PAUSE_PENDING = 6
    PAUSED = 7

    @classmethod
    def parse(cls, name: str) -> "ServiceState":
        key = str(name).strip().upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            raise Fatal(2, f"Unknown service state: {name!r}") from None


def parse_sc_query(output: str) -> Optional[ServiceState]:
    m = _STATE_LINE.search(output or "")
    if not m:
        return None
    try:
        return ServiceState(int(m.group(1)))
    except ValueError:
        return None


def query_service_status(logger: logging.Logger, name: str) -> ServiceState:
    if not _SERVICE_NAME.match(name or ""):
        raise Fatal(2, f"Invalid service name: {name!r}")

    try:
        cp = U.run_cmd(logger, ["sc.exe", "query", name], check=False, capture=True)
    except OSError as e:
        raise PreconditionError(1, f"sc.exe not available: {e}", cause=e) from e
    if cp.returncode == ERROR_SERVICE_DOES_NOT_EXIST:
        raise PreconditionError(1, f"Service {name} is not installed")

    state = parse_sc_query(cp.stdout or "")
    if cp.returncode != 0 or state is None:
        U.die(logger, f"Cannot query service {name} (sc.exe exit code {cp.returncode})")
    return state  # type: ignore[return-value]


def wait_for_service_status(
    logger: logging.Logger,
    name: str,
    desired: ServiceState,
    *,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    interval_s: float = DEFAULT_INTERVAL_S,
) -> ServiceState:
    """Poll until `name` reports `desired`; WaitTimeout after `timeout_s`."""
    state = wait_until(
        lambda: query_service_status(logger, name),
        lambda s: s is desired,
        timeout_s=timeout_s,
        interval_s=interval_s,
        what=f"service {name} to be {desired.name}",
        logger=logger,
    )
    logger.info("Service %s is %s", name, state.name)
    return state

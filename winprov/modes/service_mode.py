# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/modes/service_mode.py
from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, Optional

from ..core.exceptions import ConfigError
from ..core.wait import DEFAULT_INTERVAL_S, DEFAULT_TIMEOUT_S
from ..services.status import ServiceState, wait_for_service_status
from .output import print_fields, print_json


class ServiceMode:
    """wait-service: bounded wait for a service to reach a state; timeout is fatal."""

    def __init__(self, logger: logging.Logger, args: argparse.Namespace, conf: Optional[Dict[str, Any]] = None):
        self.logger = logger
        self.args = args
        self.conf = conf or {}

    def run(self) -> int:
        name = getattr(self.args, "service_name", None)
        if not name:
            raise ConfigError(2, "wait-service: missing `service_name:`")

        desired = ServiceState.parse(getattr(self.args, "service_status", None) or "RUNNING")
        timeout_s = getattr(self.args, "wait_timeout", None)
        interval_s = getattr(self.args, "wait_interval", None)
        timeout_s = DEFAULT_TIMEOUT_S if timeout_s is None else float(timeout_s)
        interval_s = float(interval_s or DEFAULT_INTERVAL_S)

        state = wait_for_service_status(self.logger, name, desired, timeout_s=timeout_s, interval_s=interval_s)

        payload = {"service": name, "state": state.name}
        if getattr(self.args, "json_output", False):
            print_json(payload)
        else:
            print_fields(payload, title="Service")
        return 0

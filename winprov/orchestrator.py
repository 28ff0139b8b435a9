# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winprov/orchestrator.py
from __future__ import annotations

import argparse
import logging
from typing import Any, Callable, Dict, Optional

from .core.exceptions import Fatal
from .core.logger import Log
from .modes.adapter_mode import AdapterMode
from .modes.cert_mode import CertMode
from .modes.install_mode import InstallMode
from .modes.service_mode import ServiceMode


class Orchestrator:
    """Dispatch one `cmd` to its mode and return the process exit code."""

    def __init__(self, logger: logging.Logger, args: argparse.Namespace, conf: Optional[Dict[str, Any]] = None):
        self.logger = logger
        self.args = args
        self.conf = conf or {}

    def _handlers(self) -> Dict[str, Callable[[], int]]:
        lg, a, cf = self.logger, self.args, self.conf
        return {
            "show-adapters": lambda: AdapterMode(lg, a, cf).show(),
            "resolve-adapter": lambda: AdapterMode(lg, a, cf).resolve(),
            "find-cert": lambda: CertMode(lg, a, cf).run(),
            "run-installer": lambda: InstallMode(lg, a, cf).run(),
            "wait-service": lambda: ServiceMode(lg, a, cf).run(),
        }

    def run(self) -> int:
        cmd = str(getattr(self.args, "cmd", "") or "").strip().lower()
        handler = self._handlers().get(cmd)
        if handler is None:
            raise Fatal(2, f"Unknown cmd: {cmd!r}")

        Log.banner(self.logger, cmd)
        if getattr(self.args, "dry_run", False):
            self.logger.info("DRY-RUN: no changes will be made")
        rc = int(handler())
        self.logger.debug("%s finished with exit code %d", cmd, rc)
        return rc

# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/modes/adapter_mode.py
from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, List, Optional

from ..bootstrap.document import write_tsid
from ..config.adapter_table import load_adapter_table
from ..core.exceptions import ConfigError
from ..core.logger import Log
from ..core.utils import U
from ..network.adapters import enumerate_adapters
from ..network.mac import format_mac
from ..network.model import NetworkAdapter
from ..network.resolver import resolve_adapter
from ..network.static_ip import apply_static_profile
from .output import print_fields, print_json, print_table


class AdapterMode:
    """
    show-adapters / resolve-adapter.

    resolve-adapter picks the first enumerated physical adapter that has a
    table entry and applies it: a TSID entry goes into the bootstrap config,
    a static entry is applied to that adapter. No match is fatal (exit 2)
    and leaves the machine untouched.
    """

    def __init__(self, logger: logging.Logger, args: argparse.Namespace, conf: Optional[Dict[str, Any]] = None):
        self.logger = logger
        self.args = args
        self.conf = conf or {}

    def _enumerate(self) -> List[NetworkAdapter]:
        backend = getattr(self.args, "adapter_backend", None) or "auto"
        adapters = enumerate_adapters(self.logger, backend)
        if not adapters:
            Log.warn(self.logger, "No active physical network adapter found")
        return adapters

    def show(self) -> int:
        adapters = self._enumerate()
        if getattr(self.args, "json_output", False):
            print_json({"adapters": [a.to_dict() for a in adapters]})
            return 0
        print_table(
            "Network adapters",
            ["Name", "MAC", "Status", "ifIndex", "Description"],
            [[a.name, format_mac(a.mac), a.status, a.if_index, a.description] for a in adapters],
        )
        return 0

    def resolve(self) -> int:
        dry_run = bool(getattr(self.args, "dry_run", False))
        if not getattr(self.args, "no_elevation_check", False):
            U.require_elevated(self.logger, write_actions=not dry_run)

        source = getattr(self.args, "adapter_table", None) or self.conf.get("adapters")
        table = load_adapter_table(self.logger, source)

        res = resolve_adapter(self._enumerate(), table, self.logger)
        log = Log.bind(self.logger, adapter=res.adapter.name, mac=format_mac(res.adapter.mac))

        result: Dict[str, Any] = {
            "adapter": res.adapter.to_dict(),
            "config": res.config.to_dict(),
            "dry_run": dry_run,
        }

        if res.config.tsid is not None:
            bootstrap = getattr(self.args, "bootstrap_config", None)
            if not bootstrap:
                raise ConfigError(2, "Matched a TSID entry but no `bootstrap_config:` is configured")
            log.info("Selected TSID %s", res.config.tsid)
            result["bootstrap"] = write_tsid(
                self.logger,
                bootstrap,
                res.config.tsid,
                dry_run=dry_run,
                backup=bool(getattr(self.args, "backup", False)),
            )
        else:
            assert res.config.static is not None
            log.info("Selected static profile %s/%d", res.config.static.ip, res.config.static.prefix_length)
            result["static"] = apply_static_profile(self.logger, res.adapter, res.config.static, dry_run=dry_run)
        Log.ok(self.logger, f"Resolved {res.config.kind} configuration for {res.adapter.name}")

        if getattr(self.args, "json_output", False):
            print_json(result)
        else:
            fields: Dict[str, Any] = {
                "adapter": res.adapter.name,
                "mac": format_mac(res.adapter.mac),
                "kind": res.config.kind,
            }
            if res.config.tsid is not None:
                fields["tsid"] = res.config.tsid
                fields["bootstrap_config"] = result["bootstrap"]["path"]
                fields["written"] = result["bootstrap"]["written"]
            else:
                fields["ip"] = f"{res.config.static.ip}/{res.config.static.prefix_length}"  # type: ignore[union-attr]
                fields["applied"] = result["static"]["applied"]
            print_fields(fields, title="Adapter resolution")
        return 0

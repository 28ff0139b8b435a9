# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/modes/install_mode.py
from __future__ import annotations

import argparse
import logging
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.exceptions import ConfigError
from ..core.utils import U
from ..install.download import download_file, filename_from_url
from ..install.msi import build_msi_args
from ..install.outcome import InstallResult
from ..install.runner import run_installer
from .output import print_fields, print_json


def _parse_property_pairs(pairs: Optional[List[str]]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for p in pairs or []:
        if "=" not in p:
            raise ConfigError(2, f"MSI property must be KEY=VALUE, got: {p!r}")
        k, v = p.split("=", 1)
        out[k.strip()] = v
    return out


def default_staging_dir() -> Path:
    return Path(tempfile.gettempdir()) / "winprov"


class InstallMode:
    """
    run-installer: fetch (optional), run one installer, classify its exit code.

    The process exit code is the installer's own code on failure. 3010 maps
    to 0 unless `propagate_reboot` is set, in which case it is passed through
    for a task sequence that handles the reboot itself.
    """

    def __init__(self, logger: logging.Logger, args: argparse.Namespace, conf: Optional[Dict[str, Any]] = None):
        self.logger = logger
        self.args = args
        self.conf = conf or {}

    def _dry_run(self) -> bool:
        return bool(getattr(self.args, "dry_run", False))

    def _installer_path(self) -> Path:
        local = getattr(self.args, "installer", None)
        if local:
            return U.require_file(self.logger, local, "Installer")

        url = getattr(self.args, "url", None)
        if not url:
            raise ConfigError(2, "run-installer: set `installer:` (local path) or `url:`")

        staging = Path(getattr(self.args, "staging_dir", None) or default_staging_dir()).expanduser()
        if self._dry_run():
            target = staging / filename_from_url(url)
            self.logger.info("DRY-RUN: would download %s -> %s", url, target)
            return target

        U.ensure_dir(staging)
        return download_file(
            self.logger,
            url,
            staging,
            verify=not getattr(self.args, "insecure", False),
            sha256=getattr(self.args, "sha256", None),
        )

    def _msi_properties(self) -> Dict[str, Any]:
        props: Dict[str, Any] = dict(self.conf.get("msi_properties") or {})
        props.update(_parse_property_pairs(getattr(self.args, "msi_property", None)))
        return props

    def build_argv(self, path: Path) -> List[str]:
        if path.suffix.lower() == ".msi":
            return build_msi_args(
                path,
                self._msi_properties(),
                log_path=getattr(self.args, "msi_log", None),
                action=getattr(self.args, "msi_action", None) or "install",
            )
        extra = getattr(self.args, "installer_args", None) or []
        if isinstance(extra, str):
            extra = extra.split()
        return [str(path), *[str(a) for a in extra]]

    def run(self) -> int:
        if not getattr(self.args, "no_elevation_check", False):
            U.require_elevated(self.logger, write_actions=not self._dry_run())

        path = self._installer_path()
        argv = self.build_argv(path)
        result: InstallResult = run_installer(
            self.logger,
            argv,
            name=path.name,
            timeout_s=getattr(self.args, "installer_timeout", None),
            dry_run=self._dry_run(),
        )
        rc = result.process_exit_code(propagate_reboot=bool(getattr(self.args, "propagate_reboot", False)))

        payload = {
            "installer": str(path),
            "exit_code": result.exit_code,
            "outcome": result.outcome.value,
            "reboot_required": result.reboot_required,
            "process_exit_code": rc,
            "dry_run": self._dry_run(),
        }
        if getattr(self.args, "json_output", False):
            print_json(payload)
        else:
            print_fields(payload, title="Installer result")
        return rc

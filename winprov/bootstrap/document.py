# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/bootstrap/document.py
"""
Bootstrap configuration document.

The boot image reads a JSON document at startup; the task sequence to run
is taken from `Variables.TSID`:

    {
      "Server": "https://deploy.example.com",
      "Variables": {
        "TSID": "b94dbbb4-2ede-4e95-8902-8a24a5a53543",
        "Locale": "en-US"
      }
    }

Only `Variables.TSID` is ever written. Key order and every other value
round-trip unchanged.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..core.exceptions import ConfigError, PreconditionError
from ..core.file_ops import atomic_write, backup_file
from ..core.logging_utils import log_step

VARIABLES_KEY = "Variables"
TSID_KEY = "TSID"


@dataclass
class BootstrapDocument:
    data: Dict[str, Any] = field(default_factory=dict)
    path: Optional[Path] = None

    @classmethod
    def loads(cls, text: str, path: Optional[Path] = None) -> "BootstrapDocument":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(2, f"Bootstrap config is not valid JSON ({path or '<string>'}): {e}", cause=e) from e
        if not isinstance(data, dict):
            raise ConfigError(2, f"Bootstrap config must be a JSON object ({path or '<string>'})")
        return cls(data=data, path=path)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "BootstrapDocument":
        p = Path(path).expanduser()
        if not p.is_file():
            raise PreconditionError(1, f"Bootstrap config not found: {p}")
        # utf-8-sig: files edited with Notepad/PowerShell 5 often carry a BOM.
        return cls.loads(p.read_text(encoding="utf-8-sig"), path=p)

    @property
    def tsid(self) -> Optional[str]:
        variables = self.data.get(VARIABLES_KEY)
        if isinstance(variables, dict):
            v = variables.get(TSID_KEY)
            return None if v is None else str(v)
        return None

    def set_tsid(self, tsid: str) -> Optional[str]:
        """Set Variables.TSID; returns the previous value."""
        variables = self.data.get(VARIABLES_KEY)
        if variables is None:
            variables = {}
            self.data[VARIABLES_KEY] = variables
        elif not isinstance(variables, dict):
            raise ConfigError(2, f"Bootstrap config `{VARIABLES_KEY}` must be an object")
        previous = variables.get(TSID_KEY)
        variables[TSID_KEY] = tsid
        return None if previous is None else str(previous)

    def dumps(self) -> str:
        return json.dumps(self.data, indent=2, ensure_ascii=False) + "\n"

    def save(self, path: Optional[Union[str, Path]] = None) -> Path:
        target = Path(path) if path is not None else self.path
        if target is None:
            raise ValueError("BootstrapDocument.save() needs a path")
        with atomic_write(target) as tmp:
            tmp.write_text(self.dumps(), encoding="utf-8")
        self.path = target
        return target


def write_tsid(
    logger: logging.Logger,
    path: Union[str, Path],
    tsid: str,
    *,
    dry_run: bool = False,
    backup: bool = False,
) -> Dict[str, Any]:
    doc = BootstrapDocument.load(path)
    previous = doc.set_tsid(tsid)
    summary: Dict[str, Any] = {
        "path": str(doc.path),
        "previous_tsid": previous,
        "tsid": tsid,
        "changed": previous != tsid,
        "written": False,
    }

    if not summary["changed"]:
        logger.info("Bootstrap config already carries TSID %s", tsid)
        return summary

    if dry_run:
        logger.info("DRY-RUN: would set %s.%s=%s in %s (was %s)", VARIABLES_KEY, TSID_KEY, tsid, doc.path, previous)
        return summary

    with log_step(logger, f"Writing TSID into {doc.path}"):
        if backup:
            bak = backup_file(doc.path)  # type: ignore[arg-type]
            logger.debug("Backup written: %s", bak)
            summary["backup"] = str(bak)
        doc.save()
    summary["written"] = True
    return summary

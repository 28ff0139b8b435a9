# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winprov/cli/args/validators.py
from __future__ import annotations

import argparse
import os
from typing import Any, Dict
from urllib.parse import urlparse

from .groups import COMMANDS
from .helpers import _merged_cmd, _merged_get, _require


def _validate_cmd_show_adapters(args: argparse.Namespace, conf: Dict[str, Any]) -> None:
    return None


def _validate_cmd_resolve_adapter(args: argparse.Namespace, conf: Dict[str, Any]) -> None:
    """
    Rules:
      - an adapter table is required: `adapter_table:` file or inline `adapters:`
      - `adapter_table:` must exist when given
      - inline `adapters:` must be a mapping
    TSID entries additionally need `bootstrap_config:`; that is checked once
    the matching entry is known.
    """
    table = _merged_get(args, conf, "adapter_table")
    inline = conf.get("adapters")

    if _require(table):
        if not os.path.isfile(str(table)):
            raise SystemExit(f"cmd=resolve-adapter: adapter table not found: {table}")
        return

    if inline is None:
        raise SystemExit("cmd=resolve-adapter: missing `adapters:` (YAML) or `adapter_table:` / --adapter-table")
    if not isinstance(inline, dict):
        raise SystemExit("cmd=resolve-adapter: `adapters:` must be a mapping of MAC -> entry")


def _validate_cmd_find_cert(args: argparse.Namespace, conf: Dict[str, Any]) -> None:
    cert_dir = _merged_get(args, conf, "cert_dir")
    if _require(cert_dir) and not os.path.isdir(str(cert_dir)):
        raise SystemExit(f"cmd=find-cert: cert_dir not found: {cert_dir}")


def _validate_cmd_run_installer(args: argparse.Namespace, conf: Dict[str, Any]) -> None:
    installer = _merged_get(args, conf, "installer")
    url = _merged_get(args, conf, "url")

    if _require(installer) and _require(url):
        raise SystemExit("cmd=run-installer: set either `installer:` or `url:`, not both")
    if not (_require(installer) or _require(url)):
        raise SystemExit("cmd=run-installer: missing `installer:` (local path) or `url:`")

    if _require(url):
        scheme = urlparse(str(url)).scheme.lower()
        if scheme not in ("https", "http"):
            raise SystemExit(f"cmd=run-installer: unsupported URL scheme {scheme!r} in {url}")

    props = conf.get("msi_properties")
    if props is not None and not isinstance(props, dict):
        raise SystemExit("cmd=run-installer: `msi_properties:` must be a mapping")

    timeout = _merged_get(args, conf, "installer_timeout")
    if timeout is not None and float(timeout) <= 0:
        raise SystemExit("cmd=run-installer: installer_timeout must be > 0")


def _validate_cmd_wait_service(args: argparse.Namespace, conf: Dict[str, Any]) -> None:
    if not _require(_merged_get(args, conf, "service_name")):
        raise SystemExit("cmd=wait-service: missing `service_name:` (YAML) or --service-name")
    timeout = _merged_get(args, conf, "wait_timeout")
    if timeout is not None and float(timeout) < 0:
        raise SystemExit("cmd=wait-service: wait_timeout must be >= 0")


def validate_args(args: argparse.Namespace, conf: Dict[str, Any]) -> None:
    """
    No CLI subcommands: YAML `cmd:` picks the operation, CLI can override.
    Validation never touches the machine; it only checks inputs.
    """
    cmd = _merged_cmd(args, conf)
    if not _require(cmd):
        raise SystemExit(f"Missing required YAML key: `cmd:` (or --cmd). One of: {', '.join(COMMANDS)}.")

    validators = {
        "show-adapters": _validate_cmd_show_adapters,
        "resolve-adapter": _validate_cmd_resolve_adapter,
        "find-cert": _validate_cmd_find_cert,
        "run-installer": _validate_cmd_run_installer,
        "wait-service": _validate_cmd_wait_service,
    }

    fn = validators.get(str(cmd).strip().lower())
    if fn is None:
        raise SystemExit(f"Unknown cmd={cmd!r}. Set YAML `cmd:` to one of: {', '.join(COMMANDS)}.")
    fn(args, conf)
    args.cmd = str(cmd).strip().lower()

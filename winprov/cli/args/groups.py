# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winprov/cli/args/groups.py
from __future__ import annotations

import argparse

from ...certs.matcher import POLICIES

COMMANDS = ("show-adapters", "resolve-adapter", "find-cert", "run-installer", "wait-service")


def _add_global_config_logging(p: argparse.ArgumentParser) -> None:
    # ------------------------------------------------------------------
    # Global config/logging (two-phase parse relies on these)
    # ------------------------------------------------------------------
    from ... import __version__

    p.add_argument(
        "--config",
        action="append",
        default=[],
        help="YAML/JSON config file (repeatable; later overrides earlier).",
    )
    p.add_argument("--dump-config", action="store_true", help="Print merged normalized config and exit.")
    p.add_argument("--dump-args", action="store_true", help="Print final parsed args and exit.")
    p.add_argument("--version", action="version", version=__version__)
    p.add_argument("-v", "--verbose", action="count", default=0, help="Verbosity: -v, -vv, -vvv (trace)")
    p.add_argument("-q", "--quiet", action="count", default=0, help="Less output: -q warnings, -qq errors only")
    p.add_argument("--log-file", dest="log_file", default=None, help="Also write logs to this file.")
    p.add_argument("--json-logs", dest="json_logs", action="store_true", help="Emit logs as NDJSON on stderr.")


def _add_project_control(p: argparse.ArgumentParser) -> None:
    # ------------------------------------------------------------------
    # Project control: YAML-driven operation (no subcommands)
    # ------------------------------------------------------------------
    p.add_argument(
        "--cmd",
        dest="cmd",
        default=None,
        help=f"Operation (normally from YAML `cmd:`). One of: {', '.join(COMMANDS)}",
    )


def _add_global_operation_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--dry-run", dest="dry_run", action="store_true", help="Log what would change; change nothing.")
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result as one JSON document on stdout.",
    )
    p.add_argument(
        "--no-elevation-check",
        dest="no_elevation_check",
        action="store_true",
        help="Skip the Administrator check before write actions.",
    )


def _add_adapter_knobs(p: argparse.ArgumentParser) -> None:
    # ------------------------------------------------------------------
    # show-adapters / resolve-adapter
    # ------------------------------------------------------------------
    g = p.add_argument_group("Adapter resolution")
    g.add_argument(
        "--adapter-table",
        dest="adapter_table",
        default=None,
        help="YAML/JSON file with the MAC -> {tsid|static} table (else the `adapters:` config key).",
    )
    g.add_argument(
        "--adapter-backend",
        dest="adapter_backend",
        default="auto",
        choices=["auto", "powershell", "sysfs"],
        help="How to enumerate adapters.",
    )
    g.add_argument(
        "--bootstrap-config",
        dest="bootstrap_config",
        default=None,
        help="Bootstrap configuration JSON whose Variables.TSID receives the selected TSID.",
    )
    g.add_argument("--backup", dest="backup", action="store_true", help="Keep a .bak copy of the bootstrap config.")


def _add_cert_knobs(p: argparse.ArgumentParser) -> None:
    # ------------------------------------------------------------------
    # find-cert
    # ------------------------------------------------------------------
    g = p.add_argument_group("Certificate selection")
    g.add_argument("--fqdn", dest="fqdn", default=None, help="Match this FQDN instead of computer name + DNS suffix.")
    g.add_argument("--hostname", dest="hostname", default=None, help="Override the computer name.")
    g.add_argument("--dns-suffix", dest="dns_suffix", default=None, help="Override the DNS suffix.")
    g.add_argument(
        "--issuer-contains",
        dest="issuer_contains",
        default=None,
        help="Only consider certificates whose issuer contains this text (case-sensitive).",
    )
    g.add_argument("--cert-store", dest="cert_store", default="My", help="Windows certificate store name.")
    g.add_argument(
        "--cert-location",
        dest="cert_location",
        default="LocalMachine",
        choices=["LocalMachine", "CurrentUser"],
        help="Windows certificate store location.",
    )
    g.add_argument("--cert-dir", dest="cert_dir", default=None, help="Read PEM/DER files from a directory instead.")
    g.add_argument(
        "--cert-policy",
        dest="cert_policy",
        default="unique",
        choices=list(POLICIES),
        help="What to do when several certificates match: error (unique), keep last, keep first.",
    )
    g.add_argument("--valid-only", dest="valid_only", action="store_true", help="Skip expired/not-yet-valid certificates.")
    g.add_argument("--thumbprint-out", dest="thumbprint_out", default=None, help="Write the selected thumbprint here.")


def _add_install_knobs(p: argparse.ArgumentParser) -> None:
    # ------------------------------------------------------------------
    # run-installer
    # ------------------------------------------------------------------
    g = p.add_argument_group("Installer")
    g.add_argument("--installer", dest="installer", default=None, help="Local .msi/.exe to run.")
    g.add_argument("--url", dest="url", default=None, help="Download the installer from this HTTPS URL first.")
    g.add_argument("--staging-dir", dest="staging_dir", default=None, help="Download directory (default: %%TEMP%%\\winprov).")
    g.add_argument("--sha256", dest="sha256", default=None, help="Expected SHA-256 of the download.")
    g.add_argument("--insecure", dest="insecure", action="store_true", help="Do not verify TLS certificates.")
    g.add_argument(
        "--msi-property",
        dest="msi_property",
        action="append",
        default=None,
        metavar="KEY=VALUE",
        help="Public MSI property (repeatable); merged over `msi_properties:`.",
    )
    g.add_argument(
        "--msi-action",
        dest="msi_action",
        default="install",
        choices=["install", "uninstall", "repair"],
        help="msiexec action.",
    )
    g.add_argument("--msi-log", dest="msi_log", default=None, help="msiexec verbose log path (/L*v).")
    g.add_argument(
        "--installer-args",
        dest="installer_args",
        nargs=argparse.REMAINDER,
        default=None,
        help="Arguments for an .exe installer (everything after this flag).",
    )
    g.add_argument("--installer-timeout", dest="installer_timeout", type=float, default=None, help="Kill after N seconds.")
    g.add_argument(
        "--propagate-reboot",
        dest="propagate_reboot",
        action="store_true",
        help="Exit 3010 (instead of 0) when the installer requests a reboot.",
    )


def _add_service_knobs(p: argparse.ArgumentParser) -> None:
    # ------------------------------------------------------------------
    # wait-service
    # ------------------------------------------------------------------
    g = p.add_argument_group("Service wait")
    g.add_argument("--service-name", dest="service_name", default=None, help="Service short name (e.g. WDSServer).")
    g.add_argument("--service-status", dest="service_status", default="RUNNING", help="State to wait for.")
    g.add_argument("--wait-timeout", dest="wait_timeout", type=float, default=30.0, help="Seconds before giving up.")
    g.add_argument("--wait-interval", dest="wait_interval", type=float, default=1.0, help="Seconds between polls.")

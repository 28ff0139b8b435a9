# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winprov/cli/help_texts.py
from __future__ import annotations

# NOTE:
# Pure help text for the argparse epilog. Keep it copy/paste runnable and
# free of imports.

YAML_EXAMPLE = r"""# winprov configuration examples (YAML)
#
# Run:
#   winprov --config deploy.yaml
#
# Merge multiple configs (later overrides earlier):
#   winprov --config site.yaml --config host-overrides.yaml
#
# Required values can come from YAML because winprov parses in two phases:
#   Phase 0: reads only --config / logging flags
#   Phase 1: loads+merges YAML and applies it as argparse defaults
#   Phase 2: parses the full command line (CLI flags override YAML)
#
# --------------------------------------------------------------------------------------
# Common keys
# --------------------------------------------------------------------------------------
# dry_run: false            # log what would change, change nothing
# json_output: false        # machine-readable result on stdout
# log_file: C:\Windows\Temp\winprov.log
# no_elevation_check: false
#
# --------------------------------------------------------------------------------------
# 1) Pick the deployment record for this machine by MAC and write its TSID
# --------------------------------------------------------------------------------------
cmd: resolve-adapter
bootstrap_config: X:\Deploy\Scripts\Bootstrap.json
backup: true
adapters:
  "00-15-5D-10-10-10":
    tsid: b94dbbb4-2ede-4e95-8902-8a24a5a53543
  "00:15:5d:10:10:11":
    static:
      ip: 10.0.20.15
      mask: 255.255.255.0
      gateway: 10.0.20.1
      dns_servers: [10.0.20.2, 10.0.20.3]
#
# Or keep the table in its own file:
# adapter_table: X:\Deploy\adapters.yaml
#
# --------------------------------------------------------------------------------------
# 2) Find the certificate for this host (SAN == FQDN, case-sensitive)
# --------------------------------------------------------------------------------------
# cmd: find-cert
# issuer_contains: "O=Contoso"
# cert_policy: unique       # unique | last | first
# valid_only: true
# thumbprint_out: C:\Deploy\thumbprint.txt
#
# --------------------------------------------------------------------------------------
# 3) Download and run an installer
# --------------------------------------------------------------------------------------
# cmd: run-installer
# url: https://download.example.com/SQLSysClrTypes.msi
# sha256: 0f3c...e9
# staging_dir: C:\Deploy\Staging
# msi_log: C:\Windows\Temp\SQLSysClrTypes.log
# msi_properties:
#   IACCEPTSQLNCLILICENSETERMS: "YES"
# propagate_reboot: false   # true: exit 3010 so the task sequence reboots
#
# --------------------------------------------------------------------------------------
# 4) Wait for a service
# --------------------------------------------------------------------------------------
# cmd: wait-service
# service_name: WDSServer
# service_status: RUNNING
# wait_timeout: 30
"""

FEATURE_SUMMARY = r"""
  • show-adapters    list active physical adapters (name, MAC, ifIndex)
  • resolve-adapter  first adapter with a table entry wins; no match -> exit 2, nothing applied
  • find-cert        SAN DNS name == FQDN; more than one distinct match is an error by default
  • run-installer    0 success, 3010 reboot required, anything else is passed through as the exit code
  • wait-service     bounded wait; timeout -> exit 124
"""

EXIT_CODES = r"""
  0     success
  1     precondition or external action failed
  2     configuration error / no adapter matched
  3     more than one certificate matches
  4     no certificate matches
  124   wait timed out
  N     installer exit code (run-installer)
"""

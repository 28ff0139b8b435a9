# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winprov/cli/args/__init__.py
"""
Argument parsing for the winprov CLI, re-exported from the split modules.
"""
from __future__ import annotations

from .builder import HelpFormatter, _build_epilog
from .groups import (
    COMMANDS,
    _add_adapter_knobs,
    _add_cert_knobs,
    _add_global_config_logging,
    _add_global_operation_flags,
    _add_install_knobs,
    _add_project_control,
    _add_service_knobs,
)
from .helpers import _merged_cmd, _merged_get, _require
from .parser import _build_preparser, _load_merged_config, build_parser, parse_args_with_config
from .validators import (
    _validate_cmd_find_cert,
    _validate_cmd_resolve_adapter,
    _validate_cmd_run_installer,
    _validate_cmd_show_adapters,
    _validate_cmd_wait_service,
    validate_args,
)

__all__ = [
    # Builder
    "HelpFormatter",
    "_build_epilog",
    # Groups
    "COMMANDS",
    "_add_adapter_knobs",
    "_add_cert_knobs",
    "_add_global_config_logging",
    "_add_global_operation_flags",
    "_add_install_knobs",
    "_add_project_control",
    "_add_service_knobs",
    # Helpers
    "_merged_cmd",
    "_merged_get",
    "_require",
    # Parser
    "_build_preparser",
    "_load_merged_config",
    "build_parser",
    "parse_args_with_config",
    # Validators
    "_validate_cmd_find_cert",
    "_validate_cmd_resolve_adapter",
    "_validate_cmd_run_installer",
    "_validate_cmd_show_adapters",
    "_validate_cmd_wait_service",
    "validate_args",
]

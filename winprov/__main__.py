# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winprov/__main__.py
from __future__ import annotations

import sys
import traceback
from typing import Optional, Sequence

from .cli.args import parse_args_with_config
from .core.exceptions import WinProvError, format_exception_for_cli
from .modes.output import print_json
from .orchestrator import Orchestrator


def _print_stderr(msg: str) -> None:
    print(msg, file=sys.stderr)


def _safe_log(logger, level: str, msg: str) -> None:
    """Log through `logger` when there is one, else print to stderr."""
    if logger is None:
        _print_stderr(msg)
        return

    fn = getattr(logger, level, None)
    if callable(fn):
        fn(msg)
    else:
        _print_stderr(msg)


def run(argv: Optional[Sequence[str]] = None) -> int:
    logger: Optional[object] = None
    verbose = 0

    # Phase 1: parse (config errors surface here)
    try:
        args, conf, logger = parse_args_with_config(argv)
        verbose = int(getattr(args, "verbose", 0) or 0)
    except WinProvError as e:
        _safe_log(logger, "error", f"💥 ERROR    {format_exception_for_cli(e)}")
        return e.code
    except KeyboardInterrupt:
        _safe_log(logger, "warning", "Interrupted by user (Ctrl+C).")
        return 130

    # Phase 2: run the command
    try:
        return Orchestrator(logger, args, conf).run()
    except WinProvError as e:
        _safe_log(logger, "error", format_exception_for_cli(e, verbose=verbose))
        if getattr(args, "json_output", False):
            print_json({"error": e.to_dict(include_cause=verbose >= 2)})
        return e.code
    except KeyboardInterrupt:
        _safe_log(logger, "warning", "Interrupted by user (Ctrl+C).")
        return 130
    except Exception as e:
        _safe_log(logger, "error", f"💥 UNHANDLED {type(e).__name__}: {e}")
        _safe_log(logger, "debug", traceback.format_exc())
        return 1


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()

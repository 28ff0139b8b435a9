# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winprov/modes/output.py
"""
Result rendering shared by the command modes.

`--json` prints one JSON document on stdout (logs stay on stderr, so the
output can be piped into a task-sequence step). Otherwise a rich table is
printed when stdout is a terminal, and plain `key: value` lines when it is not.
"""
from __future__ import annotations

import sys
from typing import Any, Dict, List, Optional, Sequence

from ..core.logger import is_tty
from ..core.utils import U


def create_console():
    """Rich Console on stdout, or None when stdout is not a terminal."""
    if not is_tty(sys.stdout):
        return None
    try:
        from rich.console import Console

        return Console(stderr=False)
    except Exception:
        return None


def print_json(payload: Any) -> None:
    print(U.json_dump(payload))


def print_table(title: str, columns: Sequence[str], rows: List[Sequence[Any]]) -> None:
    console = create_console()
    if console is None:
        print("\t".join(columns))
        for r in rows:
            print("\t".join("" if v is None else str(v) for v in r))
        return

    from rich.table import Table

    table = Table(title=title)
    for col in columns:
        table.add_column(col)
    for r in rows:
        table.add_row(*("" if v is None else str(v) for v in r))
    console.print(table)


def print_fields(fields: Dict[str, Any], *, title: Optional[str] = None) -> None:
    console = create_console()
    if console is None:
        for k, v in fields.items():
            print(f"{k}: {'' if v is None else v}")
        return

    from rich.table import Table

    table = Table(title=title, show_header=False)
    table.add_column("field", style="bold cyan")
    table.add_column("value")
    for k, v in fields.items():
        table.add_row(k, "" if v is None else str(v))
    console.print(table)

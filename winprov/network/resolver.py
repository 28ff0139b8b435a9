# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/network/resolver.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..config.adapter_table import AdapterTable
from ..core.exceptions import AdapterNotMatched
from .mac import format_mac
from .model import AdapterConfig, NetworkAdapter


@dataclass(frozen=True)
class Resolution:
    adapter: NetworkAdapter
    config: AdapterConfig


def resolve_adapter(
    adapters: Sequence[NetworkAdapter],
    table: AdapterTable,
    logger: Optional[logging.Logger] = None,
) -> Resolution:
    """
    First adapter, in enumeration order, whose MAC has a table entry.

    Later adapters are not consulted once one matches. No match raises
    AdapterNotMatched with every detected MAC so the operator can extend
    the table; nothing is applied in that case.
    """
    for adapter in adapters:
        cfg = table.lookup(adapter.mac)
        if cfg is not None:
            if logger:
                logger.info(
                    "Adapter %s (%s) matches table entry (%s)",
                    adapter.name,
                    format_mac(adapter.mac),
                    cfg.kind,
                )
            return Resolution(adapter=adapter, config=cfg)
        if logger:
            logger.debug("Adapter %s (%s): no table entry", adapter.name, format_mac(adapter.mac))

    raise AdapterNotMatched([format_mac(a.mac) for a in adapters])

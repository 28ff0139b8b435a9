# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/config/adapter_table.py
"""
MAC -> deployment record table, loaded from configuration.

Example (YAML):

    adapters:
      "00-15-5D-10-10-10":
        tsid: b94dbbb4-2ede-4e95-8902-8a24a5a53543
      "00:15:5d:10:10:11":
        static:
          ip: 10.73.1.50
          mask: 255.255.255.0
          gateway: 10.73.1.1
          dns_servers: [10.73.1.53]

Keys are normalized (separators dropped, upper-cased); two keys that
normalize to the same MAC are a configuration error.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional, Union

import yaml

from ..core.exceptions import ConfigError
from ..network.mac import format_mac, is_valid_mac, normalize_mac
from ..network.model import AdapterConfig


class AdapterTable(Mapping[str, AdapterConfig]):
    """Read-only mapping keyed by normalized MAC; preserves file order."""

    def __init__(self, entries: Optional[Dict[str, AdapterConfig]] = None) -> None:
        self._entries: Dict[str, AdapterConfig] = dict(entries or {})

    @classmethod
    def from_mapping(cls, mapping: Mapping[Any, Any]) -> "AdapterTable":
        if not isinstance(mapping, Mapping):
            raise ConfigError(2, f"Adapter table must be a mapping, got {type(mapping).__name__}")

        entries: Dict[str, AdapterConfig] = {}
        original: Dict[str, str] = {}
        for raw_key, raw_val in mapping.items():
            key = str(raw_key)
            if not is_valid_mac(key):
                raise ConfigError(2, f"Adapter table key is not a MAC address: {key!r} (quote MAC keys in YAML)")
            n = normalize_mac(key)
            if n in entries:
                raise ConfigError(
                    2,
                    f"Duplicate adapter table entry for {format_mac(n)}: {original[n]!r} and {key!r}",
                )
            try:
                entries[n] = AdapterConfig.from_mapping(raw_val)
            except ConfigError as e:
                raise ConfigError(2, f"Adapter table entry {key!r}: {e.msg}", cause=e) from e
            original[n] = key
        return cls(entries)

    def lookup(self, mac: str) -> Optional[AdapterConfig]:
        return self._entries.get(normalize_mac(mac))

    def __getitem__(self, mac: str) -> AdapterConfig:
        return self._entries[normalize_mac(mac)]

    def __contains__(self, mac: object) -> bool:
        return isinstance(mac, str) and normalize_mac(mac) in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"AdapterTable({len(self)} entries)"


def load_adapter_table(
    logger: logging.Logger,
    source: Union[str, Path, Mapping[str, Any], None],
) -> AdapterTable:
    """
    `source` is either an inline mapping (the `adapters:` key of the merged
    config) or a path to a YAML/JSON file holding the table, bare or under
    a top-level `adapters:` key.
    """
    if source is None:
        raise ConfigError(2, "No adapter table configured (set `adapters:` or `adapter_table:`)")

    if isinstance(source, Mapping):
        table = AdapterTable.from_mapping(source)
        logger.debug("Adapter table: %d inline entr%s", len(table), "y" if len(table) == 1 else "ies")
        return table

    path = Path(str(source)).expanduser()
    data = _load_raw(logger, path)
    inner = data.get("adapters", data) if isinstance(data, Mapping) else data
    table = AdapterTable.from_mapping(inner)
    logger.info("Loaded adapter table %s (%d entr%s)", path, len(table), "y" if len(table) == 1 else "ies")
    return table


def _load_raw(logger: logging.Logger, path: Path) -> Dict[str, Any]:
    if not path.is_file():
        raise ConfigError(2, f"Adapter table not found: {path}")
    text = path.read_text(encoding="utf-8-sig")
    try:
        data = json.loads(text) if path.suffix.lower() == ".json" else yaml.safe_load(text)
    except (ValueError, yaml.YAMLError) as e:
        raise ConfigError(2, f"Cannot parse adapter table {path}: {e}", cause=e) from e
    if not isinstance(data, dict):
        raise ConfigError(2, f"Adapter table {path} must be a mapping")
    return data


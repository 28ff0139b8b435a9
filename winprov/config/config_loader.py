# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winprov/config/config_loader.py
from __future__ import annotations

import argparse
import glob
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml

from ..core.exceptions import ConfigError

_YAML_EXT = (".yaml", ".yml")
_JSON_EXT = (".json",)


def _deep_merge(base: Dict[str, Any], over: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in over.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _normalize_keys(d: Dict[str, Any]) -> Dict[str, Any]:
    # YAML authors write `bootstrap-config:` as often as `bootstrap_config:`.
    # Only the top level maps onto argparse dests; nested tables
    # (adapter MAC keys in particular) are left untouched.
    return {str(k).replace("-", "_"): v for k, v in d.items()}


class Config:
    """
    Config files are YAML or JSON mappings. Later files override earlier ones
    (deep merge for nested mappings, replace for everything else).
    """

    @staticmethod
    def expand_configs(logger: logging.Logger, paths: Sequence[str]) -> List[Path]:
        out: List[Path] = []
        for raw in paths:
            p = str(Path(raw).expanduser())
            matches = sorted(glob.glob(p)) if any(ch in p for ch in "*?[") else [p]
            if not matches:
                raise ConfigError(2, f"Config pattern matched nothing: {raw}")
            for m in matches:
                mp = Path(m)
                if mp.is_dir():
                    found = sorted(x for x in mp.iterdir() if x.suffix.lower() in _YAML_EXT + _JSON_EXT)
                    logger.debug("Config dir %s -> %d file(s)", mp, len(found))
                    out.extend(found)
                else:
                    out.append(mp)
        return out

    @staticmethod
    def load_one(logger: logging.Logger, path: Path) -> Dict[str, Any]:
        path = Path(path)
        if not path.is_file():
            raise ConfigError(2, f"Config file not found: {path}")

        text = path.read_text(encoding="utf-8-sig")
        try:
            if path.suffix.lower() in _JSON_EXT:
                data = json.loads(text) if text.strip() else {}
            else:
                data = yaml.safe_load(text) or {}
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigError(2, f"Cannot parse config {path}: {e}", cause=e) from e

        if not isinstance(data, dict):
            raise ConfigError(2, f"Config {path} must be a mapping at the top level, got {type(data).__name__}")

        logger.debug("Loaded config %s (%d key(s))", path, len(data))
        return _normalize_keys(data)

    @staticmethod
    def load_many(logger: logging.Logger, paths: Sequence[Path]) -> Dict[str, Any]:
        merged: Dict[str, Any] = {}
        for p in paths:
            merged = _deep_merge(merged, Config.load_one(logger, p))
        if paths:
            logger.info("Merged %d config file(s)", len(paths))
        return merged

    @staticmethod
    def apply_as_defaults(logger: logging.Logger, parser: argparse.ArgumentParser, conf: Dict[str, Any]) -> None:
        """
        Push config values into the parser as defaults for known dests, so
        explicit CLI flags still win. Unknown keys stay available via `conf`.
        """
        dests = {a.dest for a in parser._actions}
        defaults = {k: v for k, v in conf.items() if k in dests and k != "config"}
        if defaults:
            parser.set_defaults(**defaults)
            logger.debug("Applied config defaults: %s", ", ".join(sorted(defaults)))

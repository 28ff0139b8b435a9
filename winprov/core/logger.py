# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winprov/core/logger.py
"""
Console and file logging for winprov.

Human output goes to stderr so that `--json` results on stdout stay
machine-readable inside a task sequence. `--json-logs` switches every
handler to NDJSON for log collectors.
"""
from __future__ import annotations

import datetime as _dt
import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

# Optional: colors
try:
    from termcolor import colored as _colored  # type: ignore
except Exception:  # pragma: no cover
    _colored = None

TRACE = 5
if logging.getLevelName(TRACE) != "TRACE":
    logging.addLevelName(TRACE, "TRACE")


def _logger_trace(self: logging.Logger, msg: str, *args, **kwargs) -> None:
    if self.isEnabledFor(TRACE):
        self._log(TRACE, msg, args, **kwargs)


if not hasattr(logging.Logger, "trace"):
    logging.Logger.trace = _logger_trace  # type: ignore[attr-defined]

# levelname -> (marker, colour)
_LEVELS: Dict[str, Tuple[str, str]] = {
    "TRACE": ("🧬", "cyan"),
    "DEBUG": ("🔍", "blue"),
    "INFO": ("✅", "green"),
    "WARNING": ("⚠️", "yellow"),
    "ERROR": ("💥", "red"),
    "CRITICAL": ("🧨", "red"),
}

Ctx = Mapping[str, Any]


def is_tty(stream: Any) -> bool:
    try:
        return bool(stream.isatty())
    except Exception:
        return False


def _console_takes_unicode() -> bool:
    # WinPE and older conhost run cp437/cp1252 consoles that cannot print emoji.
    enc = getattr(sys.stderr, "encoding", None) or "utf-8"
    try:
        "✅".encode(enc)
    except (LookupError, UnicodeEncodeError):
        return False
    return True


def c(text: str, color: Optional[str] = None, attrs: Optional[List[str]] = None, *, enable: bool = True) -> str:
    """Colorize text if termcolor is available and enabled."""
    if not (enable and color and _colored is not None):
        return text
    return _colored(text, color=color, attrs=attrs or [])


def _render_ctx(ctx: Optional[Ctx], max_len: int = 240) -> str:
    if not ctx:
        return ""
    parts = []
    for k in sorted(ctx, key=str):
        v = str(ctx[k])
        if len(v) > max_len:
            v = v[: max_len - 1] + "…"
        parts.append(f"{k}={v}")
    return " " + " ".join(parts)


class ContextLoggerAdapter(logging.LoggerAdapter):
    """
    Carries key=value context (mac, tsid, thumbprint, ...) on every record.

      log = Log.bind(logger, cmd="resolve-adapter")
      log.bind(mac="00-15-5D-10-10-10").info("Matched")

    A call site's own `extra={"ctx": {...}}` is merged on top.
    """

    def __init__(self, logger: logging.Logger, ctx: Optional[Ctx] = None):
        super().__init__(logger, {"ctx": dict(ctx or {})})

    def process(self, msg: Any, kwargs: Dict[str, Any]) -> Tuple[Any, Dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["ctx"] = {**self.extra["ctx"], **(extra.get("ctx") or {})}
        kwargs["extra"] = extra
        return msg, kwargs

    def bind(self, **ctx: Any) -> "ContextLoggerAdapter":
        return ContextLoggerAdapter(self.logger, {**self.extra["ctx"], **ctx})


@dataclass(frozen=True)
class LogStyle:
    color: bool = True
    detailed: bool = False  # milliseconds, pid, logger name, module:line
    utc: bool = False
    unicode: bool = True


class EmojiFormatter(logging.Formatter):
    """`12:00:01 ✅ INFO     message key=value` lines for people."""

    def __init__(self, style: LogStyle):
        super().__init__()
        self._style = style

    def _stamp(self, created: float) -> str:
        tz = _dt.timezone.utc if self._style.utc else None
        dt = _dt.datetime.fromtimestamp(created, tz=tz)
        return dt.strftime("%H:%M:%S.%f")[:-3] if self._style.detailed else dt.strftime("%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        marker, colour = _LEVELS.get(record.levelname, ("•", ""))
        if not self._style.unicode:
            marker = "·"
        colour_ok = self._style.color and is_tty(sys.stderr)

        lvl = f"{record.levelname:<8}"
        msg = record.getMessage()
        if colour_ok:
            lvl = c(lvl, colour)
            if record.levelno >= logging.WARNING:
                msg = c(msg, colour, ["bold"])

        where = ""
        if self._style.detailed:
            where = f" [pid={os.getpid()} {record.name} {record.module}:{record.lineno}]"

        line = f"{self._stamp(record.created)} {marker} {lvl}{where} {msg}{_render_ctx(getattr(record, 'ctx', None))}"
        if record.exc_info:
            tb = "\n".join("  " + ln for ln in self.formatException(record.exc_info).splitlines())
            line += "\n" + (c(tb, "red") if colour_ok else tb)
        return line


class JsonFormatter(logging.Formatter):
    """One JSON object per line: ts, level, logger, msg, pid, module, lineno, ctx, exc."""

    def __init__(self, *, utc: bool = True):
        super().__init__()
        self._tz = _dt.timezone.utc if utc else None

    def format(self, record: logging.LogRecord) -> str:
        obj: Dict[str, Any] = {
            "ts": _dt.datetime.fromtimestamp(record.created, tz=self._tz).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "pid": os.getpid(),
            "module": record.module,
            "lineno": record.lineno,
        }
        ctx = getattr(record, "ctx", None)
        if ctx:
            obj["ctx"] = dict(ctx)
        if record.exc_info and record.exc_info[0] is not None:
            obj["exc_type"] = record.exc_info[0].__name__
            obj["traceback"] = self.formatException(record.exc_info)
        return json.dumps(obj, ensure_ascii=False, default=str)


class Log:
    @staticmethod
    def _level_from_flags(verbose: int, quiet: int) -> int:
        """-q WARNING, -qq ERROR, -vv DEBUG, -vvv TRACE, else INFO. Quiet wins."""
        if quiet >= 2:
            return logging.ERROR
        if quiet == 1:
            return logging.WARNING
        if verbose >= 3:
            return TRACE
        if verbose >= 2:
            return logging.DEBUG
        return logging.INFO

    @staticmethod
    def bind(logger: logging.Logger, **ctx: Any) -> ContextLoggerAdapter:
        return ContextLoggerAdapter(logger, ctx)

    @staticmethod
    def banner(logger: logging.Logger, title: str, *, char: str = "─") -> None:
        width = 72
        t = f" {title.strip()} "
        side = char * max(8, (width - len(t)) // 2)
        logger.info((side + t + side)[:width])

    @staticmethod
    def _ctx(ctx: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return {"ctx": ctx} if ctx else None

    @staticmethod
    def step(logger: logging.Logger, msg: str, **ctx: Any) -> None:
        logger.info("➡️  %s", msg, extra=Log._ctx(ctx))

    @staticmethod
    def ok(logger: logging.Logger, msg: str, **ctx: Any) -> None:
        logger.info("✅ %s", msg, extra=Log._ctx(ctx))

    @staticmethod
    def warn(logger: logging.Logger, msg: str, **ctx: Any) -> None:
        logger.warning("⚠️  %s", msg, extra=Log._ctx(ctx))

    @staticmethod
    def fail(logger: logging.Logger, msg: str, **ctx: Any) -> None:
        logger.error("💥 %s", msg, extra=Log._ctx(ctx))

    @staticmethod
    def _stderr_handler(level: int, *, json_logs: bool, color: bool, detailed: bool, utc: bool) -> logging.Handler:
        h = logging.StreamHandler(stream=sys.stderr)
        h.setLevel(level)
        if json_logs:
            h.setFormatter(JsonFormatter(utc=utc))
        else:
            h.setFormatter(EmojiFormatter(LogStyle(color=color, detailed=detailed, utc=utc, unicode=_console_takes_unicode())))
        return h

    @staticmethod
    def _file_handler(level: int, path: str, *, json_logs: bool, utc: bool) -> logging.Handler:
        fp = Path(path).expanduser().resolve()
        fp.parent.mkdir(parents=True, exist_ok=True)
        h = logging.FileHandler(fp, encoding="utf-8")
        h.setLevel(level)
        # Files always get the detailed, colourless style.
        h.setFormatter(JsonFormatter(utc=utc) if json_logs else EmojiFormatter(LogStyle(color=False, detailed=True, utc=utc)))
        return h

    @staticmethod
    def setup(
        verbose: int = 0,
        log_file: Optional[str] = None,
        *,
        quiet: int = 0,
        color: bool = True,
        utc: bool = False,
        logger_name: str = "winprov",
        json_logs: bool = False,
    ) -> logging.Logger:
        """
        Configure and return the `winprov` logger. Safe to call again: old
        handlers are closed and replaced.
        """
        logger = logging.getLogger(logger_name)
        logger.propagate = False
        level = Log._level_from_flags(verbose, quiet)
        logger.setLevel(level)

        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()

        logger.addHandler(Log._stderr_handler(level, json_logs=json_logs, color=color, detailed=verbose >= 2, utc=utc))
        if log_file:
            logger.addHandler(Log._file_handler(level, log_file, json_logs=json_logs, utc=utc))

        logger.debug("Logger initialized (level=%s, log_file=%s)", logging.getLevelName(level), log_file)
        return logger

# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winprov/core/utils.py
from __future__ import annotations

import hashlib
import json
import logging
import os
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from .exceptions import Fatal, PreconditionError

try:
    from rich.progress import (
        BarColumn,
        Progress,
        TextColumn,
        TimeElapsedColumn,
        TimeRemainingColumn,
        TransferSpeedColumn,
    )
except Exception:  # pragma: no cover
    Progress = None  # type: ignore

POWERSHELL_ARGS = ["-NoProfile", "-NonInteractive", "-ExecutionPolicy", "Bypass", "-Command"]


class U:
    @staticmethod
    def die(logger: logging.Logger, msg: str, code: int = 1) -> None:
        logger.error(msg)
        raise Fatal(code, msg)

    @staticmethod
    def ensure_dir(p: Path) -> None:
        p.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def which(prog: str) -> Optional[str]:
        from shutil import which as _which
        return _which(prog)

    @staticmethod
    def json_dump(obj: Any) -> str:
        try:
            return json.dumps(obj, indent=2, sort_keys=True, default=str)
        except Exception:
            return repr(obj)

    @staticmethod
    def human_bytes(n: Optional[int]) -> str:
        if n is None:
            return "unknown"
        x = float(n)
        for unit in ["B", "KiB", "MiB", "GiB", "TiB"]:
            if x < 1024 or unit == "TiB":
                return f"{x:.2f} {unit}" if unit != "B" else f"{int(x)} {unit}"
            x /= 1024
        return f"{n} B"

    @staticmethod
    def _pretty_cmd(cmd: List[str]) -> str:
        if os.name == "nt":
            return subprocess.list2cmdline(cmd)
        return " ".join(shlex.quote(x) for x in cmd)

    @staticmethod
    def run_cmd(
        logger: logging.Logger,
        cmd: List[str],
        *,
        check: bool = True,
        capture: bool = False,
        env: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        cwd: Optional[Union[str, Path]] = None,
        input_text: Optional[str] = None,
        fatal: bool = False,
    ) -> subprocess.CompletedProcess:
        """
        Run a command and wait for it.

        - capture=True uses subprocess.run(capture_output=True, text=True)
        - fatal=True wraps failures into Fatal (otherwise re-raises subprocess exceptions)
        """
        pretty = U._pretty_cmd(cmd)
        logger.debug("Running: %s", pretty)

        try:
            return subprocess.run(
                cmd,
                check=check,
                capture_output=capture,
                text=True,
                env=env,
                timeout=timeout,
                cwd=str(cwd) if cwd is not None else None,
                input=input_text,
            )

        except subprocess.CalledProcessError as e:
            stdout = (e.stdout or e.output or "").strip()
            stderr = (e.stderr or "").strip()
            if stdout or stderr:
                logger.error(
                    "Command failed: %s%s%s",
                    pretty,
                    f"\nstdout:\n{stdout}" if stdout else "",
                    f"\nstderr:\n{stderr}" if stderr else "",
                )
            else:
                logger.error("Command failed: %s (no output)", pretty)

            if fatal:
                raise Fatal(e.returncode or 1, f"Command failed: {pretty}") from e
            raise

        except subprocess.TimeoutExpired as e:
            logger.error("Command timed out: %s (timeout=%ss)", pretty, timeout)
            if fatal:
                raise Fatal(124, f"Command timed out: {pretty}") from e
            raise

        except OSError as e:
            logger.error("Command error: %s (%s)", pretty, e)
            if fatal:
                raise Fatal(1, f"Command error: {pretty}: {e}") from e
            raise

    @staticmethod
    def powershell_exe() -> str:
        return U.which("powershell.exe") or U.which("pwsh") or "powershell.exe"

    @staticmethod
    def powershell(
        logger: logging.Logger,
        script: str,
        *,
        timeout: Optional[float] = 120,
        fatal: bool = True,
    ) -> str:
        """Run a PowerShell snippet non-interactively and return its stdout."""
        cp = U.run_cmd(
            logger,
            [U.powershell_exe(), *POWERSHELL_ARGS, script],
            capture=True,
            timeout=timeout,
            fatal=fatal,
        )
        return (cp.stdout or "").strip()

    @staticmethod
    def is_elevated() -> bool:
        if os.name == "nt":
            try:
                import ctypes

                return bool(ctypes.windll.shell32.IsUserAnAdmin())  # type: ignore[attr-defined]
            except Exception:
                return False
        return os.geteuid() == 0

    @staticmethod
    def require_elevated(logger: logging.Logger, write_actions: bool) -> None:
        if not write_actions:
            return
        if not U.is_elevated():
            logger.error("This operation requires an elevated (Administrator) session.")
            raise PreconditionError(1, "This operation requires an elevated (Administrator) session.")

    @staticmethod
    def require_file(logger: logging.Logger, path: Union[str, Path], what: str) -> Path:
        p = Path(path).expanduser()
        if not p.is_file():
            logger.error("%s not found: %s", what, p)
            raise PreconditionError(1, f"{what} not found: {p}")
        return p

    @staticmethod
    def checksum(path: Path, algo: str = "sha256") -> str:
        h = hashlib.new(algo)
        total_size = path.stat().st_size
        chunk = 1024 * 1024

        def _iter_blocks(f) -> Iterable[bytes]:
            while True:
                b = f.read(chunk)
                if not b:
                    break
                yield b

        if Progress is None or not sys.stderr.isatty():
            with open(path, "rb") as f:
                for blk in _iter_blocks(f):
                    h.update(blk)
            return h.hexdigest()

        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TransferSpeedColumn(),
            TimeElapsedColumn(),
            TimeRemainingColumn(),
        ) as progress:
            task = progress.add_task("Computing checksum", total=total_size)
            with open(path, "rb") as f:
                for blk in _iter_blocks(f):
                    h.update(blk)
                    progress.update(task, advance=len(blk))
        return h.hexdigest()


# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/core/exceptions.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


def _safe_int(x: Any, default: int = 1) -> int:
    try:
        return int(x)
    except Exception:
        return default


def _clamp_exit_code(code: int, *, windows: Optional[bool] = None) -> int:
    # Windows process exit codes are 32-bit (msiexec returns 1603, 3010, ...);
    # POSIX truncates to one byte, so keep it within 0..255 there.
    if windows is None:
        windows = os.name == "nt"
    upper = 0xFFFFFFFF if windows else 255
    if code < 0:
        return 1
    if code > upper:
        return upper
    return code


def _one_line(s: str, limit: int = 600) -> str:
    s = (s or "").strip().replace("\r", " ").replace("\n", " ")
    s = " ".join(s.split())
    return s if len(s) <= limit else (s[: limit - 3] + "...")


_SECRET_KEY_PARTS = (
    "pass",
    "password",
    "secret",
    "token",
    "apikey",
    "api_key",
    "auth",
    "private",
)


def _is_secret_key(k: str) -> bool:
    ks = (k or "").lower()
    return any(p in ks for p in _SECRET_KEY_PARTS)


def _format_context_compact(ctx: Dict[str, Any]) -> str:
    parts = []
    for k in sorted(ctx.keys()):
        v = ctx.get(k)
        if _is_secret_key(str(k)):
            parts.append(f"{k}=<redacted>")
        else:
            parts.append(f"{k}={v!r}")
    return ", ".join(parts)


@dataclass(eq=False)
class WinProvError(Exception):
    """
    Base project error with:
      - stable fields for reporting/JSON
      - readable __str__ (what users see)
      - an exit code that main() hands to the OS
    """
    code: int = 1
    msg: str = "error"
    cause: Optional[BaseException] = None
    context: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        self.code = _clamp_exit_code(_safe_int(self.code, default=1))
        self.msg = _one_line(self.msg) or self.__class__.__name__
        super().__init__(self.msg)
        self.args = (self.msg,)

    def with_context(self, **ctx: Any) -> "WinProvError":
        if self.context is None:
            self.context = {}
        self.context.update(ctx)
        return self

    def user_message(self, *, include_context: bool = False, include_cause: bool = False) -> str:
        """
        Human-friendly message for CLI output/logs.
        """
        parts = [self.msg or self.__class__.__name__]

        if include_context and self.context:
            parts.append(f"[{_one_line(_format_context_compact(self.context), limit=600)}]")

        if include_cause and self.cause is not None:
            parts.append(f"(cause: {type(self.cause).__name__}: {_one_line(str(self.cause))})")

        return " ".join(parts)

    def __str__(self) -> str:
        return self.user_message(include_context=False, include_cause=False)

    def to_dict(self, *, include_cause: bool = False) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "code": self.code,
            "message": self.msg,
            "context": self.context or {},
        }
        if include_cause and self.cause is not None:
            d["cause"] = {"type": type(self.cause).__name__, "message": _one_line(str(self.cause))}
        return d


class Fatal(WinProvError):
    """
    User-facing fatal error (exit code should be honored by top-level main()).
    """
    pass


class PreconditionError(Fatal):
    """Not elevated, prerequisite missing, file not found."""
    pass


class ConfigError(Fatal):
    """Configuration file or adapter table is malformed."""
    pass


class AdapterNotMatched(Fatal):
    """No enumerated adapter has an entry in the adapter table."""

    def __init__(self, detected_macs: List[str], *, code: int = 2) -> None:
        self.detected_macs = list(detected_macs)
        shown = ", ".join(self.detected_macs) if self.detected_macs else "<none>"
        super().__init__(code=code, msg=f"No adapter matches the configuration table (detected: {shown})")


class CertificateNotFound(Fatal):
    pass


class AmbiguousCertificate(Fatal):
    """More than one distinct certificate carries a SAN equal to the FQDN."""

    def __init__(self, fqdn: str, thumbprints: List[str], *, code: int = 3) -> None:
        self.fqdn = fqdn
        self.thumbprints = list(thumbprints)
        super().__init__(
            code=code,
            msg=f"{len(self.thumbprints)} certificates match {fqdn}: {', '.join(self.thumbprints)}",
        )


class InstallFailed(Fatal):
    """Installer exited with a failure code; code is the installer's own exit code."""
    pass


class DownloadError(Fatal):
    pass


class WaitTimeout(Fatal):
    """A bounded wait ran out of budget before the expected state was observed."""
    pass


def format_exception_for_cli(e: BaseException, *, verbose: int = 0) -> str:
    """
    One-liner output for CLI.

    verbose=0: just message
    verbose=1: message + compact context (if any)
    verbose>=2: message + context + cause
    """
    if isinstance(e, WinProvError):
        return e.user_message(
            include_context=(verbose >= 1),
            include_cause=(verbose >= 2),
        )

    if verbose >= 2:
        return f"{type(e).__name__}: {_one_line(str(e))}"
    return _one_line(str(e)) or type(e).__name__

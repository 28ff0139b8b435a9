# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winprov/install/download.py
"""
Installer download (HTTPS) into a staging directory.

Streams with requests, shows a rich progress bar when stderr is a TTY,
writes through a temp file so an interrupted download never leaves a
truncated installer under the final name. No retry: a failed download is
terminal for the invocation.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

import requests
import urllib3

from ..core.exceptions import DownloadError
from ..core.file_ops import atomic_write
from ..core.utils import U

try:
    from rich.progress import (
        BarColumn,
        DownloadColumn,
        Progress,
        TextColumn,
        TimeRemainingColumn,
        TransferSpeedColumn,
    )
except Exception:  # pragma: no cover
    Progress = None  # type: ignore

DEFAULT_CHUNK = 1024 * 1024
DEFAULT_TIMEOUT_S = 60.0


def filename_from_url(url: str) -> str:
    name = Path(unquote(urlparse(url).path)).name
    if not name:
        raise DownloadError(2, f"Cannot derive a file name from URL: {url}")
    return name


def _progress_enabled() -> bool:
    return Progress is not None and sys.stderr.isatty()


def download_file(
    logger: logging.Logger,
    url: str,
    dest: Path,
    *,
    verify: bool = True,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    chunk_size: int = DEFAULT_CHUNK,
    sha256: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> Path:
    """
    Download `url` to `dest` (a file path, or a directory to which the URL's
    file name is appended). Returns the final path.
    """
    dest = Path(dest).expanduser()
    if dest.is_dir():
        dest = dest / filename_from_url(url)
    U.ensure_dir(dest.parent)

    if not verify:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        logger.warning("TLS verification disabled for %s", url)

    logger.info("Downloading %s -> %s", url, dest)

    try:
        if session is None:
            with requests.Session() as http:
                written = _fetch(http, url, dest, verify=verify, timeout_s=timeout_s, chunk_size=chunk_size)
        else:
            written = _fetch(session, url, dest, verify=verify, timeout_s=timeout_s, chunk_size=chunk_size)
    except requests.RequestException as e:
        raise DownloadError(1, f"Download failed: {url}: {e}", cause=e).with_context(dest=str(dest)) from e
    except OSError as e:
        raise DownloadError(1, f"Cannot write {dest}: {e}", cause=e) from e

    logger.info("Downloaded %s (%s)", dest.name, U.human_bytes(written))

    if sha256:
        got = U.checksum(dest, "sha256")
        if got.lower() != sha256.strip().lower():
            dest.unlink(missing_ok=True)
            raise DownloadError(1, f"SHA-256 mismatch for {dest.name}: expected {sha256}, got {got}")
        logger.debug("SHA-256 verified for %s", dest.name)

    return dest


def _fetch(
    http: requests.Session, url: str, dest: Path, *, verify: bool, timeout_s: float, chunk_size: int
) -> int:
    with http.get(url, stream=True, timeout=timeout_s, verify=verify) as resp:
        resp.raise_for_status()
        total = int(resp.headers.get("Content-Length") or 0) or None
        with atomic_write(dest) as tmp:
            return _stream_to(resp, tmp, total, chunk_size, dest.name)


def _stream_to(resp: requests.Response, tmp: Path, total: Optional[int], chunk_size: int, label: str) -> int:
    written = 0
    with open(tmp, "wb") as f:
        if not _progress_enabled():
            for chunk in resp.iter_content(chunk_size=chunk_size):
                if chunk:
                    f.write(chunk)
                    written += len(chunk)
            return written

        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            TimeRemainingColumn(),
        ) as progress:
            task = progress.add_task(label, total=total)
            for chunk in resp.iter_content(chunk_size=chunk_size):
                if chunk:
                    f.write(chunk)
                    written += len(chunk)
                    progress.update(task, advance=len(chunk))
    return written

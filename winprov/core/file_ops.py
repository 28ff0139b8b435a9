# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winprov/core/file_ops.py
"""
Atomic file operation utilities.

Bootstrap configuration documents and downloaded installers are written
to a temporary sibling first and renamed into place, so a reader never
sees a half-written file.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional


@contextmanager
def atomic_write(
    target_path: Path,
    *,
    suffix: str = ".part",
    dir: Optional[Path] = None,
    delete_on_error: bool = True,
) -> Generator[Path, None, None]:
    """
    Context manager for atomic file writes using temporary file + rename.

    Yields the temporary path; on success it is renamed over target_path,
    on failure it is removed and the exception propagates.

    Example:
        with atomic_write(Path(r"C:\\staging\\setup.msi")) as tmp:
            tmp.write_bytes(data)
    """
    target_path = Path(target_path)
    temp_dir = Path(dir) if dir else target_path.parent
    temp_dir.mkdir(parents=True, exist_ok=True)

    # Same directory as the target so os.replace stays on one volume.
    fd, temp_name = tempfile.mkstemp(
        suffix=suffix,
        prefix=f".{target_path.name}.",
        dir=str(temp_dir),
    )
    temp_path = Path(temp_name)

    try:
        os.close(fd)
        yield temp_path
        os.replace(temp_path, target_path)
    except BaseException:
        if delete_on_error:
            temp_path.unlink(missing_ok=True)
        raise


def backup_file(path: Path, *, suffix: str = ".bak") -> Path:
    """Copy `path` next to itself with `suffix` appended; returns the backup path."""
    path = Path(path)
    backup = path.with_name(path.name + suffix)
    shutil.copy2(path, backup)
    return backup

# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import pytest

from winprov.core.file_ops import atomic_write, backup_file


@pytest.mark.unit
class TestAtomicWrite:
    def test_replaces_target_on_success(self, tmp_path):
        target = tmp_path / "Bootstrap.json"
        target.write_text("old", encoding="utf-8")
        with atomic_write(target) as tmp:
            assert tmp != target
            assert tmp.parent == target.parent
            tmp.write_text("new", encoding="utf-8")
            assert target.read_text(encoding="utf-8") == "old"
        assert target.read_text(encoding="utf-8") == "new"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["Bootstrap.json"]

    def test_failure_keeps_original_and_cleans_up(self, tmp_path):
        target = tmp_path / "Bootstrap.json"
        target.write_text("old", encoding="utf-8")
        with pytest.raises(RuntimeError):
            with atomic_write(target) as tmp:
                tmp.write_text("half", encoding="utf-8")
                raise RuntimeError("disk full")
        assert target.read_text(encoding="utf-8") == "old"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["Bootstrap.json"]

    def test_creates_parent(self, tmp_path):
        target = tmp_path / "a" / "b" / "thumbprint.txt"
        with atomic_write(target) as tmp:
            tmp.write_text("AB", encoding="utf-8")
        assert target.read_text(encoding="utf-8") == "AB"


@pytest.mark.unit
def test_backup_file(tmp_path):
    src = tmp_path / "Bootstrap.json"
    src.write_text("{}", encoding="utf-8")
    bak = backup_file(src)
    assert bak.name == "Bootstrap.json.bak"
    assert bak.read_text(encoding="utf-8") == "{}"

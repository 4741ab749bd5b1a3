from __future__ import annotations

import os
from pathlib import Path

import pytest

from pixie_installer.errors import CopyError
from pixie_installer.lib.assets import copy_file, copy_tree


def test_copy_tree_preserves_shape_and_content(tmp_path: Path) -> None:
    src = tmp_path / "src"
    (src / "a" / "b").mkdir(parents=True)
    (src / "a" / "x.txt").write_bytes(b"x-content")
    (src / "a" / "b" / "y.txt").write_bytes(b"\x00\x01y")

    dst = tmp_path / "dst"
    copy_tree(src, dst)

    copied = sorted(p.relative_to(dst).as_posix() for p in dst.rglob("*") if p.is_file())
    assert copied == ["a/b/y.txt", "a/x.txt"]
    assert (dst / "a" / "x.txt").read_bytes() == b"x-content"
    assert (dst / "a" / "b" / "y.txt").read_bytes() == b"\x00\x01y"


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="needs a non-regular file type")
def test_copy_tree_stops_at_first_bad_entry_and_keeps_earlier_copies(tmp_path: Path) -> None:
    src = tmp_path / "src"
    src.mkdir()
    (src / "a.txt").write_text("first", encoding="utf-8")
    os.mkfifo(src / "b.pipe")
    (src / "c.txt").write_text("last", encoding="utf-8")

    dst = tmp_path / "dst"
    with pytest.raises(CopyError, match="not a regular file"):
        copy_tree(src, dst)

    assert (dst / "a.txt").read_text(encoding="utf-8") == "first"
    assert not (dst / "c.txt").exists()


def test_copy_tree_missing_source_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(CopyError, match="failed to read directory"):
        copy_tree(tmp_path / "nope", tmp_path / "dst")


def test_copy_file_creates_parent_directories(tmp_path: Path) -> None:
    src = tmp_path / "settings.json"
    src.write_text("{}", encoding="utf-8")
    dst = tmp_path / "deep" / "er" / "settings.json"

    copy_file(src, dst)

    assert dst.read_text(encoding="utf-8") == "{}"


def test_copy_file_missing_source(tmp_path: Path) -> None:
    with pytest.raises(CopyError, match="failed to stat"):
        copy_file(tmp_path / "missing.json", tmp_path / "out.json")


def test_dry_run_copies_nothing(tmp_path: Path) -> None:
    src = tmp_path / "src"
    src.mkdir()
    (src / "a.txt").write_text("a", encoding="utf-8")

    copy_tree(src, tmp_path / "dst", dry_run=True)

    assert not (tmp_path / "dst").exists()

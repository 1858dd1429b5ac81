from __future__ import annotations

from pathlib import Path

import pytest

from buildforge.files import (
    FileSyncError,
    SyncErrorKind,
    copy_rebased,
    copy_tree,
    file_exists,
    file_list,
    make_dirs,
    read_text,
    remove_tree,
    write_text,
)


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


# -------------------------
# copy_rebased
# -------------------------


def test_copy_rebased_keeps_layout_below_root(tmp_path: Path) -> None:
    src = write(tmp_path / "A" / "B" / "c.txt", "payload\n")

    copied = copy_rebased(tmp_path / "A", [src], tmp_path / "D")

    target = tmp_path / "D" / "B" / "c.txt"
    assert copied == [target]
    assert target.read_bytes() == src.read_bytes()


def test_copy_rebased_relative_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    write(tmp_path / "A" / "B" / "c.txt", "payload")

    copy_rebased("A", ["A/B/c.txt"], "D")

    assert (tmp_path / "D" / "B" / "c.txt").read_text(encoding="utf-8") == "payload"


def test_copy_rebased_treats_backslashes_as_separators(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    write(tmp_path / "contrib" / "csl" / "locales" / "en.xml", "<locale/>")

    copy_rebased("contrib\\csl", ["contrib/csl/locales/en.xml"], "styles")

    assert (tmp_path / "styles" / "locales" / "en.xml").read_text(encoding="utf-8") == "<locale/>"


def test_copy_rebased_does_not_strip_partial_component(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    write(tmp_path / "AB" / "c.txt", "x")

    copy_rebased("A", ["AB/c.txt"], "D")

    assert (tmp_path / "D" / "AB" / "c.txt").exists()


def test_copy_rebased_overwrites_existing(tmp_path: Path) -> None:
    src = write(tmp_path / "A" / "c.txt", "new")
    write(tmp_path / "D" / "c.txt", "old")

    copy_rebased(tmp_path / "A", [src], tmp_path / "D")

    assert (tmp_path / "D" / "c.txt").read_text(encoding="utf-8") == "new"


def test_copy_rebased_missing_source_raises(tmp_path: Path) -> None:
    with pytest.raises(FileSyncError) as e:
        copy_rebased(tmp_path / "A", [tmp_path / "A" / "gone.txt"], tmp_path / "D")

    assert e.value.kind is SyncErrorKind.MISSING_SOURCE


# -------------------------
# copy_tree / make_dirs
# -------------------------


def test_copy_tree_copies_directory_recursively(tmp_path: Path) -> None:
    write(tmp_path / "src" / "a.txt", "a")
    write(tmp_path / "src" / "sub" / "b.txt", "b")
    write(tmp_path / "out" / "lib" / "a.txt", "stale")

    copy_tree(tmp_path / "src", tmp_path / "out" / "lib")

    assert (tmp_path / "out" / "lib" / "a.txt").read_text(encoding="utf-8") == "a"
    assert (tmp_path / "out" / "lib" / "sub" / "b.txt").read_text(encoding="utf-8") == "b"


def test_copy_tree_file_into_existing_directory(tmp_path: Path) -> None:
    src = write(tmp_path / "src" / "cli.js", "cli")
    (tmp_path / "lib").mkdir()

    target = copy_tree(src, tmp_path / "lib")

    assert target == tmp_path / "lib" / "cli.js"
    assert target.read_text(encoding="utf-8") == "cli"


def test_copy_tree_creates_missing_parents(tmp_path: Path) -> None:
    src = write(tmp_path / "x.txt", "x")

    copy_tree(src, tmp_path / "deep" / "er" / "x.txt")

    assert (tmp_path / "deep" / "er" / "x.txt").exists()


def test_make_dirs_is_idempotent(tmp_path: Path) -> None:
    target = tmp_path / "styles" / "locales"

    make_dirs(target)
    make_dirs(target)

    assert target.is_dir()


def test_make_dirs_over_a_file_raises(tmp_path: Path) -> None:
    blocker = write(tmp_path / "blocker", "")

    with pytest.raises(FileSyncError) as e:
        make_dirs(blocker / "child")

    assert e.value.kind is SyncErrorKind.NOT_A_DIRECTORY


# -------------------------
# remove_tree
# -------------------------


def test_remove_tree_missing_path_is_not_an_error(tmp_path: Path) -> None:
    remove_tree(tmp_path / "lib")
    remove_tree(tmp_path / "lib")


def test_remove_tree_removes_directory_then_is_idempotent(tmp_path: Path) -> None:
    write(tmp_path / "lib" / "sub" / "x.js", "x")

    remove_tree(tmp_path / "lib")
    remove_tree(tmp_path / "lib")

    assert not file_exists(tmp_path / "lib")


def test_remove_tree_removes_single_file(tmp_path: Path) -> None:
    target = write(tmp_path / "out.txt", "x")

    remove_tree(target)

    assert not target.exists()


# -------------------------
# file_list / text io
# -------------------------


def test_file_list_is_sorted_and_deduplicated(tmp_path: Path) -> None:
    for name in ["b.csl", "a.csl", "c.xml"]:
        write(tmp_path / name, "")

    found = file_list(tmp_path / "*.csl", tmp_path / "a.*")

    assert found == [str(tmp_path / "a.csl"), str(tmp_path / "b.csl")]


def test_read_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileSyncError) as e:
        read_text(tmp_path / "missing.txt")

    assert e.value.kind is SyncErrorKind.MISSING_SOURCE


def test_read_invalid_path_raises_io_error(tmp_path: Path) -> None:
    with pytest.raises(FileSyncError) as e:
        read_text(tmp_path / "bad\0name.txt")

    assert e.value.kind is SyncErrorKind.IO_ERROR


def test_write_invalid_path_raises_io_error(tmp_path: Path) -> None:
    with pytest.raises(FileSyncError) as e:
        write_text(tmp_path / "bad\0name.txt", "x")

    assert e.value.kind is SyncErrorKind.IO_ERROR


def test_write_text_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "src" / "version.kk"

    write_text(target, "public val version = \"1.0\"\n")

    assert read_text(target) == "public val version = \"1.0\"\n"

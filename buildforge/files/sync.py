from __future__ import annotations

import glob
import os
import shutil
from pathlib import Path
from typing import Iterable, Iterator

from loguru import logger

from .types import FileSyncError, SyncErrorKind

PathLike = str | os.PathLike[str]


def _sync_error(exc: OSError, path: PathLike) -> FileSyncError:
    match exc:
        case FileNotFoundError():
            kind = SyncErrorKind.MISSING_SOURCE
        case PermissionError():
            kind = SyncErrorKind.PERMISSION_DENIED
        case NotADirectoryError() | FileExistsError():
            kind = SyncErrorKind.NOT_A_DIRECTORY
        case _:
            kind = SyncErrorKind.IO_ERROR
    return FileSyncError(kind, str(path), exc.strerror)


def file_exists(path: PathLike) -> bool:
    return os.path.lexists(path)


def make_dirs(path: PathLike) -> Path:
    target = Path(path)
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise _sync_error(exc, target) from exc
    return target


def copy_tree(source: PathLike, destination: PathLike) -> Path:
    """Copy a file or directory tree, overwriting what is already there.

    A file copied onto an existing directory lands inside that directory,
    the same way ``cp -r`` behaves. Missing destination parents are created.
    """
    src = Path(source)
    dst = Path(destination)

    if not src.exists():
        raise FileSyncError(SyncErrorKind.MISSING_SOURCE, str(src))

    try:
        if src.is_dir():
            make_dirs(dst.parent)
            shutil.copytree(src, dst, dirs_exist_ok=True)
            return dst

        if dst.is_dir():
            dst = dst / src.name
        make_dirs(dst.parent)
        shutil.copy2(src, dst)
    except shutil.Error as exc:
        raise FileSyncError(SyncErrorKind.IO_ERROR, str(src), str(exc)) from exc
    except OSError as exc:
        raise _sync_error(exc, src) from exc

    return dst


def remove_tree(path: PathLike) -> None:
    target = Path(path)

    if not os.path.lexists(target):
        return

    try:
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        else:
            target.unlink()
    except FileNotFoundError:
        # already gone
        return
    except OSError as exc:
        raise _sync_error(exc, target) from exc


def _normalize(path: PathLike) -> str:
    return os.fspath(path).replace("\\", "/")


def _relative_to_root(root: str, filename: str) -> str:
    if not root:
        return filename
    if filename == root:
        return os.path.basename(filename)
    prefix = root if root.endswith("/") else root + "/"
    if filename.startswith(prefix):
        return filename[len(prefix):]
    return filename


def _rebased_destinations(
    rootdir: PathLike | None, files: Iterable[PathLike], destdir: PathLike
) -> Iterator[tuple[str, Path]]:
    root = _normalize(rootdir or "").rstrip("/")
    dest = Path(destdir)

    for filename in files:
        normalized = _normalize(filename)
        relative = _relative_to_root(root, normalized).lstrip("/")
        yield os.fspath(filename), dest.joinpath(*relative.split("/"))


def copy_rebased(
    rootdir: PathLike | None, files: Iterable[PathLike], destdir: PathLike
) -> list[Path]:
    """Copy ``files`` under ``destdir``, keeping their layout relative to ``rootdir``.

    ``copy_rebased("A", ["A/B/c.txt"], "D")`` creates ``D/B/c.txt``. Files that do
    not live under ``rootdir`` keep their whole path below ``destdir``.
    """
    make_dirs(destdir)
    copied: list[Path] = []

    for source, target in _rebased_destinations(rootdir, files, destdir):
        logger.debug("cp -r {} {}", source, target)
        copied.append(copy_tree(source, target))

    return copied


def file_list(*patterns: PathLike) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []

    for pattern in patterns:
        for match in sorted(glob.glob(os.fspath(pattern), recursive=True)):
            if match in seen:
                continue
            seen.add(match)
            out.append(match)

    return out


def read_text(path: PathLike) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise FileSyncError(SyncErrorKind.IO_ERROR, str(path), "not utf-8 text") from exc
    except ValueError as exc:
        raise FileSyncError(SyncErrorKind.IO_ERROR, str(path), str(exc)) from exc
    except OSError as exc:
        raise _sync_error(exc, path) from exc


def write_text(path: PathLike, text: str) -> None:
    target = Path(path)
    make_dirs(target.parent)
    try:
        target.write_text(text, encoding="utf-8")
    except ValueError as exc:
        raise FileSyncError(SyncErrorKind.IO_ERROR, str(target), str(exc)) from exc
    except OSError as exc:
        raise _sync_error(exc, target) from exc

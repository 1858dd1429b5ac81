from .sync import (
    copy_rebased,
    copy_tree,
    file_exists,
    file_list,
    make_dirs,
    read_text,
    remove_tree,
    write_text,
)
from .types import FileSyncError, SyncErrorKind

__all__ = [
    "copy_rebased",
    "copy_tree",
    "file_exists",
    "file_list",
    "make_dirs",
    "read_text",
    "remove_tree",
    "write_text",
    "FileSyncError",
    "SyncErrorKind",
]

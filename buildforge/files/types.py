from enum import Enum


class SyncErrorKind(Enum):
    MISSING_SOURCE = "missing source"
    PERMISSION_DENIED = "permission denied"
    NOT_A_DIRECTORY = "not a directory"
    IO_ERROR = "i/o error"


class FileSyncError(Exception):
    def __init__(self, kind: SyncErrorKind, path: str, detail: str | None = None):
        message = f"{kind.value}: {path}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)
        self.kind = kind
        self.path = path

from .registry import TaskRegistry
from .types import (
    CompletionError,
    DuplicateTaskError,
    Task,
    TaskError,
    TaskFailedError,
    TaskOptions,
    UnknownTaskError,
)

__all__ = [
    "TaskRegistry",
    "CompletionError",
    "DuplicateTaskError",
    "Task",
    "TaskError",
    "TaskFailedError",
    "TaskOptions",
    "UnknownTaskError",
]

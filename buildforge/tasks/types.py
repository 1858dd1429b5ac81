from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

Action = Callable[..., object]


@dataclass(frozen=True)
class TaskOptions:
    description: str = ""
    is_async: bool = False


@dataclass(frozen=True)
class Task:
    name: str
    deps: tuple[str, ...] = ()
    action: Action | None = None
    options: TaskOptions = field(default_factory=TaskOptions)

    @property
    def description(self) -> str:
        return self.options.description

    @property
    def is_async(self) -> bool:
        return self.options.is_async


class TaskError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnknownTaskError(TaskError):
    def __init__(self, name: str, required_by: str | None = None):
        if required_by is None:
            message = f"Unknown task: '{name}'"
        else:
            message = f"Unknown task: '{name}' (required by '{required_by}')"
        super().__init__(message)
        self.name = name
        self.required_by = required_by


class DuplicateTaskError(TaskError):
    def __init__(self, name: str):
        super().__init__(f"Task already registered: '{name}'")
        self.name = name


class CompletionError(TaskError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class TaskFailedError(TaskError):
    def __init__(self, task: str, cause: BaseException):
        super().__init__(f"task '{task}' failed: {cause}")
        self.task = task
        self.cause = cause

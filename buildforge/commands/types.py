from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

Command = str | Sequence[str]


def command_text(command: Command) -> str:
    if isinstance(command, str):
        return command
    return " ".join(command)


class Mode(Enum):
    INTERACTIVE = "interactive"
    CAPTURED = "captured"


@dataclass(frozen=True)
class ExitResult:
    command: str
    returncode: int
    output: str | None
    duration_s: float


class CommandError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class SpawnError(CommandError):
    def __init__(self, command: str, cause: OSError):
        super().__init__(f"could not start '{command}': {cause}")
        self.command = command
        self.cause = cause


class CommandFailedError(CommandError):
    def __init__(self, command: str, returncode: int, output: str | None = None):
        super().__init__(f"'{command}' exited with code {returncode}")
        self.command = command
        self.returncode = returncode
        self.output = output

from __future__ import annotations

import os
import subprocess
import threading
import time
from typing import TYPE_CHECKING, Callable, Mapping

from loguru import logger

from .types import (
    Command,
    CommandFailedError,
    ExitResult,
    Mode,
    SpawnError,
    command_text,
)

if TYPE_CHECKING:
    from buildforge.executor.completion import Completion


def append_flags(command: str, flags: str | None) -> str:
    """Append an opaque flag string to ``command`` exactly as given."""
    if not flags:
        return command
    return f"{command} {flags}"


def flags_from_env(variable: str | None) -> str:
    if not variable:
        return ""
    return os.environ.get(variable, "")


def execute(
    command: Command,
    mode: Mode = Mode.CAPTURED,
    env: Mapping[str, str] | None = None,
    cwd: str | os.PathLike[str] | None = None,
) -> ExitResult:
    """Run ``command`` and wait for it to exit.

    A string runs through the shell, a sequence runs as argv. Only the argv
    form raises ``SpawnError`` for a missing program; the shell reports one as
    ``CommandFailedError`` with code 127. Captured output is decoded as UTF-8
    with undecodable bytes replaced.
    """
    text = command_text(command)
    captured = mode is Mode.CAPTURED

    logger.info("> {}", text)
    start = time.monotonic()
    try:
        result = subprocess.run(
            command,
            shell=isinstance(command, str),
            cwd=cwd or None,
            env={**os.environ, **(env or {})},
            stdout=subprocess.PIPE if captured else None,
            stderr=subprocess.STDOUT if captured else None,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as exc:
        raise SpawnError(text, exc) from exc
    duration = time.monotonic() - start

    output = result.stdout if captured else None
    if output:
        logger.info("{}", output.rstrip("\n"))

    if result.returncode != 0:
        raise CommandFailedError(text, result.returncode, output)

    return ExitResult(text, result.returncode, output, duration)


def execute_async(
    command: Command,
    completion: Completion,
    mode: Mode = Mode.CAPTURED,
    env: Mapping[str, str] | None = None,
    cwd: str | os.PathLike[str] | None = None,
    then: Callable[[ExitResult], object] | None = None,
) -> threading.Thread:
    """Run ``command`` on a worker thread and resolve ``completion`` when it ends.

    ``then`` runs on the worker after a successful exit and before the
    completion is signalled; if it raises, the completion fails instead.
    """

    def worker() -> None:
        try:
            result = execute(command, mode=mode, env=env, cwd=cwd)
            if then is not None:
                then(result)
        except Exception as exc:
            completion.fail(exc)
        else:
            completion.succeed()

    thread = threading.Thread(
        target=worker, name=f"buildforge-exec:{completion.task_name}", daemon=True
    )
    thread.start()
    return thread

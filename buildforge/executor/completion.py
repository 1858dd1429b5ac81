from __future__ import annotations

from concurrent.futures import Future, InvalidStateError

from buildforge.tasks import CompletionError, TaskError


class Completion:
    """Single-use completion handle handed to asynchronous task actions.

    The action, or whatever work it starts, calls :meth:`succeed` (or the handle
    itself) or :meth:`fail` exactly once. :meth:`wait` blocks until then and has
    no timeout: a handle that is never resolved blocks forever.
    """

    def __init__(self, task_name: str) -> None:
        self.task_name = task_name
        self._future: Future[None] = Future()

    def __call__(self) -> None:
        self.succeed()

    @property
    def done(self) -> bool:
        return self._future.done()

    def succeed(self) -> None:
        try:
            self._future.set_result(None)
        except InvalidStateError as exc:
            raise self._already_resolved() from exc

    def fail(self, error: BaseException | str) -> None:
        if isinstance(error, str):
            error = TaskError(error)
        try:
            self._future.set_exception(error)
        except InvalidStateError as exc:
            raise self._already_resolved() from exc

    def wait(self) -> None:
        self._future.result()

    def _already_resolved(self) -> CompletionError:
        return CompletionError(f"task '{self.task_name}' signalled completion more than once")

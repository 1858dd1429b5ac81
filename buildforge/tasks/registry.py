from __future__ import annotations

from typing import Callable, Iterable, Iterator

from .types import Action, DuplicateTaskError, Task, TaskError, TaskOptions, UnknownTaskError


class TaskRegistry:
    """Named tasks owned by one orchestrator.

    Registering a name twice is an error. Once a run has started the registry
    is frozen and refuses further registrations.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}
        self._frozen = False

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def register(
        self,
        name: str,
        deps: Iterable[str] = (),
        action: Action | None = None,
        options: TaskOptions | None = None,
    ) -> Task:
        if self._frozen:
            raise TaskError(f"Cannot register '{name}': registry is frozen")

        if not isinstance(name, str) or len(name.strip()) < 1:
            raise TaskError("A task name can't be empty")

        if name in self._tasks:
            raise DuplicateTaskError(name)

        task = Task(name, tuple(deps), action, options or TaskOptions())
        self._tasks[name] = task
        return task

    def task(
        self,
        name: str,
        deps: Iterable[str] = (),
        *,
        description: str = "",
        is_async: bool = False,
    ) -> Callable[[Action], Action]:
        def decorator(action: Action) -> Action:
            self.register(name, deps, action, TaskOptions(description, is_async))
            return action

        return decorator

    def get(self, name: str) -> Task:
        if name not in self._tasks:
            raise UnknownTaskError(name)
        return self._tasks[name]

    def names(self) -> list[str]:
        return list(self._tasks)

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from buildforge.tasks import TaskRegistry, UnknownTaskError

from .types import CyclicDependencyError


class _Visit(Enum):
    VISITING = auto()
    VISITED = auto()


@dataclass(frozen=True)
class ExecutionPlan:
    target: str
    order: tuple[str, ...]

    def __iter__(self) -> Iterator[str]:
        return iter(self.order)

    def __len__(self) -> int:
        return len(self.order)


def build_plan(registry: TaskRegistry, target: str) -> ExecutionPlan:
    """Order ``target`` and its transitive dependencies, dependencies first.

    Dependencies are visited in declared order and each task is recorded once,
    after everything it depends on.
    """
    if target not in registry:
        raise UnknownTaskError(target)

    state: dict[str, _Visit] = {}
    out: list[str] = []
    stack: list[str] = []
    pos: dict[str, int] = {}

    def visit(tid: str, parent: str | None) -> None:
        if state.get(tid) == _Visit.VISITING:
            start = pos[tid]
            raise CyclicDependencyError(stack[start:] + [tid])
        if state.get(tid) == _Visit.VISITED:
            return

        if tid not in registry:
            raise UnknownTaskError(tid, required_by=parent)

        state[tid] = _Visit.VISITING
        pos[tid] = len(stack)
        stack.append(tid)

        for dep in registry.get(tid).deps:
            visit(dep, tid)

        stack.pop()
        pos.pop(tid)
        state[tid] = _Visit.VISITED
        out.append(tid)

    visit(target, None)

    return ExecutionPlan(target, tuple(out))

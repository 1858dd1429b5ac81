import time

from loguru import logger

from buildforge.graph import ExecutionPlan, build_plan
from buildforge.tasks import Task, TaskFailedError, TaskRegistry

from .completion import Completion
from .types import RunResult, TaskResult


class Executor:
    """Runs a task and its dependencies one at a time, in plan order.

    Only one ``run`` may be active per registry; nothing here guards against
    concurrent runs touching the same files.
    """

    def __init__(self, registry: TaskRegistry):
        self.registry = registry

    def plan(self, target: str) -> ExecutionPlan:
        return build_plan(self.registry, target)

    def run(self, target: str, *args: str) -> RunResult:
        plan = self.plan(target)
        self.registry.freeze()
        results: dict[str, TaskResult] = {}

        for tid in plan:
            task = self.registry.get(tid)
            task_args = args if tid == plan.target else ()

            logger.debug("running task '{}'", tid)
            start = time.monotonic()
            try:
                self._invoke(task, task_args)
            except Exception as exc:
                logger.error("task '{}' failed: {}", tid, exc)
                raise TaskFailedError(tid, exc) from exc
            duration = time.monotonic() - start

            results[tid] = TaskResult(tid, duration)

        return RunResult(list(plan.order), results)

    def _invoke(self, task: Task, args: tuple[str, ...]) -> None:
        if task.action is None:
            return

        if not task.is_async:
            task.action(*args)
            return

        completion = Completion(task.name)
        task.action(completion, *args)
        completion.wait()

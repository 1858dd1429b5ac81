"""buildforge - declare build tasks, then run one with its dependencies."""

__version__ = "0.1.0"

from buildforge.executor import Completion, Executor, RunResult, TaskResult
from buildforge.graph import CyclicDependencyError, ExecutionPlan, build_plan
from buildforge.tasks import (
    Task,
    TaskError,
    TaskFailedError,
    TaskOptions,
    TaskRegistry,
    UnknownTaskError,
)

__all__ = [
    "__version__",
    "Completion",
    "Executor",
    "RunResult",
    "TaskResult",
    "CyclicDependencyError",
    "ExecutionPlan",
    "build_plan",
    "Task",
    "TaskError",
    "TaskFailedError",
    "TaskOptions",
    "TaskRegistry",
    "UnknownTaskError",
]

from .completion import Completion
from .executor import Executor
from .types import RunResult, TaskResult

__all__ = ["Completion", "Executor", "RunResult", "TaskResult"]

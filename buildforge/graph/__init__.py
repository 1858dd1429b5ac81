from .plan import ExecutionPlan, build_plan
from .types import CyclicDependencyError, GraphError

__all__ = ["ExecutionPlan", "build_plan", "CyclicDependencyError", "GraphError"]

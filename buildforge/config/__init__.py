from .loader import load_project
from .registry import build_registry, command_line
from .types import ConfigError, CopyConfig, ProjectConfig, TaskConfig

__all__ = [
    "load_project",
    "build_registry",
    "command_line",
    "ProjectConfig",
    "TaskConfig",
    "CopyConfig",
    "ConfigError",
]

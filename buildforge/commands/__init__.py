from .runner import append_flags, execute, execute_async, flags_from_env
from .types import CommandError, CommandFailedError, ExitResult, Mode, SpawnError

__all__ = [
    "append_flags",
    "execute",
    "execute_async",
    "flags_from_env",
    "CommandError",
    "CommandFailedError",
    "ExitResult",
    "Mode",
    "SpawnError",
]

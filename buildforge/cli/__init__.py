from .commands import configure_logging, run_cli

__all__ = ["configure_logging", "run_cli"]

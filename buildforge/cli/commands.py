from __future__ import annotations

import argparse
import sys

from loguru import logger

from buildforge.config import ConfigError, build_registry, load_project
from buildforge.executor import Executor, RunResult
from buildforge.files import FileSyncError
from buildforge.graph import GraphError
from buildforge.tasks import TaskError, TaskFailedError, TaskRegistry

from .args import build_parser


_stderr_sink: int | None = None


def configure_logging(level: str = "INFO") -> None:
    global _stderr_sink
    if _stderr_sink is None:
        # first call replaces loguru's default stderr sink
        logger.remove()
    else:
        logger.remove(_stderr_sink)
    _stderr_sink = logger.add(
        sys.stderr,
        level=level.upper(),
        format="<level>{level: <8}</level> | {message}",
    )


def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        configure_logging(args.log_level)

        match args.command:
            case "run":
                return cmd_run(args)
            case "list":
                return cmd_list(args)
            case "plan":
                return cmd_plan(args)
            case "graph":
                return cmd_graph(args)
            case _:
                return 2

    except TaskFailedError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    except (ConfigError, GraphError, TaskError, FileSyncError) as exc:
        print(str(exc), file=sys.stderr)
        return 2

    except KeyboardInterrupt:
        return 130


def cmd_run(args: argparse.Namespace) -> int:
    executor = Executor(_load_registry(args))
    rr = executor.run(args.target, *args.args)
    _print_result(rr)
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    registry = _load_registry(args)
    width = max(len(task.name) for task in registry)
    for task in registry:
        lines = task.description.splitlines()
        if not lines:
            print(task.name)
            continue
        print(f"{task.name:<{width}}  # {lines[0]}")
        for extra in lines[1:]:
            print(f"{'':<{width}}    {extra}")
    return 0


def cmd_plan(args: argparse.Namespace) -> int:
    executor = Executor(_load_registry(args))
    for tid in executor.plan(args.target):
        print(tid)
    return 0


def cmd_graph(args: argparse.Namespace) -> int:
    registry = _load_registry(args)
    for task in registry:
        deps = " ".join(task.deps)
        print(f"{task.name}: {deps}".rstrip())
    return 0


def _load_registry(args: argparse.Namespace) -> TaskRegistry:
    project = load_project(args.config)
    return build_registry(project)


def _print_result(rr: RunResult) -> None:
    for tid in rr.order:
        result = rr.results[tid]
        print(f"OK {tid}, {result.duration_s:.3f}s")

from __future__ import annotations

import argparse

from buildforge import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="buildforge")

    parser.add_argument(
        "--config",
        default="buildforge.yml",
        help="Path to config file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Minimum level of log messages written to stderr",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
    )

    # run
    run = subparsers.add_parser("run", help="Run a task and its dependencies")
    run.add_argument("target", help="Task to run")
    run.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        help="Arguments passed to the target task only",
    )

    # list
    subparsers.add_parser("list", help="List tasks with their descriptions")

    # plan
    plan = subparsers.add_parser("plan", help="Show the execution order for a task")
    plan.add_argument("target", help="Task to plan")

    # graph
    subparsers.add_parser("graph", help="Show dependency graph")

    return parser

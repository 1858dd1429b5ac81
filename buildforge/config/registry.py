from __future__ import annotations

import shlex
from typing import Callable

from loguru import logger

from buildforge.commands import Mode, append_flags, execute, execute_async, flags_from_env
from buildforge.executor import Completion
from buildforge.files import copy_rebased, file_exists, file_list, remove_tree
from buildforge.tasks import TaskOptions, TaskRegistry
from buildforge.version import fix_version

from .types import ProjectConfig, TaskConfig


def build_registry(project: ProjectConfig, registry: TaskRegistry | None = None) -> TaskRegistry:
    """Register every task declared in ``project``.

    A declared task runs its steps in a fixed order: ``remove``, ``version``,
    ``command``, then ``copy``. Tasks without any step only aggregate their
    dependencies. A task whose ``creates`` paths all exist skips its steps.
    """
    registry = registry if registry is not None else TaskRegistry()

    for task in project:
        options = TaskOptions(task.description, task.is_async)
        registry.register(task.id, task.deps, _make_action(project, task), options)

    return registry


def command_line(task: TaskConfig, args: tuple[str, ...] = ()) -> str | None:
    if task.command is None:
        return None

    line = append_flags(task.command, flags_from_env(task.flags_env))
    if args:
        line = f"{line} {shlex.join(args)}"
    return line


def _make_action(project: ProjectConfig, task: TaskConfig) -> Callable[..., None] | None:
    if not (task.command or task.remove or task.version or task.copy):
        return None

    mode = Mode.INTERACTIVE if task.interactive else Mode.CAPTURED
    cwd = project.resolve(task.working_dir) if task.working_dir else project.root

    def up_to_date() -> bool:
        if task.creates and all(file_exists(project.resolve(path)) for path in task.creates):
            logger.info("'{}' is up to date", task.id)
            return True
        return False

    def prepare() -> None:
        for path in task.remove:
            remove_tree(project.resolve(path))
        for target in task.version:
            fix_version(project.resolve(target), project.resolve(project.manifest))

    def publish(*_: object) -> None:
        for copy in task.copy:
            patterns = [str(project.resolve(pattern)) for pattern in copy.include]
            copy_rebased(
                str(project.resolve(copy.root)),
                file_list(*patterns),
                project.resolve(copy.dest),
            )

    if task.is_async:

        def run_async(completion: Completion, *args: str) -> None:
            if up_to_date():
                completion.succeed()
                return
            prepare()
            execute_async(
                command_line(task, args),
                completion,
                mode=mode,
                env=task.env,
                cwd=cwd,
                then=publish,
            )

        return run_async

    def run(*args: str) -> None:
        if up_to_date():
            return
        prepare()
        line = command_line(task, args)
        if line is not None:
            execute(line, mode=mode, env=task.env, cwd=cwd)
        publish()

    return run

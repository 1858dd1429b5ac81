from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_MANIFEST = "package.json"


@dataclass
class CopyConfig:
    root: str
    include: list[str]
    dest: str


@dataclass
class TaskConfig:
    id: str
    command: str | None
    deps: list[str]
    env: dict[str, str]
    working_dir: str | None
    description: str = ""
    interactive: bool = False
    is_async: bool = False
    flags_env: str | None = None
    remove: list[str] = field(default_factory=list)
    copy: list[CopyConfig] = field(default_factory=list)
    version: list[str] = field(default_factory=list)
    creates: list[str] = field(default_factory=list)


@dataclass
class ProjectConfig:
    tasks: dict[str, TaskConfig]
    root: Path = field(default_factory=Path.cwd)
    manifest: str = DEFAULT_MANIFEST

    def __iter__(self):
        for tasks_id in self.tasks:
            yield self.tasks[tasks_id]

    def resolve(self, path: str) -> Path:
        return self.root / path


class ConfigError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnsupportedConfigFormatError(ConfigError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)

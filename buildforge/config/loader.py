import json
import tomllib
from pathlib import Path
from typing import Any, Mapping

import yaml

from .types import (
    DEFAULT_MANIFEST,
    ConfigError,
    CopyConfig,
    ProjectConfig,
    TaskConfig,
    UnsupportedConfigFormatError,
)

TASK_KEYS = {
    "command",
    "deps",
    "description",
    "env",
    "working_dir",
    "interactive",
    "async",
    "flags_env",
    "remove",
    "copy",
    "version",
    "creates",
}
COPY_KEYS = {"root", "include", "dest"}


def load_project(path: str | Path) -> ProjectConfig:
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise ConfigError(f"Config file not found: {pure_path}")

    if not pure_path.is_file():
        raise ConfigError(f"Config path is not a file: {pure_path}")

    fmt = _detect_format(pure_path)
    raw_file = _parse_file(pure_path, fmt)
    project = _build_project_config(raw_file, pure_path.parent)
    return project


def _detect_format(path: Path) -> str:
    fmt = path.suffix
    match fmt:
        case ".yaml" | ".yml":
            return "yaml"
        case ".toml":
            return "toml"
        case ".json":
            return "json"
        case _:
            raise UnsupportedConfigFormatError(
                f"Non supported file extension: {fmt}\n Expected format: .yml/.yaml, .toml, .json"
            )


def _parse_file(path: Path, fmt: str) -> Mapping[str, Any]:
    match fmt:
        case "yaml":
            return _parse_yaml(path)
        case "toml":
            return _parse_toml(path)
        case "json":
            return _parse_json(path)
        case _:
            raise AssertionError("Unreachable")


def _parse_yaml(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML") from exc

    return _expect_mapping(path, "YAML", raw_file)


def _parse_toml(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: invalid TOML") from exc

    return _expect_mapping(path, "TOML", raw_file)


def _parse_json(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: invalid JSON") from exc

    return _expect_mapping(path, "JSON", raw_file)


def _expect_mapping(path: Path, fmt: str, raw_file: Any) -> Mapping[str, Any]:
    if not isinstance(raw_file, Mapping):
        raise ConfigError(
            f"{path}: {fmt} parsed successfully but top-level value is not an object: {type(raw_file)}"
        )

    return raw_file


def _build_project_config(raw: Mapping[str, Any], root: Path) -> ProjectConfig:
    tasks = {}

    if not "tasks" in raw:
        raise ConfigError("Missing 'tasks' field")

    if not isinstance(raw["tasks"], Mapping):
        raise ConfigError(f"'tasks' must be a mapping, got {type(raw['tasks'])}")

    if len(raw["tasks"]) < 1:
        raise ConfigError("There must be at least one task in the config file")

    manifest = DEFAULT_MANIFEST
    if "manifest" in raw:
        manifest = _string("project", "manifest", raw["manifest"])

    for task_id, fields in raw["tasks"].items():
        if not isinstance(task_id, str):
            raise ConfigError(f"Task id must be a string, got {type(task_id)}")

        if fields is None:
            fields = {}

        if not isinstance(fields, Mapping):
            raise ConfigError(f"{task_id} must be a mapping")

        task_id_norm = task_id.strip()

        if len(task_id_norm) < 1:
            raise ConfigError("A task id can't be empty")

        if task_id_norm in tasks:
            raise ConfigError(f"Duplicate task id after normalization: {task_id_norm}")

        tasks[task_id_norm] = _build_task_config(task_id_norm, fields)

    for task in tasks.values():
        for dep in task.deps:
            if dep not in tasks:
                raise ConfigError(f"Task '{task.id}' has unknown dependency '{dep}'")

    return ProjectConfig(tasks=tasks, root=root, manifest=manifest)


def _build_task_config(task_id: str, fields: Mapping[str, Any]) -> TaskConfig:
    for field in fields.keys():
        if field not in TASK_KEYS:
            raise ConfigError(f"{task_id}: Can't process: {field}")

    command = None
    if "command" in fields:
        command = _string(task_id, "command", fields["command"])

    description = ""
    if "description" in fields:
        if not isinstance(fields["description"], str):
            raise ConfigError(f"{task_id}: The description should be a string")
        description = fields["description"].strip()

    working_dir = None
    if "working_dir" in fields:
        working_dir = _string(task_id, "working_dir", fields["working_dir"])

    flags_env = None
    if "flags_env" in fields:
        flags_env = _string(task_id, "flags_env", fields["flags_env"])

    interactive = _bool(task_id, "interactive", fields.get("interactive", False))
    is_async = _bool(task_id, "async", fields.get("async", False))

    if is_async and command is None:
        raise ConfigError(f"{task_id}: An async task needs a 'command'")

    return TaskConfig(
        id=task_id,
        command=command,
        deps=_build_deps(task_id, fields.get("deps", [])),
        env=_build_env(task_id, fields.get("env", {})),
        working_dir=working_dir,
        description=description,
        interactive=interactive,
        is_async=is_async,
        flags_env=flags_env,
        remove=_string_list(task_id, "remove", fields.get("remove", [])),
        copy=_build_copies(task_id, fields.get("copy", [])),
        version=_string_list(task_id, "version", fields.get("version", [])),
        creates=_string_list(task_id, "creates", fields.get("creates", [])),
    )


def _build_deps(task_id: str, raw: Any) -> list[str]:
    deps = []
    seen = set()

    if not isinstance(raw, list):
        raise ConfigError(f"{task_id}: Dependencies should be in a list.")

    for item in raw:
        if not isinstance(item, str):
            raise ConfigError(f"{task_id}: {item} should be a string in the dependency list")

        dep = item.strip()

        if len(dep) < 1:
            raise ConfigError(f"{task_id}: A dependency is empty")

        if dep == task_id:
            raise ConfigError(f"{task_id}: A task cannot be self dependent")

        # Allows to ignore duplicates dependency
        if dep in seen:
            continue

        deps.append(dep)
        seen.add(dep)

    return deps


def _build_env(task_id: str, raw: Any) -> dict[str, str]:
    env = {}

    if not isinstance(raw, Mapping):
        raise ConfigError(f"{task_id}: Env should be a mapping")

    for key, item in raw.items():
        if not isinstance(key, str):
            raise ConfigError(f"{task_id}: {key} should be a string")

        if len(key.strip()) < 1:
            raise ConfigError(f"{task_id}: A key can't be empty")

        if not isinstance(item, str):
            raise ConfigError(f"{task_id}: {item} should be a string")

        env[key.strip()] = item

    return env


def _build_copies(task_id: str, raw: Any) -> list[CopyConfig]:
    copies = []

    if not isinstance(raw, list):
        raise ConfigError(f"{task_id}: 'copy' should be a list")

    for entry in raw:
        if not isinstance(entry, Mapping):
            raise ConfigError(f"{task_id}: Each 'copy' entry should be a mapping")

        for field in entry.keys():
            if field not in COPY_KEYS:
                raise ConfigError(f"{task_id}: Can't process copy field: {field}")

        if "dest" not in entry:
            raise ConfigError(f"{task_id}: A 'copy' entry is missing 'dest'")

        root = ""
        if "root" in entry:
            if not isinstance(entry["root"], str):
                raise ConfigError(f"{task_id}: The copy root should be a string")
            root = entry["root"].strip()

        include = _string_list(task_id, "include", entry.get("include", []))
        if len(include) < 1:
            raise ConfigError(f"{task_id}: A 'copy' entry needs at least one 'include' pattern")

        copies.append(CopyConfig(root, include, _string(task_id, "dest", entry["dest"])))

    return copies


def _string(task_id: str, name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{task_id}: The {name} should be a string")

    if len(value.strip()) < 1:
        raise ConfigError(f"{task_id}: Please provide a {name} or remove this field")

    return value.strip()


def _string_list(task_id: str, name: str, value: Any) -> list[str]:
    if not isinstance(value, list):
        raise ConfigError(f"{task_id}: '{name}' should be a list")

    return [_string(task_id, name, item) for item in value]


def _bool(task_id: str, name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{task_id}: '{name}' should be true or false")

    return value

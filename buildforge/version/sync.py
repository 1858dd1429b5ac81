from __future__ import annotations

import re
from typing import Iterable

from loguru import logger

from buildforge.files import FileSyncError, read_text, write_text
from buildforge.files.sync import PathLike

from .types import VersionLookup, VersionRule

_MANIFEST_VERSION = re.compile(r'"version"\s*:\s*"([\w.\-]+)"')

VERSION_RULES: tuple[VersionRule, ...] = (
    VersionRule(
        "constant",
        re.compile(r'^(?P<prefix>public\s*val\s*version\s*=\s*)"[^"\n]*"', re.M),
        '{prefix}"{version}"',
    ),
    VersionRule(
        "html-tag",
        re.compile(r'(?P<prefix><span\s+id="version">)[^<\n]*(?=</span>)'),
        "{prefix}{version}",
    ),
    VersionRule(
        "python",
        re.compile(r"^(?P<prefix>__version__\s*=\s*)(?P<q>[\"'])[^\"'\n]*(?P=q)", re.M),
        "{prefix}{q}{version}{q}",
    ),
)


def read_version(manifest: PathLike) -> VersionLookup:
    try:
        content = read_text(manifest)
    except FileSyncError as exc:
        return VersionLookup.missing(str(exc))

    match = _MANIFEST_VERSION.search(content)
    if match is None:
        return VersionLookup.missing(f"{manifest}: no version field")

    return VersionLookup(match.group(1))


def apply_rules(content: str, version: str, rules: Iterable[VersionRule] = VERSION_RULES) -> str:
    for rule in rules:
        content = rule.apply(content, version)
    return content


def sync_version(
    target: PathLike, version: str, rules: Iterable[VersionRule] = VERSION_RULES
) -> bool:
    """Rewrite the version markers in ``target``; return whether the file was written.

    The file is left untouched when nothing changes, so its mtime only moves
    when the version really did.
    """
    original = read_text(target)
    updated = apply_rules(original, version, rules)

    if updated == original:
        return False

    logger.info("updating version string in '{}' to '{}'", target, version)
    write_text(target, updated)
    return True


def fix_version(target: PathLike, manifest: PathLike) -> bool:
    lookup = read_version(manifest)
    if not lookup.found:
        logger.warning("could not read version from '{}': {}", manifest, lookup.reason)
    return sync_version(target, lookup.value)

from __future__ import annotations

import re
from dataclasses import dataclass

UNKNOWN_VERSION = "<unknown>"


@dataclass(frozen=True)
class VersionLookup:
    value: str
    reason: str | None = None

    @property
    def found(self) -> bool:
        return self.reason is None

    @classmethod
    def missing(cls, reason: str) -> VersionLookup:
        return cls(UNKNOWN_VERSION, reason)


@dataclass(frozen=True)
class VersionRule:
    """A version marker and how to rewrite it.

    ``template`` is a ``str.format`` string; it receives ``version`` plus every
    named group captured by ``pattern``.
    """

    name: str
    pattern: re.Pattern[str]
    template: str

    def apply(self, content: str, version: str) -> str:
        return self.pattern.sub(
            lambda m: self.template.format(version=version, **m.groupdict()),
            content,
            count=1,
        )

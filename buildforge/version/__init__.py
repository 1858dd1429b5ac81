from .sync import VERSION_RULES, apply_rules, fix_version, read_version, sync_version
from .types import UNKNOWN_VERSION, VersionLookup, VersionRule

__all__ = [
    "VERSION_RULES",
    "apply_rules",
    "fix_version",
    "read_version",
    "sync_version",
    "UNKNOWN_VERSION",
    "VersionLookup",
    "VersionRule",
]

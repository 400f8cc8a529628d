"""Server version numbers and parsing of version strings."""

from __future__ import annotations

import enum
from dataclasses import dataclass

_DIGITS = frozenset("0123456789")


class PostgresInstanceType(enum.Enum):
    """The kind of server that reported a version."""

    UNKNOWN = enum.auto()
    POSTGRES = enum.auto()
    AURORA = enum.auto()
    REDSHIFT = enum.auto()


@dataclass
class PostgresVersion:
    """A major.minor.patch server version; ordering ignores the instance type."""

    major: int = 0
    minor: int = 0
    patch: int = 0
    instance_type: PostgresInstanceType = PostgresInstanceType.POSTGRES

    def _key(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PostgresVersion):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, PostgresVersion):
            return NotImplemented
        return not other._key() < self._key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, PostgresVersion):
            return NotImplemented
        return other._key() < self._key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, PostgresVersion):
            return NotImplemented
        return not self._key() < other._key()


def extract_postgres_version(version_str: str) -> PostgresVersion:
    """Parse the first dotted number in a server version string.

    At most three components are read. A string without "PostgreSQL"
    in it yields an UNKNOWN instance type.
    """
    result = PostgresVersion()
    if "PostgreSQL" not in version_str:
        result.instance_type = PostgresInstanceType.UNKNOWN

    size = len(version_str)
    pos = 0
    while pos < size and version_str[pos] not in _DIGITS:
        pos += 1

    components: list[int] = []
    while len(components) < 3:
        start = pos
        while pos < size and version_str[pos] in _DIGITS:
            pos += 1
        if start == pos:
            break
        components.append(int(version_str[start:pos]))
        if pos >= size or version_str[pos] != ".":
            break
        pos += 1

    for field, value in zip(("major", "minor", "patch"), components):
        setattr(result, field, value)
    return result
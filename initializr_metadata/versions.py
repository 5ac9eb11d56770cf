"""
Platform version parsing, ordering and compatibility ranges.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Optional, Tuple

from .errors import MalformedVersionError


_VERSION_PATTERN = re.compile(
    r"^(\d+)\.(\d+)\.(\d+)(?:([.-])([A-Za-z][A-Za-z0-9-]*))?$"
)
_QUALIFIER_PATTERN = re.compile(r"^([A-Za-z-]*?)(\d*)$")

_SNAPSHOT_QUALIFIERS = frozenset({"SNAPSHOT", "BUILD-SNAPSHOT"})
_RELEASE_QUALIFIERS = frozenset({"RELEASE"})

# Qualifier ranks for a given numeric triple, lowest first.
_RANK_SNAPSHOT = 0
_RANK_UNKNOWN = 1
_RANK_MILESTONE = 2
_RANK_RELEASE_CANDIDATE = 3
_RANK_RELEASE = 4


@dataclass(frozen=True)
class Qualifier:
    """Version qualifier such as RELEASE, M2 or BUILD-SNAPSHOT."""

    id: str
    number: Optional[int] = None
    separator: str = "."

    def __str__(self) -> str:
        if self.number is None:
            return self.id
        return f"{self.id}{self.number}"

    @property
    def rank(self) -> int:
        qualifier_id = self.id.upper()
        if qualifier_id in _SNAPSHOT_QUALIFIERS:
            return _RANK_SNAPSHOT
        if qualifier_id in _RELEASE_QUALIFIERS:
            return _RANK_RELEASE
        if qualifier_id == "M":
            return _RANK_MILESTONE
        if qualifier_id == "RC":
            return _RANK_RELEASE_CANDIDATE
        return _RANK_UNKNOWN


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A platform version with a total order over (major, minor, patch, qualifier).

    A missing qualifier is a release: ``2.1.4`` and ``2.1.4.RELEASE`` compare
    equal. Snapshots sort below milestones, milestones below release
    candidates, and release candidates below releases of the same triple.
    """

    major: int
    minor: int
    patch: int
    qualifier: Optional[Qualifier] = None

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.qualifier is not None:
            text += f"{self.qualifier.separator}{self.qualifier}"
        return text

    @property
    def is_snapshot(self) -> bool:
        return self.qualifier is not None and self.qualifier.rank == _RANK_SNAPSHOT

    def sort_key(self) -> Tuple[int, int, int, int, str, int]:
        if self.qualifier is None:
            return (self.major, self.minor, self.patch, _RANK_RELEASE, "", -1)
        qualifier = self.qualifier
        unknown_id = qualifier.id.upper() if qualifier.rank == _RANK_UNKNOWN else ""
        # A bare qualifier sorts below the same qualifier with any number
        number = qualifier.number if qualifier.number is not None else -1
        return (
            self.major,
            self.minor,
            self.patch,
            qualifier.rank,
            unknown_id,
            number,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.sort_key() == other.sort_key()

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self) -> int:
        return hash(self.sort_key())


def parse_version(text: Optional[str]) -> Version:
    """Parse a version such as ``2.1.4.RELEASE``, ``2.2.0-M1`` or ``3.0.0``.

    Raises:
        MalformedVersionError: if the text is not a valid version.
    """
    if text is None or not str(text).strip():
        raise MalformedVersionError("Version must not be empty")
    value = str(text).strip()
    match = _VERSION_PATTERN.match(value)
    if match is None:
        raise MalformedVersionError(f"Invalid version '{value}'")

    major, minor, patch, separator, raw_qualifier = match.groups()
    qualifier = None
    if raw_qualifier:
        qualifier_match = _QUALIFIER_PATTERN.match(raw_qualifier)
        if qualifier_match is not None and qualifier_match.group(1):
            qualifier_id, number = qualifier_match.groups()
            qualifier = Qualifier(
                id=qualifier_id,
                number=int(number) if number else None,
                separator=separator,
            )
        else:
            qualifier = Qualifier(id=raw_qualifier, separator=separator)
    return Version(int(major), int(minor), int(patch), qualifier)


@dataclass(frozen=True)
class VersionRange:
    """Compatibility range between two versions.

    A missing upper bound means the range is unbounded above.
    """

    lower: Version
    lower_inclusive: bool = True
    upper: Optional[Version] = None
    upper_inclusive: bool = False

    def __post_init__(self) -> None:
        if self.upper is not None and self.upper < self.lower:
            raise MalformedVersionError(
                f"Upper bound {self.upper} is lower than {self.lower}"
            )

    def __contains__(self, version: Version) -> bool:
        return self.contains(version)

    def contains(self, version: Version) -> bool:
        if self.lower_inclusive:
            if version < self.lower:
                return False
        elif version <= self.lower:
            return False

        if self.upper is None:
            return True
        if self.upper_inclusive:
            return version <= self.upper
        return version < self.upper

    def __str__(self) -> str:
        if self.upper is None and self.lower_inclusive:
            return str(self.lower)
        start = "[" if self.lower_inclusive else "("
        end = "]" if self.upper_inclusive else ")"
        upper = str(self.upper) if self.upper is not None else ""
        return f"{start}{self.lower},{upper}{end}"


def parse_range(text: Optional[str]) -> VersionRange:
    """Parse a compatibility range.

    ``2.1.0.RELEASE`` means ``>= 2.1.0.RELEASE``; bracket notation such as
    ``[2.1.4.RELEASE,2.2.0.BUILD-SNAPSHOT)`` sets both bounds, and ``[1.5.0]``
    matches a single version.
    """
    if text is None or not str(text).strip():
        raise MalformedVersionError("Version range must not be empty")
    value = str(text).strip()

    if value[0] not in "[(":
        return VersionRange(lower=parse_version(value))

    if value[-1] not in "])":
        raise MalformedVersionError(f"Unterminated version range '{value}'")
    lower_inclusive = value[0] == "["
    upper_inclusive = value[-1] == "]"
    parts = value[1:-1].split(",")

    if len(parts) == 1:
        if not (lower_inclusive and upper_inclusive):
            raise MalformedVersionError(f"Invalid version range '{value}'")
        exact = parse_version(parts[0])
        return VersionRange(lower=exact, upper=exact, upper_inclusive=True)
    if len(parts) != 2:
        raise MalformedVersionError(f"Invalid version range '{value}'")

    lower_text, upper_text = parts[0].strip(), parts[1].strip()
    if not lower_text:
        raise MalformedVersionError(f"Version range '{value}' has no lower bound")
    return VersionRange(
        lower=parse_version(lower_text),
        lower_inclusive=lower_inclusive,
        upper=parse_version(upper_text) if upper_text else None,
        upper_inclusive=upper_inclusive,
    )

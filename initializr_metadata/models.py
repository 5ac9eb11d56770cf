"""
Core data models for project request resolution.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Mapping, Optional, Tuple, Union

from .versions import Version, VersionRange


logger = logging.getLogger(__name__)

# Request parameter names as submitted by the web form or the URL fragment.
REQUEST_PARAMETERS = {
    "groupId": "group_id",
    "artifactId": "artifact_id",
    "name": "name",
    "description": "description",
    "packageName": "package_name",
    "language": "language",
    "bootVersion": "platform_version",
    "packaging": "packaging",
    "type": "type",
    "javaVersion": "java_version",
    "baseDir": "base_dir",
    "applicationName": "application_name",
}
DEPENDENCY_PARAMETERS = ("dependencies", "style")

_DEPENDENCY_SEPARATOR = re.compile(r"[,\s]+")


@dataclass(frozen=True)
class Dependency:
    """A selectable library entry of the dependency catalog."""

    id: str
    group_id: str
    artifact_id: str
    compatibility_range: Optional[VersionRange] = None
    name: Optional[str] = None
    description: Optional[str] = None
    group: Optional[str] = None
    scope: str = "compile"
    starter: bool = True
    facets: Tuple[str, ...] = ()

    @property
    def coordinates(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"


@dataclass(frozen=True)
class BuildDependency:
    """A dependency as it ends up in the generated build file."""

    group_id: str
    artifact_id: str
    scope: str = "compile"

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id} ({self.scope})"


def split_dependency_ids(value: Union[str, Iterable[str], None]) -> FrozenSet[str]:
    """Split a comma or whitespace separated list of dependency ids."""
    if value is None:
        return frozenset()
    if isinstance(value, str):
        items: Iterable[str] = _DEPENDENCY_SEPARATOR.split(value)
    else:
        items = value
    return frozenset(item.strip() for item in items if item and item.strip())


@dataclass(frozen=True)
class ProjectRequest:
    """A project generation request.

    Unset fields are filled in during resolution; resolution returns a new
    instance rather than mutating this one.
    """

    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    package_name: Optional[str] = None
    language: Optional[str] = None
    platform_version: Optional[str] = None
    packaging: Optional[str] = None
    type: Optional[str] = None
    java_version: Optional[str] = None
    base_dir: Optional[str] = None
    application_name: Optional[str] = None
    dependencies: FrozenSet[str] = frozenset()

    @classmethod
    def from_params(cls, params: Mapping[str, object]) -> "ProjectRequest":
        """Build a request from form or query-string parameters.

        Blank values are treated as unset and unknown parameters are ignored.
        """
        values = {}
        dependencies: FrozenSet[str] = frozenset()
        for key, raw in params.items():
            if key in DEPENDENCY_PARAMETERS:
                dependencies = dependencies | split_dependency_ids(raw)
                continue
            field_name = REQUEST_PARAMETERS.get(key)
            if field_name is None:
                logger.debug("Ignoring unknown request parameter %s", key)
                continue
            if raw is None:
                continue
            text = str(raw).strip()
            if text:
                values[field_name] = text
        return cls(dependencies=dependencies, **values)


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of checking a dependency selection against a platform version."""

    retained: FrozenSet[str]
    removed: Tuple[str, ...] = ()
    unknown: Tuple[str, ...] = ()
    warnings: Tuple[UserWarning, ...] = ()


@dataclass(frozen=True)
class ResolutionResult:
    """A validated, defaulted request and what was dropped on the way."""

    request: ProjectRequest
    platform_version: Version
    removed: Tuple[str, ...] = ()
    unknown: Tuple[str, ...] = ()
    warnings: Tuple[UserWarning, ...] = ()


@dataclass(frozen=True)
class SearchResults:
    """Catalog entries matching a search, split by compatibility."""

    valid: Tuple[Dependency, ...]
    invalid: Tuple[Dependency, ...]

    @property
    def valid_ids(self) -> Tuple[str, ...]:
        return tuple(dep.id for dep in self.valid)

    @property
    def invalid_ids(self) -> Tuple[str, ...]:
        return tuple(dep.id for dep in self.invalid)


@dataclass(frozen=True)
class ProjectDescription:
    """Everything the generation engine needs to produce an archive."""

    request: ProjectRequest
    build_system: str
    archive_name: str
    base_dir: str
    package_name: str
    application_name: str
    application_path: str
    has_web_resources: bool
    build_dependencies: Tuple[BuildDependency, ...]

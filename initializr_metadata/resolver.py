"""
Dependency compatibility checks against a platform version.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Set, Union

from .catalog import DependencyCatalog
from .errors import UnknownDependencyWarning
from .models import Dependency, ReconcileResult, SearchResults
from .versions import Version, parse_version


logger = logging.getLogger(__name__)

VersionLike = Union[Version, str]


def _as_version(version: VersionLike) -> Version:
    if isinstance(version, Version):
        return version
    return parse_version(version)


def is_compatible(dependency: Dependency, version: VersionLike) -> bool:
    """Return whether a dependency can be used with the given platform version.

    Raises:
        MalformedVersionError: if ``version`` is a string that cannot be parsed
    """
    platform_version = _as_version(version)
    if dependency.compatibility_range is None:
        return True
    return platform_version in dependency.compatibility_range


def filter_selectable(catalog: DependencyCatalog, version: VersionLike) -> Set[str]:
    """Return the ids of every catalog entry compatible with ``version``."""
    platform_version = _as_version(version)
    return {dep.id for dep in catalog if is_compatible(dep, platform_version)}


def reconcile_selection(
    selected: Iterable[str],
    catalog: DependencyCatalog,
    new_version: VersionLike,
) -> ReconcileResult:
    """Drop selected ids that are unknown or incompatible with ``new_version``.

    Never adds ids. Unknown ids are reported as warnings rather than errors.
    """
    platform_version = _as_version(new_version)
    retained: Set[str] = set()
    removed: List[str] = []
    unknown: List[str] = []
    warnings: List[UserWarning] = []

    for dependency_id in sorted(set(selected)):
        dependency = catalog.get(dependency_id)
        if dependency is None:
            logger.warning("Dropping unknown dependency %s", dependency_id)
            unknown.append(dependency_id)
            warnings.append(UnknownDependencyWarning(dependency_id))
        elif is_compatible(dependency, platform_version):
            retained.add(dependency_id)
        else:
            logger.info(
                "Dropping %s: %s is outside %s",
                dependency_id, platform_version, dependency.compatibility_range,
            )
            removed.append(dependency_id)

    return ReconcileResult(
        retained=frozenset(retained),
        removed=tuple(removed),
        unknown=tuple(unknown),
        warnings=tuple(warnings),
    )


def _matches(dependency: Dependency, terms: List[str]) -> bool:
    haystack = " ".join(
        part.lower()
        for part in (
            dependency.id,
            dependency.name,
            dependency.description,
            dependency.coordinates,
        )
        if part
    )
    return all(term in haystack for term in terms)


def search(catalog: DependencyCatalog, query: str, version: VersionLike) -> SearchResults:
    """Find catalog entries matching every term of ``query``.

    Matches incompatible with ``version`` are returned as invalid rather than
    hidden, in catalog order.
    """
    platform_version = _as_version(version)
    terms = [term for term in query.lower().split() if term]
    if not terms:
        return SearchResults(valid=(), invalid=())

    valid = []
    invalid = []
    for dependency in catalog:
        if not _matches(dependency, terms):
            continue
        if is_compatible(dependency, platform_version):
            valid.append(dependency)
        else:
            invalid.append(dependency)
    return SearchResults(valid=tuple(valid), invalid=tuple(invalid))

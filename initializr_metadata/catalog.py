"""
Dependency catalog and service metadata loading.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from .models import Dependency
from .versions import parse_range


logger = logging.getLogger(__name__)

SPRING_BOOT_GROUP_ID = "org.springframework.boot"
STARTER_PREFIX = "spring-boot-starter"

OPTION_NAMES = ("type", "packaging", "javaVersion", "language", "bootVersion")
TEXT_OPTION_NAMES = ("groupId", "artifactId", "version", "name", "description", "packageName")


class DependencyCatalog:
    """Read-only registry of selectable dependencies, in declaration order."""

    def __init__(self, dependencies: Iterable[Dependency] = ()) -> None:
        entries: Dict[str, Dependency] = {}
        for dependency in dependencies:
            if dependency.id in entries:
                raise ValueError(f"Duplicate dependency id '{dependency.id}'")
            entries[dependency.id] = dependency
        self._entries = MappingProxyType(entries)

    def __contains__(self, dependency_id: object) -> bool:
        return dependency_id in self._entries

    def __iter__(self) -> Iterator[Dependency]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"DependencyCatalog({len(self)} dependencies)"

    def get(self, dependency_id: str) -> Optional[Dependency]:
        return self._entries.get(dependency_id)

    def ids(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    def find_by_coordinates(self, coordinates: str) -> Optional[Dependency]:
        """Look up an entry by its ``groupId:artifactId``."""
        for dependency in self._entries.values():
            if dependency.coordinates == coordinates:
                return dependency
        return None


@dataclass(frozen=True)
class MetadataOption:
    """A single-select option of the service, such as the language."""

    default: Optional[str]
    values: Tuple[str, ...] = ()


@dataclass(frozen=True)
class InitializrMetadata:
    """Catalog plus the option enumerations and text defaults of the service."""

    catalog: DependencyCatalog
    options: Mapping[str, MetadataOption] = field(default_factory=dict)
    text_defaults: Mapping[str, str] = field(default_factory=dict)

    def option(self, name: str) -> Optional[MetadataOption]:
        return self.options.get(name)

    def default(self, name: str) -> Optional[str]:
        option = self.options.get(name)
        if option is not None:
            return option.default
        return self.text_defaults.get(name)

    @property
    def platform_versions(self) -> Tuple[str, ...]:
        option = self.options.get("bootVersion")
        return option.values if option is not None else ()


def _parse_dependency(entry: Mapping, group_name: Optional[str]) -> Dependency:
    dependency_id = entry.get("id")
    if not dependency_id:
        raise ValueError(f"Dependency entry without id in group '{group_name}'")

    group_id = entry.get("groupId")
    artifact_id = entry.get("artifactId")
    if not group_id:
        # Entries without coordinates are Spring Boot starters.
        group_id = SPRING_BOOT_GROUP_ID
        artifact_id = artifact_id or f"{STARTER_PREFIX}-{dependency_id}"
    elif not artifact_id:
        raise ValueError(f"Dependency '{dependency_id}' has a groupId but no artifactId")

    raw_range = entry.get("compatibilityRange") or entry.get("versionRange")
    return Dependency(
        id=dependency_id,
        group_id=group_id,
        artifact_id=artifact_id,
        compatibility_range=parse_range(raw_range) if raw_range else None,
        name=entry.get("name"),
        description=entry.get("description"),
        group=group_name,
        scope=entry.get("scope", "compile"),
        starter=bool(entry.get("starter", True)),
        facets=tuple(entry.get("facets", ())),
    )


def _parse_option(section: object) -> Optional[MetadataOption]:
    if not isinstance(section, Mapping) or "values" not in section:
        return None
    values = tuple(
        value["id"] for value in section.get("values", []) if value.get("id")
    )
    return MetadataOption(default=section.get("default"), values=values)


def load_metadata(source: Union[Mapping, str, Path]) -> InitializrMetadata:
    """Load service metadata from a parsed document or a JSON file.

    Args:
        source: Metadata document, or path to a JSON file holding one

    Returns:
        Immutable metadata with the dependency catalog

    Raises:
        MalformedVersionError: if a compatibility range cannot be parsed
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        logger.info("Loading metadata from %s", path)
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    else:
        document = source

    dependencies = []
    for group in document.get("dependencies", {}).get("values", []):
        group_name = group.get("name")
        for entry in group.get("values", []):
            dependencies.append(_parse_dependency(entry, group_name))

    options = {}
    for name in OPTION_NAMES:
        option = _parse_option(document.get(name))
        if option is not None:
            options[name] = option

    text_defaults = {}
    for name in TEXT_OPTION_NAMES:
        section = document.get(name)
        if isinstance(section, Mapping) and section.get("default"):
            text_defaults[name] = section["default"]

    catalog = DependencyCatalog(dependencies)
    logger.debug("Loaded %d dependencies and %d options", len(catalog), len(options))
    return InitializrMetadata(
        catalog=catalog,
        options=MappingProxyType(options),
        text_defaults=MappingProxyType(text_defaults),
    )

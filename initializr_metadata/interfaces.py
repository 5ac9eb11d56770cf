"""
Interfaces for metadata sources and the project generation engine.

ProjectGenerator describes the external engine that renders archives; this
package stops at the ProjectDescription handed to it.
"""

from __future__ import annotations

from typing import Protocol, Tuple

from .catalog import InitializrMetadata
from .models import ProjectDescription


class MetadataSource(Protocol):
    """Provide the dependency catalog and option enumerations of the service."""

    def fetch_metadata(self) -> InitializrMetadata:
        ...


class ProjectGenerator(Protocol):
    """Produce a project archive for a resolved description."""

    def generate(self, description: ProjectDescription) -> Tuple[bytes, str, str]:
        """Return (archive bytes, content type, file name)."""
        ...

"""
Errors and warnings raised while resolving project requests.
"""

from __future__ import annotations


class MalformedVersionError(ValueError):
    """A version or version range could not be parsed."""


class InvalidProjectRequestError(ValueError):
    """A project request was rejected before generation."""


class UnknownDependencyWarning(UserWarning):
    """A selected dependency id is not part of the catalog."""

    def __init__(self, dependency_id: str) -> None:
        super().__init__(f"Unknown dependency '{dependency_id}' was dropped")
        self.dependency_id = dependency_id


class InvalidIdentifierFallback(UserWarning):
    """A derived identifier was replaced by its default value."""

    def __init__(self, field: str, source: str, fallback: str) -> None:
        super().__init__(
            f"Cannot derive a valid {field} from '{source}', using '{fallback}'"
        )
        self.field = field
        self.source = source
        self.fallback = fallback

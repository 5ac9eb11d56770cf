"""
Derivation of project identifiers from user supplied metadata.

All derivations are pure: they only depend on their arguments.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from .errors import InvalidIdentifierFallback
from .models import ProjectRequest


DEFAULT_GROUP_ID = "com.example"
DEFAULT_ARTIFACT_ID = "demo"
DEFAULT_DESCRIPTION = "Demo project for Spring Boot"
DEFAULT_PACKAGE_NAME = "com.example.demo"
DEFAULT_APPLICATION_NAME = "Application"
APPLICATION_SUFFIX = "Application"

JAVA_KEYWORDS = frozenset({
    "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
    "class", "const", "continue", "default", "do", "double", "else", "enum",
    "extends", "final", "finally", "float", "for", "goto", "if", "implements",
    "import", "instanceof", "int", "interface", "long", "native", "new",
    "package", "private", "protected", "public", "return", "short", "static",
    "strictfp", "super", "switch", "synchronized", "this", "throw", "throws",
    "transient", "try", "void", "volatile", "while", "true", "false", "null",
})

_NON_WORD = re.compile(r"\W+")
_LEADING_DIGITS = re.compile(r"^\d+")
_WORD_SEPARATORS = re.compile(r"[\s_\-:]+")


@dataclass(frozen=True)
class ProjectDefaults:
    """Values used for anything a request leaves unset."""

    group_id: str = DEFAULT_GROUP_ID
    artifact_id: str = DEFAULT_ARTIFACT_ID
    description: str = DEFAULT_DESCRIPTION
    package_name: str = DEFAULT_PACKAGE_NAME
    application_name: str = DEFAULT_APPLICATION_NAME

    @classmethod
    def from_metadata(cls, metadata) -> "ProjectDefaults":
        """Take text defaults from service metadata where it declares them."""
        defaults = cls()
        return replace(
            defaults,
            group_id=metadata.default("groupId") or defaults.group_id,
            artifact_id=metadata.default("artifactId") or defaults.artifact_id,
            description=metadata.default("description") or defaults.description,
            package_name=metadata.default("packageName") or defaults.package_name,
        )


def _is_identifier_start(ch: str) -> bool:
    return ch.isalpha() or ch in "_$"


def _is_identifier_part(ch: str) -> bool:
    return ch.isalnum() or ch in "_$"


def clean_package_name(package_name: str) -> Optional[str]:
    """Turn free text into a Java package name, or None if that is not possible.

    Hyphens are removed, any other non-word character splits segments, and
    leading digits are stripped from each segment. A segment made only of
    digits is therefore dropped rather than kept, so ``42`` contributes
    nothing and ``com.example`` + ``42`` gives ``com.example``.
    """
    segments = []
    for segment in _NON_WORD.split(package_name.strip().replace("-", "")):
        segment = _LEADING_DIGITS.sub("", segment)
        if segment:
            segments.append(segment)
    if not segments or any(segment in JAVA_KEYWORDS for segment in segments):
        return None
    return ".".join(segments)


def derive_base_directory(artifact_id: str) -> str:
    return artifact_id


def _package_name(
    group_id: str,
    artifact_id: str,
    explicit_package_name: Optional[str],
    default: str,
) -> Tuple[str, bool]:
    if explicit_package_name and explicit_package_name.strip():
        return explicit_package_name, False
    candidate = clean_package_name(f"{group_id}.{artifact_id}")
    if candidate is None:
        return default, True
    return candidate, False


def derive_package_name(
    group_id: str,
    artifact_id: str,
    explicit_package_name: Optional[str] = None,
    default: str = DEFAULT_PACKAGE_NAME,
) -> str:
    """Return the explicit package name, or one built from group and artifact id.

    >>> derive_package_name("org.foo", "demo", None)
    'org.foo.demo'
    >>> derive_package_name("com.example", "42my-project")
    'com.example.myproject'
    """
    return _package_name(group_id, artifact_id, explicit_package_name, default)[0]


def _application_class_name(
    name: Optional[str],
    artifact_id: Optional[str],
    default: str,
) -> Tuple[str, bool]:
    source = name if name and name.strip() else artifact_id
    if not source or not source.strip():
        return default, False
    text = source.strip()
    if not _is_identifier_start(text[0]):
        return default, True

    words = [word for word in _WORD_SEPARATORS.split(text) if word]
    candidate = "".join(word[0].upper() + word[1:] for word in words)
    candidate = "".join(ch for ch in candidate if _is_identifier_part(ch))
    if not candidate:
        return default, True
    if not candidate.endswith(APPLICATION_SUFFIX):
        candidate += APPLICATION_SUFFIX
    return candidate, False


def derive_application_class_name(
    name: Optional[str],
    artifact_id: Optional[str],
    default: str = DEFAULT_APPLICATION_NAME,
) -> str:
    """Derive the main class name from the project name or artifact id.

    >>> derive_application_class_name("My project", "foo-bar")
    'MyProjectApplication'
    >>> derive_application_class_name(None, "42my-project")
    'Application'
    """
    return _application_class_name(name, artifact_id, default)[0]


def apply_defaults(
    request: ProjectRequest,
    defaults: ProjectDefaults = ProjectDefaults(),
) -> Tuple[ProjectRequest, List[InvalidIdentifierFallback]]:
    """Fill in every identifier a request leaves unset.

    Returns:
        Tuple of (defaulted request, fallbacks applied while deriving names)
    """
    fallbacks: List[InvalidIdentifierFallback] = []
    group_id = request.group_id or defaults.group_id
    artifact_id = request.artifact_id or defaults.artifact_id

    package_name, fell_back = _package_name(
        group_id, artifact_id, request.package_name, defaults.package_name
    )
    if fell_back:
        fallbacks.append(InvalidIdentifierFallback(
            "package name", f"{group_id}.{artifact_id}", package_name
        ))

    application_name = request.application_name
    if not application_name:
        application_name, fell_back = _application_class_name(
            request.name, artifact_id, defaults.application_name
        )
        if fell_back:
            fallbacks.append(InvalidIdentifierFallback(
                "application name", request.name or artifact_id, application_name
            ))

    resolved = replace(
        request,
        group_id=group_id,
        artifact_id=artifact_id,
        name=request.name or artifact_id,
        description=request.description or defaults.description,
        package_name=package_name,
        base_dir=request.base_dir or derive_base_directory(artifact_id),
        application_name=application_name,
    )
    return resolved, fallbacks

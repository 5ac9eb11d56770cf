"""
Resolution of raw project requests against service metadata.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional
from urllib.parse import parse_qsl

from .build import build_description
from .catalog import InitializrMetadata
from .defaults import ProjectDefaults, apply_defaults
from .errors import InvalidProjectRequestError, MalformedVersionError
from .models import ProjectDescription, ProjectRequest, ResolutionResult
from .resolver import reconcile_selection
from .versions import parse_version


logger = logging.getLogger(__name__)

# Request fields validated against (and defaulted from) metadata options.
OPTION_FIELDS = {
    "language": "language",
    "packaging": "packaging",
    "type": "type",
    "java_version": "javaVersion",
    "platform_version": "bootVersion",
}


def parse_fragment(fragment: str) -> ProjectRequest:
    """Build a request from an initial-state URL fragment.

    Accepts ``/#!language=groovy&packageName=com.example.acme`` as well as a
    bare ``language=groovy&packageName=com.example.acme``.
    """
    text = fragment.split("#", 1)[1] if "#" in fragment else fragment
    text = text.lstrip("!/?")
    params = {}
    for key, value in parse_qsl(text):
        if key in params and key in ("dependencies", "style"):
            params[key] = f"{params[key]},{value}"
        else:
            params[key] = value
    return ProjectRequest.from_params(params)


class ProjectRequestResolver:
    """Validate, reconcile and default project requests."""

    def __init__(
        self,
        metadata: InitializrMetadata,
        defaults: Optional[ProjectDefaults] = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            metadata: Service metadata, shared read-only between requests
            defaults: Identifier defaults; taken from ``metadata`` when omitted
        """
        self.metadata = metadata
        self.defaults = defaults or ProjectDefaults.from_metadata(metadata)

    def resolve(self, request: ProjectRequest) -> ResolutionResult:
        """Resolve a request.

        Raises:
            InvalidProjectRequestError: if the platform version cannot be
                parsed or an option value is not offered by the service
        """
        request = self._apply_option_defaults(request)
        try:
            platform_version = parse_version(request.platform_version)
        except MalformedVersionError as e:
            raise InvalidProjectRequestError(
                f"Invalid platform version '{request.platform_version}'"
            ) from e
        self._validate_options(request)

        reconciled = reconcile_selection(
            request.dependencies, self.metadata.catalog, platform_version
        )
        resolved, fallbacks = apply_defaults(
            replace(request, dependencies=reconciled.retained), self.defaults
        )
        for fallback in fallbacks:
            logger.warning("%s", fallback)

        return ResolutionResult(
            request=resolved,
            platform_version=platform_version,
            removed=reconciled.removed,
            unknown=reconciled.unknown,
            warnings=reconciled.warnings + tuple(fallbacks),
        )

    def describe(self, request: ProjectRequest) -> ProjectDescription:
        """Resolve a request and describe the archive to generate.

        Raises:
            InvalidProjectRequestError: if the request cannot be resolved or
                its project type or language has no known build layout
        """
        result = self.resolve(request)
        try:
            return build_description(result.request, self.metadata.catalog)
        except ValueError as e:
            raise InvalidProjectRequestError(str(e)) from e

    def _apply_option_defaults(self, request: ProjectRequest) -> ProjectRequest:
        changes = {}
        for field_name, option_name in OPTION_FIELDS.items():
            if getattr(request, field_name):
                continue
            default = self.metadata.default(option_name)
            if default:
                changes[field_name] = default
        return replace(request, **changes) if changes else request

    def _validate_options(self, request: ProjectRequest) -> None:
        for field_name, option_name in OPTION_FIELDS.items():
            if option_name == "bootVersion":
                continue
            option = self.metadata.option(option_name)
            value = getattr(request, field_name)
            if option is None or not option.values or value is None:
                continue
            if value not in option.values:
                raise InvalidProjectRequestError(
                    f"Unsupported {option_name} '{value}', expected one of: "
                    f"{', '.join(option.values)}"
                )

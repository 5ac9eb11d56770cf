#!/usr/bin/env python3
"""
Example script showing how to use the initializr-metadata library.
"""

from pathlib import Path

from initializr_metadata.catalog import load_metadata
from initializr_metadata.defaults import derive_application_class_name, derive_package_name
from initializr_metadata.models import ProjectRequest
from initializr_metadata.resolver import filter_selectable, reconcile_selection, search
from initializr_metadata.service import ProjectRequestResolver, parse_fragment


METADATA_FILE = Path(__file__).resolve().parent / "metadata.json"


def example_resolve_request():
    """Example: Resolve a request with custom metadata."""
    print("="*60)
    print("Example 1: Resolve a request")
    print("="*60)

    metadata = load_metadata(METADATA_FILE)
    resolver = ProjectRequestResolver(metadata)
    request = ProjectRequest(
        group_id="com.acme",
        artifact_id="foo-bar",
        name="My project",
        language="kotlin",
        dependencies=frozenset({"web", "data-jpa"}),
    )

    description = resolver.describe(request)

    print(f"\nArchive: {description.archive_name}")
    print(f"Package: {description.package_name}")
    print(f"Application: {description.application_path}")
    for dependency in description.build_dependencies:
        print(f"  {dependency}")


def example_version_change():
    """Example: Switching the platform version drops incompatible dependencies."""
    print("\n" + "="*60)
    print("Example 2: Change the platform version")
    print("="*60)

    metadata = load_metadata(METADATA_FILE)
    selected = {"data-jpa", "org.acme:bur"}

    result = reconcile_selection(selected, metadata.catalog, "1.5.17.RELEASE")

    print(f"\nRetained: {sorted(result.retained)}")
    print(f"Removed: {list(result.removed)}")


def example_search():
    """Example: Search the catalog for a platform version."""
    print("\n" + "="*60)
    print("Example 3: Search")
    print("="*60)

    metadata = load_metadata(METADATA_FILE)
    for version in metadata.platform_versions:
        results = search(metadata.catalog, "acme", version)
        selectable = sorted(filter_selectable(metadata.catalog, version))
        print(f"\n{version}")
        print(f"  valid: {list(results.valid_ids)}")
        print(f"  invalid: {list(results.invalid_ids)}")
        print(f"  selectable: {selectable}")


def example_derivations():
    """Example: Derive identifiers from raw metadata."""
    print("\n" + "="*60)
    print("Example 4: Identifier derivation")
    print("="*60)

    print(f"\n{derive_package_name('org.foo', 'demo')}")
    print(derive_package_name("com.example", "42my-project"))
    print(derive_application_class_name("My project", "foo-bar"))
    print(derive_application_class_name(None, "42my-project"))


def example_fragment():
    """Example: Resolve the initial state carried by a URL fragment."""
    print("\n" + "="*60)
    print("Example 5: URL fragment")
    print("="*60)

    metadata = load_metadata(METADATA_FILE)
    request = parse_fragment("/#!groupId=com.example.acme&artifactId=my-project")
    description = ProjectRequestResolver(metadata).describe(request)

    print(f"\n{description.package_name}.{description.application_name}")


if __name__ == "__main__":
    example_resolve_request()
    example_version_change()
    example_search()
    example_derivations()
    example_fragment()

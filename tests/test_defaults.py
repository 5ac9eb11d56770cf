"""Tests for identifier derivation."""

import pytest

from initializr_metadata.defaults import (
    ProjectDefaults,
    apply_defaults,
    clean_package_name,
    derive_application_class_name,
    derive_base_directory,
    derive_package_name,
)
from initializr_metadata.errors import InvalidIdentifierFallback
from initializr_metadata.models import ProjectRequest


def test_base_directory_is_artifact_id():
    assert derive_base_directory("my-project") == "my-project"
    assert derive_base_directory("42my-project") == "42my-project"


@pytest.mark.parametrize("group_id,artifact_id,expected", [
    ("org.foo", "demo", "org.foo.demo"),
    ("com.example", "my-project", "com.example.myproject"),
    ("com.example", "42my-project", "com.example.myproject"),
    ("com.example.acme", "my-project", "com.example.acme.myproject"),
    ("com.example", "my project", "com.example.my.project"),
])
def test_derive_package_name_from_coordinates(group_id, artifact_id, expected):
    assert derive_package_name(group_id, artifact_id, None) == expected


def test_all_digit_artifact_id_is_dropped_from_package():
    """Digit-only segments are stripped like leading digits, not joined to the group."""
    assert derive_package_name("com.example", "42", None) == "com.example"


def test_explicit_package_name_is_used_verbatim():
    assert derive_package_name("com.acme", "foo-bar", "com.example.foo") == "com.example.foo"


def test_blank_explicit_package_name_is_ignored():
    assert derive_package_name("org.foo", "demo", "  ") == "org.foo.demo"


def test_package_name_falls_back_on_keywords():
    assert derive_package_name("com.example", "class") == "com.example.demo"
    assert derive_package_name("---", "...", None, default="org.acme") == "org.acme"


def test_clean_package_name_returns_none_when_nothing_is_left():
    assert clean_package_name("42.-") is None
    assert clean_package_name("org.acme") == "org.acme"


@pytest.mark.parametrize("name,artifact_id,expected", [
    ("My project", "foo-bar", "MyProjectApplication"),
    (None, "foo-bar", "FooBarApplication"),
    (None, "demo", "DemoApplication"),
    (None, "my-project", "MyProjectApplication"),
    ("", "my_project", "MyProjectApplication"),
    ("myProject", "demo", "MyProjectApplication"),
    ("My Application", "demo", "MyApplication"),
    ("my.project", "demo", "MyprojectApplication"),
])
def test_derive_application_class_name(name, artifact_id, expected):
    assert derive_application_class_name(name, artifact_id) == expected


@pytest.mark.parametrize("name,artifact_id", [
    (None, "42my-project"),
    ("42 things", "demo"),
    ("-demo", "demo"),
    (None, None),
])
def test_application_class_name_falls_back_to_default(name, artifact_id):
    assert derive_application_class_name(name, artifact_id) == "Application"


def test_apply_defaults_fills_unset_fields():
    resolved, fallbacks = apply_defaults(ProjectRequest(group_id="org.foo"))

    assert resolved.group_id == "org.foo"
    assert resolved.artifact_id == "demo"
    assert resolved.name == "demo"
    assert resolved.description == "Demo project for Spring Boot"
    assert resolved.package_name == "org.foo.demo"
    assert resolved.base_dir == "demo"
    assert resolved.application_name == "DemoApplication"
    assert fallbacks == []


def test_apply_defaults_keeps_explicit_values():
    request = ProjectRequest(
        group_id="com.acme",
        artifact_id="foo-bar",
        name="My project",
        description="A description for my project",
        package_name="com.example.foo",
    )

    resolved, _ = apply_defaults(request)

    assert resolved.package_name == "com.example.foo"
    assert resolved.application_name == "MyProjectApplication"
    assert resolved.base_dir == "foo-bar"
    assert resolved.description == "A description for my project"


def test_apply_defaults_records_fallbacks():
    resolved, fallbacks = apply_defaults(ProjectRequest(artifact_id="42my-project"))

    assert resolved.package_name == "com.example.myproject"
    assert resolved.application_name == "Application"
    assert len(fallbacks) == 1
    assert isinstance(fallbacks[0], InvalidIdentifierFallback)
    assert fallbacks[0].field == "application name"


def test_apply_defaults_uses_custom_defaults():
    defaults = ProjectDefaults(group_id="org.acme", artifact_id="app", package_name="org.acme.app")

    resolved, fallbacks = apply_defaults(ProjectRequest(artifact_id="class"), defaults)

    assert resolved.package_name == "org.acme.app"
    assert fallbacks[0].field == "package name"


def test_apply_defaults_does_not_mutate_request():
    request = ProjectRequest(group_id="org.foo")

    apply_defaults(request)

    assert request.artifact_id is None
    assert request.package_name is None

"""Tests for the project description handed to the generation engine."""

import pytest

from initializr_metadata.build import (
    ROOT_STARTER,
    TEST_STARTER,
    TOMCAT_STARTER,
    build_description,
    effective_build_dependencies,
)
from initializr_metadata.catalog import DependencyCatalog
from initializr_metadata.models import BuildDependency, ProjectRequest


def _request(**kwargs):
    values = {
        "group_id": "com.example",
        "artifact_id": "demo",
        "name": "demo",
        "package_name": "com.example.demo",
        "application_name": "DemoApplication",
        "base_dir": "demo",
        "language": "java",
        "packaging": "jar",
        "type": "maven-project",
        "platform_version": "2.1.4.RELEASE",
    }
    values.update(kwargs)
    return ProjectRequest(**values)


def test_simple_project_has_root_and_test_starters(catalog):
    dependencies = effective_build_dependencies(_request(), catalog)

    assert dependencies == [ROOT_STARTER, TEST_STARTER]


def test_starter_dependencies_replace_root_starter(catalog):
    request = _request(dependencies=frozenset({"security", "data-jpa"}))

    dependencies = effective_build_dependencies(request, catalog)

    assert [dep.artifact_id for dep in dependencies] == [
        "spring-boot-starter-data-jpa",
        "spring-boot-starter-security",
        "spring-boot-starter-test",
    ]


def test_non_starter_dependency_keeps_root_starter(catalog):
    request = _request(platform_version="2.2.0.BUILD-SNAPSHOT", dependencies=frozenset({"org.acme:biz"}))

    dependencies = effective_build_dependencies(request, catalog)

    assert dependencies == [
        ROOT_STARTER,
        BuildDependency("org.acme", "biz", "runtime"),
        TEST_STARTER,
    ]


def test_groovy_project_adds_groovy(catalog):
    dependencies = effective_build_dependencies(_request(language="groovy"), catalog)

    assert len(dependencies) == 3
    assert BuildDependency("org.codehaus.groovy", "groovy") in dependencies


def test_kotlin_project_adds_kotlin_libraries(catalog):
    dependencies = effective_build_dependencies(_request(language="kotlin"), catalog)

    assert len(dependencies) == 4
    assert BuildDependency("org.jetbrains.kotlin", "kotlin-stdlib-jdk8") in dependencies
    assert BuildDependency("org.jetbrains.kotlin", "kotlin-reflect") in dependencies


def test_war_project_adds_web_and_provided_tomcat(catalog):
    dependencies = effective_build_dependencies(_request(packaging="war"), catalog)

    assert dependencies == [
        BuildDependency("org.springframework.boot", "spring-boot-starter-web"),
        TOMCAT_STARTER,
        TEST_STARTER,
    ]


def test_war_project_does_not_duplicate_selected_web(catalog):
    request = _request(packaging="war", dependencies=frozenset({"web"}))

    dependencies = effective_build_dependencies(request, catalog)

    assert len(dependencies) == 3


def test_war_project_without_web_in_catalog():
    dependencies = effective_build_dependencies(_request(packaging="war"), DependencyCatalog())

    assert dependencies[0].artifact_id == "spring-boot-starter-web"
    assert ROOT_STARTER not in dependencies


def test_build_description_for_java_project(catalog):
    request = _request(
        group_id="org.foo",
        package_name="org.foo.demo",
    )

    description = build_description(request, catalog)

    assert description.build_system == "maven"
    assert description.archive_name == "demo.zip"
    assert description.base_dir == "demo"
    assert description.application_path == "src/main/java/org/foo/demo/DemoApplication.java"
    assert description.has_web_resources is False


@pytest.mark.parametrize("language,path", [
    ("kotlin", "src/main/kotlin/com/example/foo/MyProjectApplication.kt"),
    ("groovy", "src/main/groovy/com/example/foo/MyProjectApplication.groovy"),
])
def test_build_description_source_layout(catalog, language, path):
    request = _request(
        language=language,
        artifact_id="foo-bar",
        base_dir="foo-bar",
        package_name="com.example.foo",
        application_name="MyProjectApplication",
        dependencies=frozenset({"web", "data-jpa"}),
    )

    description = build_description(request, catalog)

    assert description.archive_name == "foo-bar.zip"
    assert description.application_path == path
    assert description.has_web_resources is True


def test_build_description_for_gradle_project(catalog):
    description = build_description(_request(type="gradle-project"), catalog)

    assert description.build_system == "gradle"


def test_build_description_requires_resolved_request(catalog):
    with pytest.raises(ValueError, match="package_name"):
        build_description(ProjectRequest(artifact_id="demo"), catalog)


def test_build_description_rejects_unknown_language(catalog):
    with pytest.raises(ValueError, match="Unsupported language"):
        build_description(_request(language="scala"), catalog)

"""
Project description handed over to the generation engine.
"""

from __future__ import annotations

import logging
from typing import List

from .catalog import SPRING_BOOT_GROUP_ID, STARTER_PREFIX, DependencyCatalog
from .models import BuildDependency, Dependency, ProjectDescription, ProjectRequest


logger = logging.getLogger(__name__)

WEB_DEPENDENCY_ID = "web"
WEB_FACET = "web"

ROOT_STARTER = BuildDependency(SPRING_BOOT_GROUP_ID, STARTER_PREFIX)
TEST_STARTER = BuildDependency(SPRING_BOOT_GROUP_ID, f"{STARTER_PREFIX}-test", "test")
TOMCAT_STARTER = BuildDependency(SPRING_BOOT_GROUP_ID, f"{STARTER_PREFIX}-tomcat", "provided")

LANGUAGE_DEPENDENCIES = {
    "kotlin": (
        BuildDependency("org.jetbrains.kotlin", "kotlin-stdlib-jdk8"),
        BuildDependency("org.jetbrains.kotlin", "kotlin-reflect"),
    ),
    "groovy": (
        BuildDependency("org.codehaus.groovy", "groovy"),
    ),
}
SOURCE_EXTENSIONS = {"java": "java", "kotlin": "kt", "groovy": "groovy"}
BUILD_SYSTEMS = {
    "maven-project": "maven",
    "maven-build": "maven",
    "gradle-project": "gradle",
    "gradle-project-kotlin": "gradle",
    "gradle-build": "gradle",
}


def _selected_dependencies(request: ProjectRequest, catalog: DependencyCatalog) -> List[Dependency]:
    selected = [dep for dep in catalog if dep.id in request.dependencies]
    if request.packaging == "war" and WEB_DEPENDENCY_ID not in request.dependencies:
        web = catalog.get(WEB_DEPENDENCY_ID)
        if web is None:
            web = Dependency(
                id=WEB_DEPENDENCY_ID,
                group_id=SPRING_BOOT_GROUP_ID,
                artifact_id=f"{STARTER_PREFIX}-web",
                facets=(WEB_FACET,),
            )
        selected.append(web)
    return selected


def effective_build_dependencies(
    request: ProjectRequest, catalog: DependencyCatalog
) -> List[BuildDependency]:
    """List the dependencies the generated build declares, in build order.

    War packaging brings the web starter and a provided Tomcat, Kotlin and
    Groovy bring their language libraries, the root starter is added when
    nothing else is a starter, and the test starter always comes last.
    """
    selected = _selected_dependencies(request, catalog)
    build = [BuildDependency(dep.group_id, dep.artifact_id, dep.scope) for dep in selected]
    if request.packaging == "war":
        build.append(TOMCAT_STARTER)
    build.extend(LANGUAGE_DEPENDENCIES.get(request.language or "", ()))
    if not any(dep.starter for dep in selected):
        build.insert(0, ROOT_STARTER)
    build.append(TEST_STARTER)
    return build


def build_description(request: ProjectRequest, catalog: DependencyCatalog) -> ProjectDescription:
    """Describe the archive for a resolved request.

    Raises:
        ValueError: if the request still has unset identifiers
    """
    missing = [
        field_name
        for field_name in ("artifact_id", "package_name", "application_name", "base_dir", "language", "type")
        if not getattr(request, field_name)
    ]
    if missing:
        raise ValueError(f"Request is not resolved, missing: {', '.join(missing)}")

    build_system = BUILD_SYSTEMS.get(request.type)
    if build_system is None:
        raise ValueError(f"Unsupported project type: {request.type}")
    extension = SOURCE_EXTENSIONS.get(request.language)
    if extension is None:
        raise ValueError(f"Unsupported language: {request.language}")

    package_path = request.package_name.replace(".", "/")
    application_path = (
        f"src/main/{request.language}/{package_path}/{request.application_name}.{extension}"
    )
    selected = _selected_dependencies(request, catalog)
    build_dependencies = tuple(effective_build_dependencies(request, catalog))
    logger.debug(
        "Described %s with %d build dependencies", request.artifact_id, len(build_dependencies)
    )
    return ProjectDescription(
        request=request,
        build_system=build_system,
        archive_name=f"{request.artifact_id}.zip",
        base_dir=request.base_dir,
        package_name=request.package_name,
        application_name=request.application_name,
        application_path=application_path,
        has_web_resources=any(WEB_FACET in dep.facets for dep in selected),
        build_dependencies=build_dependencies,
    )

"""
Reporting and export utilities.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Dict, Iterable, Sequence

import pandas as pd

from .catalog import DependencyCatalog
from .models import ProjectDescription, ResolutionResult
from .resolver import is_compatible
from .versions import parse_version


logger = logging.getLogger(__name__)

_INVALID_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")

BULK_SUMMARY_COLUMNS = [
    "artifact_id",
    "platform_version",
    "package_name",
    "application_name",
    "archive_name",
    "dependencies",
    "removed",
    "unknown",
    "num_build_dependencies",
    "status",
    "error",
]


def print_summary(description: ProjectDescription, result: ResolutionResult) -> None:
    request = description.request
    logger.info("=" * 60)
    logger.info("PROJECT")
    logger.info("=" * 60)
    logger.info("Archive: %s (%s)", description.archive_name, description.build_system)
    logger.info("Platform version: %s", result.platform_version)
    logger.info("Language: %s, packaging: %s", request.language, request.packaging)
    logger.info("Package: %s", description.package_name)
    logger.info("Application: %s", description.application_path)
    logger.info("-" * 60)
    for dependency in description.build_dependencies:
        logger.info("  %s", dependency)
    if result.removed:
        logger.info("Removed (incompatible): %s", ", ".join(result.removed))
    if result.unknown:
        logger.info("Removed (unknown): %s", ", ".join(result.unknown))
    logger.info("=" * 60)


def description_to_dict(description: ProjectDescription, result: ResolutionResult) -> Dict:
    request = description.request
    return {
        "groupId": request.group_id,
        "artifactId": request.artifact_id,
        "name": request.name,
        "description": request.description,
        "packageName": description.package_name,
        "applicationName": description.application_name,
        "language": request.language,
        "packaging": request.packaging,
        "javaVersion": request.java_version,
        "bootVersion": str(result.platform_version),
        "buildSystem": description.build_system,
        "archiveName": description.archive_name,
        "baseDir": description.base_dir,
        "applicationPath": description.application_path,
        "hasWebResources": description.has_web_resources,
        "dependencies": sorted(request.dependencies),
        "removed": list(result.removed),
        "unknown": list(result.unknown),
        "warnings": [str(warning) for warning in result.warnings],
        "buildDependencies": [
            {"groupId": dep.group_id, "artifactId": dep.artifact_id, "scope": dep.scope}
            for dep in description.build_dependencies
        ],
    }


def save_results_json(results: Dict, output_dir: Path, artifact_id: str) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    results_file = output_dir / f"{artifact_id}_request.json"
    with open(results_file, 'w') as f:
        json.dump(results, f, indent=2, default=str)
    return results_file


def compatibility_matrix(catalog: DependencyCatalog, versions: Sequence[str]) -> pd.DataFrame:
    """Tabulate which catalog entries are selectable for each platform version."""
    parsed = [(text, parse_version(text)) for text in versions]
    rows = []
    for dependency in catalog:
        row = {
            "id": dependency.id,
            "name": dependency.name,
            "group": dependency.group,
            "coordinates": dependency.coordinates,
            "compatibility_range": (
                str(dependency.compatibility_range) if dependency.compatibility_range else ""
            ),
        }
        for text, version in parsed:
            row[text] = is_compatible(dependency, version)
        rows.append(row)
    columns = ["id", "name", "group", "coordinates", "compatibility_range"]
    columns.extend(text for text, _ in parsed)
    return pd.DataFrame(rows, columns=columns)


def export_compatibility_matrix(matrix: pd.DataFrame, output_dir: Path, stem: str) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    matrix_file = output_dir / f"{stem}_compatibility.csv"
    matrix.to_csv(matrix_file, index=False)
    return matrix_file


def export_worksheets(matrix: pd.DataFrame, output_dir: Path, stem: str) -> Path | None:
    """Write one worksheet per dependency group."""
    if matrix.empty:
        return None
    output_dir.mkdir(parents=True, exist_ok=True)
    excel_file = output_dir / f"{stem}_compatibility.xlsx"
    groups = matrix["group"].fillna("Other")
    with pd.ExcelWriter(excel_file, engine='openpyxl') as writer:
        for group_name, group_df in matrix.groupby(groups, sort=False):
            # Excel sheet names have a 31 character limit and reserve some characters
            sheet_name = _INVALID_SHEET_CHARS.sub("_", str(group_name))[:31]
            group_df.to_excel(writer, sheet_name=sheet_name, index=False)
    return excel_file


def export_bulk_summary_csv(
    rows: Iterable[Dict],
    output_dir: Path,
    input_csv: Path,
) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    summary_file = output_dir / f"{input_csv.stem}_bulk_results.csv"
    df = pd.DataFrame(list(rows), columns=BULK_SUMMARY_COLUMNS)
    df.to_csv(summary_file, index=False)
    return summary_file

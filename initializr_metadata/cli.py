"""
Command-line interface for resolving project generation requests.
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Dict, List

import pandas as pd
from tqdm import tqdm

from .build import build_description
from .catalog import InitializrMetadata, load_metadata
from .errors import InvalidProjectRequestError, MalformedVersionError
from .metadata_client import DEFAULT_SERVICE_URL, MetadataClient
from .models import ProjectRequest, split_dependency_ids
from .reporting import (
    compatibility_matrix,
    description_to_dict,
    export_bulk_summary_csv,
    export_compatibility_matrix,
    export_worksheets,
    print_summary,
    save_results_json,
)
from .resolver import search
from .service import ProjectRequestResolver, parse_fragment


logger = logging.getLogger(__name__)

# Command-line options mapped onto request fields.
REQUEST_OPTIONS = {
    "group_id": "group_id",
    "artifact_id": "artifact_id",
    "name": "name",
    "description": "description",
    "package_name": "package_name",
    "language": "language",
    "packaging": "packaging",
    "type": "type",
    "java_version": "java_version",
    "platform_version": "platform_version",
}


def _load_input_csv(path: Path) -> List[Dict[str, str]]:
    """Read bulk requests, one per row, with request parameter names as headers."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [column.strip() for column in df.columns]
    return df.to_dict(orient="records")


def _build_request(args: argparse.Namespace) -> ProjectRequest:
    request = parse_fragment(args.request) if args.request else ProjectRequest()
    changes = {}
    for option, field_name in REQUEST_OPTIONS.items():
        value = getattr(args, option)
        if value:
            changes[field_name] = value
    if args.dependencies:
        changes["dependencies"] = request.dependencies | split_dependency_ids(args.dependencies)
    return replace(request, **changes) if changes else request


def _load_metadata(args: argparse.Namespace) -> InitializrMetadata:
    if args.metadata:
        return load_metadata(Path(args.metadata))
    return MetadataClient(args.service_url).fetch_metadata()


def _run_bulk(resolver: ProjectRequestResolver, input_csv: Path, output_dir: Path) -> Path:
    rows = _load_input_csv(input_csv)
    summary_rows = []
    for row in tqdm(rows, desc="Resolving requests"):
        request = ProjectRequest.from_params(row)
        summary = {
            "artifact_id": request.artifact_id,
            "platform_version": request.platform_version,
            "status": "ok",
            "error": "",
        }
        try:
            result = resolver.resolve(request)
            description = build_description(result.request, resolver.metadata.catalog)
        except (InvalidProjectRequestError, ValueError) as e:
            logger.error("Error resolving %s: %s", request.artifact_id, e)
            summary["status"] = "error"
            summary["error"] = str(e)
            summary_rows.append(summary)
            continue
        summary.update({
            "artifact_id": description.request.artifact_id,
            "platform_version": str(result.platform_version),
            "package_name": description.package_name,
            "application_name": description.application_name,
            "archive_name": description.archive_name,
            "dependencies": " ".join(sorted(description.request.dependencies)),
            "removed": " ".join(result.removed),
            "unknown": " ".join(result.unknown),
            "num_build_dependencies": len(description.build_dependencies),
        })
        summary_rows.append(summary)
    return export_bulk_summary_csv(summary_rows, output_dir, input_csv)


def main():
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Resolve project generation requests against service metadata"
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--metadata",
        help="Path to a metadata JSON document"
    )
    source.add_argument(
        "--service-url",
        default=DEFAULT_SERVICE_URL,
        help=f"Service to fetch metadata from. Default: {DEFAULT_SERVICE_URL}"
    )

    parser.add_argument(
        "--request",
        help="Request parameters in query or fragment form, e.g. 'language=groovy&packageName=com.example.acme'"
    )
    parser.add_argument("--group-id", help="Project group id")
    parser.add_argument("--artifact-id", help="Project artifact id")
    parser.add_argument("--name", help="Human readable project name")
    parser.add_argument("--description", help="Project description")
    parser.add_argument("--package-name", help="Root package name")
    parser.add_argument("--language", help="java, kotlin or groovy")
    parser.add_argument("--packaging", help="jar or war")
    parser.add_argument("--type", help="maven-project or gradle-project")
    parser.add_argument("--java-version", help="Java version")
    parser.add_argument("--platform-version", help="Spring Boot version")
    parser.add_argument(
        "--dependencies",
        help="Comma separated dependency ids"
    )

    parser.add_argument(
        "--search",
        help="List dependencies matching a query for the platform version"
    )
    parser.add_argument(
        "--input-csv",
        help="Resolve every request of a CSV file and write a summary"
    )
    parser.add_argument(
        "--matrix",
        action="store_true",
        help="Export the dependency compatibility matrix for every platform version"
    )
    parser.add_argument(
        "--get-worksheets",
        action="store_true",
        help="Also export the compatibility matrix to an Excel file, one sheet per group"
    )
    parser.add_argument(
        "--output-dir",
        default="./output",
        help="Output directory for results. Default: ./output"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level. Default: INFO"
    )

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    output_dir = Path(args.output_dir)

    try:
        metadata = _load_metadata(args)
    except (OSError, ValueError) as e:
        print(f"Error: cannot load metadata: {e}", file=sys.stderr)
        sys.exit(1)
    resolver = ProjectRequestResolver(metadata)

    if args.matrix:
        try:
            matrix = compatibility_matrix(metadata.catalog, metadata.platform_versions)
        except MalformedVersionError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        matrix_file = export_compatibility_matrix(matrix, output_dir, "metadata")
        print(f"Compatibility matrix saved to: {matrix_file}")
        if args.get_worksheets:
            excel_file = export_worksheets(matrix, output_dir, "metadata")
            if excel_file is not None:
                print(f"Worksheets saved to: {excel_file}")
        return

    if args.input_csv:
        summary_file = _run_bulk(resolver, Path(args.input_csv), output_dir)
        print(f"Bulk results saved to: {summary_file}")
        return

    request = _build_request(args)

    if args.search:
        version = request.platform_version or metadata.default("bootVersion")
        try:
            results = search(metadata.catalog, args.search, version)
        except MalformedVersionError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        for dependency in results.valid:
            print(f"{dependency.id}\t{dependency.name or ''}")
        for dependency in results.invalid:
            print(f"{dependency.id}\t{dependency.name or ''}\t(requires {dependency.compatibility_range})")
        return

    try:
        result = resolver.resolve(request)
        description = build_description(result.request, metadata.catalog)
    except (InvalidProjectRequestError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print_summary(description, result)
    results_file = save_results_json(
        description_to_dict(description, result), output_dir, description.request.artifact_id
    )
    print(f"\nResults saved to: {results_file}")


if __name__ == "__main__":
    main()

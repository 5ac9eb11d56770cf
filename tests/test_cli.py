"""Tests for the command-line entry point."""

import json
import sys
from pathlib import Path

import pytest

from initializr_metadata.cli import main


METADATA_FILE = Path(__file__).resolve().parents[1] / "examples" / "metadata.json"


def _run(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["initializr-metadata", "--metadata", str(METADATA_FILE), *args])
    main()


def test_cli_resolves_single_request(monkeypatch, tmp_path: Path):
    _run(
        monkeypatch,
        "--request", "/#!groupId=com.example.acme&artifactId=my-project",
        "--dependencies", "web",
        "--output-dir", str(tmp_path),
    )

    with open(tmp_path / "my-project_request.json") as f:
        saved = json.load(f)
    assert saved["packageName"] == "com.example.acme.myproject"
    assert saved["dependencies"] == ["web"]
    assert saved["hasWebResources"] is True


def test_cli_rejects_invalid_request(monkeypatch, tmp_path: Path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run(monkeypatch, "--language", "cobol", "--output-dir", str(tmp_path))

    assert excinfo.value.code == 1
    assert "cobol" in capsys.readouterr().err


def test_cli_search(monkeypatch, capsys):
    _run(monkeypatch, "--search", "acme", "--platform-version", "2.1.4.RELEASE")

    out = capsys.readouterr().out
    assert "org.acme:bur\tBur" in out
    assert "org.acme:biz\tBiz\t(requires 2.2.0.BUILD-SNAPSHOT)" in out


def test_cli_exports_matrix(monkeypatch, tmp_path: Path):
    _run(monkeypatch, "--matrix", "--output-dir", str(tmp_path))

    assert (tmp_path / "metadata_compatibility.csv").exists()


def _write_metadata(tmp_path: Path, edit) -> Path:
    with open(METADATA_FILE, encoding="utf-8") as f:
        document = json.load(f)
    edit(document)
    metadata_file = tmp_path / "metadata.json"
    with open(metadata_file, "w", encoding="utf-8") as f:
        json.dump(document, f)
    return metadata_file


def test_cli_reports_request_without_project_type(monkeypatch, tmp_path: Path, capsys):
    metadata_file = _write_metadata(tmp_path, lambda document: document.pop("type"))
    monkeypatch.setattr(sys, "argv", [
        "initializr-metadata", "--metadata", str(metadata_file), "--output-dir", str(tmp_path),
    ])

    with pytest.raises(SystemExit) as excinfo:
        main()

    assert excinfo.value.code == 1
    assert "missing: type" in capsys.readouterr().err


def test_cli_reports_malformed_platform_version_in_matrix(monkeypatch, tmp_path: Path, capsys):
    def add_bad_version(document):
        document["bootVersion"]["values"].append({"id": "2.x", "name": "2.x"})

    metadata_file = _write_metadata(tmp_path, add_bad_version)
    monkeypatch.setattr(sys, "argv", [
        "initializr-metadata", "--metadata", str(metadata_file), "--matrix", "--output-dir", str(tmp_path),
    ])

    with pytest.raises(SystemExit) as excinfo:
        main()

    assert excinfo.value.code == 1
    assert "2.x" in capsys.readouterr().err

"""Tests for the repo-scanner command line."""

import io
import json
import zipfile

import pytest
from click.testing import CliRunner

from repo_scanner.main import cli


@pytest.fixture
def project(tmp_path):
    (tmp_path / "app.py").write_text("from os import *\n")
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "dep.js").write_text("x")
    return tmp_path


def test_scan_directory_prints_summary(project):
    result = CliRunner().invoke(cli, ["scan", str(project)])

    assert result.exit_code == 0, result.output
    body = json.loads(result.stdout)
    assert body["structure"] == ["app.py"]
    assert body["languages"] == ["Python"]
    assert body["errors"] == ["app.py: Wildcard import detected"]


def test_scan_respects_file_limit(project):
    (project / "b.py").write_text("x = 1\n")
    result = CliRunner().invoke(cli, ["scan", str(project), "--max-files", "1"])

    body = json.loads(result.stdout)
    assert body["structure"] == ["app.py"]
    assert body["warnings"] == ["Reached file limit (1). Some files were skipped."]


def test_scan_zip_archive(tmp_path):
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("svc/main.go", "package main\n")
    archive = tmp_path / "svc.zip"
    archive.write_bytes(buf.getvalue())

    result = CliRunner().invoke(cli, ["scan", str(archive)])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["languages"] == ["Go"]


def test_scan_rejects_non_zip_file(tmp_path):
    bogus = tmp_path / "notes.txt"
    bogus.write_text("hello")
    result = CliRunner().invoke(cli, ["scan", str(bogus)])

    assert result.exit_code == 1
    assert "not a valid zip archive" in result.output

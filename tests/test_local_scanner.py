"""Tests for the local (eager) scanner."""

import asyncio
import json

import pytest

from repo_scanner.domain.classification import Framework, Language
from repo_scanner.domain.value_objects import ScanPolicy
from repo_scanner.services.local_scanner import LocalScanner


def _scan(files, **policy):
    scanner = LocalScanner(ScanPolicy(**policy) if policy else None)
    return asyncio.run(scanner.scan(files))


@pytest.fixture
def sample_project(fake_file):
    return [
        fake_file("proj/src/app.ts", "let x: any = 5;\n"),
        fake_file("proj/package.json", json.dumps({"dependencies": {"react": "^18.0.0"}})),
        fake_file("proj/node_modules/react/index.js", "module.exports = {}"),
        fake_file("proj/package-lock.json", "{}"),
        fake_file("proj/tools/build.py", "try:\n    x()\nexcept:\n    pass\n"),
        fake_file("proj/README", "hello"),
        fake_file(".git/config", "[core]"),
    ]


def test_scan_sample_project(sample_project):
    summary = _scan(sample_project)

    assert summary.structure == (
        "proj/README",
        "proj/package.json",
        "proj/src/app.ts",
        "proj/tools/build.py",
    )
    assert set(summary.languages) == {Language.JSON, Language.TYPESCRIPT, Language.PYTHON}
    assert summary.frameworks == (Framework.REACT,)
    assert summary.file_count == len(summary.files) == 4
    assert "proj/src/app.ts: 'any' type usage detected" in summary.errors
    assert any("Bare except clause" in e for e in summary.errors)
    assert summary.warnings == ()


def test_ignored_paths_never_admitted(sample_project):
    summary = _scan(sample_project)
    for path in summary.structure:
        assert "node_modules" not in path.split("/")
        assert not path.startswith(".git/")
        assert not path.endswith("package-lock.json")


def test_structure_is_sorted_case_sensitively(fake_file):
    files = [fake_file("b.py"), fake_file("B.py"), fake_file("a.py")]
    summary = _scan(files)
    assert summary.structure == ("B.py", "a.py", "b.py")


def test_file_record_type(fake_file):
    files = [
        fake_file("src/Main.JAVA", "class Main {}"),
        fake_file("Makefile", "all:"),
        fake_file("data.weird", "x"),
    ]
    summary = _scan(files)
    types = {f.path: f.type for f in summary.files}
    assert types == {"Makefile": "unknown", "data.weird": "weird", "src/Main.JAVA": "java"}
    assert summary.languages == (Language.JAVA,)


def test_size_cap_is_inclusive(fake_file):
    cap = 100 * 1024
    files = [
        fake_file("at_cap.txt", "a", size=cap),
        fake_file("over_cap.txt", "b", size=cap + 1),
    ]
    summary = _scan(files)

    assert [f.path for f in summary.files] == ["at_cap.txt"]
    assert summary.structure == ("at_cap.txt", "over_cap.txt")
    assert summary.total_size == 2 * cap + 1
    assert summary.warnings == ("Skipped large file: over_cap.txt (100.0KB)",)


def test_file_limit_emits_one_warning(fake_file):
    files = [fake_file(f"f{i:03d}.py", "x = 1\n") for i in range(105)]
    summary = _scan(files)

    assert len(summary.structure) == 100
    assert summary.file_count == len(summary.files) == 100
    assert "f100.py" not in summary.structure
    assert summary.warnings == ("Reached file limit (100). Some files were skipped.",)


def test_injected_file_cap(fake_file):
    files = [fake_file(f"{c}.md", "# x") for c in "abcde"]
    summary = _scan(files, max_files=2)
    assert summary.structure == ("a.md", "b.md")
    assert len(summary.warnings) == 1


def test_limit_counts_admitted_paths_not_reads(fake_file):
    files = [
        fake_file("a.txt", "x", size=10_000_000),
        fake_file("b.txt", "y"),
        fake_file("c.txt", "z"),
    ]
    summary = _scan(files, max_files=2)
    assert summary.structure == ("a.txt", "b.txt")
    assert summary.file_count == 1
    assert summary.warnings[-1] == "Reached file limit (2). Some files were skipped."


def test_ignored_files_do_not_consume_the_limit(fake_file):
    files = [fake_file("a/yarn.lock"), fake_file("b.py"), fake_file("c.py")]
    summary = _scan(files, max_files=2)
    assert summary.structure == ("b.py", "c.py")
    assert summary.warnings == ()


def test_read_failure_becomes_warning(fake_file):
    files = [
        fake_file("bad.bin", size=3, error=OSError("permission denied")),
        fake_file("good.py", "x = 1\n"),
    ]
    summary = _scan(files)

    assert summary.warnings == ("Failed to read bad.bin: permission denied",)
    assert summary.structure == ("bad.bin", "good.py")
    assert [f.path for f in summary.files] == ["good.py"]
    assert summary.file_count == 1
    assert summary.total_size == 3 + 6


def test_read_timeout_becomes_warning(fake_file):
    class SlowFile:
        path = "slow.txt"
        size = 4

        async def read_text(self):
            await asyncio.sleep(1)
            return "late"

    scanner = LocalScanner(read_timeout=0.01)
    summary = asyncio.run(scanner.scan([SlowFile(), fake_file("fast.txt", "ok")]))
    assert summary.warnings == ("Failed to read slow.txt: read timed out",)
    assert summary.file_count == 1


def test_bad_package_json_is_silent(fake_file):
    summary = _scan([fake_file("package.json", "{oops")])
    assert summary.frameworks == ()
    assert summary.warnings == ()
    assert summary.file_count == 1


def test_scan_is_idempotent(sample_project):
    first = _scan(sample_project)
    second = _scan(sample_project)
    assert first == second


def test_empty_input():
    summary = _scan([])
    assert summary.structure == ()
    assert summary.file_count == 0
    assert summary.total_size == 0


def test_deeply_nested_manifest_does_not_fail_scan(fake_file):
    manifest = "[" * 50_000 + "]" * 50_000
    summary = _scan([fake_file("package.json", manifest)])
    assert summary.file_count == 1
    assert summary.frameworks == ()

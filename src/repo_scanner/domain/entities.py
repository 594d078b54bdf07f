"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from repo_scanner.domain.classification import Framework, Language


@dataclass(frozen=True, slots=True)
class TreeEntry:
    """A single node from the GitHub tree API (blob or sub-tree)."""

    path: str
    type: str  # "blob" or "tree"
    size: int = 0

    @property
    def is_file(self) -> bool:
        return self.type == "blob"


@dataclass(frozen=True, slots=True)
class FileRecord:
    """One admitted file whose content was read."""

    path: str
    content: str
    type: str  # lowercase extension without the dot, or "unknown"
    size: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "content": self.content,
            "type": self.type,
            "size": self.size,
        }


@dataclass(frozen=True, slots=True)
class RepositorySummary:
    """Bounded description of a repository produced by either scanner."""

    languages: tuple[Language, ...] = ()
    frameworks: tuple[Framework, ...] = ()
    files: tuple[FileRecord, ...] = ()
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    structure: tuple[str, ...] = ()
    total_size: int = 0
    file_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Serialise with the camelCase keys used on the wire."""
        return {
            "languages": [lang.value for lang in self.languages],
            "frameworks": [fw.value for fw in self.frameworks],
            "files": [f.to_dict() for f in self.files],
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "structure": list(self.structure),
            "totalSize": self.total_size,
            "fileCount": self.file_count,
        }


# ── Downstream assistant contract ───────────────────────────────────────────


class AssistAction(str, Enum):
    """Artifact requested from the LLM for a summary."""

    ANALYZE = "analyze"
    FIX = "fix"
    GENERATE_DOCS = "generate-docs"


@dataclass(frozen=True, slots=True)
class CriticalError:
    file: str
    issue: str
    severity: str = "medium"  # critical | high | medium | low
    line: int | None = None


@dataclass(frozen=True, slots=True)
class FileIssue:
    file: str
    issue: str


@dataclass(frozen=True, slots=True)
class SecurityIssue:
    file: str
    issue: str
    cve: str | None = None


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Issue analysis for the ``analyze`` action."""

    critical_errors: list[CriticalError] = field(default_factory=list)
    warnings: list[FileIssue] = field(default_factory=list)
    security_issues: list[SecurityIssue] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    overall_score: float = 0
    summary: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "criticalErrors": [
                {"file": e.file, "line": e.line, "issue": e.issue, "severity": e.severity}
                for e in self.critical_errors
            ],
            "warnings": [{"file": w.file, "issue": w.issue} for w in self.warnings],
            "securityIssues": [
                {"file": s.file, "issue": s.issue, "cve": s.cve}
                for s in self.security_issues
            ],
            "suggestions": list(self.suggestions),
            "overallScore": self.overall_score,
            "summary": self.summary,
        }


@dataclass(frozen=True, slots=True)
class Patch:
    file: str
    original: str
    fixed: str
    diff: str
    explanation: str
    risk: str = "low"  # low | medium | high
    test_command: str | None = None


@dataclass(frozen=True, slots=True)
class PatchResult:
    """Patch set for the ``fix`` action."""

    patches: list[Patch] = field(default_factory=list)
    summary: str = ""
    fixed_count: int = 0
    skipped_count: int = 0
    skipped_reasons: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "patches": [
                {
                    "file": p.file,
                    "original": p.original,
                    "fixed": p.fixed,
                    "diff": p.diff,
                    "explanation": p.explanation,
                    "risk": p.risk,
                    "testCommand": p.test_command,
                }
                for p in self.patches
            ],
            "summary": self.summary,
            "fixedCount": self.fixed_count,
            "skippedCount": self.skipped_count,
            "skippedReasons": list(self.skipped_reasons),
        }


@dataclass(frozen=True, slots=True)
class DocsResult:
    """Documentation bundle for the ``generate-docs`` action."""

    readme: str
    summary: str
    problems_solved: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "readme": self.readme,
            "summary": self.summary,
            "problemsSolved": self.problems_solved,
        }


AssistResult = Union[AnalysisResult, PatchResult, DocsResult]


@dataclass(frozen=True, slots=True)
class AssistOutcome:
    """Discriminated result of one assistant call."""

    success: bool
    action: AssistAction
    result: AssistResult | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.success and self.result is not None:
            return {
                "success": True,
                "action": self.action.value,
                "result": self.result.to_dict(),
            }
        return {"success": False, "error": self.error or "Unknown error"}

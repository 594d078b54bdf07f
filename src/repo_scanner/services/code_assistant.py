"""Code assistant — turns a repository summary into LLM-generated artifacts.

Each call takes a finished :class:`RepositorySummary` and an
:class:`AssistAction` and returns an :class:`AssistOutcome`.  Provider and
parsing failures never raise: they come back as ``success=False`` so the
caller can decide whether to continue.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Sequence

from repo_scanner.domain.entities import (
    AnalysisResult,
    AssistAction,
    AssistOutcome,
    AssistResult,
    CriticalError,
    DocsResult,
    FileIssue,
    FileRecord,
    Patch,
    PatchResult,
    RepositorySummary,
    SecurityIssue,
)
from repo_scanner.domain.exceptions import LlmError
from repo_scanner.domain.ports.llm_gateway import LlmGateway
from repo_scanner.services.security_sentinel import redact_files

logger = logging.getLogger(__name__)

PARSE_FAILURE_MESSAGE = "Failed to parse API response. Please try again."

# ── Prompt templates ────────────────────────────────────────────────────────

ANALYZE_SYSTEM_PROMPT = """\
You are an expert code analyzer. Analyze the provided repository and identify issues.

Respond ONLY with valid JSON (no markdown, no code blocks):
{
  "criticalErrors": [{"file": "path", "line": 1, "issue": "description", "severity": "critical"}],
  "warnings": [{"file": "path", "issue": "description"}],
  "securityIssues": [{"file": "path", "issue": "description", "cve": ""}],
  "suggestions": ["suggestion1", "suggestion2"],
  "overallScore": 75,
  "summary": "brief summary"
}
"""

FIX_SYSTEM_PROMPT = """\
You are an expert code fixer. Generate patches to fix issues.

Respond ONLY with valid JSON (no markdown, no code blocks):
{
  "patches": [
    {
      "file": "path/to/file",
      "original": "exact original code to change",
      "fixed": "exact fixed code to replace with",
      "diff": "- old\\n+ new",
      "explanation": "what this fixes",
      "risk": "low",
      "testCommand": "npm test"
    }
  ],
  "summary": "overall fix summary",
  "fixedCount": 1,
  "skippedCount": 0,
  "skippedReasons": []
}
"""

DOCS_SYSTEM_PROMPT = """\
You are a documentation expert. Generate docs for the codebase.

Respond ONLY with valid JSON (no markdown, no code blocks):
{
  "readme": "# Project Name\\n\\n## Overview\\n...",
  "summary": "Architecture summary...",
  "problemsSolved": "Issues fixed..."
}
"""


@dataclass(frozen=True, slots=True)
class FileBudget:
    """How much file content one action may put into its prompt."""

    max_files: int
    max_chars_per_file: int


FILE_BUDGETS: dict[AssistAction, FileBudget] = {
    AssistAction.ANALYZE: FileBudget(max_files=8, max_chars_per_file=800),
    AssistAction.FIX: FileBudget(max_files=6, max_chars_per_file=1000),
    AssistAction.GENERATE_DOCS: FileBudget(max_files=5, max_chars_per_file=600),
}

_FENCED_JSON = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


# ── Assistant ───────────────────────────────────────────────────────────────


class CodeAssistant:
    """Runs one of the three assist actions against an LLM gateway."""

    def __init__(self, llm_gateway: LlmGateway) -> None:
        self._llm = llm_gateway

    async def run(
        self, summary: RepositorySummary, action: AssistAction
    ) -> AssistOutcome:
        system_prompt, user_prompt = build_prompts(summary, action)
        logger.info("Processing %s request", action.value)

        try:
            raw = await self._llm.complete(system_prompt, user_prompt)
        except LlmError as exc:
            logger.error("LLM call for %s failed: %s", action.value, exc)
            return AssistOutcome(success=False, action=action, error=str(exc))

        try:
            result = parse_result(raw, action)
        except ValueError as exc:
            logger.error("Failed to parse or validate %s response: %s", action.value, exc)
            logger.error("Raw content: %s", raw[:500])
            return AssistOutcome(success=False, action=action, error=PARSE_FAILURE_MESSAGE)

        logger.info("%s completed successfully", action.value)
        return AssistOutcome(success=True, action=action, result=result)


# ── Prompt building ─────────────────────────────────────────────────────────


def truncate(content: str, max_length: int) -> str:
    if len(content) <= max_length:
        return content
    return content[:max_length] + "\n... [truncated]"


def render_files(files: Sequence[FileRecord], budget: FileBudget) -> str:
    return "\n\n".join(
        f"--- {f.path} ---\n{truncate(f.content, budget.max_chars_per_file)}"
        for f in files[: budget.max_files]
    )


def build_prompts(summary: RepositorySummary, action: AssistAction) -> tuple[str, str]:
    """Return the (system, user) prompt pair for *action*."""
    budget = FILE_BUDGETS[action]
    files, redactions = redact_files(summary.files[: budget.max_files])
    if redactions:
        logger.warning("Redacted %d potential secret(s) from prompt", redactions)
    files_text = render_files(files, budget)

    languages = ", ".join(lang.value for lang in summary.languages)
    frameworks = ", ".join(fw.value for fw in summary.frameworks)

    if action is AssistAction.ANALYZE:
        errors = "\n".join(summary.errors[:10])
        return ANALYZE_SYSTEM_PROMPT, (
            f"Analyze:\nLanguages: {languages}\nFrameworks: {frameworks}\n\n"
            f"Files:\n{files_text}\n\nErrors:\n{errors}"
        )
    if action is AssistAction.FIX:
        errors = "\n".join(summary.errors[:8])
        return FIX_SYSTEM_PROMPT, (
            f"Fix issues:\nLanguages: {languages}\n\n"
            f"Files:\n{files_text}\n\nErrors:\n{errors}"
        )
    structure = "\n".join(summary.structure[:15])
    return DOCS_SYSTEM_PROMPT, (
        f"Generate docs:\nLanguages: {languages}\nFrameworks: {frameworks}\n"
        f"Structure: {structure}\n\nFiles:\n{files_text}"
    )


# ── Response parsing ────────────────────────────────────────────────────────


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v]


def _dicts(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]


def _optional_str(value: Any) -> str | None:
    return str(value) if value else None


def parse_result(raw: str, action: AssistAction) -> AssistResult:
    """Extract and validate the JSON payload for *action*.

    A fenced ```json block is unwrapped first.  Raises ``ValueError`` when the
    text is not JSON or lacks the fields the action requires.
    """
    match = _FENCED_JSON.search(raw)
    text = (match.group(1) if match else raw).strip()

    data = json.loads(text)  # JSONDecodeError is a ValueError
    if not isinstance(data, dict):
        raise ValueError("response is not a JSON object")

    if action is AssistAction.ANALYZE:
        return _parse_analysis(data)
    if action is AssistAction.FIX:
        return _parse_patches(data)
    return _parse_docs(data)


def _parse_analysis(data: dict[str, Any]) -> AnalysisResult:
    if not (
        isinstance(data.get("criticalErrors"), list)
        and isinstance(data.get("warnings"), list)
        and _is_number(data.get("overallScore"))
    ):
        raise ValueError("invalid response structure for analyze")

    critical = []
    for item in _dicts(data["criticalErrors"]):
        line = item.get("line")
        critical.append(
            CriticalError(
                file=str(item.get("file", "")),
                issue=str(item.get("issue", "")),
                severity=str(item.get("severity", "medium")),
                line=line if isinstance(line, int) and not isinstance(line, bool) else None,
            )
        )

    return AnalysisResult(
        critical_errors=critical,
        warnings=[
            FileIssue(file=str(w.get("file", "")), issue=str(w.get("issue", "")))
            for w in _dicts(data["warnings"])
        ],
        security_issues=[
            SecurityIssue(
                file=str(s.get("file", "")),
                issue=str(s.get("issue", "")),
                cve=_optional_str(s.get("cve")),
            )
            for s in _dicts(data.get("securityIssues"))
        ],
        suggestions=_str_list(data.get("suggestions")),
        overall_score=data["overallScore"],
        summary=str(data.get("summary") or ""),
    )


def _parse_patches(data: dict[str, Any]) -> PatchResult:
    if not (
        isinstance(data.get("patches"), list)
        and _is_number(data.get("fixedCount"))
        and _is_number(data.get("skippedCount"))
    ):
        raise ValueError("invalid response structure for fix")

    return PatchResult(
        patches=[
            Patch(
                file=str(p.get("file", "")),
                original=str(p.get("original", "")),
                fixed=str(p.get("fixed", "")),
                diff=str(p.get("diff", "")),
                explanation=str(p.get("explanation", "")),
                risk=str(p.get("risk", "low")),
                test_command=_optional_str(p.get("testCommand")),
            )
            for p in _dicts(data["patches"])
        ],
        summary=str(data.get("summary") or ""),
        fixed_count=int(data["fixedCount"]),
        skipped_count=int(data["skippedCount"]),
        skipped_reasons=_str_list(data.get("skippedReasons")),
    )


def _parse_docs(data: dict[str, Any]) -> DocsResult:
    readme = data.get("readme")
    summary = data.get("summary")
    if not (isinstance(readme, str) and isinstance(summary, str)):
        raise ValueError("invalid response structure for generate-docs")
    return DocsResult(
        readme=readme,
        summary=summary,
        problems_solved=str(data.get("problemsSolved") or ""),
    )

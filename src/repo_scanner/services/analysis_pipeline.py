"""Analysis pipeline — scan, then analyze, fix and document in sequence.

The pipeline keeps a terminal-style log and a progress percentage so a UI
can replay what happened.  A scan failure or the first failing assist step
halts the run with status ``error``; results produced before the failure
are kept on the report.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable

from repo_scanner.domain.entities import (
    AnalysisResult,
    AssistAction,
    DocsResult,
    PatchResult,
    RepositorySummary,
)
from repo_scanner.domain.exceptions import RepoScannerError
from repo_scanner.domain.ports.local_file import LocalFile
from repo_scanner.services.code_assistant import CodeAssistant
from repo_scanner.services.local_scanner import LocalScanner
from repo_scanner.services.remote_scanner import RemoteScanner

logger = logging.getLogger(__name__)


class PipelineStatus(str, Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    ANALYZING = "analyzing"
    FIXING = "fixing"
    GENERATING_DOCS = "generating-docs"
    COMPLETE = "complete"
    ERROR = "error"


class LogLevel(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class LogEntry:
    level: LogLevel
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class PipelineReport:
    """Everything one pipeline run produced, in the order it happened."""

    status: PipelineStatus = PipelineStatus.IDLE
    progress: int = 0
    progress_trail: list[int] = field(default_factory=list)
    logs: list[LogEntry] = field(default_factory=list)
    summary: RepositorySummary | None = None
    analysis: AnalysisResult | None = None
    patches: PatchResult | None = None
    docs: DocsResult | None = None

    def log(self, level: LogLevel, message: str) -> None:
        self.logs.append(LogEntry(level=level, message=message))

    def advance(self, progress: int) -> None:
        self.progress = progress
        self.progress_trail.append(progress)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "progress": self.progress,
            "logs": [
                {
                    "type": entry.level.value,
                    "message": entry.message,
                    "timestamp": entry.timestamp.isoformat(),
                }
                for entry in self.logs
            ],
            "repoSummary": self.summary.to_dict() if self.summary else None,
            "analysisResult": self.analysis.to_dict() if self.analysis else None,
            "patchResult": self.patches.to_dict() if self.patches else None,
            "docsResult": self.docs.to_dict() if self.docs else None,
        }


# (action, status while running, progress before, progress after, start message)
_STEPS: list[tuple[AssistAction, PipelineStatus, int, int, str]] = [
    (AssistAction.ANALYZE, PipelineStatus.ANALYZING, 40, 50, "Sending code to AI for analysis..."),
    (AssistAction.FIX, PipelineStatus.FIXING, 60, 75, "Generating code fixes..."),
    (AssistAction.GENERATE_DOCS, PipelineStatus.GENERATING_DOCS, 85, 100, "Generating documentation..."),
]


class AnalysisPipeline:
    def __init__(
        self,
        assistant: CodeAssistant,
        local_scanner: LocalScanner | None = None,
        remote_scanner: RemoteScanner | None = None,
    ) -> None:
        self._assistant = assistant
        self._local = local_scanner or LocalScanner()
        self._remote = remote_scanner

    async def run_local(self, files: Iterable[LocalFile]) -> PipelineReport:
        report = self._start()
        report.log(LogLevel.INFO, "Processing uploaded files...")
        return await self._run(report, lambda: self._local.scan(files))

    async def run_remote(self, repository_url: str) -> PipelineReport:
        if self._remote is None:
            raise RuntimeError("AnalysisPipeline was built without a remote scanner")
        remote = self._remote
        report = self._start()
        report.log(LogLevel.INFO, "Fetching repository from GitHub...")
        report.log(LogLevel.INFO, repository_url)
        return await self._run(report, lambda: remote.scan(repository_url))

    async def _run(
        self,
        report: PipelineReport,
        scan: Callable[[], Awaitable[RepositorySummary]],
    ) -> PipelineReport:
        report.advance(15)
        try:
            summary = await scan()
        except RepoScannerError as exc:
            logger.warning("Scan failed: %s", exc)
            report.log(LogLevel.ERROR, f"Scan failed: {exc}")
            report.status = PipelineStatus.ERROR
            return report

        report.summary = summary
        self._log_summary(report, summary)
        report.advance(30)

        for action, status, start, done, message in _STEPS:
            report.status = status
            report.advance(start)
            report.log(LogLevel.INFO, message)

            outcome = await self._assistant.run(summary, action)
            if not outcome.success:
                report.log(LogLevel.ERROR, f"{action.value} failed: {outcome.error}")
                report.status = PipelineStatus.ERROR
                return report

            self._record(report, outcome.result)
            report.advance(done)

        report.status = PipelineStatus.COMPLETE
        report.log(LogLevel.SUCCESS, "All operations completed successfully!")
        return report

    @staticmethod
    def _start() -> PipelineReport:
        report = PipelineReport(status=PipelineStatus.SCANNING)
        report.advance(5)
        return report

    @staticmethod
    def _log_summary(report: PipelineReport, summary: RepositorySummary) -> None:
        languages = ", ".join(lang.value for lang in summary.languages) or "None"
        frameworks = ", ".join(fw.value for fw in summary.frameworks) or "None"
        report.log(LogLevel.SUCCESS, f"Found {summary.file_count} processable files")
        report.log(LogLevel.INFO, f"Languages detected: {languages}")
        report.log(LogLevel.INFO, f"Frameworks detected: {frameworks}")
        for warning in summary.warnings:
            report.log(LogLevel.WARNING, warning)
        if summary.errors:
            report.log(
                LogLevel.WARNING,
                f"Found {len(summary.errors)} potential issues in code",
            )

    @staticmethod
    def _record(report: PipelineReport, result: object) -> None:
        if isinstance(result, AnalysisResult):
            report.analysis = result
            report.log(
                LogLevel.SUCCESS,
                f"Analysis complete. Score: {result.overall_score}/100",
            )
            report.log(LogLevel.INFO, f"Found {len(result.critical_errors)} critical errors")
            report.log(LogLevel.INFO, f"Found {len(result.warnings)} warnings")
            report.log(LogLevel.INFO, f"Found {len(result.security_issues)} security issues")
        elif isinstance(result, PatchResult):
            report.patches = result
            report.log(
                LogLevel.SUCCESS,
                f"Generated {result.fixed_count} fixes, skipped {result.skipped_count}",
            )
            for reason in result.skipped_reasons:
                report.log(LogLevel.WARNING, f"Skipped: {reason}")
        elif isinstance(result, DocsResult):
            report.docs = result
            report.log(LogLevel.SUCCESS, "Documentation generated")

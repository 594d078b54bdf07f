"""Pydantic request / response DTOs for the API boundary.

Field names are camelCase on purpose: the summary travels between the
scanner, the browser and the assist endpoint in exactly this shape.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator

from repo_scanner.domain.classification import Framework, Language
from repo_scanner.domain.entities import AssistAction, FileRecord, RepositorySummary


class ScanGitHubRequest(BaseModel):
    """Request body for ``POST /scan/github`` and ``POST /pipeline/github``."""

    github_url: str

    @field_validator("github_url")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "github_url must not be empty."
            raise ValueError(msg)
        return stripped


class FileRecordModel(BaseModel):
    path: str
    content: str
    type: str = "unknown"
    size: int = 0


class RepoSummaryModel(BaseModel):
    """Wire form of :class:`RepositorySummary`.

    Only labels from the classification tables validate for ``languages``
    and ``frameworks``.
    """

    languages: list[Language]
    frameworks: list[Framework]
    files: list[FileRecordModel]
    errors: list[str]
    warnings: list[str]
    structure: list[str]
    totalSize: int = 0
    fileCount: int = 0

    @classmethod
    def from_domain(cls, summary: RepositorySummary) -> RepoSummaryModel:
        return cls.model_validate(summary.to_dict())

    def to_domain(self) -> RepositorySummary:
        files = tuple(
            FileRecord(path=f.path, content=f.content, type=f.type, size=f.size)
            for f in self.files
        )
        return RepositorySummary(
            languages=tuple(dict.fromkeys(self.languages)),
            frameworks=tuple(dict.fromkeys(self.frameworks)),
            files=files,
            errors=tuple(self.errors),
            warnings=tuple(self.warnings),
            structure=tuple(self.structure),
            total_size=self.totalSize,
            file_count=len(files),
        )


class AssistRequest(BaseModel):
    """Request body for ``POST /assist``."""

    repoSummary: RepoSummaryModel
    action: AssistAction


class AssistResponse(BaseModel):
    """Discriminated assist outcome: ``result`` on success, ``error`` otherwise."""

    success: bool
    action: AssistAction | None = None
    result: dict[str, Any] | None = None
    error: str | None = None


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str

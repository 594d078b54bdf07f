"""API routes — thin controllers that delegate to the services."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, File, UploadFile

from repo_scanner.infrastructure.local_sources import (
    InMemoryFile,
    archive_members,
    normalise_path,
    open_archive,
)
from repo_scanner.interface.dependencies import (
    get_assistant,
    get_local_scanner,
    get_pipeline,
    get_remote_scanner,
)
from repo_scanner.interface.schemas import (
    AssistRequest,
    AssistResponse,
    RepoSummaryModel,
    ScanGitHubRequest,
)
from repo_scanner.services.analysis_pipeline import AnalysisPipeline
from repo_scanner.services.code_assistant import CodeAssistant
from repo_scanner.services.local_scanner import LocalScanner
from repo_scanner.services.remote_scanner import RemoteScanner

router = APIRouter()


async def _read_uploads(files: list[UploadFile]) -> list[InMemoryFile]:
    uploaded: list[InMemoryFile] = []
    for upload in files:
        data = await upload.read()
        uploaded.append(InMemoryFile(path=normalise_path(upload.filename or ""), data=data))
    return uploaded


@router.post(
    "/scan/github",
    response_model=RepoSummaryModel,
    responses={
        422: {"description": "Invalid GitHub URL"},
        403: {"description": "Repository is private"},
        404: {"description": "Repository or branch not found"},
        429: {"description": "GitHub API rate limit exceeded"},
    },
)
async def scan_github(
    body: ScanGitHubRequest,
    scanner: RemoteScanner = Depends(get_remote_scanner),
) -> RepoSummaryModel:
    """Scan a public GitHub repository."""
    summary = await scanner.scan(body.github_url)
    return RepoSummaryModel.from_domain(summary)


@router.post("/scan/upload", response_model=RepoSummaryModel)
async def scan_upload(
    files: list[UploadFile] = File(...),
    scanner: LocalScanner = Depends(get_local_scanner),
) -> RepoSummaryModel:
    """Scan uploaded files; each upload's filename is its relative path."""
    summary = await scanner.scan(await _read_uploads(files))
    return RepoSummaryModel.from_domain(summary)


@router.post(
    "/scan/archive",
    response_model=RepoSummaryModel,
    responses={422: {"description": "Upload is not a zip archive"}},
)
async def scan_archive(
    archive: UploadFile = File(...),
    scanner: LocalScanner = Depends(get_local_scanner),
) -> RepoSummaryModel:
    """Scan the members of an uploaded zip archive."""
    with open_archive(await archive.read()) as zf:
        summary = await scanner.scan(archive_members(zf))
    return RepoSummaryModel.from_domain(summary)


@router.post("/assist", response_model=AssistResponse, response_model_exclude_none=True)
async def assist(
    body: AssistRequest,
    assistant: CodeAssistant = Depends(get_assistant),
) -> AssistResponse:
    """Run one assist action (analyze, fix, generate-docs) on a summary."""
    outcome = await assistant.run(body.repoSummary.to_domain(), body.action)
    return AssistResponse.model_validate(outcome.to_dict())


@router.post("/pipeline/github")
async def pipeline_github(
    body: ScanGitHubRequest,
    pipeline: AnalysisPipeline = Depends(get_pipeline),
) -> dict[str, Any]:
    """Scan a GitHub repository and run every assist action on it."""
    report = await pipeline.run_remote(body.github_url)
    return report.to_dict()


@router.post("/pipeline/upload")
async def pipeline_upload(
    files: list[UploadFile] = File(...),
    pipeline: AnalysisPipeline = Depends(get_pipeline),
) -> dict[str, Any]:
    """Scan uploaded files and run every assist action on them."""
    report = await pipeline.run_local(await _read_uploads(files))
    return report.to_dict()

"""FastAPI dependency injection wiring."""

from __future__ import annotations

import httpx

from repo_scanner.infrastructure.config import get_settings
from repo_scanner.infrastructure.github_rest_adapter import GitHubRestAdapter
from repo_scanner.infrastructure.openai_adapter import OpenAIAdapter
from repo_scanner.services.analysis_pipeline import AnalysisPipeline
from repo_scanner.services.code_assistant import CodeAssistant
from repo_scanner.services.local_scanner import LocalScanner
from repo_scanner.services.remote_scanner import RemoteScanner

_http_client: httpx.AsyncClient | None = None
_openai_adapter: OpenAIAdapter | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _openai_adapter  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
    )
    _openai_adapter = OpenAIAdapter(
        api_key=settings.openai_api_key.get_secret_value(),
        model=settings.openai_model,
        base_url=settings.openai_base_url,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
    )


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _openai_adapter  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None
    if _openai_adapter:
        await _openai_adapter.close()
        _openai_adapter = None


def get_local_scanner() -> LocalScanner:
    settings = get_settings()
    return LocalScanner(
        policy=settings.scan_policy(),
        read_timeout=settings.http_timeout_seconds,
    )


def get_remote_scanner() -> RemoteScanner:
    settings = get_settings()
    assert _http_client is not None, "startup() was not called"

    token = settings.github_token.get_secret_value() if settings.github_token else None
    return RemoteScanner(
        repo_fetcher=GitHubRestAdapter(client=_http_client, token=token),
        policy=settings.scan_policy(),
    )


def get_assistant() -> CodeAssistant:
    assert _openai_adapter is not None, "startup() was not called"
    return CodeAssistant(llm_gateway=_openai_adapter)


def get_pipeline() -> AnalysisPipeline:
    return AnalysisPipeline(
        assistant=get_assistant(),
        local_scanner=get_local_scanner(),
        remote_scanner=get_remote_scanner(),
    )

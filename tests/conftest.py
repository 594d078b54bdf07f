"""Shared fakes for the scanner and assistant ports."""

from __future__ import annotations

import json
from dataclasses import dataclass

import pytest

from repo_scanner.domain.entities import TreeEntry
from repo_scanner.domain.exceptions import (
    ContentFetchError,
    LlmError,
    RepositoryNotFoundError,
)


@dataclass
class FakeFile:
    path: str
    content: str = ""
    size: int | None = None
    error: Exception | None = None

    def __post_init__(self):
        if self.size is None:
            self.size = len(self.content.encode("utf-8"))

    async def read_text(self) -> str:
        if self.error is not None:
            raise self.error
        return self.content


class FakeFetcher:
    """In-memory RepoFetcher: ``trees`` per branch, ``contents`` per (branch, path)."""

    def __init__(self, trees=None, contents=None, failing_status=None):
        self.trees = trees or {}
        self.contents = contents or {}
        self.failing_status = failing_status or {}
        self.tree_calls: list[str] = []
        self.content_calls: list[tuple[str, str]] = []

    async def fetch_tree(self, url, branch):
        self.tree_calls.append(branch)
        if branch not in self.trees:
            status = self.failing_status.get(branch, 404)
            raise RepositoryNotFoundError(
                f"Failed to fetch repository: {status}", status_code=status
            )
        return [TreeEntry(**entry) for entry in self.trees[branch]]

    async def fetch_file_content(self, url, path, branch):
        self.content_calls.append((branch, path))
        key = (branch, path)
        if key not in self.contents:
            raise ContentFetchError(f"File not found: {path}")
        return self.contents[key]


class FakeLlm:
    """LlmGateway returning canned responses in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.prompts: list[tuple[str, str]] = []

    async def complete(self, system_prompt, user_prompt):
        self.prompts.append((system_prompt, user_prompt))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


ANALYSIS_JSON = json.dumps(
    {
        "criticalErrors": [
            {"file": "src/app.ts", "line": 3, "issue": "Null deref", "severity": "high"}
        ],
        "warnings": [{"file": "src/app.ts", "issue": "Loose equality"}],
        "securityIssues": [],
        "suggestions": ["Enable strict mode"],
        "overallScore": 72,
        "summary": "Mostly fine.",
    }
)

PATCH_JSON = json.dumps(
    {
        "patches": [
            {
                "file": "src/app.ts",
                "original": "a == b",
                "fixed": "a === b",
                "diff": "- a == b\n+ a === b",
                "explanation": "Strict equality",
                "risk": "low",
                "testCommand": "npm test",
            }
        ],
        "summary": "One fix.",
        "fixedCount": 1,
        "skippedCount": 0,
        "skippedReasons": [],
    }
)

DOCS_JSON = json.dumps(
    {"readme": "# Demo\n", "summary": "A demo app.", "problemsSolved": "Equality."}
)


@pytest.fixture
def fake_file():
    return FakeFile


@pytest.fixture
def fake_fetcher():
    return FakeFetcher


@pytest.fixture
def fake_llm():
    return FakeLlm


@pytest.fixture
def llm_error():
    return LlmError

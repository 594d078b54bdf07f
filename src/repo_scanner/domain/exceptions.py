"""Domain exception hierarchy.

Only two conditions abort a scan: a malformed repository URL and a tree
listing that fails on every branch tried.  Everything else a scanner meets
is recorded as a warning on the summary.  The interface layer maps each
exception to an HTTP status code.
"""

from __future__ import annotations


class RepoScannerError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidGitHubUrlError(RepoScannerError):
    """The supplied URL does not point to a valid GitHub repository."""


class InvalidArchiveError(RepoScannerError):
    """An uploaded archive could not be opened as a zip file."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class TreeListingError(RepoScannerError):
    """The recursive tree listing for a branch could not be retrieved.

    ``status_code`` is the HTTP status of the failed response, or ``None``
    when the request never produced one (network error, timeout).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RepositoryNotFoundError(TreeListingError):
    """The repository or branch does not exist or is not accessible (404)."""


class RepositoryAccessDeniedError(TreeListingError):
    """Access to the repository was denied (403)."""


class GitHubRateLimitError(TreeListingError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""


class ContentFetchError(RepoScannerError):
    """A single raw file could not be downloaded."""


# ── Local sources ───────────────────────────────────────────────────────────


class LocalReadError(RepoScannerError):
    """A local file could not be read as text."""


# ── LLM errors ──────────────────────────────────────────────────────────────


class LlmError(RepoScannerError):
    """Any error originating from the LLM provider."""

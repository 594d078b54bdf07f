"""GitHub REST API adapter — implements the RepoFetcher port."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from urllib.parse import quote

import httpx

from repo_scanner.domain.entities import TreeEntry
from repo_scanner.domain.exceptions import (
    ContentFetchError,
    GitHubRateLimitError,
    RepositoryAccessDeniedError,
    RepositoryNotFoundError,
    TreeListingError,
)
from repo_scanner.domain.value_objects import GitHubUrl

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_RAW_BASE = "https://raw.githubusercontent.com"
_USER_AGENT = "repo-scanner/1.0"


class GitHubRestAdapter:
    """Concrete RepoFetcher backed by the GitHub v3 REST API.

    The client's own timeout applies to every request; a timeout surfaces as
    the same error type as any other failed request.
    """

    def __init__(self, client: httpx.AsyncClient, token: str | None = None) -> None:
        self._client = client
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": _USER_AGENT,
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    async def fetch_tree(self, url: GitHubUrl, branch: str) -> list[TreeEntry]:
        """GET /repos/{owner}/{repo}/git/trees/{branch}?recursive=1 → [TreeEntry]."""
        api_url = f"{_GITHUB_API}/repos/{url.owner}/{url.repo}/git/trees/{branch}"
        try:
            resp = await self._client.get(
                api_url, headers=self._api_headers, params={"recursive": "1"}
            )
        except httpx.HTTPError as exc:
            raise TreeListingError(
                f"Network error fetching {api_url}: {exc}"
            ) from exc

        if resp.status_code != 200:
            raise _tree_error(resp, url, branch)

        try:
            data = resp.json()
        except ValueError as exc:
            raise TreeListingError(
                f"Failed to fetch repository: {resp.status_code} (response is not JSON)",
                status_code=resp.status_code,
            ) from exc
        if not isinstance(data, dict) or not isinstance(data.get("tree", []), list):
            raise TreeListingError(
                f"Failed to fetch repository: {resp.status_code} (unexpected tree payload)",
                status_code=resp.status_code,
            )
        if data.get("truncated"):
            logger.warning("GitHub truncated the tree listing for %s", url.full_name)

        return [
            TreeEntry(
                path=item["path"],
                type=item.get("type", "blob"),
                size=item.get("size") or 0,
            )
            for item in data.get("tree", [])
            if isinstance(item, dict) and "path" in item
        ]

    async def fetch_file_content(
        self, url: GitHubUrl, path: str, branch: str
    ) -> str:
        """Fetch raw file content via raw.githubusercontent.com (no rate limit)."""
        raw_url = f"{_RAW_BASE}/{url.owner}/{url.repo}/{quote(branch)}/{quote(path)}"
        try:
            resp = await self._client.get(raw_url, headers={"User-Agent": _USER_AGENT})
        except httpx.HTTPError as exc:
            raise ContentFetchError(
                f"Network error fetching {raw_url}: {exc}"
            ) from exc

        if resp.status_code != 200:
            raise ContentFetchError(
                f"raw.githubusercontent.com returned HTTP {resp.status_code} for {path}"
            )
        return resp.text


def _tree_error(resp: httpx.Response, url: GitHubUrl, branch: str) -> TreeListingError:
    """Translate a non-200 tree response into the matching domain error."""
    status = resp.status_code
    prefix = f"Failed to fetch repository: {status}"

    if status == 404:
        return RepositoryNotFoundError(
            f"{prefix} (branch '{branch}' of {url.full_name} not found; "
            "make sure the URL points to a public repository)",
            status_code=status,
        )

    if status == 403:
        if resp.headers.get("x-ratelimit-remaining", "") == "0":
            reset_raw = resp.headers.get("x-ratelimit-reset", "")
            try:
                reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                    "%Y-%m-%d %H:%M:%S UTC"
                )
            except (ValueError, OSError):
                reset_str = reset_raw or "unknown"
            return GitHubRateLimitError(
                f"{prefix} (GitHub API rate limit exceeded, resets at {reset_str}; "
                "set GITHUB_TOKEN to increase the limit)",
                status_code=status,
            )
        return RepositoryAccessDeniedError(
            f"{prefix} (access denied, the repository may be private)",
            status_code=status,
        )

    if status == 429:
        return GitHubRateLimitError(
            f"{prefix} (GitHub API rate limit exceeded)", status_code=status
        )

    return TreeListingError(prefix, status_code=status)

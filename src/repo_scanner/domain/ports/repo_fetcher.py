"""Port: repository fetcher — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from repo_scanner.domain.entities import TreeEntry
from repo_scanner.domain.value_objects import GitHubUrl


class RepoFetcher(Protocol):
    """Abstract contract for fetching GitHub repository data."""

    async def fetch_tree(self, url: GitHubUrl, branch: str) -> list[TreeEntry]:
        """Return the recursive file tree for *branch*.

        Raises :class:`TreeListingError` on any non-success response.
        """
        ...

    async def fetch_file_content(self, url: GitHubUrl, path: str, branch: str) -> str:
        """Return the raw text of a single file.

        Raises :class:`ContentFetchError` on any non-success response.
        """
        ...

"""Remote scanner — summarise a public GitHub repository without cloning it.

Unlike the local scanner this strategy separates *listed* files from
*content-fetched* files: every kept tree entry lands in ``structure``, but
raw content is downloaded only for manifests and source files, under the
size cap, and at most ``max_content_fetches`` times.
"""

from __future__ import annotations

import logging

from repo_scanner.domain.entities import RepositorySummary, TreeEntry
from repo_scanner.domain.exceptions import ContentFetchError, TreeListingError
from repo_scanner.domain.ports.repo_fetcher import RepoFetcher
from repo_scanner.domain.value_objects import GitHubUrl, ScanPolicy
from repo_scanner.services.file_filter import is_important, should_skip
from repo_scanner.services.summary_builder import SummaryBuilder

logger = logging.getLogger(__name__)

DEFAULT_BRANCHES: tuple[str, ...] = ("main", "master")


class RemoteScanner:
    """Selective strategy: list the whole tree, fetch only important files.

    Parameters
    ----------
    repo_fetcher:
        Adapter that lists trees and downloads raw files.
    policy:
        Caps and classification tables.
    branches:
        Branch names tried in order for the tree listing.
    """

    def __init__(
        self,
        repo_fetcher: RepoFetcher,
        policy: ScanPolicy | None = None,
        branches: tuple[str, ...] = DEFAULT_BRANCHES,
    ) -> None:
        if not branches:
            raise ValueError("RemoteScanner needs at least one branch to try")
        self._fetcher = repo_fetcher
        self._policy = policy or ScanPolicy()
        self._branches = branches

    async def scan(self, repository_url: str) -> RepositorySummary:
        url = GitHubUrl.from_string(repository_url)
        logger.info("Scanning %s", url.full_name)

        tree, branch = await self._list_tree(url)
        entries = self._select_entries(tree)

        policy = self._policy
        builder = SummaryBuilder(policy)
        fetched = 0

        for entry in entries:
            builder.admit(entry.path, entry.size)

            if not (
                is_important(entry.path, policy)
                and entry.size < policy.max_file_size
                and fetched < policy.max_content_fetches
            ):
                continue

            try:
                content = await self._fetcher.fetch_file_content(url, entry.path, branch)
            except ContentFetchError as exc:
                logger.debug("Fetch failed for %s: %s", entry.path, exc)
                builder.warn(f"Failed to fetch {entry.path}")
                continue

            builder.add_content(entry.path, content, entry.size)
            fetched += 1

        summary = builder.build()
        logger.info(
            "Remote scan of %s done: %d listed, %d fetched, %d warnings",
            url.full_name,
            len(summary.structure),
            summary.file_count,
            len(summary.warnings),
        )
        return summary

    async def _list_tree(self, url: GitHubUrl) -> tuple[list[TreeEntry], str]:
        """Try each branch in turn; re-raise the first failure if all fail."""
        first_error: TreeListingError | None = None
        for branch in self._branches:
            try:
                tree = await self._fetcher.fetch_tree(url, branch)
            except TreeListingError as exc:
                logger.info(
                    "Tree listing for %s@%s failed (%s)", url.full_name, branch, exc
                )
                if first_error is None:
                    first_error = exc
                continue
            return tree, branch

        raise first_error  # type: ignore[misc]

    def _select_entries(self, tree: list[TreeEntry]) -> list[TreeEntry]:
        kept = [
            entry
            for entry in tree
            if entry.is_file and not should_skip(entry.path, self._policy)
        ]
        return kept[: self._policy.max_files]

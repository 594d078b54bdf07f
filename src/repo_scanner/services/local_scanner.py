"""Local scanner — summarise a user-provided collection of files.

Every admitted file under the size cap has its content read, one file at a
time in sorted path order.  Read failures are recorded as warnings; the scan
itself never fails for a well-formed collection.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable

from repo_scanner.domain.entities import RepositorySummary
from repo_scanner.domain.ports.local_file import LocalFile
from repo_scanner.domain.value_objects import ScanPolicy
from repo_scanner.services.file_filter import should_skip
from repo_scanner.services.summary_builder import SummaryBuilder

logger = logging.getLogger(__name__)


class LocalScanner:
    """Eager strategy: read every admitted file's content.

    Parameters
    ----------
    policy:
        Caps and classification tables.
    read_timeout:
        Seconds allowed per file read; expiry becomes a per-file warning.
        ``None`` disables the timeout.
    """

    def __init__(
        self,
        policy: ScanPolicy | None = None,
        read_timeout: float | None = None,
    ) -> None:
        self._policy = policy or ScanPolicy()
        self._read_timeout = read_timeout

    async def scan(self, files: Iterable[LocalFile]) -> RepositorySummary:
        policy = self._policy
        builder = SummaryBuilder(policy)

        ordered = sorted(files, key=lambda f: f.path)
        logger.info("Scanning %d local files", len(ordered))

        for file in ordered:
            path = file.path
            if should_skip(path, policy):
                continue

            if builder.admitted_count >= policy.max_files:
                builder.warn(
                    f"Reached file limit ({policy.max_files}). Some files were skipped."
                )
                break

            builder.admit(path, file.size)

            if file.size > policy.max_file_size:
                builder.warn(
                    f"Skipped large file: {path} ({file.size / 1024:.1f}KB)"
                )
                continue

            try:
                content = await self._read(file)
            except Exception as exc:
                logger.debug("Failed to read %s", path, exc_info=True)
                builder.warn(f"Failed to read {path}: {_describe(exc)}")
                continue

            builder.add_content(path, content, file.size)

        summary = builder.build()
        logger.info(
            "Local scan done: %d listed, %d read, %d warnings",
            len(summary.structure),
            summary.file_count,
            len(summary.warnings),
        )
        return summary

    async def _read(self, file: LocalFile) -> str:
        if self._read_timeout is None:
            return await file.read_text()
        return await asyncio.wait_for(file.read_text(), timeout=self._read_timeout)


def _describe(exc: Exception) -> str:
    if isinstance(exc, asyncio.TimeoutError):
        return "read timed out"
    return str(exc) or "Unknown error"

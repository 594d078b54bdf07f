"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Mapping

from repo_scanner.domain.classification import (
    FRAMEWORK_INDICATORS,
    IGNORED_DIRS,
    IGNORED_FILES,
    IMPORTANT_EXTENSIONS,
    IMPORTANT_FILES,
    LANGUAGE_EXTENSIONS,
    Framework,
    Language,
)
from repo_scanner.domain.exceptions import InvalidGitHubUrlError

_GITHUB_URL_RE = re.compile(
    r"^https?://(?:www\.)?github\.com/(?P<owner>[A-Za-z0-9\-_.]+)/(?P<repo>[A-Za-z0-9\-_.]+?)(?:\.git)?/?$"
)


@dataclass(frozen=True, slots=True)
class GitHubUrl:
    """Validated GitHub repository URL.

    Extracts *owner* and *repo* from a URL like
    ``https://github.com/psf/requests.git``; a trailing ``.git`` is stripped
    from the repository name.  Rejects anything that does not match the
    expected pattern.
    """

    owner: str
    repo: str
    raw: str

    @classmethod
    def from_string(cls, url: str) -> GitHubUrl:
        """Parse and validate a raw URL string."""
        url = url.strip()
        match = _GITHUB_URL_RE.match(url)
        if not match:
            raise InvalidGitHubUrlError(
                f"Invalid GitHub URL: '{url}'. "
                "Expected format: https://github.com/<owner>/<repo>"
            )
        return cls(owner=match["owner"], repo=match["repo"], raw=url)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True, slots=True)
class ScanPolicy:
    """Caps and classification tables injected into a scanner.

    The defaults are the production values; tests build their own policy
    (e.g. ``ScanPolicy(max_files=3)``) instead of patching module constants.
    """

    max_files: int = 100
    max_file_size: int = 100 * 1024
    max_content_fetches: int = 50
    ignored_dirs: tuple[str, ...] = IGNORED_DIRS
    ignored_files: tuple[str, ...] = IGNORED_FILES
    important_files: tuple[str, ...] = IMPORTANT_FILES
    important_extensions: frozenset[str] = IMPORTANT_EXTENSIONS
    language_extensions: Mapping[str, Language] = field(
        default_factory=lambda: LANGUAGE_EXTENSIONS
    )
    framework_indicators: Mapping[Framework, tuple[str, ...]] = field(
        default_factory=lambda: FRAMEWORK_INDICATORS
    )

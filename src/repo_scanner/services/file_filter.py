"""File filtering — ignore rules and extension-based classification."""

from __future__ import annotations

from repo_scanner.domain.classification import Language
from repo_scanner.domain.value_objects import ScanPolicy


def in_ignored_dir(path: str, policy: ScanPolicy) -> bool:
    """Return *True* if *path* sits under an ignored directory.

    A directory matches either mid-path (``"/<dir>/"``) or as the leading
    segment (``"<dir>/"``).
    """
    return any(
        f"/{name}/" in path or path.startswith(f"{name}/")
        for name in policy.ignored_dirs
    )


def is_ignored_file(path: str, policy: ScanPolicy) -> bool:
    return any(path.endswith(name) for name in policy.ignored_files)


def should_skip(path: str, policy: ScanPolicy) -> bool:
    """Return *True* if the path is excluded from scanning altogether."""
    return in_ignored_dir(path, policy) or is_ignored_file(path, policy)


def extension_of(path: str) -> str:
    """Lowercased text after the final dot, or ``""`` when there is no dot."""
    dot = path.rfind(".")
    if dot == -1:
        return ""
    return path[dot + 1 :].lower()


def language_for(extension: str, policy: ScanPolicy) -> Language | None:
    return policy.language_extensions.get(extension)


def is_important(path: str, policy: ScanPolicy) -> bool:
    """Manifest or source file eligible for a remote content fetch."""
    if any(path.endswith(name) for name in policy.important_files):
        return True
    return extension_of(path) in policy.important_extensions

"""Summary builder — the mutable accumulator both scanners fill in.

A builder lives for exactly one scan invocation; :meth:`SummaryBuilder.build`
freezes it into the immutable :class:`RepositorySummary` handed downstream.
"""

from __future__ import annotations

from repo_scanner.domain.classification import FRAMEWORK_MANIFEST, Framework, Language
from repo_scanner.domain.entities import FileRecord, RepositorySummary
from repo_scanner.domain.value_objects import ScanPolicy
from repo_scanner.services import framework_detector, pattern_detector
from repo_scanner.services.file_filter import extension_of, language_for


class SummaryBuilder:
    def __init__(self, policy: ScanPolicy) -> None:
        self._policy = policy
        self.languages: set[Language] = set()
        self.frameworks: set[Framework] = set()
        self.files: list[FileRecord] = []
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.structure: list[str] = []
        self.total_size = 0

    @property
    def admitted_count(self) -> int:
        return len(self.structure)

    def admit(self, path: str, size: int) -> None:
        """Record a listed path: structure, size and language."""
        self.structure.append(path)
        self.total_size += size
        language = language_for(extension_of(path), self._policy)
        if language is not None:
            self.languages.add(language)

    def add_content(self, path: str, content: str, size: int) -> None:
        """Run the detectors on fetched content and keep the file record."""
        if path.endswith(FRAMEWORK_MANIFEST):
            framework_detector.detect(
                content, self.frameworks, self._policy.framework_indicators
            )
        self.errors.extend(pattern_detector.detect(path, content))
        self.files.append(
            FileRecord(
                path=path,
                content=content,
                type=extension_of(path) or "unknown",
                size=size,
            )
        )

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def build(self) -> RepositorySummary:
        # Enum declaration order keeps label ordering stable across runs.
        return RepositorySummary(
            languages=tuple(lang for lang in Language if lang in self.languages),
            frameworks=tuple(fw for fw in Framework if fw in self.frameworks),
            files=tuple(self.files),
            errors=tuple(self.errors),
            warnings=tuple(self.warnings),
            structure=tuple(self.structure),
            total_size=self.total_size,
            file_count=len(self.files),
        )

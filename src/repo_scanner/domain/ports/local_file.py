"""Port: local file handle — one entry of a user-provided file collection."""

from __future__ import annotations

from typing import Protocol


class LocalFile(Protocol):
    """A file offered to the local scanner.

    ``path`` is repo-relative and forward-slash separated (directory-qualified
    when the platform knows the directories, else the bare filename).
    """

    @property
    def path(self) -> str: ...

    @property
    def size(self) -> int: ...

    async def read_text(self) -> str:
        """Read the whole file as text; raises on failure."""
        ...

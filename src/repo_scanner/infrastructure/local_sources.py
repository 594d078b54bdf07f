"""Local file sources — implementations of the LocalFile port.

Three ways of handing files to the local scanner: a directory on disk,
files uploaded through the API (the relative path travels as the upload's
filename), and the members of an uploaded zip archive.  Each source yields
its files lazily and only once.
"""

from __future__ import annotations

import asyncio
import io
import logging
import os
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from repo_scanner.domain.classification import IGNORED_DIRS
from repo_scanner.domain.exceptions import InvalidArchiveError, LocalReadError

logger = logging.getLogger(__name__)


def _decode(data: bytes) -> str:
    """UTF-8 with undecodable bytes replaced by U+FFFD; never fails."""
    return data.decode("utf-8", errors="replace")


def normalise_path(path: str) -> str:
    """Forward slashes, no leading ``./`` or ``/``."""
    path = path.replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    return path.lstrip("/")


# ── Directory on disk ───────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class DiskFile:
    root: Path
    path: str
    size: int

    async def read_text(self) -> str:
        try:
            data = await asyncio.to_thread((self.root / self.path).read_bytes)
        except OSError as exc:
            raise LocalReadError(exc.strerror or str(exc)) from exc
        return _decode(data)


def walk_directory(
    root: str | Path, prune_dirs: Iterable[str] = IGNORED_DIRS
) -> Iterator[DiskFile]:
    """Yield every regular file under *root* with a root-relative path.

    Directories named in *prune_dirs* are not descended into; the scanner
    would drop their files anyway.
    """
    root = Path(root)
    pruned = set(prune_dirs)
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in pruned)
        for name in sorted(filenames):
            full = Path(dirpath) / name
            try:
                size = full.stat().st_size
            except OSError:
                logger.debug("Cannot stat %s, skipping", full)
                continue
            yield DiskFile(
                root=root,
                path=full.relative_to(root).as_posix(),
                size=size,
            )


# ── In-memory uploads ───────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class InMemoryFile:
    path: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    async def read_text(self) -> str:
        return _decode(self.data)


# ── Zip archives ────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ArchiveMember:
    archive: zipfile.ZipFile
    name: str
    path: str
    size: int

    async def read_text(self) -> str:
        try:
            data = await asyncio.to_thread(self.archive.read, self.name)
        except (zipfile.BadZipFile, OSError, RuntimeError) as exc:
            raise LocalReadError(str(exc)) from exc
        return _decode(data)


def open_archive(data: bytes) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as exc:
        raise InvalidArchiveError(f"Uploaded file is not a valid zip archive: {exc}") from exc


def archive_members(archive: zipfile.ZipFile) -> Iterator[ArchiveMember]:
    """Yield the file members of *archive*; ``size`` is the uncompressed size."""
    for info in archive.infolist():
        if info.is_dir():
            continue
        yield ArchiveMember(
            archive=archive,
            name=info.filename,
            path=normalise_path(info.filename),
            size=info.file_size,
        )

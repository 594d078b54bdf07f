"""repo-scanner command line.

Usage:
    repo-scanner serve
    repo-scanner scan ./my-project
    repo-scanner scan project.zip --max-files 50
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import click
import uvicorn

from repo_scanner.domain.exceptions import RepoScannerError
from repo_scanner.domain.value_objects import ScanPolicy
from repo_scanner.infrastructure.config import get_settings
from repo_scanner.infrastructure.local_sources import (
    archive_members,
    open_archive,
    walk_directory,
)
from repo_scanner.services.local_scanner import LocalScanner

_LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"


@click.group()
def cli() -> None:
    """Summarise source trees and serve the scanning API."""


@cli.command()
def serve() -> None:
    """Start the uvicorn ASGI server."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format=_LOG_FORMAT)
    uvicorn.run(
        "repo_scanner.interface.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


@cli.command()
@click.argument("target", type=click.Path(exists=True, path_type=Path))
@click.option("--max-files", default=100, show_default=True, help="Files admitted before the limit warning")
@click.option("--max-file-size-kb", default=100, show_default=True, help="Larger files are listed but not read")
@click.option("--log-level", default="WARNING", show_default=True)
def scan(target: Path, max_files: int, max_file_size_kb: int, log_level: str) -> None:
    """Scan a directory or zip archive and print the summary as JSON."""
    logging.basicConfig(level=log_level.upper(), format=_LOG_FORMAT)
    scanner = LocalScanner(
        ScanPolicy(max_files=max_files, max_file_size=max_file_size_kb * 1024)
    )

    try:
        if target.is_dir():
            summary = asyncio.run(scanner.scan(walk_directory(target)))
        else:
            with open_archive(target.read_bytes()) as archive:
                summary = asyncio.run(scanner.scan(archive_members(archive)))
    except RepoScannerError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(json.dumps(summary.to_dict(), indent=2))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

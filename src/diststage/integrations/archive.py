"""
diststage.integrations.archive - Archive Writers
==================================================

The archive writer turns a list of files into a single compressed bundle.
SiteArchiver decides WHICH files go in and under WHAT names; the writer
only knows how to write them.

    ┌──────────────┐  create_archive(source_dir,   ┌──────────────────┐
    │ SiteArchiver │  output_path, entries)  ────→ │  ArchiveWriter    │
    └──────────────┘                               │  └ ZipArchiveWriter│
                                                   └──────────────────┘

Entries are ``(path, archive_name)`` pairs written in the given order.
"""

from __future__ import annotations

import zipfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

import structlog


logger = structlog.get_logger()

ArchiveEntry = tuple[Path, str]


class ArchiveWriter(ABC):
    """Abstract interface for archive writers."""

    @abstractmethod
    def create_archive(
        self,
        source_dir: Path,
        output_path: Path,
        entries: Sequence[ArchiveEntry],
    ) -> Path:
        """Write ``entries`` into a new archive at ``output_path``.

        Args:
            source_dir: The directory the entries were collected from.
            output_path: Archive file to create (overwritten if present).
            entries: ``(path, archive_name)`` pairs, written in order.

        Returns:
            The path of the written archive.

        Raises:
            OSError: If an entry cannot be read or the archive written.
            ValueError: If an entry cannot be represented in the format.
        """
        ...


class ZipArchiveWriter(ArchiveWriter):
    """Writes deflate-compressed zip archives.

    Only regular files are written; the archive carries no explicit
    directory entries, unzipping recreates the tree from the entry names.
    Modification times before 1980 are stored as 1980-01-01.
    """

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED) -> None:
        self._compression = compression
        self._logger = logger.bind(component="zip_archive_writer")

    def create_archive(
        self,
        source_dir: Path,
        output_path: Path,
        entries: Sequence[ArchiveEntry],
    ) -> Path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(
            output_path,
            "w",
            compression=self._compression,
            strict_timestamps=False,
        ) as archive:
            for path, name in entries:
                archive.write(path, arcname=name)
        self._logger.info(
            "archive_written",
            source_dir=str(source_dir),
            output_path=str(output_path),
            entry_count=len(entries),
        )
        return output_path

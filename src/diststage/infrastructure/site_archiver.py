"""
diststage.infrastructure.site_archiver - Site Enumeration and Archiving
=========================================================================

Turns a built site directory into a single archive (normally ``site.zip``)
that is later staged as an ordinary root-level artifact.

Enumeration:
    ``enumerate_site()`` is a generator. Every call walks the filesystem
    again, so two calls may differ if the tree changed in between. Order is
    depth-first with a directory yielded before its children; siblings are
    visited in name order, but callers should not rely on more than
    "parent before children".

        site/                 enumerate_site(site) yields:
          css/                  site/css
            main.css            site/css/main.css
          index.html            site/index.html

Naming inside the archive:
    Each file is stored under its path relative to the site root, with
    posix separators: ``css/main.css``, ``index.html``. Directories are not
    written as entries.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator, Optional

import structlog

from diststage.core.exceptions import ArchiveFailure
from diststage.integrations.archive import ArchiveEntry, ArchiveWriter, ZipArchiveWriter


logger = structlog.get_logger(component="site_archiver")

SITE_ARCHIVE_NAME = "site.zip"

SITE_MISSING_MESSAGE = (
    "The site build was not run before this step, or the site directory "
    "{site_directory} does not exist. Build the site first."
)


def enumerate_site(site_root: Path) -> Iterator[Path]:
    """Yield every file and directory under ``site_root``, recursively.

    Depth-first, parent before children. ``site_root`` itself is not
    yielded. Symlinked directories are followed; a directory already walked
    (through another link or a cycle) is yielded but not entered again.

    Raises:
        ArchiveFailure: If a directory cannot be listed.
    """
    site_root = Path(site_root)
    return _walk(site_root, {site_root.resolve()})


def _walk(directory: Path, visited: set[Path]) -> Iterator[Path]:
    try:
        children = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise ArchiveFailure(
            f"Unable to list site directory {directory}: {e}",
            site_directory=directory,
            error_code="SITE_UNREADABLE",
        ) from e

    for child in children:
        yield child
        if not child.is_dir():
            continue
        real = child.resolve()
        if real in visited:
            continue
        visited.add(real)
        yield from _walk(child, visited)


def archive_name(site_root: Path, entry: Path) -> str:
    """The name ``entry`` is stored under: relative to the root, posix style."""
    return Path(os.path.relpath(entry, site_root)).as_posix()


def archive_site(
    site_root: Path,
    output_file: Path,
    entries: Optional[Iterable[Path]] = None,
    writer: Optional[ArchiveWriter] = None,
) -> Path:
    """Write the non-directory ``entries`` into one archive at ``output_file``.

    Args:
        site_root: The site directory; entry names are relative to it.
        output_file: The archive to create.
        entries: Paths under ``site_root``, normally ``enumerate_site()``
            output. Enumerated on the spot when None.
        writer: The archive writer. Defaults to ZipArchiveWriter.

    Returns:
        The archive path.

    Raises:
        ArchiveFailure: If the site root is missing, or an entry cannot be
            read or the archive cannot be written.
    """
    site_root = Path(site_root)
    output_file = Path(output_file)

    if not site_root.is_dir():
        message = SITE_MISSING_MESSAGE.format(site_directory=site_root)
        logger.error("site_directory_missing", site_directory=str(site_root))
        raise ArchiveFailure(message, site_directory=site_root, error_code="SITE_MISSING")

    if entries is None:
        entries = enumerate_site(site_root)

    archive_entries: list[ArchiveEntry] = [
        (entry, archive_name(site_root, entry))
        for entry in entries
        if not entry.is_dir()
    ]

    writer = writer or ZipArchiveWriter()
    try:
        writer.create_archive(site_root, output_file, archive_entries)
    except (OSError, ValueError) as e:
        message = f"Failed to create {output_file}: {e}"
        logger.error("site_archive_failed", output_file=str(output_file), error=str(e))
        raise ArchiveFailure(
            message,
            site_directory=site_root,
            error_code="ARCHIVE_WRITE_FAILED",
            details={"output_file": str(output_file)},
        ) from e

    logger.info(
        "site_archived",
        site_directory=str(site_root),
        output_file=str(output_file),
        file_count=len(archive_entries),
    )
    return output_file

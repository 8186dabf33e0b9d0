"""
diststage.infrastructure.path_ops - Directory and File Helpers
================================================================

The only place diststage mutates the filesystem directly (besides the
archive writer and the SCM backend). Every OSError is translated into an
IOFailure carrying the offending path(s), logged once, and raised with the
original error chained as ``__cause__``.

Operations:
    reset_directory(path)   Delete (if present) and recreate, empty.
    ensure_directory(path)  Create only if absent; existing content is kept.
    copy_file(src, dst)     Byte-for-byte copy, parents created, overwrite.
    write_text(path, text)  UTF-8 text file, parents created, overwrite.

Usage:
    >>> reset_directory(checkout / "source")
    >>> copy_file(build / "foo-1.0-src.zip", checkout / "source" / "foo-1.0-src.zip")
"""

from __future__ import annotations

import shutil
from pathlib import Path

import structlog

from diststage.core.exceptions import IOFailure


logger = structlog.get_logger(component="path_ops")


def reset_directory(path: Path) -> None:
    """Make ``path`` an existing, empty directory.

    Deletes the directory recursively when it exists, then creates it with
    its parents. Calling it twice in a row is fine: the second call just
    recreates an empty directory again.

    Args:
        path: The directory to reset.

    Raises:
        IOFailure: If deletion or creation fails, or the directory is still
            missing after creation.
    """
    path = Path(path)
    if path.exists():
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as e:
            message = f"Unable to remove directory {path}: {e}"
            logger.error("directory_remove_failed", path=str(path), error=str(e))
            raise IOFailure(message, paths=[path], error_code="DIRECTORY_REMOVE_FAILED") from e

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        message = f"Unable to create directory {path}: {e}"
        logger.error("directory_create_failed", path=str(path), error=str(e))
        raise IOFailure(message, paths=[path], error_code="DIRECTORY_CREATE_FAILED") from e

    if not path.is_dir():
        message = f"Unable to create directory {path}: directory missing after creation"
        logger.error("directory_create_failed", path=str(path))
        raise IOFailure(message, paths=[path], error_code="DIRECTORY_CREATE_FAILED")

    logger.debug("directory_reset", path=str(path))


def ensure_directory(path: Path) -> None:
    """Create ``path`` (and parents) only when it does not exist yet.

    Used for checkout directories, which are kept between runs so that
    checkouts can be incremental.

    Raises:
        IOFailure: If the directory cannot be created.
    """
    path = Path(path)
    if path.is_dir():
        return
    reset_directory(path)


def copy_file(source: Path, destination: Path) -> Path:
    """Copy ``source`` to ``destination`` byte for byte.

    Parent directories of the destination are created as needed, and an
    existing destination is overwritten without any check.

    Args:
        source: File to copy.
        destination: Target file path (not a directory).

    Returns:
        The destination path.

    Raises:
        IOFailure: Carrying both paths if anything goes wrong.
    """
    source = Path(source)
    destination = Path(destination)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)
    except OSError as e:
        message = f"Unable to copy file {source} to {destination}: {e}"
        logger.error(
            "file_copy_failed",
            source=str(source),
            destination=str(destination),
            error=str(e),
        )
        raise IOFailure(
            message,
            paths=[source, destination],
            error_code="COPY_FAILED",
        ) from e

    logger.debug("file_copied", source=str(source), destination=str(destination))
    return destination


def write_text(path: Path, text: str) -> Path:
    """Write ``text`` to ``path`` as UTF-8, replacing any existing file."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        message = f"Unable to write file {path}: {e}"
        logger.error("file_write_failed", path=str(path), error=str(e))
        raise IOFailure(message, paths=[path], error_code="WRITE_FAILED") from e

    logger.debug("file_written", path=str(path), length=len(text))
    return path

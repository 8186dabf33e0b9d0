"""
diststage.core.exceptions - Custom Exception Hierarchy
========================================================

This module defines the structured exception hierarchy for diststage.
Every failure that should stop a run is raised as one of these types at
the point of detection and propagates to the caller untouched; nothing is
retried and nothing already copied or added is rolled back.

Exception Hierarchy:
    StagingError (base)
        ├── ConfigurationError  - Invalid config, malformed SCM URL, missing value
        ├── IOFailure           - Directory reset or file copy failed
        ├── ArchiveFailure      - Site directory missing or unreadable
        └── VcsFailure          - Checkout, add or commit failed

Not an exception:
    A run whose gating conditions are unmet (not a distribution module,
    no staging URL, no build output) returns a PreconditionSkip value
    instead; see diststage.core.models.

Usage:
    >>> from diststage.core.exceptions import IOFailure
    >>> raise IOFailure(
    ...     message="Unable to copy file a.zip to b.zip: disk full",
    ...     paths=[Path("a.zip"), Path("b.zip")],
    ... )
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Sequence


# =============================================================================
# Base Exception
# =============================================================================
class StagingError(Exception):
    """Base exception for all diststage errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code. Convention: UPPER_SNAKE_CASE
            (e.g., "COPY_FAILED", "COMMIT_FAILED").
        details: Additional debugging context (paths, URLs, command output).
    """

    def __init__(
        self,
        message: str,
        error_code: str = "STAGING_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)

        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize this exception to a dictionary (for structured logging).

        Returns:
            Dictionary with error_type, message, error_code, and details.
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


# =============================================================================
# Configuration Error
# =============================================================================
class ConfigurationError(StagingError):
    """Raised when configuration is invalid or missing.

    Common Causes:
        - Malformed YAML configuration file
        - SCM URL not of the form ``scm:<provider>:<url>``
        - Unsupported SCM provider
        - Release URL missing when promoting
    """

    def __init__(
        self,
        message: str,
        error_code: str = "CONFIG_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


# =============================================================================
# I/O Failure
# =============================================================================
class IOFailure(StagingError):
    """Raised when a directory reset or a file copy fails.

    Always raised with ``from`` so the underlying OSError stays attached as
    ``__cause__``.

    Attributes:
        paths: The offending path(s): one for a directory reset, the source
            and destination for a copy.
    """

    def __init__(
        self,
        message: str,
        paths: Sequence[Path],
        error_code: str = "IO_FAILURE",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        enriched_details = details or {}
        enriched_details["paths"] = [str(p) for p in paths]

        super().__init__(message=message, error_code=error_code, details=enriched_details)

        self.paths = list(paths)


# =============================================================================
# Archive Failure
# =============================================================================
class ArchiveFailure(StagingError):
    """Raised when the site cannot be archived.

    Either the site directory is missing (the site build has not run) or an
    entry could not be read or written.
    """

    def __init__(
        self,
        message: str,
        site_directory: Optional[Path] = None,
        error_code: str = "ARCHIVE_FAILURE",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        enriched_details = details or {}
        if site_directory is not None:
            enriched_details["site_directory"] = str(site_directory)

        super().__init__(message=message, error_code=error_code, details=enriched_details)

        self.site_directory = site_directory


# =============================================================================
# VCS Failure
# =============================================================================
class VcsFailure(StagingError):
    """Raised when a checkout, add or commit against the SCM fails.

    A commit failure after a successful add leaves the working copy with
    staged-but-uncommitted changes; ``command_output`` holds the backend's
    raw output so the operator can inspect it.

    Attributes:
        command_output: Verbatim output of the failing SCM command.
    """

    def __init__(
        self,
        message: str,
        command_output: str = "",
        error_code: str = "VCS_FAILURE",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        enriched_details = details or {}
        enriched_details["command_output"] = command_output

        super().__init__(message=message, error_code=error_code, details=enriched_details)

        self.command_output = command_output

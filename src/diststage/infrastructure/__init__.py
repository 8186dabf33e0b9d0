"""
diststage.infrastructure - Filesystem Layer
=============================================

Directory lifecycle, guarded copies and site archiving. Everything here
translates OSError into the diststage exception hierarchy.

    ┌─────────────── ORCHESTRATION LAYER ─────────────────┐
    │  DistributionStager, workflows                       │
    └─────────────────────┬───────────────────────────────┘
                          │ reset / copy / archive
                          ▼
    ┌─────────────── INFRASTRUCTURE LAYER ────────────────┐
    │  path_ops:      reset_directory, ensure_directory,   │
    │                 copy_file, write_text                │
    │  site_archiver: enumerate_site, archive_site         │
    └──────────────────────────────────────────────────────┘
"""

from diststage.infrastructure.path_ops import (
    copy_file,
    ensure_directory,
    reset_directory,
    write_text,
)
from diststage.infrastructure.site_archiver import (
    SITE_ARCHIVE_NAME,
    archive_name,
    archive_site,
    enumerate_site,
)

__all__ = [
    "reset_directory",
    "ensure_directory",
    "copy_file",
    "write_text",
    "enumerate_site",
    "archive_site",
    "archive_name",
    "SITE_ARCHIVE_NAME",
]

"""
diststage.orchestration.site_compression - Site Archive Creation
==================================================================

The ``compress-site`` workflow: zip the built site into
``<working_directory>/site.zip``. A later ``stage-distributions`` run picks
the archive up from the build-output directory and places it at the root
of the staging checkout.

Unlike the SCM workflows this one has no gates. A missing site directory
is an operator error (the site build has not run) and fails.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import structlog

from diststage.core.config import StagingConfig
from diststage.core.exceptions import ArchiveFailure
from diststage.infrastructure.path_ops import ensure_directory
from diststage.infrastructure.site_archiver import (
    SITE_ARCHIVE_NAME,
    SITE_MISSING_MESSAGE,
    archive_site,
    enumerate_site,
)
from diststage.integrations.archive import ArchiveWriter


logger = structlog.get_logger()


class SiteCompressionWorkflow:
    """Archives the built site into the build-output directory."""

    def __init__(
        self,
        config: StagingConfig,
        archive_writer: Optional[ArchiveWriter] = None,
    ) -> None:
        self._config = config
        self._archive_writer = archive_writer
        self._logger = logger.bind(component="site_compression_workflow")

    @property
    def output_file(self) -> Path:
        return self._config.working_directory / SITE_ARCHIVE_NAME

    def run(self) -> Path:
        """Create the site archive and return its path.

        Raises:
            ArchiveFailure: If the site directory is missing or the archive
                cannot be written.
            IOFailure: If the working directory cannot be created.
        """
        site_directory = self._config.site_directory
        if not site_directory.exists():
            message = SITE_MISSING_MESSAGE.format(site_directory=site_directory)
            self._logger.error("site_directory_missing", site_directory=str(site_directory))
            raise ArchiveFailure(message, site_directory=site_directory, error_code="SITE_MISSING")

        ensure_directory(self._config.working_directory)
        self._logger.info(
            "compressing_site",
            site_directory=str(site_directory),
            output_file=str(self.output_file),
        )
        return archive_site(
            site_directory,
            self.output_file,
            entries=enumerate_site(site_directory),
            writer=self._archive_writer,
        )

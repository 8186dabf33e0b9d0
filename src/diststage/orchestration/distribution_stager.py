"""
diststage.orchestration.distribution_stager - Distribution Staging
====================================================================

Lays the built distributions out inside a checked-out staging area and
works out which files the SCM has to add and commit.

Resulting layout of the checkout directory:

    <checkout>/
        ├── RELEASE-NOTES.txt
        ├── site.zip
        ├── HEADER.html
        ├── README.html
        ├── <other root artifacts>
        ├── source/
        │     ├── foo-1.0-src.tar.gz
        │     ├── HEADER.html          (copy of the root page)
        │     └── README.html          (copy of the root page)
        └── binaries/
              ├── foo-1.0-bin.zip
              ├── HEADER.html          (copy of the root page)
              └── README.html          (copy of the root page)

The pages are copied rather than linked because the target repository may
not keep symbolic links.

Phases (one run per instance):

    INIT
      │  reset source/ and binaries/
      ▼
    DIRECTORIES_PREPARED
      │  classify build output, copy source/binary/root files,
      │  site archive and release notes
      ▼
    CLASSIFIED_AND_COPIED
      │  render HEADER.html and README.html, fan them out
      ▼
    DOCS_GENERATED
      │  collect commit candidates
      ▼
    PLAN_FINALIZED

A failure in any phase propagates at once and leaves ``phase`` at the last
completed one. Nothing is retried or rolled back; the caller starts a new
run with a new stager, and the directory reset makes that safe.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import structlog

from diststage.core.config import ProjectConfig, StagingConfig
from diststage.core.enums import ArtifactKind, StagingPhase
from diststage.core.exceptions import StagingError
from diststage.core.models import ArtifactFile, StagingPlan
from diststage.infrastructure.path_ops import copy_file, reset_directory, write_text
from diststage.infrastructure.site_archiver import SITE_ARCHIVE_NAME
from diststage.integrations.templates.base import (
    HEADER_TEMPLATE,
    README_TEMPLATE,
    BaseTemplateRenderer,
)
from diststage.integrations.templates.renderer import PackageTemplateRenderer
from diststage.orchestration.classifier import classify_directory


logger = structlog.get_logger()

SOURCE_DIRECTORY = "source"
BINARIES_DIRECTORY = "binaries"
HEADER_FILE = "HEADER.html"
README_FILE = "README.html"


class DistributionStager:
    """Copies one build's distributions into a staging checkout.

    Attributes:
        _checkout_directory: Root of the checked-out staging area.
        _build_output_directory: Directory holding the built distributions.
        _release_notes_file: Release notes copied to the checkout root.
        _project: Coordinates used to render README.html.
        _renderer: Renders the HEADER and README pages.
        _phase: The last completed phase.
        _started: Whether run() was called before.
        _plan: The plan being built; returned by run().

    Example:
        >>> stager = DistributionStager.from_config(config)
        >>> plan = stager.run()
        >>> plan.files_to_commit[0]
        PosixPath('target/commons-release-plugin/scm/source/foo-1.0-src.zip')
    """

    def __init__(
        self,
        checkout_directory: Path,
        build_output_directory: Path,
        release_notes_file: Path,
        project: ProjectConfig,
        renderer: Optional[BaseTemplateRenderer] = None,
    ) -> None:
        self._checkout_directory = Path(checkout_directory)
        self._build_output_directory = Path(build_output_directory)
        self._release_notes_file = Path(release_notes_file)
        self._project = project
        self._renderer = renderer or PackageTemplateRenderer()
        self._phase = StagingPhase.INIT
        self._started = False
        self._plan = StagingPlan(checkout_directory=self._checkout_directory)
        self._logger = logger.bind(
            component="distribution_stager",
            checkout_directory=str(self._checkout_directory),
        )

    @classmethod
    def from_config(
        cls,
        config: StagingConfig,
        checkout_directory: Optional[Path] = None,
        renderer: Optional[BaseTemplateRenderer] = None,
    ) -> DistributionStager:
        """Build a stager from the run configuration.

        ``checkout_directory`` defaults to ``config.dist_checkout_directory``.
        """
        return cls(
            checkout_directory=checkout_directory or config.dist_checkout_directory,
            build_output_directory=config.working_directory,
            release_notes_file=config.release_notes_file,
            project=config.project,
            renderer=renderer,
        )

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def phase(self) -> StagingPhase:
        """The last phase this stager completed."""
        return self._phase

    @property
    def checkout_directory(self) -> Path:
        return self._checkout_directory

    @property
    def source_directory(self) -> Path:
        return self._checkout_directory / SOURCE_DIRECTORY

    @property
    def binaries_directory(self) -> Path:
        return self._checkout_directory / BINARIES_DIRECTORY

    # =========================================================================
    # Run
    # =========================================================================

    def run(self) -> StagingPlan:
        """Execute every phase and return the finalized plan.

        Raises:
            StagingError: If this stager already ran (or started to).
            IOFailure: If a reset, copy or write fails.
            ConfigurationError: If a page template cannot be rendered.
        """
        if self._started:
            raise StagingError(
                message=(
                    f"DistributionStager already ran (phase: {self._phase.value}); "
                    "create a new stager for another run"
                ),
                error_code="STAGER_ALREADY_RUN",
                details={"phase": self._phase.value},
            )
        self._started = True

        self._logger.info(
            "staging_started",
            build_output_directory=str(self._build_output_directory),
        )

        self._prepare_directories()
        self._advance(StagingPhase.DIRECTORIES_PREPARED)

        artifact_files, site_files, release_notes = self._copy_artifacts()
        self._advance(StagingPhase.CLASSIFIED_AND_COPIED)

        doc_files = self._generate_docs()
        self._advance(StagingPhase.DOCS_GENERATED)

        for path in [*artifact_files, *site_files, *doc_files, release_notes]:
            self._plan.add_file(path)
        self._advance(StagingPhase.PLAN_FINALIZED)

        self._logger.info(
            "staging_complete",
            copies=len(self._plan.copies),
            files_to_commit=len(self._plan.files_to_commit),
        )
        return self._plan

    # =========================================================================
    # Phases
    # =========================================================================

    def _prepare_directories(self) -> None:
        reset_directory(self.binaries_directory)
        reset_directory(self.source_directory)

    def _copy_artifacts(self) -> tuple[list[Path], list[Path], Path]:
        """Copy the classified build output, the site archive and the release notes.

        Returns:
            (copied artifacts, copied site files, copied release notes).
        """
        artifact_files: list[Path] = []
        site_files: list[Path] = []
        site_archives: list[ArtifactFile] = []

        for artifact in classify_directory(self._build_output_directory):
            if artifact.kind is ArtifactKind.METADATA_EXCLUDED:
                self._logger.debug("artifact_skipped", file=artifact.name, kind=artifact.kind.value)
                continue
            if artifact.kind is ArtifactKind.ROOT and artifact.name == SITE_ARCHIVE_NAME:
                site_archives.append(artifact)
                continue
            artifact_files.append(self._copy(artifact.path, self._destination_for(artifact)))

        for artifact in site_archives:
            site_files.append(self._copy(artifact.path, self._checkout_directory / artifact.name))

        self._logger.info("copying_release_notes", release_notes_file=str(self._release_notes_file))
        release_notes = self._copy(
            self._release_notes_file,
            self._checkout_directory / self._release_notes_file.name,
        )
        return artifact_files, site_files, release_notes

    def _generate_docs(self) -> list[Path]:
        """Render the root pages, then fan them out to source/ and binaries/."""
        header = write_text(
            self._checkout_directory / HEADER_FILE,
            self._renderer.render(HEADER_TEMPLATE),
        )
        readme = write_text(
            self._checkout_directory / README_FILE,
            self._renderer.render(
                README_TEMPLATE,
                {
                    "artifact_id": self._project.artifact_id,
                    "version": self._project.version,
                    "site_url": self._project.url,
                },
            ),
        )

        doc_files = [header, readme]
        for subtree in (self.source_directory, self.binaries_directory):
            doc_files.append(self._copy(header, subtree / HEADER_FILE))
            doc_files.append(self._copy(readme, subtree / README_FILE))
        return doc_files

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _destination_for(self, artifact: ArtifactFile) -> Path:
        if artifact.kind is ArtifactKind.SOURCE:
            return self.source_directory / artifact.name
        if artifact.kind is ArtifactKind.BINARY:
            return self.binaries_directory / artifact.name
        return self._checkout_directory / artifact.name

    def _copy(self, source: Path, destination: Path) -> Path:
        copy_file(source, destination)
        self._plan.record_copy(source, destination)
        return destination

    def _advance(self, phase: StagingPhase) -> None:
        self._logger.debug("staging_phase_completed", phase=phase.value)
        self._phase = phase

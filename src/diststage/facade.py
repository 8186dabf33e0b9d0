"""
diststage.facade - DistStage Top-Level Facade
===============================================

The single entry point tying configuration and collaborators to the three
workflows. The CLI is a thin layer over this class.

Architecture Context:

    ┌──────────────────────────────────────────────────┐
    │                DistStage (Facade)                 │
    │                                                   │
    │  ┌─────────────────────────────────────────────┐ │
    │  │         Orchestration Layer                  │ │
    │  │  ReleaseCommitWorkflow, PromotionWorkflow,   │ │
    │  │  SiteCompressionWorkflow, DistributionStager │ │
    │  └─────────────────────┬───────────────────────┘ │
    │                        │                          │
    │  ┌─────────────────────▼───────────────────────┐ │
    │  │         Infrastructure Layer                 │ │
    │  │  path_ops, site_archiver                     │ │
    │  └─────────────────────┬───────────────────────┘ │
    │                        │                          │
    │  ┌─────────────────────▼───────────────────────┐ │
    │  │         Integration Layer                    │ │
    │  │  SCM providers, archive writer, templates    │ │
    │  └─────────────────────────────────────────────┘ │
    └──────────────────────────────────────────────────┘

Usage:
    >>> from diststage import DistStage
    >>> from diststage.core.config import load_config
    >>>
    >>> stage = DistStage(load_config("diststage.yaml"))
    >>> stage.compress_site()
    >>> outcome = stage.stage_distributions()
    >>> outcome.status, outcome.revision
    (<OutcomeStatus.COMMITTED: 'committed'>, '1234')
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import structlog

from diststage.core.config import StagingConfig
from diststage.core.models import WorkflowOutcome
from diststage.integrations.archive import ArchiveWriter
from diststage.integrations.scm.base import BaseScmProvider
from diststage.integrations.templates.base import BaseTemplateRenderer
from diststage.orchestration.promotion import PromotionWorkflow
from diststage.orchestration.release_commit import ReleaseCommitWorkflow
from diststage.orchestration.site_compression import SiteCompressionWorkflow


logger = structlog.get_logger()


class DistStage:
    """Top-level facade for staging release distributions.

    Each call builds a fresh workflow from the shared configuration and
    collaborators, so one DistStage can run several commands in sequence
    (typically ``compress_site()`` then ``stage_distributions()``).

    Attributes:
        _config: The run configuration.
        _scm_provider: Provider override for the staging location. Built
            from the staging URL when None.
        _release_scm_provider: Provider override for the release location
            (promotion only). Built from the release URL when None.
        _renderer: Page renderer for HEADER.html / README.html.
        _archive_writer: Writer used by compress_site().
    """

    def __init__(
        self,
        config: Optional[StagingConfig] = None,
        *,
        scm_provider: Optional[BaseScmProvider] = None,
        release_scm_provider: Optional[BaseScmProvider] = None,
        renderer: Optional[BaseTemplateRenderer] = None,
        archive_writer: Optional[ArchiveWriter] = None,
    ) -> None:
        """Initialize the facade.

        Args:
            config: Run configuration. Defaults to StagingConfig(), which
                reads DISTSTAGE_* environment variables.
            scm_provider: Optional SCM provider for the staging location.
            release_scm_provider: Optional SCM provider for the release
                location.
            renderer: Optional page renderer. Defaults to the packaged
                templates.
            archive_writer: Optional archive writer. Defaults to zip.
        """
        self._config = config or StagingConfig()
        self._scm_provider = scm_provider
        self._release_scm_provider = release_scm_provider
        self._renderer = renderer
        self._archive_writer = archive_writer
        self._logger = logger.bind(component="diststage")

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def config(self) -> StagingConfig:
        """Access the configuration."""
        return self._config

    # =========================================================================
    # Commands
    # =========================================================================

    def stage_distributions(self) -> WorkflowOutcome:
        """Check out the staging area, stage the distributions, commit them.

        Returns:
            The workflow outcome (SKIPPED, DRY_RUN or COMMITTED).
        """
        self._logger.debug("command_started", command="stage-distributions")
        workflow = ReleaseCommitWorkflow(
            self._config,
            scm_provider=self._scm_provider,
            renderer=self._renderer,
        )
        return workflow.run()

    def promote(self) -> WorkflowOutcome:
        """Check out the staging and release areas.

        Returns:
            The workflow outcome (SKIPPED or CHECKED_OUT).
        """
        self._logger.debug("command_started", command="promote")
        workflow = PromotionWorkflow(
            self._config,
            staging_provider=self._scm_provider,
            release_provider=self._release_scm_provider,
        )
        return workflow.run()

    def compress_site(self) -> Path:
        """Zip the built site into the build-output directory.

        Returns:
            Path of the created site archive.
        """
        self._logger.debug("command_started", command="compress-site")
        workflow = SiteCompressionWorkflow(self._config, archive_writer=self._archive_writer)
        return workflow.run()

    def __repr__(self) -> str:
        return (
            f"DistStage(dist_module={self._config.is_dist_module}, "
            f"dry_run={self._config.dry_run})"
        )

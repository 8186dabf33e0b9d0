"""
diststage.orchestration.promotion - Staging to Release Promotion
==================================================================

The ``promote`` workflow checks out both ends of a promotion: the staging
area that received the distributions and the release area they will move
to. Each location gets its own repository handle, provider and checkout
directory; nothing is shared between the two.

    staging URL ──→ ScmRepository ──→ provider ──→ dist-staging-scm/
    release URL ──→ ScmRepository ──→ provider ──→ dist-release-scm/

Moving the accepted artifacts between the two checkouts is not done here;
the workflow ends with both working copies ready.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import structlog

from diststage.core.config import StagingConfig
from diststage.core.enums import OutcomeStatus
from diststage.core.exceptions import ConfigurationError, VcsFailure
from diststage.core.models import ScmRepository, WorkflowOutcome, WorkingCopy
from diststage.infrastructure.path_ops import ensure_directory
from diststage.integrations.scm.base import BaseScmProvider
from diststage.integrations.scm.factory import create_scm_provider
from diststage.integrations.scm.svn import redact_url
from diststage.orchestration.preconditions import check_preconditions


logger = structlog.get_logger()


class PromotionWorkflow:
    """Checks out the staging and release areas side by side.

    Attributes:
        _config: The run configuration.
        _staging_provider: Provider override for the staging location.
        _release_provider: Provider override for the release location.
    """

    def __init__(
        self,
        config: StagingConfig,
        staging_provider: Optional[BaseScmProvider] = None,
        release_provider: Optional[BaseScmProvider] = None,
    ) -> None:
        self._config = config
        self._staging_provider = staging_provider
        self._release_provider = release_provider
        self._logger = logger.bind(component="promotion_workflow")

    def run(self) -> WorkflowOutcome:
        """Check out both locations.

        Returns:
            SKIPPED when a precondition is unmet, otherwise CHECKED_OUT with
            the staging working copy followed by the release one.

        Raises:
            ConfigurationError: If the release URL is unset, or either URL
                or provider is invalid.
            IOFailure: If a checkout directory cannot be created.
            VcsFailure: If either checkout fails.
        """
        config = self._config
        skip = check_preconditions(config)
        if skip is not None:
            return WorkflowOutcome.skipped(skip)

        if not config.dist_svn_release_url:
            raise ConfigurationError(
                message="The release URL (dist_svn_release_url) must be set to promote distributions",
                error_code="RELEASE_URL_UNSET",
            )

        self._logger.info(
            "promotion_started",
            staging_url=redact_url(config.dist_svn_staging_url),
            release_url=redact_url(config.dist_svn_release_url),
        )

        staging_copy = self._checkout(
            config.dist_svn_staging_url,
            config.dist_staging_checkout_directory,
            self._staging_provider,
        )
        release_copy = self._checkout(
            config.dist_svn_release_url,
            config.dist_release_checkout_directory,
            self._release_provider,
        )

        self._logger.info(
            "promotion_checked_out",
            staging_directory=str(staging_copy.directory),
            release_directory=str(release_copy.directory),
        )
        return WorkflowOutcome(
            status=OutcomeStatus.CHECKED_OUT,
            working_copies=[staging_copy, release_copy],
        )

    def _checkout(
        self,
        scm_url: str,
        directory: Path,
        provider: Optional[BaseScmProvider],
    ) -> WorkingCopy:
        credentials = self._config.credentials
        repository = ScmRepository.from_scm_url(
            scm_url,
            username=credentials.username,
            password=credentials.password,
        )
        provider = provider or create_scm_provider(repository)

        ensure_directory(directory)
        try:
            return provider.checkout(repository, directory)
        except VcsFailure as e:
            e.details["scm_url"] = redact_url(scm_url)
            self._logger.error("checkout_failed", scm_url=redact_url(scm_url), error=e.message)
            raise

"""
diststage.orchestration.release_commit - Stage and Commit Distributions
=========================================================================

The ``stage-distributions`` workflow: check out the staging area, lay the
build's distributions out in it, then add and commit them in one change.

Flow:

    check_preconditions ──skip──→ WorkflowOutcome(SKIPPED)
            │
            ▼
    ScmRepository.from_scm_url(staging URL) + credentials
            │
            ▼
    ensure checkout dir ──→ provider.checkout ──→ DistributionStager.run
                                                        │
                             ┌──────── dry run ─────────┤
                             ▼                          ▼
                  log would_commit            provider.add ──fail──→ VcsFailure
                  WorkflowOutcome(DRY_RUN)          │
                                              provider.commit ──fail──→ VcsFailure
                                                    │
                                              WorkflowOutcome(COMMITTED)

The checkout happens in dry-run mode too, so connectivity and
configuration problems show up before a real run. Re-running after a
successful commit stages the same content again and attempts another
commit; avoiding that is up to the caller.
"""

from __future__ import annotations

from typing import Optional

import structlog

from diststage.core.config import StagingConfig
from diststage.core.enums import OutcomeStatus
from diststage.core.exceptions import VcsFailure
from diststage.core.models import CommitRequest, ScmRepository, WorkflowOutcome
from diststage.infrastructure.path_ops import ensure_directory
from diststage.integrations.scm.base import BaseScmProvider
from diststage.integrations.scm.factory import create_scm_provider
from diststage.integrations.scm.svn import redact_url
from diststage.integrations.templates.base import BaseTemplateRenderer
from diststage.orchestration.distribution_stager import DistributionStager
from diststage.orchestration.preconditions import check_preconditions


logger = structlog.get_logger()


class ReleaseCommitWorkflow:
    """Stages the distributions of one build and commits them.

    Attributes:
        _config: The run configuration.
        _scm_provider: Provider override; built from the staging URL if None.
        _renderer: Page renderer handed to the DistributionStager.
    """

    def __init__(
        self,
        config: StagingConfig,
        scm_provider: Optional[BaseScmProvider] = None,
        renderer: Optional[BaseTemplateRenderer] = None,
    ) -> None:
        self._config = config
        self._scm_provider = scm_provider
        self._renderer = renderer
        self._logger = logger.bind(component="release_commit_workflow")

    def run(self) -> WorkflowOutcome:
        """Run the workflow.

        Returns:
            SKIPPED when a precondition is unmet, DRY_RUN when staging ran
            without a commit, COMMITTED with the new revision otherwise.

        Raises:
            ConfigurationError: If the staging URL or provider is invalid.
            IOFailure: If staging the files fails.
            VcsFailure: If the checkout, the add or the commit fails.
        """
        config = self._config
        skip = check_preconditions(config)
        if skip is not None:
            return WorkflowOutcome.skipped(skip)

        staging_url = redact_url(config.dist_svn_staging_url)
        self._logger.info("staging_distributions", staging_url=staging_url)

        repository = ScmRepository.from_scm_url(
            config.dist_svn_staging_url,
            username=config.credentials.username,
            password=config.credentials.password,
        )
        provider = self._scm_provider or create_scm_provider(repository)

        ensure_directory(config.dist_checkout_directory)
        try:
            working_copy = provider.checkout(repository, config.dist_checkout_directory)
        except VcsFailure as e:
            e.details["staging_url"] = staging_url
            self._logger.error("checkout_failed", staging_url=staging_url, error=e.message)
            raise

        stager = DistributionStager.from_config(
            config,
            checkout_directory=working_copy.directory,
            renderer=self._renderer,
        )
        plan = stager.run()
        message = config.commit_message

        if config.dry_run:
            self._logger.info(
                "would_commit",
                staging_url=staging_url,
                message=message,
                artifact_id=config.project.artifact_id,
                version=config.project.version,
                file_count=len(plan.files_to_commit),
            )
            return WorkflowOutcome(
                status=OutcomeStatus.DRY_RUN,
                plan=plan,
                commit_message=message,
                working_copies=[working_copy],
            )

        request = CommitRequest(
            working_copy=working_copy,
            files=plan.files_to_commit,
            message=message,
        )

        add_result = provider.add(request.working_copy, request.files, request.message)
        if not add_result.success:
            self._logger.error("add_failed", command_output=add_result.command_output)
            raise VcsFailure(
                f"Adding dist files failed: {add_result.command_output}",
                command_output=add_result.command_output,
                error_code="ADD_FAILED",
                details={"staging_url": staging_url},
            )
        self._logger.info("files_added", message=message, file_count=len(request.files))

        commit_result = provider.commit(request.working_copy, request.files, request.message)
        if not commit_result.success:
            self._logger.error("commit_failed", command_output=commit_result.command_output)
            raise VcsFailure(
                f"Committing dist files failed: {commit_result.command_output}",
                command_output=commit_result.command_output,
                error_code="COMMIT_FAILED",
                details={"staging_url": staging_url},
            )

        self._logger.info("committed_revision", revision=commit_result.revision)
        return WorkflowOutcome(
            status=OutcomeStatus.COMMITTED,
            plan=plan,
            commit_message=message,
            revision=commit_result.revision,
            working_copies=[working_copy],
        )

"""
diststage.core.models - Core Data Models
==========================================

Pydantic models that flow between the layers of diststage.

Model Overview:
    ArtifactFile     → A build-output file and its bucket (classifier output)
    CopyOperation    → One (source, destination) pair of the staging plan
    StagingPlan      → Everything a staging run copied, plus what to commit
    ScmRepository    → A parsed ``scm:<provider>:<url>`` location + credentials
    WorkingCopy      → A local checkout bound to a repository
    ScmResult        → What the SCM backend reported for add/commit
    CommitRequest    → Working copy + files + message submitted to the SCM
    PreconditionSkip → Why a run was a clean no-op (not an error)
    WorkflowOutcome  → What a workflow run returned

Data Flow:
    build output ──classify──→ [ArtifactFile] ──copy──→ StagingPlan
                                                            │
    ScmRepository ──checkout──→ WorkingCopy ──┐             │
                                              ▼             ▼
                                         CommitRequest (files_to_commit)
                                              │
                                              ▼
                                   ScmResult ──→ WorkflowOutcome
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from diststage.core.enums import ArtifactKind, OutcomeStatus, SkipReason
from diststage.core.exceptions import ConfigurationError


# =============================================================================
# Classification
# =============================================================================
class ArtifactFile(BaseModel):
    """A file from the build-output directory with its classification.

    Identity is the path; the kind is a pure function of the file name and
    never changes once assigned. Instances are created fresh on every run.

    Attributes:
        path: Location of the file in the build-output directory.
        kind: The bucket the file was assigned to.
    """

    model_config = ConfigDict(frozen=True)

    path: Path = Field(description="Path of the file in the build-output directory")
    kind: ArtifactKind = Field(description="Destination bucket of the file")

    @property
    def name(self) -> str:
        """The file name the classification was derived from."""
        return self.path.name


# =============================================================================
# Staging Plan
# =============================================================================
class CopyOperation(BaseModel):
    """A single copy performed while staging."""

    model_config = ConfigDict(frozen=True)

    source: Path
    destination: Path


class StagingPlan(BaseModel):
    """The result of one DistributionStager run.

    ``files_to_commit`` behaves like an insertion-ordered set: adding a path
    twice keeps its first position. The order is part of the contract
    because it shows up in commit logs.

    Attributes:
        checkout_directory: Root of the checked-out staging area.
        copies: Every copy performed, in execution order.
        files_to_commit: Paths handed to the SCM add/commit.
    """

    checkout_directory: Path = Field(
        description="Root of the checked-out staging area",
    )
    copies: list[CopyOperation] = Field(
        default_factory=list,
        description="Copies performed, in execution order",
    )
    files_to_commit: list[Path] = Field(
        default_factory=list,
        description="Insertion-ordered, de-duplicated commit candidates",
    )

    def record_copy(self, source: Path, destination: Path) -> None:
        self.copies.append(CopyOperation(source=source, destination=destination))

    def add_file(self, path: Path) -> None:
        """Append a commit candidate unless it is already present."""
        if path not in self.files_to_commit:
            self.files_to_commit.append(path)


# =============================================================================
# SCM Models
# =============================================================================
class ScmRepository(BaseModel):
    """A remote SCM location plus the credentials used to reach it.

    Built from an SCM URL of the form ``scm:<provider>:<url>``, e.g.
    ``scm:svn:https://dist.apache.org/repos/dist/dev/commons/foo``.

    Attributes:
        provider: The SCM provider id (e.g. "svn").
        url: The provider-specific URL (everything after the provider id).
        username: Injected username, if any.
        password: Injected password, if any. Excluded from repr.
    """

    provider: str = Field(description="SCM provider id, e.g. 'svn'")
    url: str = Field(description="Provider-specific repository URL")
    username: Optional[str] = Field(default=None)
    password: Optional[str] = Field(default=None, repr=False)

    @property
    def scm_url(self) -> str:
        """The full ``scm:<provider>:<url>`` form."""
        return f"scm:{self.provider}:{self.url}"

    @classmethod
    def from_scm_url(
        cls,
        scm_url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> ScmRepository:
        """Parse an ``scm:<provider>:<url>`` string.

        Raises:
            ConfigurationError: If the string is not of that form.
        """
        parts = scm_url.split(":", 2)
        if len(parts) != 3 or parts[0] != "scm" or not parts[1] or not parts[2]:
            raise ConfigurationError(
                message=(
                    f"Invalid SCM URL '{scm_url}': expected the form "
                    f"scm:<provider>:<url>, e.g. scm:svn:https://host/repos/dist/dev/foo"
                ),
                error_code="INVALID_SCM_URL",
                details={"scm_url": scm_url},
            )
        return cls(
            provider=parts[1],
            url=parts[2],
            username=username,
            password=password,
        )


class WorkingCopy(BaseModel):
    """A local checkout of an ScmRepository.

    Owned by the workflow that checked it out; never shared between the
    staging and the release locations. The directory is left in place after
    the run so the next checkout can be incremental.
    """

    repository: ScmRepository
    directory: Path
    revision: Optional[str] = Field(
        default=None,
        description="Revision reported by the checkout, when known",
    )


class ScmResult(BaseModel):
    """Outcome of an add or commit reported by the SCM backend.

    Attributes:
        success: Whether the backend reported success.
        command_output: Raw backend output, kept verbatim for error messages.
        revision: The committed revision (commit only).
    """

    success: bool
    command_output: str = ""
    revision: Optional[str] = None


class CommitRequest(BaseModel):
    """The add-then-commit unit submitted to the SCM backend."""

    working_copy: WorkingCopy
    files: list[Path] = Field(default_factory=list)
    message: str


# =============================================================================
# Workflow Outcomes
# =============================================================================
class PreconditionSkip(BaseModel):
    """A gating condition that made the run a clean no-op."""

    model_config = ConfigDict(frozen=True)

    reason: SkipReason
    message: str


class WorkflowOutcome(BaseModel):
    """What a workflow run returned when it did not raise.

    Attributes:
        status: How the run ended.
        skip: Set when status is SKIPPED.
        plan: The staging plan (staging runs past the gates).
        commit_message: The message used, or that would have been used.
        revision: The committed revision (COMMITTED only).
        working_copies: Checkouts made during the run.
    """

    status: OutcomeStatus
    skip: Optional[PreconditionSkip] = None
    plan: Optional[StagingPlan] = None
    commit_message: Optional[str] = None
    revision: Optional[str] = None
    working_copies: list[WorkingCopy] = Field(default_factory=list)

    @classmethod
    def skipped(cls, skip: PreconditionSkip) -> WorkflowOutcome:
        return cls(status=OutcomeStatus.SKIPPED, skip=skip)

"""
diststage.core - Foundation Layer
=================================

The building blocks every other diststage module depends on:

    - config:      StagingConfig, ProjectConfig, CredentialsConfig, load_config
    - enums:       ArtifactKind, StagingPhase, OutcomeStatus, SkipReason
    - models:      ArtifactFile, StagingPlan, ScmRepository, WorkingCopy, ...
    - exceptions:  StagingError hierarchy
    - logging:     configure_logging (structlog)

Dependency Rule:
    core/ depends on NOTHING else in the diststage package.
    infrastructure/, integrations/ and orchestration/ depend on core/.
"""

from diststage.core.config import (
    CredentialsConfig,
    ProjectConfig,
    StagingConfig,
    load_config,
)
from diststage.core.enums import ArtifactKind, OutcomeStatus, SkipReason, StagingPhase
from diststage.core.exceptions import (
    ArchiveFailure,
    ConfigurationError,
    IOFailure,
    StagingError,
    VcsFailure,
)
from diststage.core.models import (
    ArtifactFile,
    CommitRequest,
    CopyOperation,
    PreconditionSkip,
    ScmRepository,
    ScmResult,
    StagingPlan,
    WorkflowOutcome,
    WorkingCopy,
)

__all__ = [
    # Config
    "StagingConfig",
    "ProjectConfig",
    "CredentialsConfig",
    "load_config",
    # Enums
    "ArtifactKind",
    "StagingPhase",
    "OutcomeStatus",
    "SkipReason",
    # Models
    "ArtifactFile",
    "CopyOperation",
    "StagingPlan",
    "ScmRepository",
    "WorkingCopy",
    "ScmResult",
    "CommitRequest",
    "PreconditionSkip",
    "WorkflowOutcome",
    # Exceptions
    "StagingError",
    "ConfigurationError",
    "IOFailure",
    "ArchiveFailure",
    "VcsFailure",
]

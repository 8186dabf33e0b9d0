"""
diststage.core.enums - Type-Safe Enumerations
===============================================

All enums inherit from both `str` and `Enum`, so they serialize to plain
strings in logs and JSON and compare equal to their values:

    >>> ArtifactKind.SOURCE == "source"
    True

    ┌─────────────────────────────────────────────────────────────────┐
    │  CLASSIFICATION                                                 │
    │    ArtifactKind: Where a built file belongs in the dist tree    │
    ├─────────────────────────────────────────────────────────────────┤
    │  STAGING                                                        │
    │    StagingPhase: DistributionStager's single-run state machine  │
    ├─────────────────────────────────────────────────────────────────┤
    │  WORKFLOWS                                                      │
    │    OutcomeStatus: How a workflow run ended                      │
    │    SkipReason: Which gating condition was unmet                 │
    └─────────────────────────────────────────────────────────────────┘
"""

from enum import Enum


# =============================================================================
# Artifact Kind
# =============================================================================
# The destination bucket of a file found in the build-output directory:
#
#   SOURCE            → <checkout>/source/
#   BINARY            → <checkout>/binaries/
#   METADATA_EXCLUDED → not copied at all
#   ROOT              → <checkout>/
# =============================================================================
class ArtifactKind(str, Enum):
    """Classification tag of a build-output file.

    Assigned by diststage.orchestration.classifier.classify_name(), first
    match wins: SOURCE, BINARY, METADATA_EXCLUDED, then ROOT.
    """

    SOURCE = "source"                       # *src* artifacts
    BINARY = "binary"                       # *bin* artifacts
    METADATA_EXCLUDED = "metadata_excluded"  # scm dir, checksum bookkeeping
    ROOT = "root"                           # everything else (site.zip, notes)


# =============================================================================
# Staging Phase
# =============================================================================
#   INIT → DIRECTORIES_PREPARED → CLASSIFIED_AND_COPIED
#        → DOCS_GENERATED → PLAN_FINALIZED
#
# Transitions only move forward. A failure leaves the stager in the phase
# it had reached; recovery is a fresh run from INIT.
# =============================================================================
class StagingPhase(str, Enum):
    """States of a single DistributionStager run."""

    INIT = "init"
    DIRECTORIES_PREPARED = "directories_prepared"
    CLASSIFIED_AND_COPIED = "classified_and_copied"
    DOCS_GENERATED = "docs_generated"
    PLAN_FINALIZED = "plan_finalized"


class OutcomeStatus(str, Enum):
    """How a workflow run ended (failures are raised, not returned)."""

    SKIPPED = "skipped"         # A precondition was unmet; nothing happened
    DRY_RUN = "dry_run"         # Checked out and staged; add/commit skipped
    COMMITTED = "committed"     # Added and committed to the staging area
    CHECKED_OUT = "checked_out"  # Promotion: both areas checked out


class SkipReason(str, Enum):
    """Business-rule gates that turn a run into a clean no-op."""

    NOT_DIST_MODULE = "not_dist_module"
    STAGING_URL_UNSET = "staging_url_unset"
    NO_DISTRIBUTIONS = "no_distributions"

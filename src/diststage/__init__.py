"""
diststage - Release Distribution Staging
=========================================

Stages a project's built release distributions into a Subversion
distribution repository:

    compress-site       →  stage-distributions          →  promote
    (target/site →        (build output → checkout,       (check out staging
     site.zip)             HEADER/README, add, commit)      and release areas)

Architecture Layers (top to bottom):
    1. Facade / CLI         - DistStage, ``diststage`` console script
    2. Orchestration Layer  - Classifier, DistributionStager, workflows
    3. Infrastructure Layer - Directory reset, guarded copies, site archiving
    4. Integration Layer    - SCM providers, archive writer, page templates

Quick Start:
    >>> from diststage import DistStage
    >>> from diststage.core.config import StagingConfig
    >>> config = StagingConfig(
    ...     is_dist_module=True,
    ...     dist_svn_staging_url="scm:svn:https://dist.apache.org/repos/dist/dev/commons/foo",
    ...     dry_run=True,
    ... )
    >>> DistStage(config).stage_distributions().status
    <OutcomeStatus.DRY_RUN: 'dry_run'>
"""

# =============================================================================
# Package Version
# =============================================================================
# Single source of truth for the package version, referenced by
# pyproject.toml:
#   from diststage import __version__
# =============================================================================
__version__ = "0.1.0"

# =============================================================================
# Package-Level Exports
# =============================================================================
# The DistStage facade is the main entry point. For specific components,
# import from submodules directly:
#   from diststage.core.config import StagingConfig
#   from diststage.orchestration import DistributionStager
# =============================================================================
from diststage.facade import DistStage

__all__ = ["DistStage", "__version__"]

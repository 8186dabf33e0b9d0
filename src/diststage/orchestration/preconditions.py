"""
diststage.orchestration.preconditions - Business-Rule Gates
=============================================================

Every SCM-facing workflow first asks whether there is anything to do at
all. The answers are not failures: a module that is not a distribution
module, or a build without distributions, simply has nothing to stage.

Gates, checked in this order, first unmet one wins:

    ┌────────────────────────┐  no   ┌──────────────────────────────┐
    │ is_dist_module?        │ ────→ │ SKIP NOT_DIST_MODULE (info)  │
    └───────────┬────────────┘       └──────────────────────────────┘
                │ yes
    ┌───────────▼────────────┐  no   ┌──────────────────────────────┐
    │ staging URL set?       │ ────→ │ SKIP STAGING_URL_UNSET (warn)│
    └───────────┬────────────┘       └──────────────────────────────┘
                │ yes
    ┌───────────▼────────────┐  no   ┌──────────────────────────────┐
    │ build output exists?   │ ────→ │ SKIP NO_DISTRIBUTIONS (info) │
    └───────────┬────────────┘       └──────────────────────────────┘
                │ yes
                ▼
              None (proceed)

Checking the gates never touches the filesystem beyond one existence test
and never calls the SCM.
"""

from __future__ import annotations

from typing import Optional

import structlog

from diststage.core.config import StagingConfig
from diststage.core.enums import SkipReason
from diststage.core.models import PreconditionSkip


logger = structlog.get_logger(component="preconditions")


def check_preconditions(config: StagingConfig) -> Optional[PreconditionSkip]:
    """Return the first unmet gate as a PreconditionSkip, or None.

    Args:
        config: The validated run configuration.

    Returns:
        None when the workflow should proceed, otherwise the reason it
        should end as a clean no-op. The skip has already been logged.
    """
    if not config.is_dist_module:
        skip = PreconditionSkip(
            reason=SkipReason.NOT_DIST_MODULE,
            message="Module is not marked as a distribution module; nothing to stage.",
        )
        logger.info("precondition_skip", reason=skip.reason.value, message=skip.message)
        return skip

    if not config.dist_svn_staging_url:
        skip = PreconditionSkip(
            reason=SkipReason.STAGING_URL_UNSET,
            message="The staging URL (dist_svn_staging_url) is not set; nothing will be staged.",
        )
        logger.warning("precondition_skip", reason=skip.reason.value, message=skip.message)
        return skip

    if not config.working_directory.exists():
        skip = PreconditionSkip(
            reason=SkipReason.NO_DISTRIBUTIONS,
            message=(
                f"Build output directory {config.working_directory} does not exist; "
                "no distributions to stage."
            ),
        )
        logger.info(
            "precondition_skip",
            reason=skip.reason.value,
            message=skip.message,
            working_directory=str(config.working_directory),
        )
        return skip

    return None

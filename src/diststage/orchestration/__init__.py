"""
diststage.orchestration - Orchestration Layer
===============================================

Decides what goes where and drives the SCM:

    - classifier:          classify_name, classify_directory
    - preconditions:       check_preconditions (business-rule gates)
    - DistributionStager:  lays the distributions out in a checkout
    - ReleaseCommitWorkflow:   stage-distributions (checkout, stage, add, commit)
    - PromotionWorkflow:       promote (checkout staging and release areas)
    - SiteCompressionWorkflow: compress-site (zip the built site)
"""

from diststage.orchestration.classifier import (
    classify_directory,
    classify_file,
    classify_files,
    classify_name,
    list_build_output,
)
from diststage.orchestration.distribution_stager import DistributionStager
from diststage.orchestration.preconditions import check_preconditions
from diststage.orchestration.promotion import PromotionWorkflow
from diststage.orchestration.release_commit import ReleaseCommitWorkflow
from diststage.orchestration.site_compression import SiteCompressionWorkflow

__all__ = [
    # Classification
    "classify_name",
    "classify_file",
    "classify_files",
    "classify_directory",
    "list_build_output",
    # Staging
    "DistributionStager",
    "check_preconditions",
    # Workflows
    "ReleaseCommitWorkflow",
    "PromotionWorkflow",
    "SiteCompressionWorkflow",
]

"""
Tests for diststage.orchestration.promotion
=============================================

Promotion checks out the staging and release areas with independent
repositories, providers and directories.
"""

import pytest

from diststage.core.enums import OutcomeStatus, SkipReason
from diststage.core.exceptions import ConfigurationError, VcsFailure
from diststage.integrations.scm.mock import MockScmProvider
from diststage.orchestration.promotion import PromotionWorkflow


@pytest.fixture
def release_provider() -> MockScmProvider:
    return MockScmProvider()


class TestPromotionGates:
    def test_same_gates_as_staging(self, config, scm_provider, release_provider) -> None:
        config = config.model_copy(update={"is_dist_module": False})
        outcome = PromotionWorkflow(config, scm_provider, release_provider).run()
        assert outcome.status == OutcomeStatus.SKIPPED
        assert outcome.skip.reason == SkipReason.NOT_DIST_MODULE
        assert scm_provider.calls == [] and release_provider.calls == []

    def test_no_build_output(self, config, scm_provider, release_provider) -> None:
        outcome = PromotionWorkflow(config, scm_provider, release_provider).run()
        assert outcome.skip.reason == SkipReason.NO_DISTRIBUTIONS

    def test_release_url_required(self, config, build_output, scm_provider, release_provider) -> None:
        config = config.model_copy(update={"dist_svn_release_url": ""})
        with pytest.raises(ConfigurationError) as exc_info:
            PromotionWorkflow(config, scm_provider, release_provider).run()
        assert exc_info.value.error_code == "RELEASE_URL_UNSET"
        assert scm_provider.calls == [] and release_provider.calls == []


class TestPromotionCheckout:
    def test_checks_out_both_locations(self, config, build_output, scm_provider, release_provider) -> None:
        outcome = PromotionWorkflow(config, scm_provider, release_provider).run()

        assert outcome.status == OutcomeStatus.CHECKED_OUT
        staging_copy, release_copy = outcome.working_copies
        assert staging_copy.directory == config.dist_staging_checkout_directory
        assert release_copy.directory == config.dist_release_checkout_directory
        assert staging_copy.repository.url.endswith("/dist/dev/commons/foo")
        assert release_copy.repository.url.endswith("/dist/release/commons/foo")

    def test_each_location_uses_its_own_provider(self, config, build_output, scm_provider, release_provider) -> None:
        PromotionWorkflow(config, scm_provider, release_provider).run()
        assert scm_provider.operations == ["checkout"]
        assert release_provider.operations == ["checkout"]

    def test_directories_exist_afterwards(self, config, build_output, scm_provider, release_provider) -> None:
        PromotionWorkflow(config, scm_provider, release_provider).run()
        assert config.dist_staging_checkout_directory.is_dir()
        assert config.dist_release_checkout_directory.is_dir()

    def test_nothing_is_added_or_committed(self, config, build_output, scm_provider, release_provider) -> None:
        outcome = PromotionWorkflow(config, scm_provider, release_provider).run()
        assert outcome.revision is None
        assert "commit" not in scm_provider.operations + release_provider.operations

    def test_providers_from_urls(self, config, build_output) -> None:
        outcome = PromotionWorkflow(config).run()
        assert outcome.status == OutcomeStatus.CHECKED_OUT

    def test_release_checkout_failure(self, config, build_output, scm_provider, release_provider) -> None:
        release_provider.fail_checkout("svn: E170001: Authorization failed")
        with pytest.raises(VcsFailure) as exc_info:
            PromotionWorkflow(config, scm_provider, release_provider).run()
        assert exc_info.value.details["scm_url"] == config.dist_svn_release_url
        assert scm_provider.operations == ["checkout"]

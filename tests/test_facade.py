"""
Tests for diststage.facade
============================

The DistStage facade wires configuration and collaborators into the
three workflows.
"""

import zipfile

from diststage import DistStage, __version__
from diststage.core.config import StagingConfig
from diststage.core.enums import OutcomeStatus
from diststage.integrations.scm.mock import MockScmProvider


class TestDistStageInit:
    def test_default_config(self) -> None:
        stage = DistStage()
        assert isinstance(stage.config, StagingConfig)
        assert stage.config.is_dist_module is False

    def test_custom_config(self, config) -> None:
        assert DistStage(config).config is config

    def test_repr(self, config) -> None:
        assert repr(DistStage(config)) == "DistStage(dist_module=True, dry_run=False)"

    def test_version(self) -> None:
        assert __version__ == "0.1.0"


class TestDistStageCommands:
    def test_default_config_skips(self, scm_provider) -> None:
        outcome = DistStage(scm_provider=scm_provider).stage_distributions()
        assert outcome.status == OutcomeStatus.SKIPPED
        assert scm_provider.calls == []

    def test_stage_distributions(self, config, build_output, scm_provider, renderer) -> None:
        stage = DistStage(config, scm_provider=scm_provider, renderer=renderer)
        outcome = stage.stage_distributions()
        assert outcome.status == OutcomeStatus.COMMITTED
        assert scm_provider.operations == ["checkout", "add", "commit"]

    def test_promote_uses_separate_providers(self, config, build_output) -> None:
        staging, release = MockScmProvider(), MockScmProvider()
        stage = DistStage(config, scm_provider=staging, release_scm_provider=release)

        outcome = stage.promote()

        assert outcome.status == OutcomeStatus.CHECKED_OUT
        assert staging.operations == ["checkout"]
        assert release.operations == ["checkout"]

    def test_compress_then_stage(self, config, site_dir, build_output, scm_provider) -> None:
        """The site archive made by compress_site is committed at the checkout root."""
        stage = DistStage(config, scm_provider=scm_provider)

        archive = stage.compress_site()
        outcome = stage.stage_distributions()

        staged = config.dist_checkout_directory / "site.zip"
        assert staged in outcome.plan.files_to_commit
        assert staged.read_bytes() == archive.read_bytes()
        with zipfile.ZipFile(staged) as zf:
            assert "index.html" in zf.namelist()

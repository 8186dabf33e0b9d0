"""
Dry-Run Staging Example — Stage a Release Without Committing
=============================================================

This example builds a throwaway project in a temporary directory, zips
its site and stages its distributions against the mock SCM provider in
dry-run mode. Nothing leaves the machine.

This is useful for:
    - Seeing the staged layout before pointing at a real repository
    - Checking which files a real run would add and commit

Usage:
    python examples/dry_run_staging.py
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from diststage import DistStage
from diststage.core.config import ProjectConfig, StagingConfig
from diststage.core.logging import configure_logging
from diststage.integrations.scm.mock import MockScmProvider


def build_fake_project(base: Path) -> None:
    """Lay out what a release build leaves behind."""
    output = base / "target" / "commons-release-plugin"
    output.mkdir(parents=True)
    (output / "foo-1.0-src.zip").write_bytes(b"source archive")
    (output / "foo-1.0-bin.tar.gz").write_bytes(b"binary archive")
    (output / "sha1.properties").write_text("foo-1.0-src.zip=0\n", encoding="utf-8")

    site = base / "target" / "site"
    site.mkdir(parents=True)
    (site / "index.html").write_text("<html><body>Foo</body></html>", encoding="utf-8")

    (base / "RELEASE-NOTES.txt").write_text("Foo 1.0 release notes\n", encoding="utf-8")


def main() -> None:
    """Stage a fake release and print the plan."""
    configure_logging("INFO")

    with tempfile.TemporaryDirectory() as tmp:
        base = Path(tmp) / "foo"
        build_fake_project(base)

        config = StagingConfig(
            is_dist_module=True,
            dist_svn_staging_url="scm:mock:https://dist.example.org/repos/dist/dev/commons/foo",
            dry_run=True,
            base_dir=base,
            project=ProjectConfig(
                artifact_id="commons-foo",
                version="1.0",
                url="https://commons.example.org/foo",
            ),
        )
        provider = MockScmProvider()
        stage = DistStage(config, scm_provider=provider)

        archive = stage.compress_site()
        outcome = stage.stage_distributions()

        print("Dry-Run Staging")
        print("-" * 40)
        print(f"Status      : {outcome.status.value}")
        print(f"Site archive: {archive.name}")
        print(f"Message     : {outcome.commit_message}")
        print(f"SCM calls   : {', '.join(provider.operations)}")
        print()
        print("Files a real run would commit:")
        checkout = outcome.plan.checkout_directory
        for path in outcome.plan.files_to_commit:
            print(f"  {path.relative_to(checkout).as_posix()}")


if __name__ == "__main__":
    main()

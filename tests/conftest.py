"""
Shared Test Fixtures for diststage
=====================================

This module provides reusable pytest fixtures used across the entire
test suite. Fixtures are organized by layer:

    1. Isolation (environment variables, structlog configuration)
    2. Filesystem layout (project base dir, build output, release notes)
    3. Configuration fixtures
    4. Integration fixtures (mock SCM provider, template renderer)
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
import structlog

from diststage.core.config import ProjectConfig, StagingConfig
from diststage.integrations.scm.mock import MockScmProvider
from diststage.integrations.templates.renderer import PackageTemplateRenderer


STAGING_URL = "scm:mock:https://dist.example.org/repos/dist/dev/commons/foo"
RELEASE_URL = "scm:mock:https://dist.example.org/repos/dist/release/commons/foo"


# =============================================================================
# Isolation
# =============================================================================

@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch, tmp_path):
    """Keep DISTSTAGE_* variables and a stray diststage.yaml out of every test."""
    for key in list(os.environ):
        if key.upper().startswith("DISTSTAGE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    structlog.reset_defaults()


# =============================================================================
# Filesystem Layout
# =============================================================================

@pytest.fixture
def base_dir(tmp_path) -> Path:
    """Project root holding RELEASE-NOTES.txt and target/."""
    base = tmp_path / "project"
    base.mkdir()
    (base / "RELEASE-NOTES.txt").write_text("Release notes for foo 1.0\n", encoding="utf-8")
    return base


@pytest.fixture
def build_output(base_dir) -> Path:
    """Build-output directory with one source, one binary and a checksum file."""
    output = base_dir / "target" / "commons-release-plugin"
    output.mkdir(parents=True)
    (output / "foo-1.0-src.zip").write_bytes(b"source archive")
    (output / "foo-1.0-bin.tar.gz").write_bytes(b"binary archive")
    (output / "sha1.properties").write_text("foo-1.0-src.zip=abc\n", encoding="utf-8")
    return output


@pytest.fixture
def site_dir(base_dir) -> Path:
    """A small built site: index.html and css/main.css."""
    site = base_dir / "target" / "site"
    (site / "css").mkdir(parents=True)
    (site / "index.html").write_text("<html>foo</html>", encoding="utf-8")
    (site / "css" / "main.css").write_text("body {}", encoding="utf-8")
    return site


# =============================================================================
# Configuration
# =============================================================================

@pytest.fixture
def project() -> ProjectConfig:
    return ProjectConfig(
        artifact_id="commons-foo",
        version="1.0",
        url="https://commons.example.org/foo",
    )


@pytest.fixture
def config(base_dir, project) -> StagingConfig:
    """A distribution-module configuration staging through the mock provider."""
    return StagingConfig(
        is_dist_module=True,
        dist_svn_staging_url=STAGING_URL,
        dist_svn_release_url=RELEASE_URL,
        base_dir=base_dir,
        project=project,
    )


# =============================================================================
# Integrations
# =============================================================================

@pytest.fixture
def scm_provider() -> MockScmProvider:
    """Fresh MockScmProvider starting at revision 0."""
    return MockScmProvider()


@pytest.fixture
def renderer() -> PackageTemplateRenderer:
    return PackageTemplateRenderer()

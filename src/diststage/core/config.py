"""
diststage.core.config - Configuration Management
==================================================

This module provides the configuration system for diststage. Configuration
can be loaded from multiple sources with the following priority (highest first):

    1. Explicit overrides (the CLI passes its flags this way)
    2. YAML configuration file (diststage.yaml)
    3. Environment variables (prefixed with DISTSTAGE_)
    4. Default values defined in the models below

load_config() hands the YAML values to StagingConfig as constructor
arguments, which is why they win over the environment.

Architecture Context:
    Configuration flows DOWN through the system. The top-level StagingConfig
    is created once, validated once, and passed explicitly to every workflow.
    No component reads paths from module-level state:

        StagingConfig
            ├── ProjectConfig      → DistributionStager (README variables,
            │                        commit message)
            ├── CredentialsConfig  → SCM repositories
            └── (paths, flags)     → Preconditions, workflows, PathOps

Directory Defaults:
    Every directory is derived from ``working_directory`` unless given
    explicitly, so overriding the working directory moves the checkouts
    along with it:

        target/commons-release-plugin/             (working_directory)
            ├── scm/                               (dist_checkout_directory)
            ├── dist-staging-scm/                  (dist_staging_checkout_directory)
            └── dist-release-scm/                  (dist_release_checkout_directory)

Usage:
    # Load from environment variables:
    config = StagingConfig()

    # Load from YAML file:
    config = load_config("diststage.yaml")

    # Explicit overrides:
    config = StagingConfig(is_dist_module=True, dry_run=True)

Environment Variables:
    DISTSTAGE_IS_DIST_MODULE=true
    DISTSTAGE_DIST_SVN_STAGING_URL=scm:svn:https://dist.example.org/repos/dist/dev/foo
    DISTSTAGE_DRY_RUN=true
    DISTSTAGE_PROJECT__ARTIFACT_ID=foo
    DISTSTAGE_PROJECT__VERSION=1.0
    DISTSTAGE_CREDENTIALS__USERNAME=jdoe
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings

from diststage.core.exceptions import ConfigurationError


DEFAULT_CONFIG_FILE = "diststage.yaml"


# =============================================================================
# Project Metadata
# =============================================================================
# The coordinates of the project being released. These end up in the
# generated README.html and in every commit message.
# =============================================================================
class ProjectConfig(BaseModel):
    """Metadata about the project whose distributions are being staged.

    Attributes:
        artifact_id: The project's artifact identifier (e.g. "commons-foo").
        version: The version being released (e.g. "1.0").
        url: The project's site URL, linked from README.html.
    """

    artifact_id: str = Field(
        default="",
        description="Artifact identifier of the project being released",
    )
    version: str = Field(
        default="",
        description="Version of the project being released",
    )
    url: str = Field(
        default="",
        description="Project site URL referenced by the generated README",
    )


class CredentialsConfig(BaseModel):
    """Credentials injected into every SCM repository handle.

    Both values are optional: an svn client with cached credentials does
    not need them. The password is never logged.
    """

    username: Optional[str] = Field(
        default=None,
        description="Username for the distribution repository",
    )
    password: Optional[str] = Field(
        default=None,
        description="Password associated with the username",
    )


# =============================================================================
# Main Configuration
# =============================================================================
# Environment Variable Mapping:
#   DISTSTAGE_DRY_RUN              → config.dry_run
#   DISTSTAGE_PROJECT__VERSION     → config.project.version
#   DISTSTAGE_CREDENTIALS__USERNAME → config.credentials.username
# =============================================================================
class StagingConfig(BaseSettings):
    """Top-level configuration for a staging, promotion or compression run.

    Attributes:
        is_dist_module: Run only when the module is flagged as a
            distribution module. Defaults to False, making every workflow a
            no-op until explicitly enabled.
        dist_svn_staging_url: SCM URL of the staging area, in the form
            ``scm:svn:https://...``. Required non-empty.
        dist_svn_release_url: SCM URL of the release area (promotion only).
        dry_run: Check out, stage and log, but never add or commit.
        base_dir: Root directory of the project being released.
        working_directory: The build-output directory holding the built
            distributions (and the site archive).
        dist_checkout_directory: Where the staging area is checked out for
            ``stage-distributions``.
        dist_staging_checkout_directory: Staging checkout used by ``promote``.
        dist_release_checkout_directory: Release checkout used by ``promote``.
        site_directory: The built site, compressed by ``compress-site``.
        release_notes_file: Release notes copied to the checkout root.
        log_level: Logging level name.
        log_json: Render logs as JSON lines instead of console output.
        project: Project coordinates (see ProjectConfig).
        credentials: SCM credentials (see CredentialsConfig).
    """

    # -------------------------------------------------------------------------
    # Gates and modes
    # -------------------------------------------------------------------------
    is_dist_module: bool = Field(
        default=False,
        description="Only run when this module is a distribution module",
    )
    dist_svn_staging_url: str = Field(
        default="",
        description="SCM URL of the staging area (scm:svn:https://...)",
    )
    dist_svn_release_url: str = Field(
        default="",
        description="SCM URL of the release area (scm:svn:https://...)",
    )
    dry_run: bool = Field(
        default=False,
        description="Skip add/commit; checkout and staging still happen",
    )

    # -------------------------------------------------------------------------
    # Paths
    # -------------------------------------------------------------------------
    base_dir: Path = Field(
        default=Path("."),
        description="Root directory of the project being released",
    )
    working_directory: Optional[Path] = Field(
        default=None,
        description="Build-output directory holding the distributions",
    )
    dist_checkout_directory: Optional[Path] = Field(
        default=None,
        description="Checkout directory of the staging area",
    )
    dist_staging_checkout_directory: Optional[Path] = Field(
        default=None,
        description="Staging checkout directory used by promotion",
    )
    dist_release_checkout_directory: Optional[Path] = Field(
        default=None,
        description="Release checkout directory used by promotion",
    )
    site_directory: Optional[Path] = Field(
        default=None,
        description="Directory of the built site",
    )
    release_notes_file: Optional[Path] = Field(
        default=None,
        description="Release notes file copied into the checkout root",
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines instead of console output",
    )

    # -------------------------------------------------------------------------
    # Nested Configurations
    # -------------------------------------------------------------------------
    project: ProjectConfig = Field(
        default_factory=ProjectConfig,
        description="Coordinates of the project being released",
    )
    credentials: CredentialsConfig = Field(
        default_factory=CredentialsConfig,
        description="SCM credentials",
    )

    model_config = {
        "env_prefix": "DISTSTAGE_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
    }

    @model_validator(mode="after")
    def _derive_directories(self) -> StagingConfig:
        """Fill every unset directory from base_dir / working_directory."""
        if self.working_directory is None:
            self.working_directory = self.base_dir / "target" / "commons-release-plugin"
        if self.dist_checkout_directory is None:
            self.dist_checkout_directory = self.working_directory / "scm"
        if self.dist_staging_checkout_directory is None:
            self.dist_staging_checkout_directory = self.working_directory / "dist-staging-scm"
        if self.dist_release_checkout_directory is None:
            self.dist_release_checkout_directory = self.working_directory / "dist-release-scm"
        if self.site_directory is None:
            self.site_directory = self.base_dir / "target" / "site"
        if self.release_notes_file is None:
            self.release_notes_file = self.base_dir / "RELEASE-NOTES.txt"
        return self

    @property
    def commit_message(self) -> str:
        """The literal message used for both the add and the commit."""
        return (
            f"Staging release: {self.project.artifact_id}, "
            f"version: {self.project.version}"
        )


# =============================================================================
# Configuration Loader
# =============================================================================
def load_config(path: Optional[str] = None, **overrides: Any) -> StagingConfig:
    """Load configuration from a YAML file, environment variables and overrides.

    Args:
        path: Path to a YAML configuration file. If None, looks for
            'diststage.yaml' in the current directory and falls back to
            pure defaults + environment variables when it is absent.
        **overrides: Values that win over the YAML file (the CLI flags).
            Nested sections are merged key by key.

    Returns:
        A fully validated StagingConfig instance.

    Raises:
        FileNotFoundError: If an explicit path is provided but doesn't exist.
        ConfigurationError: If the YAML is malformed or a value is invalid.
    """
    if path is None:
        default_path = Path(DEFAULT_CONFIG_FILE)
        if default_path.exists():
            path = str(default_path)

    yaml_data: dict[str, Any] = {}
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(config_path, encoding="utf-8") as f:
                raw_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                message=f"Invalid YAML in configuration file {path}: {e}",
                error_code="INVALID_CONFIG_FILE",
                details={"path": str(path)},
            ) from e
        if isinstance(raw_data, dict):
            yaml_data = raw_data

    merged = _merge(yaml_data, overrides)
    try:
        return StagingConfig(**merged)
    except ValidationError as e:
        raise ConfigurationError(
            message=f"Invalid configuration: {e}",
            error_code="INVALID_CONFIG",
        ) from e


def _merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged

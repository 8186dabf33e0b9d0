"""
diststage.cli - Command Line Entry Point
==========================================

Usage:
  diststage compress-site
  diststage stage-distributions --dist-module --staging-url scm:svn:https://host/repos/dist/dev/foo
  diststage stage-distributions --config diststage.yaml --dry-run
  diststage stage-distributions --artifact-id commons-foo --version 1.0 --site-url https://commons.apache.org/foo
  diststage promote --release-url scm:svn:https://host/repos/dist/release/foo

Flags override the YAML file, which overrides DISTSTAGE_* environment
variables. Exit status is 0 when the command succeeded or had
nothing to do, 1 when it failed.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Optional, Sequence

import structlog

from diststage.core.config import load_config
from diststage.core.exceptions import StagingError
from diststage.core.logging import configure_logging
from diststage.core.models import WorkflowOutcome
from diststage.facade import DistStage


logger = structlog.get_logger(component="cli")

COMMANDS = ("stage-distributions", "promote", "compress-site")

EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diststage",
        description="Stage release distributions into a Subversion distribution repository.",
    )
    parser.add_argument("command", choices=COMMANDS, help="What to run")

    # Configuration and logging
    parser.add_argument("--config", help="YAML configuration file (default: ./diststage.yaml if present)")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL")
    parser.add_argument("--log-json", action="store_true", default=None, help="Emit JSON log lines")

    # Gates and modes
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Check out and stage, but do not add or commit",
    )
    parser.add_argument(
        "--dist-module",
        dest="is_dist_module",
        action="store_true",
        default=None,
        help="Mark this module as a distribution module",
    )

    # Repositories
    parser.add_argument("--staging-url", dest="dist_svn_staging_url", help="scm:svn:<url> of the staging area")
    parser.add_argument("--release-url", dest="dist_svn_release_url", help="scm:svn:<url> of the release area")
    parser.add_argument("--username", help="SCM username")
    parser.add_argument("--password", help="SCM password")

    # Project
    parser.add_argument("--artifact-id", help="Artifact id of the project being released")
    parser.add_argument("--version", dest="project_version", help="Version being released")
    parser.add_argument("--site-url", help="Project site URL linked from README.html")

    # Paths
    parser.add_argument("--base-dir", help="Root directory of the project")
    parser.add_argument("--working-directory", help="Build-output directory holding the distributions")
    parser.add_argument("--site-directory", help="Directory of the built site")
    parser.add_argument("--release-notes", dest="release_notes_file", help="Release notes file")
    return parser


def overrides_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Turn the flags that were actually given into load_config() overrides."""
    overrides: dict[str, Any] = {}
    for key in (
        "log_level",
        "log_json",
        "dry_run",
        "is_dist_module",
        "dist_svn_staging_url",
        "dist_svn_release_url",
        "base_dir",
        "working_directory",
        "site_directory",
        "release_notes_file",
    ):
        value = getattr(args, key)
        if value is not None:
            overrides[key] = value

    project = {
        "artifact_id": args.artifact_id,
        "version": args.project_version,
        "url": args.site_url,
    }
    project = {key: value for key, value in project.items() if value is not None}
    if project:
        overrides["project"] = project

    credentials = {"username": args.username, "password": args.password}
    credentials = {key: value for key, value in credentials.items() if value is not None}
    if credentials:
        overrides["credentials"] = credentials
    return overrides


def run_command(stage: DistStage, command: str) -> dict[str, Any]:
    """Run ``command`` and return the fields of its completion log line."""
    if command == "compress-site":
        return {"archive": str(stage.compress_site())}

    if command == "stage-distributions":
        outcome = stage.stage_distributions()
    else:
        outcome = stage.promote()
    return _outcome_fields(outcome)


def _outcome_fields(outcome: WorkflowOutcome) -> dict[str, Any]:
    fields: dict[str, Any] = {"status": outcome.status.value}
    if outcome.skip is not None:
        fields["skip_reason"] = outcome.skip.reason.value
    if outcome.revision is not None:
        fields["revision"] = outcome.revision
    return fields


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config, **overrides_from_args(args))
    except (StagingError, FileNotFoundError) as e:
        configure_logging(args.log_level or "INFO", json=bool(args.log_json))
        logger.error("configuration_failed", error=str(e))
        return EXIT_FAILURE

    configure_logging(config.log_level, json=config.log_json)

    try:
        fields = run_command(DistStage(config), args.command)
    except StagingError as e:
        logger.error("command_failed", command=args.command, **e.to_dict())
        return EXIT_FAILURE

    logger.info("command_complete", command=args.command, **fields)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

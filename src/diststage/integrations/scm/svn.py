"""Subversion provider driving the ``svn`` command line client.

All commands run non-interactively with captured output. Credentials from
the repository are passed as ``--username``/``--password`` arguments and
masked in every log line; URLs are logged with embedded user-info redacted.

Commit targets:
    Files staged into ``source/`` and ``binaries/`` may live in directories
    that are themselves new to the repository. ``svn commit`` refuses a
    file whose unversioned parent is not part of the commit, so the parent
    directories are passed as targets too, with ``--depth empty`` so that
    nothing besides the listed paths is committed.
"""

from __future__ import annotations

import os
import re
import subprocess
from pathlib import Path
from typing import Optional, Sequence
from urllib.parse import urlparse, urlunparse

import structlog

from diststage.core.exceptions import VcsFailure
from diststage.core.models import ScmRepository, ScmResult, WorkingCopy
from diststage.integrations.scm.base import BaseScmProvider


logger = structlog.get_logger()

_REVISION_PATTERN = re.compile(r"(?:Committed|Checked out) revision (\d+)\.")

CHECKOUT_TIMEOUT_SECONDS = 1800
ADD_TIMEOUT_SECONDS = 300
COMMIT_TIMEOUT_SECONDS = 1800


def redact_url(url: str) -> str:
    """Return ``url`` safe to write into logs (user-info masked).

    Accepts both plain URLs and ``scm:<provider>:<url>`` strings.
    """
    if url.startswith("scm:"):
        parts = url.split(":", 2)
        if len(parts) == 3:
            return f"scm:{parts[1]}:{redact_url(parts[2])}"
        return url

    parsed = urlparse(url)
    if parsed.username is None or not parsed.hostname:
        return url

    port = f":{parsed.port}" if parsed.port else ""
    auth = f"{parsed.username}:***@" if parsed.password is not None else "***@"
    return urlunparse(parsed._replace(netloc=f"{auth}{parsed.hostname}{port}"))


def parse_revision(output: str) -> Optional[str]:
    """Extract the last reported revision number from svn output."""
    matches = _REVISION_PATTERN.findall(output)
    return matches[-1] if matches else None


class SvnScmProvider(BaseScmProvider):
    """SCM provider for ``scm:svn:`` repositories.

    Attributes:
        _executable: The svn binary to run.
    """

    provider_name = "svn"

    def __init__(self, executable: str = "svn") -> None:
        self._executable = executable
        self._logger = logger.bind(component="svn_scm_provider")

    # =========================================================================
    # BaseScmProvider
    # =========================================================================

    def checkout(self, repository: ScmRepository, directory: Path) -> WorkingCopy:
        directory = Path(directory)
        safe_url = redact_url(repository.url)
        self._logger.info("checkout_started", url=safe_url, directory=str(directory))

        cmd = [
            self._executable,
            "checkout",
            *self._common_args(repository),
            repository.url,
            str(directory),
        ]
        try:
            completed = self._run(cmd, repository, cwd=None, timeout=CHECKOUT_TIMEOUT_SECONDS)
        except (OSError, subprocess.SubprocessError) as e:
            raise VcsFailure(
                f"Unable to check out {safe_url}: {e}",
                error_code="CHECKOUT_FAILED",
                details={"url": safe_url, "directory": str(directory)},
            ) from e

        output = _combined_output(completed)
        if completed.returncode != 0:
            self._logger.error(
                "checkout_failed",
                url=safe_url,
                exit_code=completed.returncode,
            )
            raise VcsFailure(
                f"Unable to check out {safe_url} (exit {completed.returncode}): "
                f"{output.strip()}",
                command_output=output,
                error_code="CHECKOUT_FAILED",
                details={"url": safe_url, "directory": str(directory)},
            )

        revision = parse_revision(output)
        self._logger.info("checkout_complete", url=safe_url, revision=revision)
        return WorkingCopy(repository=repository, directory=directory, revision=revision)

    def add(
        self,
        working_copy: WorkingCopy,
        files: Sequence[Path],
        message: str,
    ) -> ScmResult:
        # svn add takes no message; it only schedules the files.
        targets = [self._relative(working_copy, f) for f in files]
        cmd = [
            self._executable,
            "add",
            "--parents",
            "--force",
            *self._common_args(working_copy.repository),
            *targets,
        ]
        self._logger.info("add_started", file_count=len(targets))
        return self._run_for_result(cmd, working_copy, ADD_TIMEOUT_SECONDS)

    def commit(
        self,
        working_copy: WorkingCopy,
        files: Sequence[Path],
        message: str,
    ) -> ScmResult:
        targets = [self._relative(working_copy, f) for f in files]
        parents: list[str] = []
        for target in targets:
            for parent in reversed(Path(target).parents):
                parent_str = parent.as_posix()
                if parent_str != "." and parent_str not in parents:
                    parents.append(parent_str)

        cmd = [
            self._executable,
            "commit",
            "--depth",
            "empty",
            "-m",
            message,
            *self._common_args(working_copy.repository),
            *parents,
            *targets,
        ]
        self._logger.info("commit_started", file_count=len(targets))
        result = self._run_for_result(cmd, working_copy, COMMIT_TIMEOUT_SECONDS)
        if result.success:
            result.revision = parse_revision(result.command_output)
        return result

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    @staticmethod
    def _common_args(repository: ScmRepository) -> list[str]:
        args = ["--non-interactive"]
        if repository.username:
            args += ["--username", repository.username]
        if repository.password:
            args += ["--password", repository.password]
        return args

    @staticmethod
    def _relative(working_copy: WorkingCopy, path: Path) -> str:
        path = Path(path)
        try:
            return path.relative_to(working_copy.directory).as_posix()
        except ValueError:
            return Path(os.path.relpath(path, working_copy.directory)).as_posix()

    def _run(
        self,
        cmd: list[str],
        repository: ScmRepository,
        cwd: Optional[Path],
        timeout: int,
    ) -> subprocess.CompletedProcess:
        self._logger.debug("svn_command", command=_mask(cmd, repository))
        return subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            text=True,
            timeout=timeout,
        )

    def _run_for_result(
        self,
        cmd: list[str],
        working_copy: WorkingCopy,
        timeout: int,
    ) -> ScmResult:
        try:
            completed = self._run(cmd, working_copy.repository, working_copy.directory, timeout)
        except (OSError, subprocess.SubprocessError) as e:
            return ScmResult(success=False, command_output=str(e))
        return ScmResult(
            success=completed.returncode == 0,
            command_output=_combined_output(completed),
        )


def _combined_output(completed: subprocess.CompletedProcess) -> str:
    return "".join(part for part in (completed.stdout, completed.stderr) if part)


def _mask(cmd: Sequence[str], repository: ScmRepository) -> list[str]:
    masked = []
    hide_next = False
    for arg in cmd:
        if hide_next:
            masked.append("***")
        elif arg == repository.url:
            masked.append(redact_url(arg))
        else:
            masked.append(arg)
        hide_next = arg == "--password"
    return masked

"""
diststage.integrations.scm.mock - Mock SCM Provider for Testing
=================================================================

An in-memory SCM provider that never touches a real repository. It is
selected with ``scm:mock:<anything>`` URLs and injected directly by the
test suite.

Features:
    - **Call tracking**: every checkout/add/commit is recorded in
      ``calls`` for assertions ("zero add/commit calls in dry-run").
    - **Failure injection**: make checkout raise, or add/commit return an
      unsuccessful ScmResult with a chosen command output.
    - **Revisions**: each successful commit bumps a revision counter.
    - **Checkout directory**: created on checkout, like a real client.

Usage:
    >>> provider = MockScmProvider()
    >>> provider.fail_commit("svn: E155011: out of date")
    >>> wc = provider.checkout(repository, Path("/tmp/scm"))
    >>> provider.commit(wc, [], "msg").success
    False
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Sequence

import structlog

from diststage.core.exceptions import VcsFailure
from diststage.core.models import ScmRepository, ScmResult, WorkingCopy
from diststage.integrations.scm.base import BaseScmProvider


logger = structlog.get_logger()


class MockScmProvider(BaseScmProvider):
    """Mock SCM provider recording every call.

    Attributes:
        _calls: Recorded calls, each a dict with an "operation" key.
        _revision: Last committed revision number.
        _checkout_failure: Message to raise on checkout, if set.
        _add_failure: Command output of a failing add, if set.
        _commit_failure: Command output of a failing commit, if set.
    """

    provider_name = "mock"

    def __init__(self, start_revision: int = 0) -> None:
        self._calls: list[dict[str, Any]] = []
        self._revision = start_revision
        self._checkout_failure: Optional[str] = None
        self._add_failure: Optional[str] = None
        self._commit_failure: Optional[str] = None
        self._logger = logger.bind(component="mock_scm_provider")

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def calls(self) -> list[dict[str, Any]]:
        """All recorded calls, in order."""
        return self._calls

    @property
    def operations(self) -> list[str]:
        """Just the operation names of the recorded calls."""
        return [call["operation"] for call in self._calls]

    def calls_for(self, operation: str) -> list[dict[str, Any]]:
        return [call for call in self._calls if call["operation"] == operation]

    @property
    def revision(self) -> int:
        return self._revision

    # =========================================================================
    # Failure Injection
    # =========================================================================

    def fail_checkout(self, message: str = "svn: E170013: Unable to connect") -> None:
        self._checkout_failure = message

    def fail_add(self, command_output: str = "svn: E150002: add failed") -> None:
        self._add_failure = command_output

    def fail_commit(self, command_output: str = "svn: E155011: commit failed") -> None:
        self._commit_failure = command_output

    def reset(self) -> None:
        """Clear recorded calls and injected failures."""
        self._calls.clear()
        self._checkout_failure = None
        self._add_failure = None
        self._commit_failure = None

    # =========================================================================
    # BaseScmProvider
    # =========================================================================

    def checkout(self, repository: ScmRepository, directory: Path) -> WorkingCopy:
        directory = Path(directory)
        self._calls.append({
            "operation": "checkout",
            "url": repository.url,
            "directory": directory,
            "username": repository.username,
        })
        self._logger.debug("mock_checkout", url=repository.url, directory=str(directory))

        if self._checkout_failure is not None:
            raise VcsFailure(
                self._checkout_failure,
                command_output=self._checkout_failure,
                error_code="CHECKOUT_FAILED",
                details={"url": repository.url},
            )

        directory.mkdir(parents=True, exist_ok=True)
        return WorkingCopy(
            repository=repository,
            directory=directory,
            revision=str(self._revision),
        )

    def add(
        self,
        working_copy: WorkingCopy,
        files: Sequence[Path],
        message: str,
    ) -> ScmResult:
        self._calls.append({
            "operation": "add",
            "directory": working_copy.directory,
            "files": list(files),
            "message": message,
        })
        if self._add_failure is not None:
            return ScmResult(success=False, command_output=self._add_failure)
        output = "".join(f"A         {Path(f).as_posix()}\n" for f in files)
        return ScmResult(success=True, command_output=output)

    def commit(
        self,
        working_copy: WorkingCopy,
        files: Sequence[Path],
        message: str,
    ) -> ScmResult:
        self._calls.append({
            "operation": "commit",
            "directory": working_copy.directory,
            "files": list(files),
            "message": message,
        })
        if self._commit_failure is not None:
            return ScmResult(success=False, command_output=self._commit_failure)

        self._revision += 1
        revision = str(self._revision)
        return ScmResult(
            success=True,
            command_output=f"Committed revision {revision}.\n",
            revision=revision,
        )

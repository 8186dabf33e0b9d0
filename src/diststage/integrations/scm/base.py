"""
diststage.integrations.scm.base - Abstract SCM Provider Interface
===================================================================

The contract every SCM backend implements. Workflows never shell out to
``svn`` themselves; they talk to a provider through three operations:

    ┌──────────────────┐  checkout(repository, dir) ┌──────────────────┐
    │ ReleaseCommit /  │ ─────────────────────────→ │ BaseScmProvider  │
    │ Promotion        │  add(wc, files, message)   │  (abstract)      │
    │ workflows        │  commit(wc, files, message)│                  │
    │                  │ ←──── WorkingCopy /        └────────┬─────────┘
    └──────────────────┘       ScmResult                     │
                                                   ┌─────────┴────────┐
                                                   │                  │
                                              ┌────▼────┐      ┌──────▼─────┐
                                              │  Mock   │      │    Svn     │
                                              │Provider │      │  Provider  │
                                              └─────────┘      └────────────┘

Failure Semantics:
    - checkout raises VcsFailure; there is nothing to stage without it.
    - add and commit return an ScmResult. The caller decides that an
      unsuccessful result is fatal and embeds ``command_output`` in the
      error, because only the caller knows whether the add already went
      through when the commit failed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

from diststage.core.models import ScmRepository, ScmResult, WorkingCopy


class BaseScmProvider(ABC):
    """Abstract base class for SCM providers.

    Subclasses must implement checkout(), add() and commit(). Transport,
    authentication and protocol details stay inside the subclass.
    """

    #: The provider id this class handles in ``scm:<provider>:<url>``.
    provider_name: str = ""

    @abstractmethod
    def checkout(self, repository: ScmRepository, directory: Path) -> WorkingCopy:
        """Check ``repository`` out into ``directory``.

        Checking out into an existing checkout of the same location is an
        incremental update, not an error.

        Raises:
            VcsFailure: If the checkout fails.
        """
        ...

    @abstractmethod
    def add(
        self,
        working_copy: WorkingCopy,
        files: Sequence[Path],
        message: str,
    ) -> ScmResult:
        """Schedule ``files`` for addition in ``working_copy``.

        Files that are already versioned must not make the add fail.
        """
        ...

    @abstractmethod
    def commit(
        self,
        working_copy: WorkingCopy,
        files: Sequence[Path],
        message: str,
    ) -> ScmResult:
        """Commit ``files`` with ``message``; the result carries the revision."""
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(provider={self.provider_name!r})"

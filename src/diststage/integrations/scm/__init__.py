"""
diststage.integrations.scm - Source Control Providers
=======================================================

Workflows check out, add and commit through the BaseScmProvider
interface, so the backend can be swapped without touching them.

Available Providers:
    - BaseScmProvider: Abstract base class defining the SCM contract.
    - SvnScmProvider:  Drives the ``svn`` command line client.
    - MockScmProvider: Records calls, injects failures (for testing).

Usage:
    >>> from diststage.integrations.scm import create_scm_provider
    >>> provider = create_scm_provider(repository)
    >>> working_copy = provider.checkout(repository, checkout_dir)
"""

from diststage.integrations.scm.base import BaseScmProvider
from diststage.integrations.scm.factory import create_scm_provider
from diststage.integrations.scm.mock import MockScmProvider
from diststage.integrations.scm.svn import SvnScmProvider

__all__ = [
    "BaseScmProvider",
    "MockScmProvider",
    "SvnScmProvider",
    "create_scm_provider",
]

"""
diststage.integrations.scm.factory - SCM Provider Factory
===========================================================

Maps the provider id of an ``scm:<provider>:<url>`` location to a concrete
BaseScmProvider:

    - "svn"  → SvnScmProvider (the svn command line client)
    - "mock" → MockScmProvider (no repository at all)

Usage:
    >>> repository = ScmRepository.from_scm_url("scm:svn:https://host/repos/dist/dev/foo")
    >>> provider = create_scm_provider(repository)
    >>> type(provider)  # SvnScmProvider
"""

from __future__ import annotations

from diststage.core.exceptions import ConfigurationError
from diststage.core.models import ScmRepository
from diststage.integrations.scm.base import BaseScmProvider


SUPPORTED_PROVIDERS = ("svn", "mock")


def create_scm_provider(repository: ScmRepository) -> BaseScmProvider:
    """Create the provider that handles ``repository``.

    Raises:
        ConfigurationError: If the provider id is not supported.
    """
    provider_name = repository.provider.lower()

    if provider_name == "svn":
        from diststage.integrations.scm.svn import SvnScmProvider
        return SvnScmProvider()

    if provider_name == "mock":
        from diststage.integrations.scm.mock import MockScmProvider
        return MockScmProvider()

    raise ConfigurationError(
        message=(
            f"Unknown SCM provider: '{provider_name}'. "
            f"Available providers: {', '.join(SUPPORTED_PROVIDERS)}."
        ),
        error_code="UNSUPPORTED_SCM_PROVIDER",
        details={"scm_url": repository.scm_url},
    )

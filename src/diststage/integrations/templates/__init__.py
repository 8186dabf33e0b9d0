"""
diststage.integrations.templates - HTML Page Templates
========================================================

Renders the HEADER.html and README.html pages placed at the top of the
staged distribution tree and copied into ``source/`` and ``binaries/``.

Available Renderers:
    - BaseTemplateRenderer:    Abstract renderer contract.
    - PackageTemplateRenderer: Renders the templates shipped in resources/.
"""

from diststage.integrations.templates.base import (
    HEADER_TEMPLATE,
    README_TEMPLATE,
    BaseTemplateRenderer,
)
from diststage.integrations.templates.renderer import PackageTemplateRenderer

__all__ = [
    "BaseTemplateRenderer",
    "PackageTemplateRenderer",
    "HEADER_TEMPLATE",
    "README_TEMPLATE",
]

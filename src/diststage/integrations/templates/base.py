"""
diststage.integrations.templates.base - Abstract Template Renderer
====================================================================

DistributionStager renders HEADER.html and README.html through this
interface; template syntax is the renderer's business.

Template ids used by diststage:
    HEADER  - no variables
    README  - artifact_id, version, site_url
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional


HEADER_TEMPLATE = "HEADER"
README_TEMPLATE = "README"


class BaseTemplateRenderer(ABC):
    """Abstract base class for template renderers."""

    @abstractmethod
    def render(
        self,
        template_id: str,
        variables: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Render ``template_id`` with ``variables`` into text.

        Raises:
            ConfigurationError: If the template is unknown or a variable
                it references is missing.
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

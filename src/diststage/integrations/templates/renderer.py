"""Renderer for the HTML templates shipped inside the package.

Templates live in ``resources/<TEMPLATE_ID>.html`` and use ``${name}``
placeholders (``string.Template`` syntax). ``$$`` produces a literal ``$``.
Values are HTML-escaped before substitution.
"""

from __future__ import annotations

import html
from importlib import resources
from string import Template
from typing import Any, Mapping, Optional

import structlog

from diststage.core.exceptions import ConfigurationError
from diststage.integrations.templates.base import BaseTemplateRenderer


logger = structlog.get_logger()

_RESOURCE_PACKAGE = "diststage.integrations.templates"
_RESOURCE_DIR = "resources"


class PackageTemplateRenderer(BaseTemplateRenderer):
    """Renders the packaged HEADER/README templates.

    Templates are read once and cached per renderer instance.
    """

    def __init__(self) -> None:
        self._cache: dict[str, Template] = {}
        self._logger = logger.bind(component="package_template_renderer")

    def render(
        self,
        template_id: str,
        variables: Optional[Mapping[str, Any]] = None,
    ) -> str:
        template = self._load(template_id)
        values = {
            key: "" if value is None else html.escape(str(value))
            for key, value in (variables or {}).items()
        }
        try:
            text = template.substitute(values)
        except KeyError as e:
            raise ConfigurationError(
                message=f"Template {template_id} needs variable {e.args[0]!r}",
                error_code="TEMPLATE_VARIABLE_MISSING",
                details={"template_id": template_id, "variable": e.args[0]},
            ) from e

        self._logger.debug("template_rendered", template_id=template_id, length=len(text))
        return text

    def _load(self, template_id: str) -> Template:
        if template_id in self._cache:
            return self._cache[template_id]

        resource = (
            resources.files(_RESOURCE_PACKAGE)
            .joinpath(_RESOURCE_DIR)
            .joinpath(f"{template_id}.html")
        )
        if not resource.is_file():
            raise ConfigurationError(
                message=f"Unknown template: '{template_id}'",
                error_code="UNKNOWN_TEMPLATE",
                details={"template_id": template_id},
            )

        template = Template(resource.read_text(encoding="utf-8"))
        self._cache[template_id] = template
        return template

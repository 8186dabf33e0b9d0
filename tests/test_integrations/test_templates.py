"""
Tests for diststage.integrations.templates
============================================

The packaged HEADER and README pages and their placeholder substitution.
"""

import pytest

from diststage.core.exceptions import ConfigurationError
from diststage.integrations.templates import (
    HEADER_TEMPLATE,
    README_TEMPLATE,
    BaseTemplateRenderer,
    PackageTemplateRenderer,
)


README_VARIABLES = {
    "artifact_id": "commons-foo",
    "version": "1.0",
    "site_url": "https://commons.example.org/foo",
}


class TestPackageTemplateRenderer:
    """Tests for rendering the packaged templates."""

    def test_is_a_template_renderer(self, renderer) -> None:
        assert isinstance(renderer, BaseTemplateRenderer)

    def test_header_needs_no_variables(self, renderer) -> None:
        text = renderer.render(HEADER_TEMPLATE)
        assert "<h1>" in text
        assert "$" not in text

    def test_readme_substitutes_coordinates(self, renderer) -> None:
        text = renderer.render(README_TEMPLATE, README_VARIABLES)
        assert "commons-foo" in text
        assert "<b>1.0</b>" in text
        assert 'href="https://commons.example.org/foo"' in text
        assert "${" not in text

    def test_none_values_render_empty(self, renderer) -> None:
        text = renderer.render(README_TEMPLATE, {**README_VARIABLES, "site_url": None})
        assert 'href=""' in text

    def test_rendering_is_repeatable(self, renderer) -> None:
        """The cached template renders the same text every time."""
        first = renderer.render(README_TEMPLATE, README_VARIABLES)
        second = renderer.render(README_TEMPLATE, README_VARIABLES)
        assert first == second

    def test_values_are_html_escaped(self, renderer) -> None:
        text = renderer.render(
            README_TEMPLATE,
            {
                "artifact_id": "<script>alert(1)</script>",
                "version": "1.0",
                "site_url": 'https://example.org/?a=1&b="2"',
            },
        )
        assert "<script>" not in text
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in text
        assert 'href="https://example.org/?a=1&amp;b=&quot;2&quot;"' in text

    def test_unknown_template(self, renderer) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            renderer.render("FOOTER")
        assert exc_info.value.error_code == "UNKNOWN_TEMPLATE"

    def test_missing_variable(self, renderer) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            renderer.render(README_TEMPLATE, {"artifact_id": "commons-foo"})
        assert exc_info.value.error_code == "TEMPLATE_VARIABLE_MISSING"

    def test_repr(self) -> None:
        assert repr(PackageTemplateRenderer()) == "PackageTemplateRenderer()"

"""Template rendering engine for Pagesmith.

This module uses Jinja2 to render layouts. Page content is pre-rendered,
trusted HTML, so autoescaping is disabled. Unknown variables are errors.

Key class:
- TemplateEngine: Default LayoutRenderer implementation.

Key function:
- page_variables: Build the variable mapping a layout is rendered with.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError
from pygments.formatters import HtmlFormatter

from .config import SiteConfig
from .content import PageRecord, SiteModel
from .errors import LayoutRenderError


def page_variables(config: SiteConfig, page: PageRecord, model: SiteModel) -> dict[str, Any]:
    """Build the variables used to render ``page``.

    Every page receives the same ``nav`` menu, so layouts can highlight the
    active link by comparing ``item.path`` with ``path``.

    Args:
        config: Site configuration for the run.
        page: Page being rendered.
        model: Complete site model.

    Returns:
        Mapping of template variable names to values.
    """
    return {
        "site": config.section("site"),
        "author": config.section("author"),
        "source": config.section("deploy"),
        "title": page.title,
        "path": page.path,
        "content": page.content,
        "nav": list(model.nav),
        "menus": {name: list(entries) for name, entries in model.menus.items()},
    }


class TemplateEngine:
    """Template rendering engine using Jinja2.

    Attributes:
        layouts_dir: Directory containing the layout files.
        env: Jinja2 environment.
    """

    def __init__(self, layouts_dir: Path):
        """Initialize the template engine.

        Args:
            layouts_dir: Directory with layout templates.
        """
        self.layouts_dir = layouts_dir
        self.env = Environment(
            loader=FileSystemLoader(str(layouts_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            extensions=["jinja2.ext.debug"],
        )
        self.env.globals["pygments_css"] = self._pygments_css

    @staticmethod
    def _pygments_css() -> str:
        """Return Pygments CSS styles for highlighted code blocks."""
        return HtmlFormatter().get_style_defs(".highlight")

    def render(self, layout_name: str, variables: Mapping[str, Any]) -> str:
        """Render a layout with the given variables.

        Args:
            layout_name: Layout file name relative to the layouts directory.
            variables: Template variables.

        Returns:
            Rendered HTML string.

        Raises:
            LayoutRenderError: If the layout is missing, has a syntax error or
                references an undefined variable.
        """
        try:
            template = self.env.get_template(layout_name)
            return template.render(**variables)
        except TemplateError as exc:
            raise LayoutRenderError(layout_name, _format_error_message(exc), exc) from exc


def _format_error_message(exc: TemplateError) -> str:
    """Format a Jinja2 error into a user-friendly message."""
    error_type = type(exc).__name__
    if error_type == "TemplateNotFound":
        return f"Layout not found: {exc.message}"
    if error_type == "UndefinedError":
        return f"Undefined variable: {exc.message}"
    lineno = getattr(exc, "lineno", None)
    if error_type == "TemplateSyntaxError" and lineno:
        return f"Template syntax error on line {lineno}: {exc.message}"
    return f"{error_type}: {exc.message}"

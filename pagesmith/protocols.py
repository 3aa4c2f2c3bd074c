"""Capability contracts consumed by the Pagesmith pipeline.

The pipeline never talks to mistune or Jinja2 directly: it depends on these
protocols, so any compliant implementation can be substituted (a different
Markdown library, a stub in tests, another template engine).
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MarkdownConverter(Protocol):
    """Protocol for converting Markdown text to HTML."""

    @abstractmethod
    def to_html(self, markdown_text: str, link_aliases: Mapping[str, str] | None = None) -> str:
        """Convert Markdown to HTML.

        Args:
            markdown_text: Markdown source.
            link_aliases: Predefined reference links, e.g. ``{"base_url": "https://..."}``.

        Returns:
            Rendered HTML.

        Raises:
            MarkdownParseError: If the document cannot be converted.
        """
        ...


@runtime_checkable
class LayoutRenderer(Protocol):
    """Protocol for rendering a named layout with a variable mapping."""

    @abstractmethod
    def render(self, layout_name: str, variables: Mapping[str, Any]) -> str:
        """Render a layout.

        Args:
            layout_name: Layout file name, e.g. ``default.html``.
            variables: Template variables.

        Returns:
            Rendered HTML.

        Raises:
            LayoutRenderError: If the layout is missing or fails to render.
        """
        ...

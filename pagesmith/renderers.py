"""Markdown rendering for Pagesmith.

This module contains the default MarkdownConverter implementation, built on
mistune. Raw HTML inside Markdown is passed through, fenced code blocks with
a language are highlighted with Pygments, and predefined link aliases (such as
``base_url``) are available to reference-style links::

    [Home][base_url]

Key classes:
- MarkdownRenderer: Converts Markdown bodies to HTML.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

import mistune
from mistune.util import escape_url, unikey
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .errors import MarkdownParseError

logger = logging.getLogger(__name__)

PLUGINS = ["strikethrough", "footnotes", "table", "url", "def_list", "abbr"]


class _HighlightRenderer(mistune.HTMLRenderer):
    """HTML renderer with Pygments highlighting for fenced code blocks."""

    def __init__(self):
        super().__init__(escape=False)

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block, highlighted when the language is known.

        Args:
            code: The code content.
            info: Language identifier (e.g., 'python', 'php').

        Returns:
            HTML string for the block.
        """
        lang = info.split(None, 1)[0] if info else ""
        if lang:
            try:
                lexer = get_lexer_by_name(lang, stripall=True)
            except ClassNotFound:
                lexer = None
            if lexer is not None:
                formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
                return highlight(code, lexer, formatter)
        escaped = code.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        lang_class = f' class="language-{lang}"' if lang else ""
        return f"<pre{lang_class}><code>{escaped}</code></pre>\n"


def predefined_links(link_aliases: Mapping[str, str] | None):
    """Build a mistune parse hook that predefines reference links.

    The aliases are placed in the parser's reference-link table before the
    document is parsed, so ``[text][base_url]`` resolves without adding any
    text to the document. An empty URL still defines the alias.

    Args:
        link_aliases: Mapping of alias name to URL.

    Returns:
        A ``before_parse_hooks`` callable.
    """
    aliases = dict(link_aliases or {})

    def hook(md, state) -> None:
        ref_links = state.env.setdefault("ref_links", {})
        for name, url in aliases.items():
            ref_links[unikey(name)] = {"url": escape_url(url or ""), "label": name}

    return hook


class MarkdownRenderer:
    """Renders Markdown content to HTML with mistune."""

    def __init__(self, plugins: list[str] | None = None):
        self.plugins = list(PLUGINS if plugins is None else plugins)

    def to_html(self, markdown_text: str, link_aliases: Mapping[str, str] | None = None) -> str:
        """Convert Markdown to HTML.

        Args:
            markdown_text: Markdown source.
            link_aliases: Predefined reference links.

        Returns:
            Rendered HTML.

        Raises:
            MarkdownParseError: If mistune fails on the document.
        """
        markdown = mistune.create_markdown(renderer=_HighlightRenderer(), plugins=self.plugins)
        markdown.before_parse_hooks.append(predefined_links(link_aliases))
        try:
            html = markdown(markdown_text)
        except Exception as exc:
            logger.debug("Markdown conversion failed: %s", exc)
            raise MarkdownParseError("<markdown>", f"{type(exc).__name__}: {exc}") from exc
        return str(html)

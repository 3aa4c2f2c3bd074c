"""Pagesmith static site generator.

This package turns a tree of Markdown pages with ``key = value`` front matter
into a tree of HTML files rendered through Jinja2 layouts.

The main entry point is the CLI module; the generation pipeline itself lives
in ``pagesmith.build``.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"

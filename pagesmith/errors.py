"""Error types raised by the Pagesmith generation pipeline.

Every error carries a human-readable ``message`` that the CLI prints verbatim.

Key classes:
- GenerationError: Base class for every failure of a generation run.
- ConfigMissing: The site configuration file could not be loaded.
- ContentReadError: The content tree or a source file could not be read.
- ContentParseError: A single page could not be parsed (skipped, not fatal).
- LayoutRenderError: The template engine failed on a layout.
- FilesystemError: Creating, deleting or writing an output path failed.
"""

from __future__ import annotations

from pathlib import Path


class GenerationError(Exception):
    """Base error for a generation run.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigMissing(GenerationError):
    """Raised when ``config.ini`` is absent or unreadable."""

    def __init__(self, path: Path, message: str | None = None):
        self.path = path
        super().__init__(message or f"Cannot get config file {path}")


class ContentReadError(GenerationError):
    """Raised when a content file or the content root cannot be read."""

    def __init__(self, path: Path | str, message: str):
        self.path = path
        super().__init__(message)


class ContentParseError(GenerationError):
    """A single content unit could not be turned into a page.

    These errors are isolated per page: the pipeline records a skip message
    and moves on to the next unit.
    """

    def __init__(self, path: Path | str, message: str):
        self.path = path
        super().__init__(message)


class FrontMatterError(ContentParseError):
    """The front-matter block of a unit is malformed."""


class MarkdownParseError(ContentParseError):
    """The Markdown converter failed on a unit body."""


class LayoutRenderError(GenerationError):
    """Raised when a layout cannot be rendered.

    Attributes:
        layout: Name of the offending layout file.
    """

    def __init__(self, layout: str, message: str, original_error: Exception | None = None):
        self.layout = layout
        self.original_error = original_error
        super().__init__(f"Cannot render layout {layout}: {message}")


class FilesystemError(GenerationError):
    """Raised when a filesystem operation on the output tree fails.

    Attributes:
        path: The path the operation was applied to.
        operation: One of ``create``, ``delete``, ``write``, ``copy``.
    """

    def __init__(self, path: Path | str, operation: str, message: str):
        self.path = path
        self.operation = operation
        super().__init__(message)

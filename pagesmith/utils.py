"""Utility functions for Pagesmith.

Key functions:
    is_markdown: Check if a path is a Markdown file.
    ucfirst: Uppercase the first character of a string.
    title_from_filename: Derive a page title from a source filename.
    output_name_for: Replace the Markdown extension with ``.html``.
    to_site_path: Slash-separated path of a directory relative to a root.
    join_site_path: Join a site path and a file name.
    remove_tree: Recursively delete a directory.
    copy_tree: Recursively mirror a directory, overwriting destination files.
"""

from __future__ import annotations

import shutil
from pathlib import Path, PurePosixPath

from .errors import FilesystemError

MARKDOWN_SUFFIX = ".md"
HTML_SUFFIX = ".html"


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file (extension matched case-insensitively).

    Args:
        path: Path to check.

    Returns:
        True if the file has a ``.md`` extension.
    """
    return path.suffix.lower() == MARKDOWN_SUFFIX


def ucfirst(text: str) -> str:
    """Uppercase the first character, leaving the rest untouched.

    Examples:
        >>> ucfirst("about-us")
        'About-us'
    """
    return text[:1].upper() + text[1:]


def title_from_filename(filename: str) -> str:
    """Convert a source filename into a fallback page title.

    Examples:
        >>> title_from_filename("index.md")
        'Index'
    """
    return ucfirst(Path(filename).stem)


def output_name_for(filename: str) -> str:
    """Return the HTML output name for a Markdown source filename.

    Examples:
        >>> output_name_for("Notes.MD")
        'Notes.html'
    """
    return Path(filename).stem + HTML_SUFFIX


def to_site_path(directory: Path, root: Path) -> str:
    """Return ``directory`` relative to ``root`` with forward slashes.

    The root itself maps to the empty string.
    """
    relative = directory.relative_to(root)
    if relative == Path():
        return ""
    return PurePosixPath(*relative.parts).as_posix()


def join_site_path(site_path: str, name: str) -> str:
    """Join a site path and a file name (``name`` alone at the site root)."""
    return f"{site_path}/{name}" if site_path else name


def remove_tree(path: Path) -> None:
    """Recursively delete a directory.

    Raises:
        FilesystemError: If any entry cannot be removed.
    """
    try:
        shutil.rmtree(path)
    except OSError as exc:
        raise FilesystemError(path, "delete", f"Cannot delete {path}: {exc}") from exc


def copy_tree(source: Path, dest: Path) -> None:
    """Recursively copy ``source`` into ``dest``, overwriting existing files.

    Raises:
        FilesystemError: If the copy fails.
    """
    try:
        shutil.copytree(source, dest, dirs_exist_ok=True)
    except (OSError, shutil.Error) as exc:
        raise FilesystemError(dest, "copy", f"Cannot copy {source} to {dest}: {exc}") from exc

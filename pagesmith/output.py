"""Output writing for Pagesmith.

The writer only reconciles the files it is asked to write: an existing output
file is deleted and rewritten, but outputs of deleted content are left alone.

Key class:
- OutputWriter: Persists rendered pages and the marker file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .content import PageRecord
from .errors import FilesystemError

logger = logging.getLogger(__name__)

MARKER_FILENAME = "README.md"
MARKER_CONTENT = "Powered by [Pagesmith](https://pypi.org/project/pagesmith/)."


class OutputWriter:
    """Writes rendered pages into the output tree.

    Attributes:
        output_root: Root of the generated site.
    """

    def __init__(self, output_root: Path):
        self.output_root = output_root

    def _delete(self, target: Path, label: str) -> bool:
        if not target.is_file():
            return False
        try:
            target.unlink()
        except OSError as exc:
            raise FilesystemError(target, "delete", f"Cannot delete {label}") from exc
        return True

    def _write(self, target: Path, content: str, label: str) -> None:
        try:
            with open(target, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as exc:
            raise FilesystemError(target, "write", f"Cannot write {label}") from exc

    def write_page(self, page: PageRecord, rendered: str) -> list[str]:
        """Write a rendered page to its output location.

        Args:
            page: Page being written.
            rendered: Final HTML.

        Returns:
            Status messages, in order: an optional ``Delete`` then ``Write``.

        Raises:
            FilesystemError: If the directory cannot be created or the file
                cannot be deleted or written.
        """
        messages: list[str] = []
        target_dir = self.output_root / page.path if page.path else self.output_root
        if not target_dir.is_dir():
            try:
                target_dir.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise FilesystemError(target_dir, "create", f"Cannot create {target_dir}") from exc
        label = page.output_path
        target = target_dir / page.output_name
        if self._delete(target, label):
            messages.append(f"Delete {label}")
        self._write(target, rendered, label)
        logger.debug("Wrote %s", target)
        messages.append(f"Write {label}")
        return messages

    def write_marker(self) -> str:
        """Replace the ``README.md`` marker file at the output root.

        Returns:
            Status message.
        """
        target = self.output_root / MARKER_FILENAME
        try:
            if target.is_file():
                target.unlink()
            with open(target, "w", encoding="utf-8") as f:
                f.write(MARKER_CONTENT)
        except OSError as exc:
            raise FilesystemError(target, "write", "Cannot create the README file") from exc
        return "README file created"

"""Static asset mirroring for Pagesmith.

Runs once per generation, after every page has been written.

Key components:
- AssetPipeline: Removes stale layout output and mirrors the assets directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .utils import copy_tree, remove_tree

logger = logging.getLogger(__name__)

ASSETS_DIRNAME = "assets"
LAYOUTS_DIRNAME = "layouts"


class AssetPipeline:
    """Copies static assets from the source directory into the output tree.

    Attributes:
        assets_dir (Path): Directory containing source assets.
        output_root (Path): Root of the generated site.
    """

    def __init__(self, source_dir: Path, output_root: Path):
        """Initialize the asset pipeline.

        Args:
            source_dir: The ``_site-src`` directory.
            output_root: Root of the generated site.
        """
        self.assets_dir = source_dir / ASSETS_DIRNAME
        self.output_root = output_root

    def remove_stale_layouts(self) -> bool:
        """Remove a ``layouts`` directory left in the output tree.

        Returns:
            True if a directory was removed.
        """
        stale = self.output_root / LAYOUTS_DIRNAME
        if not stale.is_dir():
            return False
        logger.debug("Removing stale %s", stale)
        remove_tree(stale)
        return True

    def run(self) -> list[str]:
        """Execute the asset step.

        Returns:
            Status messages.

        Raises:
            FilesystemError: If removal or copying fails.
        """
        self.remove_stale_layouts()
        if not self.assets_dir.is_dir():
            logger.debug("No assets directory at %s", self.assets_dir)
            return []
        copy_tree(self.assets_dir, self.output_root / ASSETS_DIRNAME)
        return ["Copy assets directory (and sub)"]

"""Site generation for Pagesmith.

This module contains the generation pipeline: it loads configuration,
aggregates every content file into the site model, renders each page through
its layout, writes the output tree, mirrors assets and rewrites the marker
file.

Key functions:
- build_site: Run one complete generation.
- list_pages: List the content files of a project.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .assets import AssetPipeline
from .config import SiteConfig, load_config
from .content import PageModelBuilder, SiteModel, discover_content, iter_content_files
from .output import OutputWriter
from .protocols import LayoutRenderer, MarkdownConverter
from .renderers import MarkdownRenderer
from .templates import TemplateEngine, page_variables
from .utils import join_site_path, to_site_path

logger = logging.getLogger(__name__)

SOURCE_DIRNAME = "_site-src"
LAYOUTS_DIRNAME = "layouts"
CONTENT_DIRNAME = "content"
PAGES_DIRNAME = "pages"


@dataclass(frozen=True)
class SiteLayout:
    """Locations of a project's source and output trees."""

    project_root: Path

    @property
    def source_dir(self) -> Path:
        return self.project_root / SOURCE_DIRNAME

    @property
    def layouts_dir(self) -> Path:
        return self.source_dir / LAYOUTS_DIRNAME

    @property
    def pages_dir(self) -> Path:
        return self.source_dir / CONTENT_DIRNAME / PAGES_DIRNAME

    @property
    def output_root(self) -> Path:
        return self.project_root


@dataclass
class BuildResult:
    """Result of a generation run.

    Attributes:
        messages: Ordered, human-readable status messages.
        model: The site model the pages were rendered from.
        output_dir: Root of the generated site.
        config: Configuration the run used, overrides applied.
    """

    messages: list[str]
    model: SiteModel
    output_dir: Path
    config: SiteConfig = field(default_factory=SiteConfig)


def build_site(
    project_root: Path,
    overrides: Mapping[str, Any] | None = None,
    markdown: MarkdownConverter | None = None,
    renderer: LayoutRenderer | None = None,
) -> BuildResult:
    """Generate the whole site.

    Args:
        project_root: Directory holding ``_site-src``; pages are written here.
        overrides: Values deep-merged over the loaded config, e.g.
            ``{"site": {"base_url": "http://localhost:8000"}}``.
        markdown: Optional Markdown converter (defaults to MarkdownRenderer).
        renderer: Optional layout renderer (defaults to TemplateEngine).

    Returns:
        BuildResult with the ordered status messages.

    Raises:
        ConfigMissing: If ``config.ini`` cannot be loaded.
        ContentReadError: If the content tree or a file cannot be read.
        LayoutRenderError: If a layout fails to render.
        FilesystemError: If writing the output tree fails.
    """
    layout = SiteLayout(project_root)
    config = load_config(layout.source_dir).with_overrides(overrides)
    markdown = markdown or MarkdownRenderer()
    renderer = renderer or TemplateEngine(layout.layouts_dir)

    builder = PageModelBuilder(config, layout.layouts_dir, markdown)
    model = builder.build(discover_content(layout.pages_dir))
    logger.debug("Collected %d pages, %d menu(s)", len(model.pages), len(model.menus))

    messages: list[str] = list(model.skipped)
    writer = OutputWriter(layout.output_root)
    for page in model.pages.values():
        rendered = renderer.render(page.layout, page_variables(config, page, model))
        messages.extend(writer.write_page(page, rendered))

    messages.extend(AssetPipeline(layout.source_dir, layout.output_root).run())
    messages.append(writer.write_marker())
    return BuildResult(
        messages=messages, model=model, output_dir=layout.output_root, config=config
    )


def list_pages(project_root: Path) -> list[str]:
    """Return the content files of a project, relative to the pages directory.

    Args:
        project_root: Directory holding ``_site-src``.

    Returns:
        Slash-separated relative paths in discovery order.

    Raises:
        ContentReadError: If the pages directory does not exist.
    """
    pages_dir = SiteLayout(project_root).pages_dir
    return [
        join_site_path(to_site_path(path.parent, pages_dir), path.name)
        for path in iter_content_files(pages_dir)
    ]

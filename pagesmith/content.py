"""Content discovery and page model building for Pagesmith.

This module walks the content tree, turns every Markdown file into a
ContentUnit, and aggregates the units into the site model: a mapping of site
path to PageRecord plus the navigation menus.

Key classes:
- ContentUnit: One discovered source file.
- PageRecord: One page of the generated site.
- MenuEntry: One navigation link.
- SiteModel: All pages and menus of a generation run.
- LayoutResolver: Picks the layout file for a page.
- PageModelBuilder: Aggregates units into a SiteModel.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from .config import SiteConfig
from .errors import ContentParseError, ContentReadError
from .frontmatter import FrontMatter, parse_front_matter
from .protocols import MarkdownConverter
from .utils import (
    is_markdown,
    join_site_path,
    output_name_for,
    title_from_filename,
    to_site_path,
)

logger = logging.getLogger(__name__)

DEFAULT_LAYOUT = "default"
DEFAULT_MENU = "nav"
LAYOUT_SUFFIX = ".html"


@dataclass(frozen=True)
class ContentUnit:
    """A discovered content file.

    Attributes:
        source_path: Absolute path of the source file.
        site_path: Slash-separated directory path relative to the content root.
        raw_text: Complete file content.
    """

    source_path: Path
    site_path: str
    raw_text: str

    @property
    def filename(self) -> str:
        return self.source_path.name

    @property
    def relative_name(self) -> str:
        return join_site_path(self.site_path, self.filename)


@dataclass
class PageRecord:
    """Represents a page of the generated site.

    Attributes:
        layout: Layout file name, e.g. ``default.html``.
        title: Page title.
        path: Site path of the page (``""`` for the site root).
        content: HTML produced from the Markdown body.
        output_name: Output file name, e.g. ``index.html``.
        source_path: Source file the page was built from.
    """

    layout: str
    title: str
    path: str
    content: str
    output_name: str
    source_path: Path | None = None

    @property
    def output_path(self) -> str:
        """Output location relative to the site root."""
        return join_site_path(self.path, self.output_name)


@dataclass(frozen=True)
class MenuEntry:
    """A navigation link to a page."""

    title: str
    path: str


@dataclass
class SiteModel:
    """Pages and menus collected during one generation run.

    Attributes:
        pages: Site path -> PageRecord, in first-insertion order.
        menus: Menu name -> entries in discovery order. ``nav`` always exists.
        skipped: Messages for units that could not be parsed.
    """

    pages: dict[str, PageRecord] = field(default_factory=dict)
    menus: dict[str, list[MenuEntry]] = field(
        default_factory=lambda: {DEFAULT_MENU: []}
    )
    skipped: list[str] = field(default_factory=list)

    @property
    def nav(self) -> list[MenuEntry]:
        return self.menus.setdefault(DEFAULT_MENU, [])


def _walk(directory: Path) -> Iterator[Path]:
    """Yield Markdown files depth first, a directory's files before its children."""
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        raise ContentReadError(directory, f"Cannot list {directory}: {exc}") from exc
    subdirs = []
    for entry in entries:
        path = Path(entry.path)
        if entry.is_dir():
            subdirs.append(path)
        elif entry.is_file() and is_markdown(path):
            yield path
    for subdir in subdirs:
        yield from _walk(subdir)


def iter_content_files(content_root: Path) -> Iterator[Path]:
    """Iterate over the Markdown files under ``content_root``.

    Raises:
        ContentReadError: If ``content_root`` is not a directory.
    """
    if not content_root.is_dir():
        raise ContentReadError(content_root, f"Invalid content directory {content_root}")
    return _walk(content_root)


def discover_content(content_root: Path) -> Iterator[ContentUnit]:
    """Lazily yield a ContentUnit for every Markdown file in the content tree.

    Each call starts a fresh traversal.

    Args:
        content_root: Directory holding the Markdown pages.

    Yields:
        ContentUnit instances in traversal order.

    Raises:
        ContentReadError: If the root is missing or a file cannot be read.
    """
    for path in iter_content_files(content_root):
        site_path = to_site_path(path.parent, content_root)
        try:
            raw_text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ContentReadError(
                path,
                f"Cannot get content of {join_site_path(site_path, path.name)}: {exc}",
            ) from exc
        logger.debug("Discovered %s", path)
        yield ContentUnit(source_path=path, site_path=site_path, raw_text=raw_text)


class LayoutResolver:
    """Resolves the layout file for a page.

    A layout requested in front matter is used when ``<name>.html`` exists in
    the layouts directory; anything else falls back to ``default.html``.

    Attributes:
        layouts_dir: Directory containing the layout templates.
    """

    def __init__(self, layouts_dir: Path):
        self.layouts_dir = layouts_dir

    def resolve(self, requested: str | None) -> str:
        """Resolve a requested layout name to a layout file name.

        Args:
            requested: Layout name from front matter, or None.

        Returns:
            Layout file name to render with.
        """
        if requested:
            candidate = f"{requested}{LAYOUT_SUFFIX}"
            if (self.layouts_dir / candidate).is_file():
                return candidate
            logger.debug("Layout %s not found, using %s", candidate, DEFAULT_LAYOUT)
        return f"{DEFAULT_LAYOUT}{LAYOUT_SUFFIX}"


class PageModelBuilder:
    """Aggregates content units into the site model.

    The whole discovery sequence is consumed before anything is rendered, so
    every page sees the complete menu.

    Attributes:
        config: Site configuration for this run.
        layout_resolver: Resolver used to pick layouts.
        markdown: Markdown converter capability.
    """

    def __init__(self, config: SiteConfig, layouts_dir: Path, markdown: MarkdownConverter):
        self.config = config
        self.layout_resolver = LayoutResolver(layouts_dir)
        self.markdown = markdown

    @property
    def link_aliases(self) -> dict[str, str]:
        return {"base_url": self.config.base_url}

    def build_page(self, unit: ContentUnit) -> tuple[PageRecord, FrontMatter | None]:
        """Build the PageRecord for a single unit.

        Args:
            unit: The content unit to convert.

        Returns:
            Tuple of (PageRecord, parsed front matter or None).

        Raises:
            ContentParseError: If the front matter or Markdown body is invalid.
        """
        meta, body = parse_front_matter(unit.raw_text, source=unit.relative_name)
        try:
            content = self.markdown.to_html(body, self.link_aliases)
        except ContentParseError as exc:
            exc.path = unit.source_path
            raise
        title = meta.title if meta and meta.title else title_from_filename(unit.filename)
        page = PageRecord(
            layout=self.layout_resolver.resolve(meta.layout if meta else None),
            title=title,
            path=unit.site_path,
            content=content,
            output_name=output_name_for(unit.filename),
            source_path=unit.source_path,
        )
        return page, meta

    def build(self, units: Iterable[ContentUnit]) -> SiteModel:
        """Aggregate every unit into a SiteModel.

        Units sharing a site path overwrite each other; the last one wins.

        Args:
            units: Content units in discovery order.

        Returns:
            The complete SiteModel.

        Raises:
            ContentReadError: Propagated from discovery; aborts the run.
        """
        model = SiteModel()
        for unit in units:
            try:
                page, meta = self.build_page(unit)
            except ContentParseError as exc:
                logger.debug("Skipping %s: %s", unit.source_path, exc.message)
                model.skipped.append(f"Skip {unit.relative_name}: {exc.message}")
                continue
            if unit.site_path in model.pages:
                logger.debug("Page at '%s' replaced by %s", unit.site_path, unit.filename)
            model.pages[unit.site_path] = page
            if meta and meta.menu:
                model.menus.setdefault(meta.menu, []).append(
                    MenuEntry(title=page.title, path=page.path)
                )
        return model

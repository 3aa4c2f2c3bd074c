"""Front-matter extraction for Pagesmith content files.

A content file may start with an HTML comment holding ``key = value`` lines::

    <!--
    title = Home
    layout = default
    menu = nav
    -->
    # Body in Markdown

Only ``title``, ``layout`` and ``menu`` are interpreted by the pipeline; other
keys are kept in ``FrontMatter.extra`` and otherwise ignored.
"""

from __future__ import annotations

import configparser
import re
from dataclasses import dataclass, field

from .config import read_ini
from .errors import FrontMatterError

# The body group must match at least one character: a file made only of the
# comment block is not front matter and is rendered as body text.
FRONTMATTER_RE = re.compile(r"^<!--(.+?)-->(.+)", re.DOTALL)

_SECTION = "front_matter"
RECOGNIZED_KEYS = ("title", "layout", "menu")


@dataclass(frozen=True)
class FrontMatter:
    """Parsed front-matter block.

    Attributes:
        title: Title override, if declared.
        layout: Requested layout name (without the ``.html`` extension).
        menu: Name of the menu this page belongs to.
        extra: Every other declared key.
    """

    title: str | None = None
    layout: str | None = None
    menu: str | None = None
    extra: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, values: dict[str, str]) -> FrontMatter:
        known = {key: values[key] for key in RECOGNIZED_KEYS if key in values}
        extra = {key: value for key, value in values.items() if key not in RECOGNIZED_KEYS}
        return cls(extra=extra, **known)

    def keys(self) -> list[str]:
        declared = [key for key in RECOGNIZED_KEYS if getattr(self, key) is not None]
        return declared + list(self.extra)


def parse_front_matter(
    raw_text: str, source: str = "<string>"
) -> tuple[FrontMatter | None, str]:
    """Split raw file content into front matter and body.

    Args:
        raw_text: Complete content of a source file.
        source: Name used in error messages.

    Returns:
        Tuple of (FrontMatter or None, body). When no block is found the
        whole input is returned as the body.

    Raises:
        FrontMatterError: If the block is present but not valid ``key = value`` text.
    """
    match = FRONTMATTER_RE.match(raw_text)
    if not match:
        return None, raw_text
    raw_info, body = match.groups()
    # Indented lines would otherwise be read as value continuations.
    lines = "\n".join(line.strip() for line in raw_info.splitlines() if line.strip())
    try:
        sections = read_ini(f"[{_SECTION}]\n{lines}\n", source=source)
    except configparser.Error as exc:
        raise FrontMatterError(source, f"Invalid front matter in {source}: {exc}") from exc
    values: dict[str, str] = {}
    for section_values in sections.values():
        values.update(section_values)
    return FrontMatter.from_mapping(values), body

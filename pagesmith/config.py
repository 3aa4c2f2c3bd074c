"""Site configuration for Pagesmith.

The configuration lives in ``_site-src/config.ini`` and is made of the
``[site]``, ``[author]`` and ``[deploy]`` sections. It is loaded once per
generation run and passed explicitly to every component that reads it.
"""

from __future__ import annotations

import configparser
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from .errors import ConfigMissing

CONFIG_FILENAME = "config.ini"
SECTIONS = ("site", "author", "deploy")
PREVIEW_BASE_URL = "http://localhost:8000"


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``.

    Values from ``override`` win at every depth; nested mappings present on
    both sides are merged instead of replaced.

    Args:
        base: Original mapping.
        override: Mapping whose values take precedence.

    Returns:
        A new merged dictionary. Neither argument is modified.
    """
    merged: dict[str, Any] = {
        key: dict(value) if isinstance(value, Mapping) else value
        for key, value in base.items()
    }
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        elif isinstance(value, Mapping):
            merged[key] = deep_merge({}, value)
        else:
            merged[key] = value
    return merged


def _freeze(data: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(
        {
            key: _freeze(value) if isinstance(value, Mapping) else value
            for key, value in data.items()
        }
    )


@dataclass(frozen=True)
class SiteConfig:
    """Immutable section -> key -> value configuration.

    Attributes:
        data: Read-only nested mapping of configuration values.
    """

    data: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        sections = {name: {} for name in SECTIONS}
        frozen = _freeze(deep_merge(sections, self.data))
        object.__setattr__(self, "data", frozen)

    def section(self, name: str) -> dict[str, Any]:
        """Return a plain copy of a configuration section (empty if missing)."""
        value = self.data.get(name, {})
        return dict(value) if isinstance(value, Mapping) else {}

    def get(self, section: str, key: str, default: Any = None) -> Any:
        return self.section(section).get(key, default)

    @property
    def base_url(self) -> str:
        return str(self.get("site", "base_url", "") or "")

    def with_overrides(self, overrides: Mapping[str, Any] | None) -> SiteConfig:
        """Return a new config with ``overrides`` deep-merged on top.

        Args:
            overrides: Caller supplied values, e.g. ``{"site": {"base_url": ...}}``.

        Returns:
            A new SiteConfig; this instance is left untouched.
        """
        if not overrides:
            return self
        return SiteConfig(deep_merge(self.data, overrides))

    def to_dict(self) -> dict[str, Any]:
        return deep_merge({}, self.data)


def _unquote(value: str | None) -> str:
    if value is None:
        return ""
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def read_ini(text: str, source: str = "<string>") -> dict[str, dict[str, str]]:
    """Parse INI text into a nested dictionary.

    Keys keep their case, values are plain strings with surrounding quotes
    removed. A key followed by an empty value reads as an empty string;
    a line without a delimiter is a parsing error.

    Raises:
        configparser.Error: If the text is not valid INI.
    """
    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        default_section="__defaults__",
    )
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    parser.read_string(text, source=source)
    return {
        section: {key: _unquote(value) for key, value in parser.items(section, raw=True)}
        for section in parser.sections()
    }


def load_config(source_dir: Path) -> SiteConfig:
    """Load site configuration from ``config.ini``.

    Args:
        source_dir: The ``_site-src`` directory of the project.

    Returns:
        The loaded SiteConfig.

    Raises:
        ConfigMissing: If the file is absent, unreadable or not valid INI.
    """
    config_path = source_dir / CONFIG_FILENAME
    if not config_path.is_file():
        raise ConfigMissing(config_path)
    try:
        text = config_path.read_text(encoding="utf-8")
        data = read_ini(text, source=str(config_path))
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigMissing(config_path, f"Cannot read config file {config_path}: {exc}") from exc
    except configparser.Error as exc:
        raise ConfigMissing(config_path, f"Invalid config file {config_path}: {exc}") from exc
    return SiteConfig(data)

"""
Configuration parser for augtree-query.

Handles TOML file parsing into dataclasses with per-field defaults.
"""

import tomllib
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

from .debug import debug_print


def _debug_print(msg: str) -> None:
    debug_print("CONFIG", msg)


@dataclass
class SourceConfig:
    """A calendar feed: a local ICS file or a URL."""
    name: str
    url: Optional[str] = None
    path: Optional[Path] = None


@dataclass
class WindowConfig:
    """Recurrence expansion window, in days around the query point."""
    days_before: int = 30
    days_after: int = 365


@dataclass
class FetchConfig:
    timeout: int = 30  # Request timeout in seconds


@dataclass
class Config:
    """Main configuration container for augtree-query."""

    timezone: str = "Europe/Amsterdam"
    debug: bool = False
    window: WindowConfig = field(default_factory=WindowConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    sources: list[SourceConfig] = field(default_factory=list)

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        xdg_config = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(xdg_config) / 'augtree' / 'augtree.toml'

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from TOML file."""
        if config_path is None:
            config_path = cls.get_default_config_path()

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'rb') as f:
            data = tomllib.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        general = data.get('General', {})

        window_data = data.get('Window', {})
        window = WindowConfig(
            days_before=window_data.get('days_before', WindowConfig.days_before),
            days_after=window_data.get('days_after', WindowConfig.days_after),
        )

        fetch_data = data.get('Fetch', {})
        fetch = FetchConfig(timeout=fetch_data.get('timeout', FetchConfig.timeout))

        # Supports both [Source.Name] and [Source] with nested sub-tables
        sources = []
        for key, value in data.items():
            if key.startswith('Source.') and isinstance(value, dict):
                sources.append(_parse_source(key.split('.', 1)[1], value))
            elif key == 'Source' and isinstance(value, dict):
                for sub_key, sub_value in value.items():
                    if isinstance(sub_value, dict):
                        sources.append(_parse_source(sub_key, sub_value))

        _debug_print(f"Total calendar sources found: {len(sources)}")

        return cls(
            timezone=general.get('timezone', cls.timezone),
            debug=general.get('debug', cls.debug),
            window=window,
            fetch=fetch,
            sources=sources,
        )


def _parse_source(name: str, value: dict) -> SourceConfig:
    url = value.get('url')
    path = value.get('path')
    if not url and not path:
        raise ValueError(f"[Source.{name}] needs either 'url' or 'path'")
    _debug_print(f"Found calendar source: {name}")
    return SourceConfig(
        name=value.get('name', name),
        url=url or None,
        path=Path(os.path.expanduser(path)) if path else None,
    )

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from command_finder.constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_CONFIG_PATH,
    DEFAULT_QUERY_TIMEOUT,
)
from command_finder.types import Config

logger = logging.getLogger(__name__)

_DEFAULT_TEMPLATE = """\
# command_finder configuration file

[catalog]
# Catalog database location (defaults to a file in the system temp directory)
# storage_path = "/tmp/command_finder/catalog.db"
# Records inserted per transaction while rebuilding
# batch_size = 500
# Seconds a single query may run before it counts as "no results"
# query_timeout = 2.0

[providers]
# Action provider modules to load (dotted Python paths)
# paths = [
#     "myapp.actions",
# ]
"""


@dataclass
class LoadedConfig:
    """Result of loading the command_finder config file."""

    storage_path: str | None = None
    batch_size: int = DEFAULT_BATCH_SIZE
    query_timeout: float = DEFAULT_QUERY_TIMEOUT
    provider_paths: list[str] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict)

    def apply(self, config: Config) -> Config:
        """Fold file settings into *config*. Explicit provider lists are extended, not replaced."""
        if self.storage_path is not None:
            config.storage_path = self.storage_path
        config.batch_size = self.batch_size
        config.query_timeout = self.query_timeout
        config.providers = list(config.providers) + [
            p for p in self.provider_paths if p not in config.providers
        ]
        return config


def load_config(path: str = DEFAULT_CONFIG_PATH) -> LoadedConfig:
    """Load configuration from a TOML file.

    - Missing file: create default template, return defaults.
    - Malformed TOML: log warning, return defaults.
    - Invalid values: log warning, keep the default for that key.

    Never raises an exception.
    """
    config_path = Path(path)

    if not config_path.exists():
        _create_default_template(config_path)
        return LoadedConfig()

    try:
        content = config_path.read_bytes()
    except OSError as e:
        logger.warning("Failed to read config file %s: %s", path, e)
        return LoadedConfig()

    if not content:
        return LoadedConfig()

    try:
        raw = tomllib.loads(content.decode("utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        logger.warning("Malformed TOML in %s: %s", path, e)
        return LoadedConfig()

    loaded = LoadedConfig(raw=raw)

    catalog = raw.get("catalog")
    if isinstance(catalog, dict):
        storage_path = catalog.get("storage_path")
        if isinstance(storage_path, str) and storage_path:
            loaded.storage_path = storage_path

        batch_size = catalog.get("batch_size")
        if batch_size is not None:
            if isinstance(batch_size, int) and not isinstance(batch_size, bool) and batch_size > 0:
                loaded.batch_size = batch_size
            else:
                logger.warning("Ignoring invalid batch_size %r in %s", batch_size, path)

        query_timeout = catalog.get("query_timeout")
        if query_timeout is not None:
            if isinstance(query_timeout, (int, float)) and not isinstance(query_timeout, bool) and query_timeout > 0:
                loaded.query_timeout = float(query_timeout)
            else:
                logger.warning("Ignoring invalid query_timeout %r in %s", query_timeout, path)

    providers = raw.get("providers")
    if isinstance(providers, dict):
        paths = providers.get("paths")
        if isinstance(paths, list):
            loaded.provider_paths = [str(p) for p in paths]

    return loaded


def _create_default_template(config_path: Path) -> None:
    """Create the default config template, creating parent directories if needed."""
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(_DEFAULT_TEMPLATE, encoding="utf-8")
    except OSError as e:
        logger.warning("Failed to create default config at %s: %s", config_path, e)

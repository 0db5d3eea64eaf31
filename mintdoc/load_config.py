"""Logic for loading and merging configuration files."""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from mintdoc.deep_merge import deep_merge
from mintdoc.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "output_folder": "docs/reference",
    "docs_json": None,
    "navigation": {
        "tab_name": "API Reference",
        "group_name": "API",
        "enable_menu": False,
    },
    "cache": {
        "enabled": True,
        "max_size": 500,
    },
    "limits": {
        "max_recursion_depth": 25,
        "max_processing_seconds": 600,
        "max_file_size_bytes": 50 * 1024 * 1024,
        "max_total_output_bytes": 500 * 1024 * 1024,
        "max_segment_length": 200,
    },
}


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if not path:
        return config

    p = Path(path)
    if not p.exists():
        logger.warning("Config file %s not found; using defaults", p)
        return config

    try:
        user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        msg = f"Failed to read config file: {p}"
        raise ConfigurationError(
            msg, resource=str(p), operation="load_config", cause=e
        ) from e
    if not isinstance(user_config, dict):
        msg = f"Config file must contain a mapping, got {type(user_config).__name__}"
        raise ConfigurationError(msg, resource=str(p), operation="load_config")

    unknown = sorted(set(user_config) - set(DEFAULT_CONFIG))
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        user_config = {k: v for k, v in user_config.items() if k in DEFAULT_CONFIG}
    return deep_merge(config, user_config)

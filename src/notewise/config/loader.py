"""YAML configuration loader with inheritance support.

Supports:
- Loading YAML config files
- Config inheritance via 'extends' key
- Deep merging of nested config
- Environment overrides for the Ollama host and log level
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from . import (
    CacheConfig,
    GenerationConfig,
    LoggingConfig,
    NotewiseConfig,
    SearchConfig,
)

logger = logging.getLogger(__name__)

ENV_OLLAMA_HOST = "OLLAMA_HOST"
ENV_LOG_LEVEL = "NOTEWISE_LOG_LEVEL"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    Values from override take precedence. Nested dicts are merged recursively.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_with_inheritance(path: Path) -> dict[str, Any]:
    """Load YAML file with inheritance support.

    If the file contains an 'extends' key, the base config is loaded first
    and merged with the current config.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        config = yaml.safe_load(f) or {}

    if "extends" in config:
        base_name = config.pop("extends")
        base_path = path.parent / base_name
        base_config = load_yaml_with_inheritance(base_path)
        config = deep_merge(base_config, config)

    return config


def dict_to_config(data: dict[str, Any]) -> NotewiseConfig:
    """Convert raw dict to typed NotewiseConfig dataclass."""
    root = data.get("notewise", {}) or {}

    # YAML sections may be present but empty
    def safe_get(key: str) -> dict[str, Any]:
        value = root.get(key, {})
        return value if value is not None else {}

    return NotewiseConfig(
        generation=GenerationConfig(**safe_get("generation")),
        cache=CacheConfig(**safe_get("cache")),
        search=SearchConfig(**safe_get("search")),
        logging=LoggingConfig(**safe_get("logging")),
    )


def apply_env_overrides(
    config: NotewiseConfig, environ: Mapping[str, str] | None = None
) -> NotewiseConfig:
    """Apply environment variable overrides in place.

    Args:
        config: Configuration to update
        environ: Environment mapping (defaults to os.environ)

    Returns:
        The same config instance
    """
    env = os.environ if environ is None else environ

    host = env.get(ENV_OLLAMA_HOST)
    if host:
        if not host.startswith(("http://", "https://")):
            host = f"http://{host}"
        config.generation.host = host
        logger.debug(f"Ollama host overridden from environment: {host}")

    level = env.get(ENV_LOG_LEVEL)
    if level:
        config.logging.level = level.upper()

    return config


def load_config(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> NotewiseConfig:
    """Load notewise configuration.

    Args:
        path: Path to a YAML config file; defaults are used when None
        environ: Environment mapping for overrides (defaults to os.environ)

    Returns:
        Parsed NotewiseConfig

    Examples:
        >>> config = load_config()
        >>> config = load_config(path="/path/to/notewise.yaml")
    """
    if path is None:
        config = NotewiseConfig()
    else:
        config = dict_to_config(load_yaml_with_inheritance(Path(path)))

    return apply_env_overrides(config, environ)


__all__ = [
    "ENV_LOG_LEVEL",
    "ENV_OLLAMA_HOST",
    "apply_env_overrides",
    "deep_merge",
    "dict_to_config",
    "load_config",
    "load_yaml_with_inheritance",
]

#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

import logging
import sys

import yaml

from .exit_codes import ConfigError
from .tag_filter import DefaultTagFilter, VERSION_PATTERN
from .tag_processor import SNAPSHOT_SUFFIX

logger = logging.getLogger("gitversioning")

ENV_PREFIX = "GITVERSIONING_"

# Per-project configuration files, checked in this order
CONFIG_FILENAMES = [
    '.gitversioning.toml',
    '.gitversioning.yaml',
    '.gitversioning.yml',
    '.gitversioning.json',
]


def configure_logging(debug: bool = False):
    """Configure logging for command line use (stderr)."""
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=[logging.StreamHandler(sys.stderr)],
            force=True
        )
    else:
        logging.basicConfig(
            level=logging.INFO,
            format="%(levelname)s: %(message)s",
            handlers=[logging.StreamHandler(sys.stderr)],
            force=True
        )


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        "tag_prefix": "",
        "pattern": VERSION_PATTERN,
        "processor": None,  # highest precedence in the registry
        "snapshot_suffix": SNAPSHOT_SUFFIX,
        "sub_directory": None,
    }


def find_config_file(work_tree: Path) -> Optional[Path]:
    """Get the first per-project configuration file in the work tree."""
    for filename in CONFIG_FILENAMES:
        path = work_tree / filename
        if path.is_file():
            return path
    return None


def read_config_file(path: Path) -> Dict[str, Any]:
    """
    Read a TOML, YAML or JSON configuration file.

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    try:
        if path.suffix.lower() == '.toml':
            with open(path, 'rb') as f:
                data = tomllib.load(f)
        elif path.suffix.lower() in ['.yaml', '.yml']:
            with open(path, 'r') as f:
                data = yaml.safe_load(f)
        else:
            with open(path, 'r') as f:
                data = json.load(f)
    except (OSError, tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Error loading config from {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config in {path} must be a table/mapping")
    return data


def read_pyproject(work_tree: Path) -> Dict[str, Any]:
    """Get the [tool.gitversioning] table of pyproject.toml, if any."""
    pyproject = work_tree / "pyproject.toml"
    if not pyproject.is_file():
        return {}
    data = read_config_file(pyproject)
    section = data.get('tool', {}).get('gitversioning', {})
    if not isinstance(section, dict):
        raise ConfigError(f"[tool.gitversioning] in {pyproject} must be a table")
    return section


def merge_configs(base_config, override_config):
    """
    Merge configuration dictionaries, ignoring unknown keys.

    Keys are accepted with dashes or underscores ("tag-prefix" or
    "tag_prefix").

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        key = key.replace('-', '_')
        if key not in merged:
            logger.debug(f"Ignoring unknown config key: {key}")
            continue
        merged[key] = value

    return merged


def apply_env_overrides(config, environ=None):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: GITVERSIONING_KEY
    For example: GITVERSIONING_TAG_PREFIX=v
    """
    environ = os.environ if environ is None else environ
    config = config.copy()

    for env_key, value in environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue
        key = env_key[len(ENV_PREFIX):].lower()
        if key in config:
            config[key] = value
        else:
            logger.debug(f"Ignoring unknown environment variable: {env_key}")

    return config


def load_config(work_tree, overrides: Optional[Dict[str, Any]] = None, environ=None) -> Dict[str, Any]:
    """
    Load configuration for a work tree.

    Sources, later ones win: defaults, [tool.gitversioning] in
    pyproject.toml, the first .gitversioning.* file, GITVERSIONING_*
    environment variables, explicit overrides (None values are skipped).
    """
    work_tree = Path(work_tree)
    config = get_default_config()
    config = merge_configs(config, read_pyproject(work_tree))

    config_path = find_config_file(work_tree)
    if config_path is not None:
        logger.debug(f"Using config from {config_path}")
        config = merge_configs(config, read_config_file(config_path))

    config = apply_env_overrides(config, environ)

    if overrides:
        config = merge_configs(config, {k: v for k, v in overrides.items() if v is not None})

    return config


def build_tag_filter(config: Dict[str, Any]) -> DefaultTagFilter:
    """Create the tag filter described by the configuration."""
    tag_filter = DefaultTagFilter(config.get('pattern') or VERSION_PATTERN)
    prefix = config.get('tag_prefix')
    if prefix:
        tag_filter.prepend(prefix)
    return tag_filter


def build_tag_processor(config: Dict[str, Any], registry=None):
    """Create the tag processor described by the configuration."""
    if registry is None:
        from .registry import default_registry
        registry = default_registry()
    return registry.tag_processor(
        config.get('processor') or None,
        suffix=config.get('snapshot_suffix', SNAPSHOT_SUFFIX)
    )

"""Configuration file loading and CLI overrides for the resolver.

The config file is YAML (or JSON by extension) with an optional
``resolver:`` section. CLI flags are applied on top with highest precedence.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
from typing import Any, Dict, Optional

import yaml

from constants import Constants
from resolution.config import ConfigError, ResolverConfig

logger = logging.getLogger(__name__)


def config_path_from(args: Any) -> Optional[str]:
    """Return the --config path, falling back to RESOLVEWITH_CONFIG."""
    return getattr(args, "CONFIG", None) or os.environ.get(Constants.ENV_CONFIG) or None


def load_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    """Load the resolver section of a configuration file.

    Args:
        config_path: Path to YAML/JSON config file.

    Returns:
        The ``resolver`` mapping, or the whole document when it has no such
        section. Empty dict when no path is given.

    Raises:
        ConfigError: If the file is missing or cannot be parsed.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            if config_path.lower().endswith(".json"):
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to parse config {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a mapping")
    section = data.get(Constants.CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise ConfigError(f"'{Constants.CONFIG_SECTION}' in {config_path} must be a mapping")
    logger.info("Loaded resolver config from: %s", config_path)
    return section


def apply_cli_overrides(config: ResolverConfig, args: Any) -> ResolverConfig:
    """Return ``config`` with any CLI-provided values replacing file values."""
    overrides: Dict[str, Any] = {}
    if getattr(args, "CONDITIONS", None):
        overrides["conditions"] = tuple(args.CONDITIONS)
    if getattr(args, "EXTENSIONS", None):
        for ext in args.EXTENSIONS:
            if not ext.startswith("."):
                raise ConfigError(f"extension {ext!r} must start with '.'")
        overrides["extensions"] = tuple(args.EXTENSIONS)
    if getattr(args, "PREFER_MODULE", False):
        overrides["prefer_module"] = True
    if getattr(args, "STRICT", False):
        overrides["strict_descriptors"] = True
    if not overrides:
        return config
    return dataclasses.replace(config, **overrides)


def build_config(args: Any) -> ResolverConfig:
    """Config file (if any) plus CLI overrides."""
    section = load_config_file(config_path_from(args))
    return apply_cli_overrides(ResolverConfig.from_mapping(section), args)

"""
Configuration module for node embedding training.

Configuration lives in YAML. Command line flags are applied on top with
dotted keys such as 'training.epochs'.
"""

import copy
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default.yaml"


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, loads default.yaml

    Returns:
        Configuration dictionary
    """
    config_path = DEFAULT_CONFIG_PATH if config_path is None else Path(config_path)

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    return config


def get_default_config() -> Dict[str, Any]:
    """Get default configuration dictionary."""
    return load_config()


def apply_overrides(config: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of config with dotted-key overrides applied.

    None values are skipped, so unset command line flags leave the
    configured value in place.

    Args:
        config: Base configuration
        overrides: e.g. {'training.epochs': 10, 'walks.hops': None}

    Returns:
        New configuration dictionary
    """
    merged = copy.deepcopy(config)

    for dotted_key, value in overrides.items():
        if value is None:
            continue

        section = merged
        *parents, leaf = dotted_key.split('.')
        for key in parents:
            section = section.setdefault(key, {})
        section[leaf] = value

    return merged


__all__ = ['load_config', 'get_default_config', 'apply_overrides', 'DEFAULT_CONFIG_PATH']

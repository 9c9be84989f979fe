# failstack/config/loader.py
"""
Configuration Loader

Loads configuration from YAML files with code defaults as fallback.

Design principle:
- Code = truth (has all defaults)
- YAML = input parameters (optional)
- System works without YAML
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Dict, Any

import yaml

from .settings import StackConfig
from .validator import validate_config, has_errors

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".failstack" / "config.yml"

# Active configuration (replaced atomically, never mutated)
_active_config: StackConfig = StackConfig.default()


def load_config(config_path: Optional[Path] = None) -> StackConfig:
    """
    Load stack configuration.

    Args:
        config_path: Path to YAML file. If None, tries ~/.failstack/config.yml

    Returns:
        StackConfig instance (always has code defaults as fallback)

    Note:
        - If YAML is not found or invalid, returns code defaults
        - Error-level validation issues also fall back to code defaults
    """
    config = StackConfig.default()

    yaml_data = _load_yaml(config_path)
    if not yaml_data:
        return config

    section = yaml_data.get("stack") if isinstance(yaml_data, dict) else None
    if not isinstance(section, dict):
        return config

    merged = _merge_config(config, section)

    issues = validate_config(merged)
    for issue in issues:
        logger.warning(f"Config issue: {issue}")
    if has_errors(issues):
        return config

    return merged


def get_config() -> StackConfig:
    """Get the active configuration"""
    return _active_config


def set_config(config: StackConfig) -> StackConfig:
    """
    Replace the active configuration.

    Returns:
        The previously active configuration
    """
    global _active_config
    previous = _active_config
    _active_config = config
    return previous


def configure(config_path: Optional[Path] = None) -> StackConfig:
    """Load configuration from YAML and make it active"""
    config = load_config(config_path)
    set_config(config)
    return config


def _load_yaml(config_path: Optional[Path] = None) -> Optional[Dict[str, Any]]:
    """Load YAML file, return None if not found (not an error)"""
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if not path.exists():
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config from {path}: {e}")
        return None


def _merge_config(default_instance: StackConfig, yaml_data: Dict[str, Any]) -> StackConfig:
    """Merge YAML data into default config instance"""
    merged = {**default_instance.to_dict(), **yaml_data}
    unknown = set(merged) - set(StackConfig.__dataclass_fields__)
    if unknown:
        logger.warning(f"Ignoring unknown stack config keys: {sorted(unknown)}")
    return StackConfig(**{k: v for k, v in merged.items() if k in StackConfig.__dataclass_fields__})

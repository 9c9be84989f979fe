"""
FailStack Configuration

Design principles:
1. Code has defaults, YAML is input parameters (YAML can be deleted)
2. Configuration objects are frozen; the active one is replaced, never mutated
"""

from .settings import StackConfig, DEFAULT_MAX_DEPTH
from .loader import load_config, get_config, set_config, configure
from .validator import validate_config, ConfigIssue

__all__ = [
    "StackConfig",
    "DEFAULT_MAX_DEPTH",
    "load_config",
    "get_config",
    "set_config",
    "configure",
    "validate_config",
    "ConfigIssue",
]

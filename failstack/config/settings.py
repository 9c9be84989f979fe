# failstack/config/settings.py
"""
Stack Capture Configuration

Code defaults for stack capture. YAML is optional input (see loader.py).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Any


DEFAULT_MAX_DEPTH = 50


@dataclass(frozen=True)
class StackConfig:
    """
    Configuration for stack capture.

    - max_depth: Maximum number of frames recorded per capture (innermost kept)
    - capture_enabled: When False, wrapping records an empty stack
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    capture_enabled: bool = True

    @classmethod
    def default(cls) -> "StackConfig":
        """Create default configuration (no YAML needed)"""
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "max_depth": self.max_depth,
            "capture_enabled": self.capture_enabled,
        }

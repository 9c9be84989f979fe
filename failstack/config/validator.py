# failstack/config/validator.py
"""
Configuration Validator

Validates configuration for illegal/misleading values.
Returns structured issues with level (warn/error), path, message, hint.
"""

from typing import List, Literal
from dataclasses import dataclass

from .settings import StackConfig


# Beyond this a capture walks more frames than the interpreter normally allows
RECURSION_DEPTH_HINT = 1000


@dataclass(frozen=True)
class ConfigIssue:
    """
    Configuration validation issue

    Structured output for CLI/logging.
    """
    level: Literal["warn", "error"]
    path: str  # e.g., "stack.max_depth"
    message: str
    hint: str = ""

    def __str__(self) -> str:
        hint_str = f"\n   Hint: {self.hint}" if self.hint else ""
        return f"[{self.level}] [{self.path}] {self.message}{hint_str}"


def validate_config(config: StackConfig) -> List[ConfigIssue]:
    """
    Validate stack configuration.

    Returns:
        List of issues (warn/error level)
    """
    issues = []

    if not isinstance(config.max_depth, int) or isinstance(config.max_depth, bool):
        issues.append(ConfigIssue(
            level="error",
            path="stack.max_depth",
            message=f"max_depth must be an integer, got {type(config.max_depth).__name__}",
            hint="Use a positive integer such as 50",
        ))
    elif config.max_depth < 1:
        issues.append(ConfigIssue(
            level="error",
            path="stack.max_depth",
            message=f"max_depth={config.max_depth} would record no frames",
            hint="Set stack.capture_enabled=false to disable capture instead",
        ))
    elif config.max_depth > RECURSION_DEPTH_HINT:
        issues.append(ConfigIssue(
            level="warn",
            path="stack.max_depth",
            message=f"max_depth={config.max_depth} exceeds the default recursion limit",
            hint="Deep captures keep every code object on the stack alive",
        ))

    if not isinstance(config.capture_enabled, bool):
        issues.append(ConfigIssue(
            level="error",
            path="stack.capture_enabled",
            message="capture_enabled must be true or false",
        ))

    return issues


def has_errors(issues: List[ConfigIssue]) -> bool:
    """Return True if any issue is error level"""
    return any(issue.level == "error" for issue in issues)

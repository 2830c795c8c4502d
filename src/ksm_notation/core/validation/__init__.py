"""Input validation: injection, traversal, and markup detection."""

from ksm_notation.core.validation.patterns import (
    contains_command_injection,
    contains_dangerous_unicode,
    contains_html,
    contains_path_traversal,
)
from ksm_notation.core.validation.validator import (
    InputValidator,
    ValidationPurpose,
    escape_shell_arg,
    is_alphanumeric,
    sanitize_for_shell,
    sanitize_string,
    truncate_string,
)

__all__ = [
    "InputValidator",
    "ValidationPurpose",
    "contains_command_injection",
    "contains_dangerous_unicode",
    "contains_html",
    "contains_path_traversal",
    "escape_shell_arg",
    "is_alphanumeric",
    "sanitize_for_shell",
    "sanitize_string",
    "truncate_string",
]

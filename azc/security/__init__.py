"""
Security Utilities for Input Validation

Validates user-supplied values before they are spliced into Azure CLI
command lines, which are executed through the shell.

Usage:
    from azc.security import CommandValidator, ValidationError

    try:
        project = CommandValidator.validate_safe_argument(user_input)
    except ValidationError as e:
        logger.error(f"Invalid input: {e}")
        raise
"""

from .command_validator import CommandValidator
from .validation import ValidationError

__all__ = [
    "ValidationError",
    "CommandValidator",
]

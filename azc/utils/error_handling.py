"""
Error Handling Utility Module

Reusable patterns for best-effort code paths (subscription lookup, PR listing,
organization discovery) where a failure is logged and the caller carries on.

1. log_and_continue() - Log error and continue execution
2. log_and_return_default() - Log error and return a default value

Both use structured logging with contextual information. Never put an access
token in the context dict.
"""

import logging
from typing import Any


def log_and_continue(
    logger: logging.Logger,
    error: Exception,
    context: dict[str, Any],
    error_type: str = "Operation",
) -> None:
    """
    Log an error with structured context and continue execution gracefully.

    Args:
        logger: Logger instance from get_logger(__name__)
        error: The caught exception
        context: Structured data about what failed (command, pr_id, etc.)
        error_type: Human-readable description of the operation

    Example:
        try:
            user_id = await self._get_current_user_id()
        except AzureCliError as e:
            log_and_continue(logger, e, {"command": command}, "Signed-in user lookup")
    """
    logger.warning(
        f"{error_type} failed: {error}",
        extra={
            "error_type": error_type,
            "exception_class": error.__class__.__name__,
            "context": context,
        },
    )


def log_and_return_default(
    logger: logging.Logger,
    error: Exception,
    context: dict[str, Any],
    default_value: Any = None,
    error_type: str = "Operation",
) -> Any:
    """
    Log an error and return a default value.

    Args:
        logger: Logger instance
        error: The caught exception
        context: Structured data about what failed
        default_value: Value to return on error (None, [], {}, etc.)
        error_type: Human-readable description

    Returns:
        default_value

    Example:
        try:
            return await self.azure_cli.execute_az_command(command)
        except AzureCliError as e:
            return log_and_return_default(
                logger, e,
                context={"command": command},
                default_value=[],
                error_type="Created PR lookup"
            )
    """
    logger.warning(
        f"{error_type} failed, returning default value: {error}",
        extra={
            "error_type": error_type,
            "exception_class": error.__class__.__name__,
            "context": context,
            "default_value": str(default_value),
        },
    )
    return default_value

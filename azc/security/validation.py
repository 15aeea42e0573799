"""
Base Validation Exception for Security Utilities
"""


class ValidationError(Exception):
    """
    Raised when input validation fails.

    Messages name the offending character or limit, never echo secrets.
    """

    pass

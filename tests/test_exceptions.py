"""Tests for the scriptkit exception hierarchy."""

import pytest

from scriptkit.exceptions import (
    ConfigurationError,
    ParseError,
    ScriptKitError,
    ScriptValidationFailed,
    UnsupportedFormatError,
    check_config_keys,
)
from scriptkit.models import ScriptElement
from scriptkit.validation import ScriptValidator


class TestScriptKitError:
    """Test base error formatting."""

    def test_message_only(self):
        error = ScriptKitError("Something broke")
        assert str(error) == "Error: Something broke"

    def test_hint_and_details(self):
        error = ScriptKitError(
            "Something broke", hint="Try again", details={"file": "a.fdx"}
        )
        formatted = error.format_error()
        assert "Hint: Try again" in formatted
        assert "  file: a.fdx" in formatted


class TestUnsupportedFormatError:
    """Test unsupported format errors."""

    def test_is_parse_error(self):
        error = UnsupportedFormatError("notes.docx", [".fdx", ".fountain"])
        assert isinstance(error, ParseError)
        assert error.message == "Unsupported format: notes.docx"
        assert error.details == {"supported_extensions": [".fdx", ".fountain"]}


class TestScriptValidationFailed:
    """Test strict validation failures."""

    def test_reports_error_count_and_codes(self):
        elements = [
            ScriptElement(id="dup", type="action", content="a"),
            ScriptElement(id="dup", type="action", content="b", sequence=2),
        ]
        report = ScriptValidator().validate(elements)
        error = ScriptValidationFailed(report)
        assert error.report is report
        assert error.message == "Script validation failed: 1 errors found"
        assert error.details["codes"] == ["duplicate-ids"]


class TestCheckConfigKeys:
    """Test detection of common configuration mistakes."""

    @pytest.mark.parametrize(
        ("wrong", "correct"),
        [
            ("strict", "strict_validation"),
            ("autofix", "auto_fix"),
            ("level", "log_level"),
            ("encoding", "text_encoding"),
        ],
    )
    def test_wrong_keys(self, wrong, correct):
        with pytest.raises(ConfigurationError) as exc_info:
            check_config_keys({wrong: True})
        assert exc_info.value.hint == f"Use '{correct}' instead of '{wrong}'"

    def test_correct_keys_pass(self):
        check_config_keys({"strict_validation": True, "auto_fix": False})

"""Custom exception hierarchy for scriptkit with helpful error messages."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from scriptkit.validation.report import ValidationReport


class ScriptKitError(Exception):
    """Base exception with helpful formatting for all scriptkit errors.

    Provides structured error messages with hints and details to help users
    understand and fix problems.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception with structured error information.

        Args:
            message: Primary error message describing what went wrong
            hint: Optional hint suggesting how to fix the problem
            details: Optional dictionary with additional debugging information
        """
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Format the error message with hint and details.

        Returns:
            Formatted error string with all available information
        """
        output = f"Error: {self.message}"
        if self.hint:
            output += f"\nHint: {self.hint}"
        if self.details:
            details_str = "\n".join(
                f"  {key}: {value}" for key, value in self.details.items()
            )
            output += f"\nDetails:\n{details_str}"
        return output


class ConfigurationError(ScriptKitError):
    """Configuration errors including invalid settings and missing config files."""

    pass


class ParseError(ScriptKitError):
    """Screenplay parsing errors for unreadable or structurally broken sources."""

    pass


class UnsupportedFormatError(ParseError):
    """Raised when no parser is registered for a file's extension."""

    def __init__(self, name: str, supported: list[str] | None = None) -> None:
        """Initialize with the offending file name.

        Args:
            name: File name (or extension) that could not be dispatched
            supported: Extensions that are accepted
        """
        self.name = name
        details = {"supported_extensions": supported} if supported else None
        super().__init__(
            message=f"Unsupported format: {name}",
            hint="Use a .fountain, .txt, .fdx or .pdf file",
            details=details,
        )


class ScriptKitFileNotFoundError(ScriptKitError):
    """File not found errors with helpful path information."""

    pass


class ValidationError(ScriptKitError):
    """Input validation errors with details about what was expected."""

    pass


class ScriptValidationFailed(ValidationError):
    """Strict-mode failure: the script still carries error-severity issues."""

    def __init__(self, report: ValidationReport) -> None:
        """Initialize from the validation report that failed.

        Args:
            report: Report whose error issues triggered the failure
        """
        self.report = report
        errors = [issue for issue in report.issues if issue.severity == "error"]
        details: dict[str, Any] = {
            "confidence": f"{report.confidence:.2f}",
            "codes": sorted({issue.code.value for issue in errors}),
        }
        super().__init__(
            message=f"Script validation failed: {len(errors)} errors found",
            hint="Fix the reported issues or import without strict mode",
            details=details,
        )


def check_config_keys(config: dict[str, Any]) -> None:
    """Check for common configuration mistakes.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigurationError: With hints about correct configuration keys
    """
    wrong_keys = {
        "strict": "strict_validation",
        "autofix": "auto_fix",
        "level": "log_level",
        "encoding": "text_encoding",
    }

    for wrong, correct in wrong_keys.items():
        if wrong in config:
            raise ConfigurationError(
                message=f"Invalid configuration key '{wrong}'",
                hint=f"Use '{correct}' instead of '{wrong}'",
                details={
                    "found_keys": list(config.keys()),
                    "invalid_key": wrong,
                    "correct_key": correct,
                },
            )

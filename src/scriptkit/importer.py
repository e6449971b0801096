"""Public import pipeline: parse, optionally fix, validate, freeze."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from scriptkit.config import get_logger, get_settings
from scriptkit.document import ScriptDocument
from scriptkit.exceptions import ParseError, ScriptKitFileNotFoundError
from scriptkit.models import ScriptElement, ScriptMetadata, TitlePageData
from scriptkit.parser import get_parser
from scriptkit.validation import AutoFixer, AutoFixResult, ValidationReport

logger = get_logger(__name__)


@dataclass(frozen=True)
class ImportResult:
    """Everything produced by importing one screenplay source."""

    document: ScriptDocument
    metadata: ScriptMetadata
    auto_fix_available: bool
    auto_fix: AutoFixResult | None = None

    @property
    def elements(self) -> tuple[ScriptElement, ...]:
        return self.document.elements

    @property
    def title_page(self) -> TitlePageData | None:
        return self.document.title_page

    @property
    def validation_report(self) -> ValidationReport:
        return self.document.validation_report

    @property
    def auto_fixed_elements(self) -> list[str] | None:
        """Ids changed or removed by auto-fix; ``None`` when it did not run."""
        if self.auto_fix is None:
            return None
        return self.auto_fix.changed_ids + self.auto_fix.removed

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "elements": [element.to_dict() for element in self.elements],
            "metadata": self.metadata.to_dict(),
            "validationReport": self.validation_report.to_dict(),
            "autoFixAvailable": self.auto_fix_available,
        }
        if self.title_page is not None:
            data["titlePage"] = self.title_page.to_dict()
        if self.auto_fixed_elements is not None:
            data["autoFixedElements"] = self.auto_fixed_elements
        return data


def parse_bytes(
    data: bytes | str,
    filename: str | Path,
    *,
    strict: bool | None = None,
    auto_fix: bool | None = None,
) -> ImportResult:
    """Import screenplay content whose format is given by ``filename``.

    Args:
        data: Raw file content
        filename: Name used to pick the parser by extension
        strict: Fail on error-severity issues (default from settings)
        auto_fix: Apply mechanical fixes first (default from settings)

    Returns:
        Import result with the frozen document and its validation report

    Raises:
        UnsupportedFormatError: If the extension has no parser
        ParseError: If the source is structurally unreadable
        ScriptValidationFailed: In strict mode, if errors remain
    """
    settings = get_settings()
    strict = settings.strict_validation if strict is None else strict
    auto_fix = settings.auto_fix if auto_fix is None else auto_fix

    parser = get_parser(filename)
    parsed = parser.parse(data)
    elements = parsed.elements

    fix_result = None
    if auto_fix:
        fix_result = AutoFixer().fix(elements)
        elements = fix_result.elements

    document = ScriptDocument.create(
        elements,
        parsed.title_page,
        strict=strict,
        log_validation=settings.log_validation,
    )

    # Dry run on the frozen elements: would a fix still change anything?
    remaining = AutoFixer().fix(document.elements)
    result = ImportResult(
        document=document,
        metadata=parsed.metadata,
        auto_fix_available=remaining.total_fixed > 0,
        auto_fix=fix_result,
    )
    logger.info(
        "Imported screenplay",
        file=str(filename),
        elements=len(document),
        confidence=round(document.confidence(), 3),
        auto_fixed=len(result.auto_fixed_elements or []),
    )
    return result


def parse_file(
    path: str | Path,
    *,
    strict: bool | None = None,
    auto_fix: bool | None = None,
) -> ImportResult:
    """Read and import a screenplay file.

    Raises:
        ScriptKitFileNotFoundError: If the file does not exist
    """
    path = Path(path)
    # Dispatch first so unsupported files fail before any I/O
    get_parser(path)
    if not path.is_file():
        raise ScriptKitFileNotFoundError(
            message=f"Screenplay file not found: {path}",
            hint="Check the path and try again",
            details={"path": str(path.resolve())},
        )
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ParseError(
            message=f"Failed to read screenplay file: {path}",
            details={"os_error": str(e)},
        ) from e
    return parse_bytes(data, path.name, strict=strict, auto_fix=auto_fix)

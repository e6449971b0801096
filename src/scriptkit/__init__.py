"""scriptkit: screenplay import, validation and pagination.

scriptkit reads Fountain, Final Draft (FDX) and PDF screenplays into an
immutable element model, scores how trustworthy the import is, and lays the
result out onto industry standard pages.
"""

from .document import ScriptDocument
from .exceptions import (
    ParseError,
    ScriptKitError,
    ScriptValidationFailed,
    UnsupportedFormatError,
)
from .importer import ImportResult, parse_bytes, parse_file
from .models import (
    DualPosition,
    ElementType,
    ScriptElement,
    ScriptMetadata,
    TitlePageData,
)
from .pagination import PageLayout, PageMetrics, paginate

__version__ = "0.1.0"

__all__ = [
    "DualPosition",
    "ElementType",
    "ImportResult",
    "PageLayout",
    "PageMetrics",
    "ParseError",
    "ScriptDocument",
    "ScriptElement",
    "ScriptKitError",
    "ScriptMetadata",
    "ScriptValidationFailed",
    "TitlePageData",
    "UnsupportedFormatError",
    "__version__",
    "paginate",
    "parse_bytes",
    "parse_file",
]

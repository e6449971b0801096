"""Writers that turn documents back into screenplay files."""

from scriptkit.export.fdx_writer import to_fdx
from scriptkit.export.fountain_writer import to_fountain

EXPORTERS = {
    "fountain": to_fountain,
    "fdx": to_fdx,
}

__all__ = ["EXPORTERS", "to_fdx", "to_fountain"]

from .parser import parse_table, split_line
from .reader import DEFAULT_ENCODING, ExportReadError, read_export

__all__ = [
    "DEFAULT_ENCODING",
    "ExportReadError",
    "parse_table",
    "read_export",
    "split_line",
]

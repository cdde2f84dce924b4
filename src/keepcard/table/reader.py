from __future__ import annotations

import codecs
from pathlib import Path

from ..models.generation_result import FailureKind

"""Export file acquisition.

Reads a stock report export from disk and decodes it. The export is produced
by a Japanese pharmacy system on Windows, hence the cp932 default. Decoding is
strict: undecodable bytes fail the read instead of producing U+FFFD names.
Everything after this module works on decoded text only.
"""

__all__ = [
    "DEFAULT_ENCODING",
    "ExportReadError",
    "read_export",
]

DEFAULT_ENCODING = "cp932"  # Windows の Shift_JIS (機種依存文字 Ⅱ ① ㈱ を含む)
EXPORT_SUFFIX = ".csv"


class ExportReadError(Exception):
    """Raised when an export file cannot be read or decoded."""
    kind = FailureKind.READ_FAILURE


def read_export(path: Path, encoding: str = DEFAULT_ENCODING) -> str:
    """Read and decode an export file.

    Parameters
    ----------
    path: export file path (must end with .csv)
    encoding: codec name used to decode the file bytes

    Raises
    ------
    ExportReadError: wrong suffix, missing file, OS error, unknown codec or
        undecodable bytes
    """
    if path.suffix.lower() != EXPORT_SUFFIX:
        raise ExportReadError(f"CSVファイルを選択してください: {path.name}")
    if not path.is_file():
        raise ExportReadError(f"file not found: {path}")
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise ExportReadError(f"unknown encoding: {encoding}") from e
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ExportReadError(f"ファイル読み込みエラー: {e}") from e
    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise ExportReadError(f"decode failed ({encoding}): {e.reason} at byte {e.start}") from e

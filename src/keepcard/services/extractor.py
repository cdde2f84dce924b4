from __future__ import annotations

import logging
import re
import string
from collections.abc import Sequence

from ..models.generation_result import FailureKind
from ..models.item_record import ItemRecord
from ..models.layout import DEFAULT_LAYOUT, ColumnLayout

"""Record extraction: parsed export rows -> ItemRecord collection.

Row handling:
- row `header_row_index` is the header (only checked when header_labels is set)
- every later row is a candidate data row
- rows too short to reach every referenced column are dropped
- non-numeric quantities become 0, never an error
- rows without a name or with keep quantity <= 0 are dropped
"""

logger = logging.getLogger(__name__)

__all__ = [
    "ExtractionError",
    "InsufficientRowsError",
    "NoQualifyingDataError",
    "parse_quantity",
    "extract_items",
]

# 先頭の整数部分のみ採用 ("12abc" -> 12, "3.7" -> 3)
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


class ExtractionError(Exception):
    """Base class for extraction failures reported to the user."""
    kind: FailureKind


class InsufficientRowsError(ExtractionError):
    """Raised when the export has no data row after the header."""
    kind = FailureKind.INSUFFICIENT_ROWS


class NoQualifyingDataError(ExtractionError):
    """Raised when no data row yields a card."""
    kind = FailureKind.NO_QUALIFYING_DATA


def parse_quantity(value: str | None) -> int:
    """Parse a quantity field, returning 0 when it holds no leading integer."""
    if not value:
        return 0
    match = _LEADING_INT.match(value)
    if match is None:
        return 0
    return int(match.group(1))


def _column_letter(index: int) -> str:
    letters = ""
    index += 1
    while index > 0:
        index, rem = divmod(index - 1, 26)
        letters = string.ascii_uppercase[rem] + letters
    return letters


def _check_header(header: Sequence[str], layout: ColumnLayout) -> None:
    if not layout.header_labels:
        return
    for field_name, expected in layout.header_labels.items():
        idx = layout.columns.get(field_name)
        if idx is None:
            logger.warning(f"header check: unknown field '{field_name}' ignored")
            continue
        actual = header[idx] if idx < len(header) else ""
        if actual != expected:
            logger.warning(
                f"header mismatch column={_column_letter(idx)} field={field_name} "
                f"expected='{expected}' actual='{actual}'"
            )


def _field(row: Sequence[str], idx: int) -> str:
    return row[idx] or ""


def _to_record(row: Sequence[str], layout: ColumnLayout) -> ItemRecord | None:
    if len(row) <= layout.max_column_index:
        return None
    record = ItemRecord.from_quantities(
        name=_field(row, layout.name),
        price=_field(row, layout.price),
        safety_stock=parse_quantity(row[layout.safety_stock]),
        max_out=parse_quantity(row[layout.max_out]),
        prescription_count=_field(row, layout.prescription_count),
        patient_count=_field(row, layout.patient_count),
    )
    return record if record.qualifies else None


def extract_items(rows: Sequence[Sequence[str]], layout: ColumnLayout = DEFAULT_LAYOUT) -> list[ItemRecord]:
    """Map parsed rows to ItemRecords in input order.

    Args:
        rows: Output of parse_table (blank lines already removed)
        layout: Row/column offsets of the export

    Returns:
        Qualifying records, same order as the source rows

    Raises:
        InsufficientRowsError: fewer than header + one data row
        NoQualifyingDataError: no row produced a record
    """
    if len(rows) < layout.min_row_count:
        raise InsufficientRowsError(
            f"expected at least {layout.min_row_count} rows, got {len(rows)}"
        )

    _check_header(rows[layout.header_row_index], layout)
    candidates = rows[layout.header_row_index + 1:]

    items: list[ItemRecord] = []
    for row in candidates:
        record = _to_record(row, layout)
        if record is not None:
            items.append(record)

    logger.debug(f"extracted items={len(items)} dropped={len(candidates) - len(items)}")
    if not items:
        raise NoQualifyingDataError(f"no rows with keep quantity > 0 among {len(candidates)} data rows")
    return items

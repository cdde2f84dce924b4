from __future__ import annotations

from dataclasses import dataclass

"""Fixed export layout for the keep-card generator.

The stock report export places a 21-line preamble before the header row, so
the header is the 22nd non-blank line and data starts at the 23rd. Column
positions are 0-based indices into a parsed row.
"""

__all__ = [
    "CARDS_PER_PAGE",
    "HEADER_ROW_INDEX",
    "ColumnLayout",
    "DEFAULT_LAYOUT",
]

HEADER_ROW_INDEX = 21
CARDS_PER_PAGE = 16  # A4横 4列×4行


@dataclass(frozen=True)
class ColumnLayout:
    """Row/column offsets of the stock report export.

    header_labels is optional: field name -> expected header text. When set,
    the extractor compares the header row against it and logs mismatches.
    """
    header_row_index: int = HEADER_ROW_INDEX
    name: int = 4  # E列：薬品名
    price: int = 6  # G列：薬価
    safety_stock: int = 12  # M列：安全在庫数量
    max_out: int = 13  # N列：MAX出庫数量
    prescription_count: int = 14  # O列：処方回数
    patient_count: int = 15  # P列：患者数
    header_labels: dict[str, str] | None = None

    @property
    def columns(self) -> dict[str, int]:
        return {
            "name": self.name,
            "price": self.price,
            "safety_stock": self.safety_stock,
            "max_out": self.max_out,
            "prescription_count": self.prescription_count,
            "patient_count": self.patient_count,
        }

    @property
    def max_column_index(self) -> int:
        return max(self.columns.values())

    @property
    def min_row_count(self) -> int:
        """Header row plus at least one data row."""
        return self.header_row_index + 2


DEFAULT_LAYOUT = ColumnLayout()

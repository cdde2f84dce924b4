from __future__ import annotations

from dataclasses import dataclass

"""ItemRecord model for the keep-card generator.

An ItemRecord is one qualifying data row of the stock report, reduced to the
figures printed on a card. Records are built once during extraction and never
mutated afterwards.
"""

__all__ = [
    "ItemRecord",
    "EmptySlot",
    "EMPTY_SLOT",
]


@dataclass(frozen=True)
class ItemRecord:
    """One card worth of inventory figures.

    Attributes:
        name: Item (drug) name, never blank
        price: Unit price text as exported, "" when absent
        keep_quantity: max(safety_stock, max_out), the headline number on the card
        safety_stock: Safety stock quantity, 0 when the source field is not numeric
        max_out: Maximum issue quantity, 0 when the source field is not numeric
        prescription_count: Prescription count text, "" when absent
        patient_count: Patient count text, "" when absent
    """
    name: str
    price: str
    keep_quantity: int
    safety_stock: int
    max_out: int
    prescription_count: str = ""
    patient_count: str = ""

    @classmethod
    def from_quantities(
        cls,
        name: str,
        price: str,
        safety_stock: int,
        max_out: int,
        prescription_count: str = "",
        patient_count: str = "",
    ) -> ItemRecord:
        """Build a record deriving keep_quantity from the two source quantities."""
        return cls(
            name=name,
            price=price,
            keep_quantity=max(safety_stock, max_out),
            safety_stock=safety_stock,
            max_out=max_out,
            prescription_count=prescription_count,
            patient_count=patient_count,
        )

    @property
    def qualifies(self) -> bool:
        """True when the record belongs on a card (named, positive keep quantity)."""
        return bool(self.name and self.name.strip()) and self.keep_quantity > 0


@dataclass(frozen=True)
class EmptySlot:
    """Blank card used to pad the final page."""

    def __bool__(self) -> bool:
        return False


EMPTY_SLOT = EmptySlot()

from __future__ import annotations

from dataclasses import dataclass

from .item_record import ItemRecord, EmptySlot

"""Page model: one printed sheet of cards."""

__all__ = [
    "Page",
    "Slot",
]

Slot = ItemRecord | EmptySlot


@dataclass(frozen=True)
class Page:
    """Fixed-capacity grid of card slots.

    number is 1-based. slots always holds exactly `capacity` entries; only the
    last page of a run contains EmptySlot markers.
    """
    number: int
    slots: tuple[Slot, ...]

    @property
    def capacity(self) -> int:
        return len(self.slots)

    @property
    def items(self) -> list[ItemRecord]:
        return [s for s in self.slots if isinstance(s, ItemRecord)]

    @property
    def empty_count(self) -> int:
        return sum(1 for s in self.slots if isinstance(s, EmptySlot))

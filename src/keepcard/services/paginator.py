from __future__ import annotations

import math
from collections.abc import Sequence

from ..models.item_record import EMPTY_SLOT, ItemRecord
from ..models.layout import CARDS_PER_PAGE
from ..models.page import Page, Slot

"""Pagination of ItemRecords into fixed-capacity print pages."""

__all__ = [
    "paginate",
]


def paginate(items: Sequence[ItemRecord], page_capacity: int = CARDS_PER_PAGE) -> list[Page]:
    """Split items into pages of exactly `page_capacity` slots.

    Item order is preserved. Only the last page may be padded with EMPTY_SLOT.
    An empty sequence yields no pages.
    """
    if page_capacity < 1:
        raise ValueError(f"page_capacity must be >= 1, got {page_capacity}")

    total_pages = math.ceil(len(items) / page_capacity)
    pages: list[Page] = []
    for page_num in range(total_pages):
        start = page_num * page_capacity
        end = min(start + page_capacity, len(items))
        slots: list[Slot] = list(items[start:end])
        # 最後のページで16枚未満の場合、空のカードで埋める
        slots.extend([EMPTY_SLOT] * (page_capacity - len(slots)))
        pages.append(Page(number=page_num + 1, slots=tuple(slots)))
    return pages

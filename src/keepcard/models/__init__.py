"""Domain models for the keep-card generator.

Records, pages and generation results flow one way:
parsed rows -> ItemRecord -> Page -> GenerationResult / SessionState.
"""

from .generation_result import (
    FailureKind,
    GenerationFailure,
    GenerationResult,
    GenerationSuccess,
    SessionState,
)
from .item_record import EMPTY_SLOT, EmptySlot, ItemRecord
from .layout import CARDS_PER_PAGE, DEFAULT_LAYOUT, HEADER_ROW_INDEX, ColumnLayout
from .page import Page, Slot

__all__ = [
    # Layout constants
    "CARDS_PER_PAGE",
    "DEFAULT_LAYOUT",
    "HEADER_ROW_INDEX",
    "ColumnLayout",
    # Records and pages
    "EMPTY_SLOT",
    "EmptySlot",
    "ItemRecord",
    "Page",
    "Slot",
    # Results
    "FailureKind",
    "GenerationFailure",
    "GenerationResult",
    "GenerationSuccess",
    "SessionState",
]

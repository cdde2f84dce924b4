from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .item_record import ItemRecord
from .page import Page

"""Generation result models for the keep-card generator.

One generation cycle (file load -> cards) ends in exactly one of:

- GenerationSuccess: the records and pages produced
- GenerationFailure: a FailureKind plus a human readable message

SessionState holds the collection of the last successful cycle. It is replaced
wholesale on success and left untouched on failure.
"""

__all__ = [
    "FailureKind",
    "GenerationSuccess",
    "GenerationFailure",
    "GenerationResult",
    "SessionState",
]


class FailureKind(Enum):
    """Failure taxonomy for a generation cycle.

    - INSUFFICIENT_ROWS: fewer rows than header + one data row
    - NO_QUALIFYING_DATA: no row produced a card
    - MALFORMED_NUMERIC_FIELD: never surfaced, bad quantities default to 0
    - READ_FAILURE: the export could not be read or decoded
    """
    INSUFFICIENT_ROWS = "insufficient_rows"
    NO_QUALIFYING_DATA = "no_qualifying_data"
    MALFORMED_NUMERIC_FIELD = "malformed_numeric_field"
    READ_FAILURE = "read_failure"

    @property
    def error_type(self) -> str:
        """UPPER_SNAKE label used in the error log."""
        return self.name


@dataclass(frozen=True)
class GenerationSuccess:
    items: tuple[ItemRecord, ...]
    pages: tuple[Page, ...]
    source: str | None = None

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class GenerationFailure:
    kind: FailureKind
    message: str
    source: str | None = None

    @property
    def ok(self) -> bool:
        return False


GenerationResult = GenerationSuccess | GenerationFailure


@dataclass(frozen=True)
class SessionState:
    """Collection of the currently loaded export (one active collection)."""
    source: str | None = None
    items: tuple[ItemRecord, ...] = field(default_factory=tuple)
    pages: tuple[Page, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> SessionState:
        return cls()

    @classmethod
    def from_success(cls, result: GenerationSuccess) -> SessionState:
        return cls(source=result.source, items=result.items, pages=result.pages)

    @property
    def loaded(self) -> bool:
        return bool(self.items)

from __future__ import annotations

import logging
from pathlib import Path

from ..models.generation_result import (
    GenerationFailure,
    GenerationResult,
    GenerationSuccess,
    SessionState,
)
from ..models.layout import CARDS_PER_PAGE, DEFAULT_LAYOUT, ColumnLayout
from ..table.parser import parse_table
from ..table.reader import DEFAULT_ENCODING, ExportReadError, read_export
from .extractor import ExtractionError, extract_items
from .paginator import paginate

"""Generation cycle orchestration.

One cycle: export text -> rows -> ItemRecords -> Pages.

The caller owns the SessionState. Every cycle takes the current state and
returns (result, next_state):
- success: next_state is a new state built from the result
- failure: next_state is the state passed in, untouched
"""

logger = logging.getLogger(__name__)

__all__ = [
    "generate",
    "generate_from_file",
]


def generate(
    text: str,
    state: SessionState,
    *,
    source: str | None = None,
    layout: ColumnLayout = DEFAULT_LAYOUT,
    page_capacity: int = CARDS_PER_PAGE,
) -> tuple[GenerationResult, SessionState]:
    """Run one generation cycle over already decoded export text.

    Args:
        text: Decoded export contents
        state: Current session state (returned as-is on failure)
        source: Label for logs/results, usually the file name
        layout: Row/column offsets of the export
        page_capacity: Cards per printed page

    Returns:
        (GenerationSuccess | GenerationFailure, next session state)
    """
    rows = parse_table(text)
    logger.debug(f"parsed rows={len(rows)} source={source}")
    try:
        items = extract_items(rows, layout)
    except ExtractionError as e:
        logger.warning(f"{source or '<text>'}: {e.kind.error_type} {e}")
        return GenerationFailure(kind=e.kind, message=str(e), source=source), state

    pages = paginate(items, page_capacity)
    result = GenerationSuccess(items=tuple(items), pages=tuple(pages), source=source)
    logger.info(f"{source or '<text>'}: cards={result.item_count} pages={result.page_count}")
    return result, SessionState.from_success(result)


def generate_from_file(
    path: Path,
    state: SessionState,
    *,
    encoding: str = DEFAULT_ENCODING,
    layout: ColumnLayout = DEFAULT_LAYOUT,
    page_capacity: int = CARDS_PER_PAGE,
) -> tuple[GenerationResult, SessionState]:
    """Read an export file and run one generation cycle over it.

    Read/decode errors are reported as a READ_FAILURE result; the state is
    left untouched.
    """
    logger.info(f"loading {path.name} (encoding={encoding})")
    try:
        text = read_export(path, encoding)
    except ExportReadError as e:
        logger.warning(f"{path.name}: {e.kind.error_type} {e}")
        return GenerationFailure(kind=e.kind, message=str(e), source=path.name), state
    return generate(text, state, source=path.name, layout=layout, page_capacity=page_capacity)

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, fields
from pathlib import Path

import pandas as pd

from ..models.item_record import ItemRecord

"""Tabular export of derived ItemRecords (keep list) via pandas."""

COLUMNS = [f.name for f in fields(ItemRecord)]


def items_to_frame(items: Sequence[ItemRecord]) -> pd.DataFrame:
    """One row per record, columns in ItemRecord field order."""
    return pd.DataFrame([asdict(i) for i in items], columns=COLUMNS)


def write_items_csv(items: Sequence[ItemRecord], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    # utf-8-sig: Excel で文字化けしないよう BOM 付き
    items_to_frame(items).to_csv(path, index=False, encoding="utf-8-sig")
    return path

from __future__ import annotations

from collections.abc import Sequence
from html import escape
from pathlib import Path

from ..models.item_record import ItemRecord
from ..models.page import Page, Slot

"""Print sheet rendering.

Each Page becomes one A4 landscape sheet holding a 4x4 grid of cards. Empty
slots are rendered as blank cards so the grid keeps its shape.
"""

__all__ = [
    "render_card",
    "render_page",
    "render_document",
    "write_document",
]

STYLE = """
@page { size: A4 landscape; margin: 8mm; }
body { margin: 0; font-family: "Hiragino Sans", "Meiryo", sans-serif; }
.page { display: grid; grid-template-columns: repeat(4, 1fr); grid-template-rows: repeat(4, 1fr);
        gap: 3mm; width: 281mm; height: 194mm; page-break-after: always; }
.page:last-child { page-break-after: auto; }
.card { border: 1px solid #333; border-radius: 2mm; padding: 2mm; overflow: hidden; }
.card.empty { border-style: dashed; border-color: #ccc; }
.card-title { font-weight: bold; font-size: 10pt; }
.drug-price, .drug-stats { font-size: 7pt; color: #555; }
.keep-label { font-size: 7pt; text-align: center; }
.keep-value { font-size: 28pt; font-weight: bold; text-align: center; }
.decoration-line { border-top: 2px solid #4a90d9; margin-top: 1mm; }
"""


def _stats_text(item: ItemRecord) -> str:
    stats: list[str] = []
    if item.prescription_count:
        stats.append(f"処方回数: {item.prescription_count}回")
    if item.patient_count:
        stats.append(f"患者数: {item.patient_count}人")
    return " / ".join(stats)


def render_card(slot: Slot) -> str:
    if not isinstance(slot, ItemRecord):
        return '<div class="card empty"></div>'

    # 薬価・処方回数・患者数は空なら非表示
    price_html = f'<div class="drug-price">薬価: {escape(slot.price)}円</div>' if slot.price else ""
    stats = _stats_text(slot)
    stats_html = f'<div class="drug-stats">{escape(stats)}</div>' if stats else ""
    return (
        '<div class="card"><div class="card-inner">'
        f'<div class="card-header"><div class="card-title">{escape(slot.name)}</div>{price_html}</div>'
        '<div class="card-body"><div class="keep-label">キープ数</div>'
        f'<div class="keep-value">{slot.keep_quantity:,}</div></div>'
        f'<div class="card-footer">{stats_html}<div class="decoration-line"></div></div>'
        '</div></div>'
    )


def render_page(page: Page) -> str:
    cards = "\n".join(render_card(s) for s in page.slots)
    return f'<section class="page" data-page="{page.number}">\n{cards}\n</section>'


def render_document(pages: Sequence[Page], *, title: str = "キープカード") -> str:
    body = "\n".join(render_page(p) for p in pages)
    return (
        "<!DOCTYPE html>\n"
        '<html lang="ja">\n<head>\n<meta charset="utf-8">\n'
        f"<title>{escape(title)}</title>\n<style>{STYLE}</style>\n</head>\n"
        f"<body>\n{body}\n</body>\n</html>\n"
    )


def write_document(pages: Sequence[Page], path: Path, *, title: str = "キープカード") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_document(pages, title=title), encoding="utf-8")
    return path

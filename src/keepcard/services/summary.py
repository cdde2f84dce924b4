from __future__ import annotations

from ..models.generation_result import FailureKind, GenerationFailure, GenerationResult, GenerationSuccess
from ..models.processing_result import RunResult

"""User-facing status messages and the SUMMARY line.

Status messages are the texts shown to pharmacy staff after each generation
attempt. The SUMMARY line is the machine-readable run total printed by the CLI:

SUMMARY files={n}/{n} success={s} failed={f} cards={c} pages={p} elapsed_sec={e}
"""

FAILURE_MESSAGES = {
    FailureKind.INSUFFICIENT_ROWS: "CSVファイルにデータがありません",
    FailureKind.NO_QUALIFYING_DATA: "有効なデータがありません（キープ数が0より大きいデータが必要です）",
}


def render_status_message(result: GenerationResult) -> str:
    """Render the status text for one generation attempt."""
    if isinstance(result, GenerationSuccess):
        return f"{result.item_count}枚のカードを生成しました（{result.page_count}ページ）"
    if not isinstance(result, GenerationFailure):
        raise TypeError(f"unexpected generation result: {type(result).__name__}")
    fixed = FAILURE_MESSAGES.get(result.kind)
    if fixed is not None:
        return fixed
    return f"エラーが発生しました: {result.message}"


def _format_elapsed(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # Format very small numbers to avoid scientific notation
        return f"{seconds:.6f}".rstrip('0').rstrip('.')
    return f"{seconds:.2f}".rstrip('0').rstrip('.')


def render_summary_line(result: RunResult) -> str:
    """Render the SUMMARY line for a CLI run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 4, 1, 9, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 4, 1, 9, 0, 2, tzinfo=timezone.utc)
        >>> render_summary_line(RunResult(start_time=start, end_time=end))
        'SUMMARY files=0/0 success=0 failed=0 cards=0 pages=0 elapsed_sec=2'
    """
    total = result.total_files
    return (
        f"SUMMARY files={total}/{total} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"cards={result.total_cards} "
        f"pages={result.total_pages} "
        f"elapsed_sec={_format_elapsed(result.elapsed_seconds)}"
    )

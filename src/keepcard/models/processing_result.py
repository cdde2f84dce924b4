from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .generation_result import GenerationFailure, GenerationResult, GenerationSuccess

"""Batch run results for the keep-card CLI.

A run processes several exports in sequence; each export is its own
generation cycle. RunResult aggregates the per-file outcomes for the SUMMARY
line and the exit code.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file outcome of a run."""
    file_name: str
    status: str  # success/failed
    cards: int  # 生成カード数
    pages: int
    error_type: str | None = None
    output_path: str | None = None


@dataclass(frozen=True)
class RunResult:
    """Aggregated outcome of one CLI run."""
    start_time: datetime
    end_time: datetime
    file_stats: list[FileStat] = field(default_factory=list)

    @property
    def elapsed_seconds(self) -> float:
        return (self.end_time - self.start_time).total_seconds()

    @property
    def total_files(self) -> int:
        return len(self.file_stats)

    @property
    def success_files(self) -> int:
        return sum(1 for s in self.file_stats if s.status == "success")

    @property
    def failed_files(self) -> int:
        return sum(1 for s in self.file_stats if s.status == "failed")

    @property
    def total_cards(self) -> int:
        return sum(s.cards for s in self.file_stats)

    @property
    def total_pages(self) -> int:
        return sum(s.pages for s in self.file_stats)


def file_stat_from_result(file_name: str, result: GenerationResult, output_path: str | None = None) -> FileStat:
    if isinstance(result, GenerationSuccess):
        return FileStat(
            file_name=file_name,
            status="success",
            cards=result.item_count,
            pages=result.page_count,
            output_path=output_path,
        )
    if not isinstance(result, GenerationFailure):
        raise TypeError(f"unexpected generation result: {type(result).__name__}")
    return FileStat(
        file_name=file_name,
        status="failed",
        cards=0,
        pages=0,
        error_type=result.kind.error_type,
    )

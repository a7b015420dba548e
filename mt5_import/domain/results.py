"""Domain-level results for a report import."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .models import ParsedTrade, ReportFormat


@dataclass(frozen=True)
class SkippedRow:
    """A source row that did not yield a trade."""

    row_number: int
    reason: str


@dataclass(frozen=True)
class ImportResult:
    source_format: ReportFormat
    trades: Sequence[ParsedTrade] = field(default_factory=tuple)
    skipped: Sequence[SkippedRow] = field(default_factory=tuple)
    # source row of each trade, parallel to ``trades``
    trade_rows: Sequence[int] = field(default_factory=tuple)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def is_empty(self) -> bool:
        return not self.trades

    @property
    def warnings(self) -> list[str]:
        return [f"row {row.row_number}: {row.reason}" for row in self.skipped]

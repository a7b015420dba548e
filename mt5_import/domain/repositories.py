"""Repository interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Protocol

from .results import ImportResult


class TradeReportRepository(Protocol):
    """Provides the trades contained in one broker report."""

    def list_trades(self) -> ImportResult:
        ...

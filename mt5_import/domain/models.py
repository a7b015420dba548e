"""Domain models for the MT5 import pipeline.

These dataclasses capture the canonical schema for trades recovered from
broker reports.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Side(str, Enum):
    """Canonical direction of a parsed trade."""

    BUY = "BUY"
    SELL = "SELL"


class TradeSide(str, Enum):
    """Direction as the journal backend stores it."""

    LONG = "LONG"
    SHORT = "SHORT"


class TradeStatus(str, Enum):
    WIN = "WIN"
    LOSS = "LOSS"
    BE = "BE"


class ReportFormat(str, Enum):
    HTML = "html"
    EXCEL = "excel"


@dataclass(frozen=True)
class ParsedTrade:
    """Normalized closed position as recovered from an MT5 report."""

    symbol: str
    side: Side
    entry: float
    exit: float
    quantity: float
    entry_date: str
    exit_date: str
    profit_loss: float
    commission: float = 0.0
    swap: float = 0.0


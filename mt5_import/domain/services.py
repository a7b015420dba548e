"""Domain services applying the trade invariants."""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from .models import ParsedTrade, Side, TradeSide
from .results import ImportResult, SkippedRow

_LONG_TOKENS = frozenset({"BUY", "LONG", "IN"})


def map_side_to_trade_side(side: Side | str) -> TradeSide:
    token = side.value if isinstance(side, Side) else str(side or "")
    if token.strip().upper() in _LONG_TOKENS:
        return TradeSide.LONG
    return TradeSide.SHORT


class TradeValidator:
    """Final filter guaranteeing the output contract of both scanners."""

    @staticmethod
    def is_valid(trade: ParsedTrade) -> bool:
        return bool(
            trade.symbol
            and trade.entry > 0
            and trade.exit > 0
            and trade.quantity > 0
            and trade.entry_date
            and trade.exit_date
        )

    def validate(self, trades: Iterable[ParsedTrade]) -> tuple[ParsedTrade, ...]:
        return tuple(trade for trade in trades if self.is_valid(trade))

    def filter_result(self, result: ImportResult) -> ImportResult:
        kept: list[ParsedTrade] = []
        kept_rows: list[int] = []
        dropped: list[SkippedRow] = []
        for position, trade in enumerate(result.trades):
            row_number = result.trade_rows[position] if position < len(result.trade_rows) else 0
            if self.is_valid(trade):
                kept.append(trade)
                kept_rows.append(row_number)
            else:
                label = trade.symbol or "no symbol"
                if not row_number:
                    label = f"trade {position + 1}, {label}"
                dropped.append(SkippedRow(row_number=row_number, reason=f"failed validation ({label})"))
        if not dropped:
            return result
        return replace(
            result,
            trades=tuple(kept),
            skipped=tuple(result.skipped) + tuple(dropped),
            trade_rows=tuple(kept_rows) if result.trade_rows else (),
        )


def validate_trades(trades: Sequence[ParsedTrade]) -> tuple[ParsedTrade, ...]:
    return TradeValidator().validate(trades)

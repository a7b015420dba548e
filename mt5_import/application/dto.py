"""Application-level DTOs handed to the journal backend."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Iterable

from mt5_import.domain.models import ParsedTrade, TradeSide, TradeStatus
from mt5_import.domain.services import map_side_to_trade_side


def status_for(profit_loss: float) -> TradeStatus:
    if profit_loss > 0:
        return TradeStatus.WIN
    if profit_loss < 0:
        return TradeStatus.LOSS
    return TradeStatus.BE


@dataclass(slots=True, frozen=True)
class CreateTradeRequest:
    account_id: str
    symbol: str
    side: TradeSide
    entry_price: float
    exit_price: float
    quantity: float
    pnl: float
    commission: float
    swap: float
    status: TradeStatus
    executed_at: str
    date: str
    close_time: str

    @classmethod
    def from_parsed(cls, trade: ParsedTrade, account_id: str) -> "CreateTradeRequest":
        return cls(
            account_id=account_id,
            symbol=trade.symbol,
            side=map_side_to_trade_side(trade.side),
            entry_price=trade.entry,
            exit_price=trade.exit,
            quantity=trade.quantity,
            pnl=trade.profit_loss,
            commission=trade.commission,
            swap=trade.swap,
            status=status_for(trade.profit_loss),
            executed_at=trade.entry_date,
            date=trade.entry_date,
            close_time=trade.exit_date,
        )

    def to_payload(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["side"] = self.side.value
        payload["status"] = self.status.value
        return payload


def build_create_requests(trades: Iterable[ParsedTrade], account_id: str) -> list[CreateTradeRequest]:
    return [CreateTradeRequest.from_parsed(trade, account_id) for trade in trades]

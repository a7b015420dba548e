"""Preview and export renderers for imported trades."""
from __future__ import annotations

import csv
import io
import json
from html import escape
from typing import Sequence

from mt5_import.application.dto import CreateTradeRequest
from mt5_import.domain.models import ParsedTrade
from mt5_import.domain.results import SkippedRow

TRADE_COLUMNS = [
    "symbol",
    "side",
    "entry",
    "exit",
    "quantity",
    "entry_date",
    "exit_date",
    "profit_loss",
    "commission",
    "swap",
]


def trades_to_rows(trades: Sequence[ParsedTrade]) -> list[dict[str, object]]:
    return [
        {
            "symbol": trade.symbol,
            "side": trade.side.value,
            "entry": trade.entry,
            "exit": trade.exit,
            "quantity": trade.quantity,
            "entry_date": trade.entry_date,
            "exit_date": trade.exit_date,
            "profit_loss": trade.profit_loss,
            "commission": trade.commission,
            "swap": trade.swap,
        }
        for trade in trades
    ]


def skipped_to_rows(skipped: Sequence[SkippedRow]) -> list[dict[str, object]]:
    return [{"row": item.row_number, "reason": item.reason} for item in skipped]


def render_csv(trades: Sequence[ParsedTrade]) -> bytes:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=TRADE_COLUMNS)
    writer.writeheader()
    writer.writerows(trades_to_rows(trades))
    return buffer.getvalue().encode("utf-8")


def render_json(requests: Sequence[CreateTradeRequest]) -> bytes:
    payload = [request.to_payload() for request in requests]
    return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")


def render_html(trades: Sequence[ParsedTrade]) -> str:
    rows = trades_to_rows(trades)
    if not rows:
        return "<p>No trades imported.</p>"
    header = "".join(f"<th>{col}</th>" for col in TRADE_COLUMNS)
    body_parts = []
    for row in rows:
        body_parts.append("<tr>" + "".join(f"<td>{escape(str(value))}</td>" for value in row.values()) + "</tr>")
    body_html = "".join(body_parts)
    return f"<table><thead><tr>{header}</tr></thead><tbody>{body_html}</tbody></table>"

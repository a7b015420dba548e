"""Central configuration for the MT5 import package."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import timezone

# Ordered header synonyms per logical field; the first column present wins.
FIELD_SYNONYMS: dict[str, tuple[str, ...]] = {
    "symbol": ("symbol", "pair", "instrument", "ticket"),
    "side": ("type", "direction", "side"),
    "quantity": ("volume", "lot", "size", "qty"),
    "entry": ("open price", "entry price", "price", "openprice"),
    "exit": ("close price", "exit price", "closeprice"),
    "open_time": ("open time", "time", "opentime", "date"),
    "close_time": ("close time", "exit time", "closetime"),
    "profit": ("profit", "p&l", "pnl"),
    "commission": ("commission", "fee"),
    "swap": ("swap",),
}

# MT5 repeats these headers for the closing leg of a position.
CLOSE_LEG_ALIASES = {
    "time": "close time",
    "price": "close price",
}

HTML_EXTENSIONS = frozenset({".htm", ".html"})
EXCEL_EXTENSIONS = frozenset({".xlsx", ".xlsm", ".xls"})


@dataclass(slots=True, frozen=True)
class Settings:
    header_scan_rows: int
    min_position_cells: int
    timezone: timezone.__class__
    log_level: str
    field_synonyms: dict[str, tuple[str, ...]] = field(default_factory=dict)
    html_extensions: frozenset[str] = frozenset()
    excel_extensions: frozenset[str] = frozenset()


SETTINGS = Settings(
    header_scan_rows=20,
    min_position_cells=13,
    timezone=timezone.utc,
    log_level=os.environ.get("MT5_IMPORT_LOG_LEVEL", "INFO").upper(),
    field_synonyms=dict(FIELD_SYNONYMS),
    html_extensions=HTML_EXTENSIONS,
    excel_extensions=EXCEL_EXTENSIONS,
)

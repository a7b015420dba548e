"""MT5 HTML report parser producing parsed trades from the Positions table."""
from __future__ import annotations

import logging
import re
from io import BytesIO
from pathlib import Path

from mt5_import.config import SETTINGS
from mt5_import.domain.errors import ParseError, ParseErrorKind
from mt5_import.domain.models import ParsedTrade, ReportFormat
from mt5_import.domain.results import ImportResult, SkippedRow
from mt5_import.infrastructure.parsing.utils import (
    canonical_date,
    canonical_side,
    decode_report_bytes,
    ensure_bytes,
    extract_text,
    parse_number,
)

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"<(b|th)\b[^>]*>(.*?)</\1\s*>", re.IGNORECASE | re.DOTALL)
_ROW_RE = re.compile(r"<tr\b[^>]*>.*?</tr\s*>", re.IGNORECASE | re.DOTALL)
_HEADER_CELL_RE = re.compile(r"<th\b", re.IGNORECASE)
_CELL_RE = re.compile(r"<td\b([^>]*)>(.*?)</td\s*>", re.IGNORECASE | re.DOTALL)
_CLASS_ATTR_RE = re.compile(r"""\bclass\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s>]+))""", re.IGNORECASE)

# Positional layout of an MT5 Positions row.
OPEN_TIME, POSITION_ID, SYMBOL, TYPE, VOLUME, OPEN_PRICE = 0, 1, 2, 3, 4, 5
STOP_LOSS, TAKE_PROFIT, CLOSE_TIME, CLOSE_PRICE = 6, 7, 8, 9
COMMISSION, SWAP, PROFIT = 10, 11, 12

FAILURE_MESSAGE = "Failed to parse MetaTrader 5 HTML report"


def _find_heading(html: str, needle: str, start: int = 0) -> re.Match[str] | None:
    for match in _HEADING_RE.finditer(html, start):
        if needle in extract_text(match.group(2)).lower():
            return match
    return None


def positions_section(html: str) -> str:
    """Slice the document from the Positions heading up to the Orders heading."""
    positions = _find_heading(html, "positions")
    if positions is None:
        raise ParseError(ParseErrorKind.SECTION_NOT_FOUND, "Positions section header not found")
    orders = _find_heading(html, "orders", positions.end())
    end = orders.start() if orders else len(html)
    return html[positions.start():end]


def _is_hidden(attributes: str) -> bool:
    match = _CLASS_ATTR_RE.search(attributes)
    if not match:
        return False
    classes = next(group for group in match.groups() if group is not None)
    return "hidden" in classes.lower().split()


def visible_cells(row_html: str) -> list[str]:
    return [body for attributes, body in _CELL_RE.findall(row_html) if not _is_hidden(attributes)]


def _row_to_trade(cells: list[str]) -> ParsedTrade | None:
    symbol = extract_text(cells[SYMBOL]).upper()
    entry = parse_number(cells[OPEN_PRICE])
    exit_price = parse_number(cells[CLOSE_PRICE])
    volume = parse_number(cells[VOLUME])
    open_time = extract_text(cells[OPEN_TIME])
    close_time = extract_text(cells[CLOSE_TIME])
    if not symbol or not entry or not exit_price or not volume or not close_time:
        return None
    return ParsedTrade(
        symbol=symbol,
        side=canonical_side(extract_text(cells[TYPE])),
        entry=entry,
        exit=exit_price,
        quantity=volume,
        entry_date=canonical_date(open_time),
        exit_date=canonical_date(close_time),
        profit_loss=parse_number(cells[PROFIT]),
        commission=parse_number(cells[COMMISSION]),
        swap=parse_number(cells[SWAP]),
    )


def scan_positions(html: str) -> ImportResult:
    section = positions_section(html)
    trades: list[ParsedTrade] = []
    trade_rows: list[int] = []
    skipped: list[SkippedRow] = []

    for row_number, row_match in enumerate(_ROW_RE.finditer(section), start=1):
        row = row_match.group(0)
        if _HEADER_CELL_RE.search(row):
            continue
        cells = visible_cells(row)
        if not any(extract_text(cell) for cell in cells):
            continue
        if len(cells) < SETTINGS.min_position_cells:
            skipped.append(SkippedRow(row_number, f"expected at least {SETTINGS.min_position_cells} cells, found {len(cells)}"))
            continue
        try:
            trade = _row_to_trade(cells)
        except Exception as exc:
            logger.debug("Skipping malformed HTML row %s: %s", row_number, exc)
            skipped.append(SkippedRow(row_number, f"malformed row: {exc}"))
            continue
        if trade is None:
            skipped.append(SkippedRow(row_number, "open position or incomplete row"))
            continue
        trades.append(trade)
        trade_rows.append(row_number)

    if not trades:
        raise ParseError(ParseErrorKind.NO_TRADES_FOUND, "No valid trades found in Positions section")

    logger.info("Parsed %d trades from MT5 HTML report (%d rows skipped)", len(trades), len(skipped))
    return ImportResult(
        source_format=ReportFormat.HTML,
        trades=tuple(trades),
        skipped=tuple(skipped),
        trade_rows=tuple(trade_rows),
    )


def parse_mt5_html(source: str | bytes | BytesIO | Path) -> ImportResult:
    """Parse the Positions table of an MT5 HTML report.

    ``source`` is either already-decoded text or the raw exported bytes.
    """
    try:
        html = source if isinstance(source, str) else decode_report_bytes(ensure_bytes(source))
        return scan_positions(html)
    except ParseError:
        raise
    except Exception as exc:
        raise ParseError(ParseErrorKind.PARSE_FAILED, FAILURE_MESSAGE) from exc

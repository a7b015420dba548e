"""MT5 Excel report parser producing parsed trades from the Positions block."""
from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Sequence

import pandas as pd

from mt5_import.config import CLOSE_LEG_ALIASES, SETTINGS
from mt5_import.domain.errors import ParseError, ParseErrorKind
from mt5_import.domain.models import ParsedTrade, ReportFormat
from mt5_import.domain.results import ImportResult, SkippedRow
from mt5_import.infrastructure.parsing.cells import EMPTY_CELL, CellValue
from mt5_import.infrastructure.parsing.utils import canonical_date, canonical_side, ensure_bytes

logger = logging.getLogger(__name__)

Row = Sequence[CellValue]

_ZIP_SIGNATURE = b"PK\x03\x04"
_OLE_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"

FAILURE_MESSAGE = "Failed to parse MetaTrader 5 Excel file"


def _engine_for(data: bytes) -> str:
    if data.startswith(_ZIP_SIGNATURE):
        return "openpyxl"
    if data.startswith(_OLE_SIGNATURE):
        return "xlrd"
    raise ValueError("Unrecognized workbook signature")


def read_worksheet(data: bytes) -> pd.DataFrame:
    """Load the first worksheet holding data, or the first one if all are empty."""
    engine = _engine_for(data)
    with pd.ExcelFile(BytesIO(data), engine=engine) as xls:
        sheets = xls.sheet_names
        if not sheets:
            raise ParseError(ParseErrorKind.NO_WORKSHEET, "No worksheet found in Excel file")
        first: pd.DataFrame | None = None
        for name in sheets:
            frame = xls.parse(name, header=None)
            if first is None:
                first = frame
            if not frame.dropna(how="all").empty:
                logger.debug("Using worksheet %r", name)
                return frame
    return first


def frame_to_rows(frame: pd.DataFrame) -> list[list[CellValue]]:
    return [[CellValue.from_raw(value) for value in record] for record in frame.itertuples(index=False, name=None)]


def find_header_index(rows: Sequence[Row]) -> int:
    """Index of the row after the first "Positions" banner, else the first row."""
    for index, row in enumerate(rows[: SETTINGS.header_scan_rows]):
        if any("positions" in cell.as_text().lower() for cell in row):
            return index + 1
    return 0


def build_header_map(row: Row) -> dict[str, int]:
    mapping: dict[str, int] = {}
    for column, cell in enumerate(row):
        header = cell.as_text().lower().strip()
        if not header:
            continue
        if header in mapping:
            alias = CLOSE_LEG_ALIASES.get(header)
            if alias and alias not in mapping:
                mapping[alias] = column
            continue
        mapping[header] = column
    return mapping


def resolve(row: Row, header_map: dict[str, int], field: str) -> CellValue:
    for key in SETTINGS.field_synonyms[field]:
        column = header_map.get(key)
        if column is None or column >= len(row):
            continue
        cell = row[column]
        if cell.is_empty:
            continue
        return cell
    return EMPTY_CELL


def _row_to_trade(row: Row, header_map: dict[str, int]) -> ParsedTrade | None:
    symbol = resolve(row, header_map, "symbol").as_text().upper()
    entry = resolve(row, header_map, "entry").as_number()
    exit_price = resolve(row, header_map, "exit").as_number()
    volume = resolve(row, header_map, "quantity").as_number()
    open_time = resolve(row, header_map, "open_time").as_text()
    close_time = resolve(row, header_map, "close_time").as_text()
    if not symbol or not entry or not exit_price or not volume or not close_time:
        return None
    return ParsedTrade(
        symbol=symbol,
        side=canonical_side(resolve(row, header_map, "side").as_text()),
        entry=entry,
        exit=exit_price,
        quantity=volume,
        entry_date=canonical_date(open_time),
        exit_date=canonical_date(close_time),
        profit_loss=resolve(row, header_map, "profit").as_number(),
        commission=resolve(row, header_map, "commission").as_number(),
        swap=resolve(row, header_map, "swap").as_number(),
    )


def scan_positions(rows: Sequence[Row]) -> ImportResult:
    header_index = find_header_index(rows)
    header_map = build_header_map(rows[header_index]) if header_index < len(rows) else {}
    if not header_map:
        raise ParseError(ParseErrorKind.NO_HEADER_ROW, "Could not find header row in Excel file")

    trades: list[ParsedTrade] = []
    trade_rows: list[int] = []
    skipped: list[SkippedRow] = []
    # Orders and Deals blocks follow the Positions block; their rows are not position skips.
    past_positions = False
    for index in range(header_index + 1, len(rows)):
        row = rows[index]
        row_number = index + 1
        first = row[0] if row else EMPTY_CELL
        if first.is_empty:
            continue
        first_text = first.as_text().lower()
        if "orders" in first_text:
            past_positions = True
            continue
        if "symbol" in first_text or "type" in first_text:
            continue
        try:
            trade = _row_to_trade(row, header_map)
        except Exception as exc:
            logger.debug("Skipping malformed Excel row %s: %s", row_number, exc)
            if not past_positions:
                skipped.append(SkippedRow(row_number, f"malformed row: {exc}"))
            continue
        if trade is None:
            if not past_positions:
                skipped.append(SkippedRow(row_number, "open position or incomplete row"))
            continue
        trades.append(trade)
        trade_rows.append(row_number)

    if not trades:
        raise ParseError(ParseErrorKind.NO_TRADES_FOUND, "No valid trades found in Excel file")

    logger.info("Parsed %d trades from MT5 Excel report (%d rows skipped)", len(trades), len(skipped))
    return ImportResult(
        source_format=ReportFormat.EXCEL,
        trades=tuple(trades),
        skipped=tuple(skipped),
        trade_rows=tuple(trade_rows),
    )


def parse_mt5_excel(source: bytes | BytesIO | Path | BinaryIO) -> ImportResult:
    try:
        frame = read_worksheet(ensure_bytes(source))
        return scan_positions(frame_to_rows(frame))
    except ParseError:
        raise
    except Exception as exc:
        raise ParseError(ParseErrorKind.PARSE_FAILED, FAILURE_MESSAGE) from exc

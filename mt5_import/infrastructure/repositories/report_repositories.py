"""File-backed repositories for MT5 broker reports."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path, PurePath
from typing import BinaryIO

from mt5_import.config import SETTINGS
from mt5_import.domain.errors import ParseError, ParseErrorKind
from mt5_import.domain.models import ReportFormat
from mt5_import.domain.repositories import TradeReportRepository
from mt5_import.domain.results import ImportResult
from mt5_import.infrastructure.parsing.excel_report import parse_mt5_excel
from mt5_import.infrastructure.parsing.html_report import parse_mt5_html
from mt5_import.infrastructure.parsing.utils import ensure_bytes

_HTML_MIME_TYPES = {"text/html", "application/xhtml+xml"}
_EXCEL_MIME_TYPES = {
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel.sheet.macroenabled.12",
    "application/vnd.ms-excel",
}


def detect_format(filename: str | None, content_type: str | None = None) -> ReportFormat:
    suffix = PurePath(filename or "").suffix.lower()
    if suffix in SETTINGS.html_extensions:
        return ReportFormat.HTML
    if suffix in SETTINGS.excel_extensions:
        return ReportFormat.EXCEL
    mime = (content_type or "").split(";")[0].strip().lower()
    if mime in _HTML_MIME_TYPES:
        return ReportFormat.HTML
    if mime in _EXCEL_MIME_TYPES:
        return ReportFormat.EXCEL
    raise ParseError(
        ParseErrorKind.UNSUPPORTED_FORMAT,
        f"Unsupported report type: {filename or content_type or 'unknown'}",
    )


class HtmlReportRepository(TradeReportRepository):
    def __init__(self, source: BytesIO | Path | bytes | BinaryIO) -> None:
        self._source = ensure_bytes(source)

    def list_trades(self) -> ImportResult:
        return parse_mt5_html(self._source)


class ExcelReportRepository(TradeReportRepository):
    def __init__(self, source: BytesIO | Path | bytes | BinaryIO) -> None:
        self._source = ensure_bytes(source)

    def list_trades(self) -> ImportResult:
        return parse_mt5_excel(BytesIO(self._source))


def repository_for(
    filename: str | None,
    source: BytesIO | Path | bytes | BinaryIO,
    content_type: str | None = None,
) -> TradeReportRepository:
    if filename is None and isinstance(source, Path):
        filename = source.name
    report_format = detect_format(filename, content_type)
    if report_format is ReportFormat.HTML:
        return HtmlReportRepository(source)
    return ExcelReportRepository(source)

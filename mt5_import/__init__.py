"""MetaTrader 5 broker-report import toolkit."""
from mt5_import.application.use_cases import ImportContext, ImportTradesUseCase, import_trades
from mt5_import.domain.errors import ParseError, ParseErrorKind
from mt5_import.domain.models import ParsedTrade, ReportFormat, Side
from mt5_import.domain.results import ImportResult, SkippedRow
from mt5_import.domain.services import TradeValidator, validate_trades
from mt5_import.infrastructure.parsing.excel_report import parse_mt5_excel
from mt5_import.infrastructure.parsing.html_report import parse_mt5_html
from mt5_import.infrastructure.repositories.report_repositories import (
    ExcelReportRepository,
    HtmlReportRepository,
)

__all__ = [
    "ImportContext",
    "ImportTradesUseCase",
    "import_trades",
    "ParseError",
    "ParseErrorKind",
    "ParsedTrade",
    "ReportFormat",
    "Side",
    "ImportResult",
    "SkippedRow",
    "TradeValidator",
    "validate_trades",
    "parse_mt5_excel",
    "parse_mt5_html",
    "ExcelReportRepository",
    "HtmlReportRepository",
]

"""Application services orchestrating the report import workflow."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import BinaryIO

from mt5_import.domain.errors import ParseError, ParseErrorKind
from mt5_import.domain.repositories import TradeReportRepository
from mt5_import.domain.results import ImportResult
from mt5_import.domain.services import TradeValidator
from mt5_import.infrastructure.repositories.report_repositories import repository_for

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ImportContext:
    repository: TradeReportRepository
    validator: TradeValidator = field(default_factory=TradeValidator)


class ImportTradesUseCase:
    def __init__(self, context: ImportContext) -> None:
        self._context = context

    def execute(self) -> ImportResult:
        parsed = self._context.repository.list_trades()
        result = self._context.validator.filter_result(parsed)
        dropped = len(parsed.trades) - len(result.trades)
        if dropped:
            logger.warning("Validator dropped %d of %d parsed trades", dropped, len(parsed.trades))
        if not result.trades:
            raise ParseError(ParseErrorKind.NO_TRADES_FOUND, "No valid trades remain after validation")
        return result


def import_trades(
    filename: str | None,
    source: BytesIO | Path | bytes | BinaryIO,
    content_type: str | None = None,
) -> ImportResult:
    """Detect the report format, parse it and return the validated trades."""
    context = ImportContext(repository=repository_for(filename, source, content_type))
    return ImportTradesUseCase(context).execute()

"""Command-line entrypoint for MT5 report imports."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from mt5_import.application.dto import build_create_requests
from mt5_import.application.use_cases import import_trades
from mt5_import.domain.errors import ParseError
from mt5_import.infrastructure.logging import setup_logging
from mt5_import.presentation.trade_report import render_csv, render_json


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import closed positions from a MetaTrader 5 report")
    parser.add_argument("report", type=str, help="Path to the MT5 HTML or Excel report")
    parser.add_argument("--account-id", type=str, default="", help="Journal account the trades belong to")
    parser.add_argument("--csv", type=str, help="Write the parsed trades to this CSV file")
    parser.add_argument("--json", type=str, help="Write create-trade payloads to this JSON file")
    parser.add_argument("--show-skipped", action="store_true", help="List rows that did not yield a trade")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (default from MT5_IMPORT_LOG_LEVEL)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    setup_logging(args.log_level)

    path = Path(args.report)
    try:
        result = import_trades(path.name, path)
    except ParseError as exc:
        print(f"Import failed ({exc.kind.name}): {exc.message}", file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"Could not read report {path}: {exc.strerror or exc}", file=sys.stderr)
        return 2

    print("Import Summary")
    print("==============")
    print(f"Trades: {len(result.trades)}")
    print(f"Skipped rows: {result.skipped_count}")
    print()
    for trade in result.trades:
        print(
            f"- {trade.exit_date} {trade.symbol} {trade.side.value} {trade.quantity:g} "
            f"@ {trade.entry:g} -> {trade.exit:g} P/L {trade.profit_loss:.2f}"
        )

    if args.show_skipped and result.skipped:
        print("\nSkipped rows:")
        for warning in result.warnings:
            print(f"- {warning}")

    if args.csv:
        Path(args.csv).write_bytes(render_csv(result.trades))
    if args.json:
        requests = build_create_requests(result.trades, args.account_id)
        Path(args.json).write_bytes(render_json(requests))

    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

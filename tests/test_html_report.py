import pytest

from mt5_import.domain.errors import ParseError, ParseErrorKind
from mt5_import.domain.models import ParsedTrade, ReportFormat, Side
from mt5_import.infrastructure.parsing.html_report import parse_mt5_html


def test_well_formed_rows_map_positionally(position_row, html_report):
    html = html_report(
        [
            position_row(),
            position_row(symbol="gbpusd", side="sell", volume="0.5", open_price="1.2700",
                         close_price="1.2650", profit="25.0", commission="-3.5", swap="-1.2"),
        ]
    )

    result = parse_mt5_html(html)

    assert result.source_format is ReportFormat.HTML
    assert len(result.trades) == 2
    assert result.trades[0] == ParsedTrade(
        symbol="EURUSD",
        side=Side.BUY,
        entry=1.09,
        exit=1.095,
        quantity=1.5,
        entry_date="2024-06-27",
        exit_date="2024-06-28",
        profit_loss=75.0,
        commission=-7.0,
        swap=0.0,
    )
    second = result.trades[1]
    assert second.symbol == "GBPUSD"
    assert second.side is Side.SELL
    assert second.swap == pytest.approx(-1.2)


def test_hidden_cells_do_not_shift_columns(position_row, html_report):
    plain = parse_mt5_html(html_report([position_row()]))
    with_hidden = parse_mt5_html(html_report([position_row(hidden=True)]))

    assert with_hidden.trades == plain.trades


def test_broken_row_is_skipped_not_raised(position_row, html_report):
    rows = [position_row(position=str(1000 + i)) for i in range(5)]
    rows.insert(2, "<tr><td>2024.06.27</td><td>broken<td></tr>")

    result = parse_mt5_html(html_report(rows))

    assert len(result.trades) == 5
    assert result.skipped_count == 1


def test_open_positions_are_skipped(position_row, html_report):
    html = html_report([position_row(), position_row(close_price="", close_time="")])

    result = parse_mt5_html(html)

    assert len(result.trades) == 1
    assert result.skipped[0].reason == "open position or incomplete row"
    assert result.warnings[0].endswith("open position or incomplete row")


def test_orders_section_is_excluded(position_row, html_report):
    html = html_report([position_row()], orders_rows=[position_row(symbol="USDJPY")])

    result = parse_mt5_html(html)

    assert [trade.symbol for trade in result.trades] == ["EURUSD"]



def test_orders_heading_before_positions_is_ignored(position_row, html_report):
    html = html_report([position_row(), position_row(symbol="USDJPY")]).replace(
        "<div><b>Trade History Report</b></div>",
        "<div><b>Trade History Report</b></div>\n<div><b>Open Orders</b></div>",
    )

    result = parse_mt5_html(html)

    assert [trade.symbol for trade in result.trades] == ["EURUSD", "USDJPY"]
    assert result.trade_rows == (2, 3)

def test_side_tokens_in_and_long_map_to_buy(position_row, html_report):
    html = html_report([position_row(side="in"), position_row(side="Long"), position_row(side="out")])

    sides = [trade.side for trade in parse_mt5_html(html).trades]

    assert sides == [Side.BUY, Side.BUY, Side.SELL]


def test_utf16_bytes_are_decoded(position_row, html_report):
    payload = html_report([position_row()]).encode("utf-16")

    result = parse_mt5_html(payload)

    assert result.trades[0].symbol == "EURUSD"


def test_missing_positions_section():
    with pytest.raises(ParseError) as excinfo:
        parse_mt5_html("<html><body><b>Deals</b><table></table></body></html>")

    assert excinfo.value.kind is ParseErrorKind.SECTION_NOT_FOUND


def test_no_trades_found(html_report):
    with pytest.raises(ParseError) as excinfo:
        parse_mt5_html(html_report([]))

    assert excinfo.value.kind is ParseErrorKind.NO_TRADES_FOUND


def test_unexpected_failure_is_wrapped():
    with pytest.raises(ParseError) as excinfo:
        parse_mt5_html(12345)

    assert excinfo.value.kind is ParseErrorKind.PARSE_FAILED
    assert str(excinfo.value) == "Failed to parse MetaTrader 5 HTML report"

from datetime import datetime
from io import BytesIO
from typing import Callable, Sequence

import pytest
from openpyxl import Workbook

POSITION_HEADERS = [
    "Time", "Position", "Symbol", "Type", "Volume", "Price", "S / L",
    "T / P", "Time", "Price", "Commission", "Swap", "Profit",
]


def make_position_row(
    symbol: str = "EURUSD",
    side: str = "buy",
    volume: str = "1.5",
    open_price: str = "1.0900",
    close_price: str = "1.0950",
    open_time: str = "2024.06.27 09:30:00",
    close_time: str = "2024.06.28 14:15:00",
    commission: str = "-7",
    swap: str = "0",
    profit: str = "75.0",
    position: str = "1001",
    hidden: bool = False,
) -> str:
    values = [
        open_time, position, symbol, side, volume, open_price, "", "",
        close_time, close_price, commission, swap, profit,
    ]
    cells = [f"<td>{value}</td>" for value in values]
    if hidden:
        cells.insert(4, '<td class="hidden" colspan="8">999</td>')
    return '<tr bgcolor="#F7F7F7" align="right">' + "".join(cells) + "</tr>"


def make_html_report(rows: Sequence[str], orders_rows: Sequence[str] = ()) -> str:
    header_cells = "".join(f"<th>{name}</th>" for name in POSITION_HEADERS)
    parts = [
        "<html><head><title>Trade History Report</title></head><body>",
        '<div><b>Trade History Report</b></div>',
        '<table cellspacing="1" cellpadding="3" border="0">',
        '<tr align="center"><th colspan="13" style="height: 25px"><div><b>Positions</b></div></th></tr>',
        f'<tr align="center" bgcolor="#E5F0FC">{header_cells}</tr>',
        *rows,
        '<tr><td colspan="13" style="height: 30px"></td></tr>',
        '<tr align="center"><th colspan="13" style="height: 25px"><div><b>Orders</b></div></th></tr>',
        *orders_rows,
        "</table></body></html>",
    ]
    return "\n".join(parts)


def make_workbook(rows: Sequence[Sequence[object]], extra_sheets: Sequence[Sequence[Sequence[object]]] = ()) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(list(row))
    for index, sheet_rows in enumerate(extra_sheets, start=1):
        extra = workbook.create_sheet(f"Sheet{index + 1}")
        for row in sheet_rows:
            extra.append(list(row))
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def mt5_workbook_rows() -> list[list[object]]:
    return [
        ["Trade History Report"],
        ["Name:", "Demo Trader"],
        ["Positions"],
        list(POSITION_HEADERS),
        [datetime(2024, 6, 27, 9, 30), 1001, "eurusd", "buy", 1.5, 1.09, None, None,
         datetime(2024, 6, 28, 14, 15), 1.095, -7, 0, 75.0],
        [datetime(2024, 7, 1, 8, 0), 1002, "GBPUSD", "sell", 0.5, 1.27, None, None,
         datetime(2024, 7, 2, 16, 45), 1.265, -3.5, -1.2, 25.0],
        ["Orders"],
        ["Open Time", "Order", "Symbol", "Type", "Volume", "Price", "S / L", "T / P", "Time", "State", "Comment"],
        [datetime(2024, 6, 27, 9, 30), 2001, "EURUSD", "buy", "1.5 / 1.5", 1.09, None, None,
         datetime(2024, 6, 27, 9, 30), "filled", None],
    ]


@pytest.fixture
def position_row() -> Callable[..., str]:
    return make_position_row


@pytest.fixture
def html_report() -> Callable[..., str]:
    return make_html_report


@pytest.fixture
def workbook_bytes() -> Callable[..., bytes]:
    return make_workbook


@pytest.fixture
def mt5_workbook() -> bytes:
    return make_workbook(mt5_workbook_rows())


@pytest.fixture
def mt5_rows() -> list[list[object]]:
    return mt5_workbook_rows()

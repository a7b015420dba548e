"""Streamlit front-end for the MT5 report import pipeline."""
from __future__ import annotations

from typing import Sequence

import pandas as pd
import streamlit as st

from mt5_import import ParseError, ParsedTrade, import_trades
from mt5_import.application.dto import build_create_requests
from mt5_import.domain.results import ImportResult
from mt5_import.infrastructure.logging import setup_logging
from mt5_import.presentation.trade_report import (
    TRADE_COLUMNS,
    render_csv,
    render_html,
    render_json,
    skipped_to_rows,
    trades_to_rows,
)


st.set_page_config(page_title="MT5 Trade Import", layout="wide")
st.title("Import from MetaTrader 5")

if "logging_ready" not in st.session_state:
    setup_logging()
    st.session_state["logging_ready"] = True


def trades_to_dataframe(trades: Sequence[ParsedTrade]) -> pd.DataFrame:
    frame = pd.DataFrame(trades_to_rows(trades), columns=TRADE_COLUMNS)
    frame.insert(0, "import", True)
    return frame


def selected_trades(result: ImportResult, edited: pd.DataFrame) -> list[ParsedTrade]:
    if not isinstance(edited, pd.DataFrame) or "import" not in edited.columns:
        return list(result.trades)
    mask = edited["import"].astype(bool).tolist()
    return [trade for trade, keep in zip(result.trades, mask) if keep]


if "view" not in st.session_state:
    st.session_state["view"] = "upload"
if "result" not in st.session_state:
    st.session_state["result"] = None


if st.session_state["view"] == "upload":
    st.caption("Open the MT5 terminal History tab, right-click and save the report as HTML or Open XML.")
    report_file = st.file_uploader("Upload MT5 report", type=["htm", "html", "xlsx", "xlsm", "xls"])
    account_id = st.text_input("Journal account id")

    run_btn = st.button("Parse report", disabled=not report_file)
    if run_btn and report_file:
        with st.spinner("Parsing..."):
            try:
                result = import_trades(report_file.name, report_file.read(), report_file.type)
            except ParseError as exc:
                st.error(f"Import failed: {exc.message}")
                result = None
        if result is not None:
            st.session_state["result"] = result
            st.session_state["account_id"] = account_id.strip()
            st.session_state["view"] = "review"
            st.rerun()
else:
    back_clicked = st.button("← Back", key="back_to_upload")
    if back_clicked:
        st.session_state["view"] = "upload"
        st.session_state["result"] = None
        st.rerun()

    result: ImportResult | None = st.session_state.get("result")
    if not result:
        st.info("No trades available. Upload a report first.")
    else:
        st.subheader("Summary")
        col1, col2 = st.columns(2)
        col1.metric("Trades found", len(result.trades))
        col2.metric("Rows skipped", result.skipped_count)

        tabs = st.tabs(["Trades", "Skipped rows"])
        with tabs[0]:
            edited_df = st.data_editor(
                trades_to_dataframe(result.trades),
                hide_index=True,
                disabled=TRADE_COLUMNS,
                key="trade_selection",
                use_container_width=True,
            )
            chosen = selected_trades(result, edited_df)
            st.caption(f"{len(chosen)} of {len(result.trades)} trades selected")
            account_id = st.session_state.get("account_id", "")
            st.download_button(
                "Download selection CSV",
                data=render_csv(chosen),
                file_name="mt5_trades.csv",
                mime="text/csv",
            )
            st.download_button(
                "Download create-trade JSON",
                data=render_json(build_create_requests(chosen, account_id)),
                file_name="mt5_trades.json",
                mime="application/json",
                disabled=not account_id,
            )
            st.download_button(
                "Download preview HTML",
                data=render_html(chosen).encode("utf-8"),
                file_name="mt5_trades.html",
                mime="text/html",
            )
        with tabs[1]:
            st.dataframe(pd.DataFrame(skipped_to_rows(result.skipped), columns=["row", "reason"]))

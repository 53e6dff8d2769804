"""Streamlit demo UI for pulse-engine."""

from __future__ import annotations

import logging
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any

from pulse_engine.adapters import json_adapter
from pulse_engine.config import configure_logging, load_config
from pulse_engine.directory import filter_directory, summarize_directory
from pulse_engine.report import build_report
from pulse_engine.rollups import employee_rollup

logger = logging.getLogger(__name__)

SORT_OPTIONS = ["sentiment", "satisfaction", "name", "submissionCount", "workload", "workLifeBalance", "pendingActions"]


def scale_sentiment(value: float) -> float:
    """Display sentiment on the 0-10 scale used by the dashboards."""

    return round(value * 10, 1)


def sentiment_label(scaled: float) -> str:
    if scaled >= 8:
        return "Excellent"
    if scaled >= 6:
        return "Good"
    if scaled >= 4:
        return "Fair"
    if scaled > 0:
        return "Low"
    return "No Data"


def _parse_uploaded(uploaded_file):
    with tempfile.NamedTemporaryFile(delete=False, suffix=".json") as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    return json_adapter.parse(temp_path)


def _directory_rows(rows) -> list[dict[str, Any]]:
    return [
        {
            "name": row.full_name,
            "email": row.email,
            "department": row.dept_code or "",
            "role": row.role,
            "sentiment": scale_sentiment(row.latest_sentiment),
            "label": sentiment_label(scale_sentiment(row.latest_sentiment)),
            "satisfaction": round(row.avg_sat_score, 1),
            "submissions": row.total_feedback_count,
            "pending actions": row.pending_action_count,
        }
        for row in rows
    ]


def main() -> None:
    import streamlit as st

    config = load_config()
    configure_logging(config.log_level)

    st.set_page_config(page_title="Pulse Engine Demo", layout="wide")
    st.title("Pulse Engine — Streamlit Demo")

    with st.sidebar:
        st.header("Controls")
        uploaded = st.file_uploader("Upload snapshot", type=["json"])
        use_demo = st.checkbox("Load demo snapshot", value=True)
        period = st.text_input("Period", value="", placeholder="e.g. Oct-2026 (blank = current month)")
        compare_mode = st.selectbox("Compare", options=["month", "quarter", "current"], index=0)
        range_name = st.selectbox("Leaderboard range", options=["quarter", "month", "year", "all"], index=0)
        search = st.text_input("Directory search", value="")
        sort_key = st.selectbox("Directory sort", options=SORT_OPTIONS, index=0)
        descending = st.checkbox("Descending", value=False)
        run = st.button("Run analytics", type="primary")

    if not run:
        st.info("Configure inputs in the sidebar and click **Run analytics**.")
        return

    try:
        if use_demo:
            snapshot = json_adapter.parse(config.data_path)
            data_source = f"demo snapshot ({config.data_path})"
        elif uploaded is not None:
            snapshot = _parse_uploaded(uploaded)
            data_source = f"uploaded file ({uploaded.name})"
        else:
            st.error("Please upload a JSON snapshot or enable 'Load demo snapshot'.")
            return

        now = datetime.now()
        report = build_report(
            snapshot,
            now=now,
            period=period.strip() or None,
            compare_mode=compare_mode,
            range_name=range_name,
            trend_months=config.trend_months,
            podium_size=config.podium_size,
        )
        st.success(f"Loaded {len(snapshot.persons())} people from {data_source}.")
        for section, count in report["skipped_rows"].items():
            if count:
                st.warning(f"{section}: {count} rows referenced unknown people and were skipped.")

        st.subheader(f"A) Departments — {report['period']}")
        st.table(report["groups"]["department"].get("trends") or report["groups"]["department"]["current"])

        st.subheader("B) Burnout Alerts")
        if report["burnout"]:
            st.table(report["burnout"])
        else:
            st.write("No significant burnout risks detected this period.")

        st.subheader("C) Manager Accountability")
        st.table(report["managers"])

        st.subheader("D) Kudos Leaderboard")
        st.table(report["leaderboard"]["entries"] or [{"rank": "-", "full_name": "No kudos this period"}])

        st.subheader("E) Employee Directory")
        rows = filter_directory(employee_rollup(snapshot).rows, search=search or None, sort_key=sort_key, descending=descending)
        summary = summarize_directory(rows)
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("People", summary.total)
        c2.metric("Avg sentiment", f"{scale_sentiment(summary.avg_latest_sentiment):.1f} / 10")
        c3.metric("At risk", summary.at_risk_count)
        c4.metric("Pending actions", summary.pending_action_count)
        st.table(_directory_rows(rows))

    except ValueError as exc:
        st.error(f"Input error: {exc}")
    except Exception:
        logger.exception("Demo run failed")
        st.error("Something went wrong while running the demo. Please verify the snapshot format.")


if __name__ == "__main__":
    main()

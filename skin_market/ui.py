# -*- coding: utf-8 -*-
"""
Skin Market Suite | UI Components

Formatting helpers, plotly figure builders and the Streamlit widgets
shared by every page. Figure builders are plain functions returning
plotly figures so they can be exercised without a running app.
"""

from __future__ import annotations
import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from skin_market.analytics import linear_trend
from skin_market.config import APP_ICON, APP_TITLE, APP_VERSION, CHART_COLORS
from skin_market.errors import ExportError
from skin_market.export import EXPORT_FORMATS, MIME_TYPES, export_filename, export_result
from skin_market.logging_config import configure_logging
from skin_market.models import TimePoint
from skin_market.state import (
    KEY_DATA_URL,
    clear_data,
    clear_upload,
    data_stats,
    get_last_error,
    get_session,
    init_session_state,
    inject_custom_css,
    remember_upload,
    uploader_key,
)

logger = logging.getLogger(__name__)

GOLDEN_ANGLE = 137.508


# ==============================================================================
# FORMATTING
# ==============================================================================

def format_millions(value: float, decimals: int = 1) -> str:
    """USD-million figure as money: 358.3 -> "$358.3M", 3203.4 -> "$3.2B"."""
    if abs(value) >= 1000:
        return f"${value / 1000:,.{decimals}f}B"
    return f"${value:,.{decimals}f}M"


def format_percentage(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}%"


def chart_colors(count: int) -> List[str]:
    """Base palette, extended with golden-angle hues past its length."""
    if count <= len(CHART_COLORS):
        return list(CHART_COLORS[:max(count, 0)])
    extra = [f"hsl({(i * GOLDEN_ANGLE) % 360:.1f}, 70%, 50%)" for i in range(len(CHART_COLORS), count)]
    return list(CHART_COLORS) + extra


def trend_indicator(current: float, previous: float) -> Dict[str, str]:
    if current > previous:
        return {"direction": "up", "icon": "↗", "delta_color": "normal"}
    if current < previous:
        return {"direction": "down", "icon": "↘", "delta_color": "inverse"}
    return {"direction": "stable", "icon": "→", "delta_color": "off"}


# ==============================================================================
# FIGURES
# ==============================================================================

def _summary_frame(items: Sequence) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Name": s.name,
                "Base": s.market_size_base,
                "Forecast": s.market_size_forecast,
                "Share_Base": s.market_share_base,
                "Share_Forecast": s.market_share_forecast,
                "CAGR": s.cagr,
            }
            for s in items
        ],
        columns=["Name", "Base", "Forecast", "Share_Base", "Share_Forecast", "CAGR"],
    )


def share_pie(items: Sequence, title: str = "", forecast: bool = True) -> go.Figure:
    """Donut of market shares for a list of summaries."""
    df = _summary_frame(items)
    column = "Share_Forecast" if forecast else "Share_Base"
    fig = px.pie(
        df,
        names="Name",
        values=column,
        hole=0.45,
        title=title or None,
        color_discrete_sequence=chart_colors(len(df)),
    )
    fig.update_traces(textinfo="percent+label")
    return fig


def growth_bar(items: Sequence, title: str = "") -> go.Figure:
    """Horizontal CAGR bars, fastest growing on top."""
    df = _summary_frame(items).sort_values("CAGR", kind="stable")
    fig = px.bar(
        df,
        x="CAGR",
        y="Name",
        orientation="h",
        color="Name",
        text_auto=".1f",
        title=title or None,
        color_discrete_sequence=chart_colors(len(df)),
    )
    fig.update_layout(showlegend=False, xaxis_title="CAGR (%)", yaxis_title=None)
    return fig


def region_bar(items: Sequence, base_year: int, forecast_year: int, title: str = "") -> go.Figure:
    """Grouped base vs forecast market size per region."""
    df = _summary_frame(items).rename(columns={"Base": str(base_year), "Forecast": str(forecast_year)})
    long = df.melt(id_vars="Name", value_vars=[str(base_year), str(forecast_year)],
                   var_name="Year", value_name="USD Million")
    fig = px.bar(
        long,
        x="Name",
        y="USD Million",
        color="Year",
        barmode="group",
        title=title or None,
        color_discrete_sequence=chart_colors(2),
    )
    fig.update_layout(xaxis_title=None)
    return fig


def time_series_line(series_by_name: Dict[str, Sequence[TimePoint]], title: str = "",
                     show_trend: bool = False) -> go.Figure:
    """
    One line per named series.

    Args:
        series_by_name: Segment name -> time series (e.g. one bucket of model.time_series)
        title: Figure title
        show_trend: Add a dashed least-squares line per series
    """
    colors = chart_colors(len(series_by_name))
    fig = go.Figure()
    for color, (name, points) in zip(colors, series_by_name.items()):
        years = [p.year for p in points]
        fig.add_trace(go.Scatter(x=years, y=[p.value for p in points], mode="lines+markers",
                                 name=name, line=dict(color=color)))
        if show_trend and len(points) > 1:
            m, b = linear_trend(points)
            fig.add_trace(go.Scatter(x=years, y=[m * y + b for y in years], mode="lines",
                                     name=f"{name} (trend)", line=dict(color=color, dash="dash")))
    fig.update_layout(title=title or None, xaxis_title=None, yaxis_title="USD Million")
    return fig


# ==============================================================================
# STREAMLIT WIDGETS
# ==============================================================================

def kpi_row(kpis: List[Tuple[str, str, Optional[str]]]) -> None:
    cols = st.columns(len(kpis))
    for c, (label, value, delta) in zip(cols, kpis):
        c.metric(label, value, delta=delta)


def render_page_header(title: str, description: str = None, icon: str = "📊"):
    st.title(f"{icon} {title}")
    if description:
        st.markdown(f"*{description}*")
    st.divider()


def sidebar_data_controls(result, source_mode: str, session=None) -> None:
    """Upload, URL, refresh and clear controls plus load status."""
    s = get_session(session)
    with st.sidebar:
        st.title("💉 Market Suite")
        st.caption(f"{APP_VERSION} | {APP_TITLE}")

        st.divider()
        st.subheader("📦 Data")

        up = st.file_uploader("Upload market data", type=["csv", "parquet"], key=uploader_key(s))
        if up is not None and remember_upload(up.name, up.getvalue(), s):
            st.rerun()

        s[KEY_DATA_URL] = st.text_input(
            "DATA_URL (optional)",
            value=s.get(KEY_DATA_URL, ""),
            help="Used when no file is uploaded and DATA_PATH is not set.",
        )

        c1, c2 = st.columns(2)
        with c1:
            if st.button("🔄 Refresh", use_container_width=True):
                logger.info("Manual refresh requested (source=%s)", source_mode)
                st.cache_data.clear()
                st.rerun()
        with c2:
            if st.button("🗑️ Clear", use_container_width=True):
                logger.info("Clearing cached market data")
                clear_upload(s)
                clear_data(s)
                st.cache_data.clear()
                st.rerun()

        st.caption(f"Source: {source_mode}")
        error = get_last_error(s)
        if error:
            st.error(error)

        stats = data_stats(result)
        if stats is None:
            st.warning("⚠️ No data available (upload / DATA_PATH / URL).")
            return

        st.success("✅ Data loaded")
        st.caption(
            f"{stats['totalDataPoints']:,} data points | {stats['regions']} regions | "
            f"{stats['countries']} countries"
        )
        if result.has_warnings:
            with st.expander(f"⚠️ {len(result.parse_warnings) + len(result.validation_warnings)} data warnings"):
                for w in result.parse_warnings:
                    st.write(f"Row {w.row}, {w.column}: {w.message}")
                for w in result.validation_warnings:
                    st.write(w.message)


def sidebar_exports(result) -> None:
    """Download buttons for every export format."""
    if result is None:
        return
    with st.sidebar:
        st.divider()
        st.markdown("### 📤 Export")
        now = datetime.now()
        for fmt in EXPORT_FORMATS:
            try:
                payload = export_result(result, fmt)
            except ExportError as e:
                st.warning(f"{fmt.upper()} export unavailable: {e}")
                continue
            st.download_button(
                f"⬇️ Download {fmt.upper()}",
                data=payload,
                file_name=export_filename(fmt, now),
                mime=MIME_TYPES[fmt],
                use_container_width=True,
            )


def load_page():
    """
    Shared page preamble: session defaults, CSS, data load and sidebar.

    Stops the script run when no dataset is available.
    """
    from skin_market.data import load_data_flow

    configure_logging()
    init_session_state()
    inject_custom_css()

    result, source_mode = load_data_flow()
    sidebar_data_controls(result, source_mode)
    sidebar_exports(result)

    if result is None:
        st.title(f"{APP_ICON} {APP_TITLE}")
        st.error("No data loaded. Upload a CSV in the sidebar or configure DATA_PATH / DATA_URL.")
        st.stop()
    return result

"""Growth Explorer - any time series in the dataset, with trend lines"""

import pandas as pd
import streamlit as st

from skin_market.analytics import cagr, linear_trend
from skin_market.ui import (
    format_millions,
    format_percentage,
    kpi_row,
    load_page,
    render_page_header,
    time_series_line,
    trend_indicator,
)
from skin_market.config import PAGE_CONFIG

st.set_page_config(**{**PAGE_CONFIG, "page_title": "Growth Explorer"})

result = load_page()
model = result.model

render_page_header(
    title="Growth Explorer",
    description="Compare any region / segment time series and its linear trend",
    icon="📈",
)

series_tree = model.time_series
if not series_tree:
    st.info("No time series available.")
    st.stop()

c1, c2 = st.columns(2)
with c1:
    region = st.selectbox("Region", list(series_tree))
with c2:
    segment_type = st.selectbox("Segment type", list(series_tree[region]))

segments = series_tree[region][segment_type]
chosen = st.multiselect("Segments", list(segments), default=list(segments)[:5])
show_trend = st.toggle("Show linear trend", value=True)

if not chosen:
    st.info("Select at least one segment.")
    st.stop()

selection = {name: segments[name] for name in chosen}
st.plotly_chart(
    time_series_line(selection, f"{region} | {segment_type}", show_trend=show_trend),
    use_container_width=True,
)

# Per-segment growth summary
rows = []
for name, points in selection.items():
    first, last = points[0], points[-1]
    slope, _ = linear_trend(points)
    rows.append({
        "Segment": name,
        "From": first.year,
        "To": last.year,
        "Start": format_millions(first.value, 2),
        "End": format_millions(last.value, 2),
        "CAGR": format_percentage(cagr(first.value, last.value, last.year - first.year)),
        "Trend (USD M / year)": round(slope, 2),
    })
st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

# Year over year for one segment
st.header("📅 Year over year")
focus = st.selectbox("Segment", chosen)
points = selection[focus]
if len(points) < 2:
    st.info("At least two years are needed for a year-over-year view.")
    st.stop()

latest, previous = points[-1], points[-2]
trend = trend_indicator(latest.value, previous.value)
kpi_row([
    (f"{focus} {latest.year}", format_millions(latest.value, 2),
     f"{trend['icon']} {format_millions(latest.value - previous.value, 2)}"),
    ("Years covered", f"{points[0].year}-{latest.year}", None),
])

yoy = pd.DataFrame([{"Year": p.year, "Value": p.value} for p in points])
yoy["Change"] = yoy["Value"].diff()
yoy["Change (%)"] = yoy["Value"].pct_change() * 100
st.dataframe(yoy.round(2), use_container_width=True, hide_index=True)

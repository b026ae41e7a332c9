"""Regional Analysis - market size, share and country breakdown per region"""

import pandas as pd
import streamlit as st

from skin_market.config import PAGE_CONFIG, PipelineConfig
from skin_market.ui import (
    format_millions,
    format_percentage,
    growth_bar,
    kpi_row,
    load_page,
    render_page_header,
    share_pie,
    time_series_line,
)

st.set_page_config(**{**PAGE_CONFIG, "page_title": "Regional Analysis"})

result = load_page()
model = result.model
ov = model.overview
config = PipelineConfig.from_env()

render_page_header(
    title="Regional Analysis",
    description=f"Regional markets, {ov.base_year} vs {ov.forecast_year}",
    icon="🗺️",
)

if not model.regions:
    st.info("No regional data available.")
    st.stop()

# Ranking table
st.header("🏆 Regional ranking")
ranking = pd.DataFrame([
    {
        "Region": r.name,
        f"Size {ov.base_year}": format_millions(r.market_size_base, 2),
        f"Size {ov.forecast_year}": format_millions(r.market_size_forecast, 2),
        f"Share {ov.forecast_year}": format_percentage(r.market_share_forecast),
        "CAGR": format_percentage(r.cagr),
    }
    for r in model.regions
])
st.dataframe(ranking, use_container_width=True, hide_index=True)

c1, c2 = st.columns(2)
with c1:
    st.plotly_chart(share_pie(model.regions, f"Share {ov.forecast_year}"), use_container_width=True)
with c2:
    st.plotly_chart(growth_bar(model.regions, "CAGR by region"), use_container_width=True)

# Region detail
st.header("🔍 Region detail")
names = [r.name for r in model.regions]
selected = st.selectbox("Region", names, index=0)
region = next(r for r in model.regions if r.name == selected)

kpi_row([
    (f"Size {ov.forecast_year}", format_millions(region.market_size_forecast, 2), None),
    ("Global share", format_percentage(region.market_share_forecast), None),
    ("CAGR", format_percentage(region.cagr), None),
])

st.markdown("**Market drivers**")
for d in region.market_drivers:
    st.markdown(f"- {d}")

buckets = model.time_series.get(region.name, {})
series = buckets.get(config.type_segment) or buckets.get(config.country_segment, {})
if series:
    st.plotly_chart(time_series_line(series, f"{region.name} market"), use_container_width=True)

# Countries
countries = [model.countries[n] for n in region.key_markets if n in model.countries]
if countries:
    st.subheader("🌐 Key markets")
    st.dataframe(
        pd.DataFrame([
            {
                "Country": c.name,
                f"Size {ov.base_year}": c.market_size_base,
                f"Size {ov.forecast_year}": c.market_size_forecast,
                "CAGR (%)": round(c.cagr, 1),
                "Population (M)": c.population,
                "Penetration (%)": c.penetration_rate,
                "Avg. spending (USD)": c.average_spending,
            }
            for c in countries
        ]),
        use_container_width=True,
        hide_index=True,
    )
else:
    st.caption("No country breakdown for this region.")

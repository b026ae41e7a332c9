# -*- coding: utf-8 -*-
"""
Skin Boosters Market Intelligence | Overview

Streamlit entry point (home page). Run with:
    streamlit run app.py

Other modules live under pages/.
"""

from __future__ import annotations
import traceback

import pandas as pd
import streamlit as st

from skin_market.analytics import growth_leaders, region_totals
from skin_market.config import PAGE_CONFIG, PipelineConfig
from skin_market.errors import MarketSuiteError
from skin_market.state import set_last_error
from skin_market.ui import (
    format_millions,
    format_percentage,
    kpi_row,
    load_page,
    region_bar,
    render_page_header,
    share_pie,
    time_series_line,
)

st.set_page_config(**PAGE_CONFIG)


def page_overview() -> None:
    result = load_page()
    model = result.model
    ov = model.overview
    config = PipelineConfig.from_env()

    render_page_header(ov.market_name, f"Market size {ov.base_year}-{ov.forecast_year}", icon="🌍")

    kpi_row([
        (f"Market {ov.base_year}", format_millions(ov.market_size_base, 2), None),
        (f"Market {ov.forecast_year}", format_millions(ov.market_size_forecast, 2),
         format_millions(ov.market_size_forecast - ov.market_size_base, 2)),
        ("CAGR", format_percentage(ov.cagr), None),
        ("Regions", f"{len(model.regions)}", None),
    ])

    for w in result.validation_warnings:
        (st.error if w.is_error else st.warning)(w.message)

    c1, c2 = st.columns(2)
    with c1:
        st.subheader("Regional share")
        if model.regions:
            st.plotly_chart(share_pie(model.regions, f"Share {ov.forecast_year}"), use_container_width=True)
        else:
            st.info("No regional data available.")
    with c2:
        st.subheader("Product types")
        if model.product_types:
            st.plotly_chart(share_pie(model.product_types, f"Share {ov.forecast_year}"), use_container_width=True)
        else:
            st.info("No product type data available.")

    if model.regions:
        st.subheader("Market size by region")
        st.plotly_chart(region_bar(model.regions, ov.base_year, ov.forecast_year), use_container_width=True)

        leaders = growth_leaders(region_totals(model.time_series, config))
        if leaders["fastest_growing"]:
            st.caption(
                f"Fastest growing: **{leaders['fastest_growing']}** | "
                f"Largest in {ov.forecast_year}: **{leaders['largest']}**"
            )

    global_types = model.time_series.get(config.global_region, {}).get(config.type_segment, {})
    if global_types:
        st.subheader("Global market by product type")
        st.plotly_chart(time_series_line(global_types), use_container_width=True)

    c1, c2 = st.columns(2)
    with c1:
        st.subheader("✅ Key drivers")
        for d in ov.key_drivers:
            st.markdown(f"- {d}")
    with c2:
        st.subheader("⛔ Key restraints")
        for r in ov.key_restraints:
            st.markdown(f"- {r}")

    if model.market_players:
        st.subheader("🏢 Market players")
        players = pd.DataFrame([p.to_dict() for p in model.market_players])
        st.dataframe(players, use_container_width=True, hide_index=True)

    if model.trends:
        st.subheader("📈 Trends")
        for t in model.trends:
            with st.expander(f"{t.trend} ({t.impact} impact)"):
                st.write(t.description)
                st.caption(", ".join(t.regions))


if __name__ == "__main__":
    try:
        page_overview()
    except MarketSuiteError as ex:
        set_last_error(str(ex))
        st.error(str(ex))
    except Exception as ex:
        set_last_error(str(ex))
        st.error("Unexpected error in the app.")
        with st.expander("Technical details", expanded=False):
            st.code(traceback.format_exc())

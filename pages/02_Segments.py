"""Segment Analysis - product types, ingredients, gender and end users"""

import streamlit as st

from skin_market.analytics import segment_growth_table
from skin_market.config import PAGE_CONFIG, PipelineConfig
from skin_market.ui import growth_bar, load_page, render_page_header, share_pie

st.set_page_config(**{**PAGE_CONFIG, "page_title": "Segment Analysis"})

result = load_page()
model = result.model
ov = model.overview
config = PipelineConfig.from_env()

render_page_header(
    title="Segment Analysis",
    description="Global market split by product type, ingredient, gender and end user",
    icon="🧪",
)


def render_segment(items, segment_type: str, region: str, details) -> None:
    if not items:
        st.info(f"No {segment_type.lower()} data available.")
        return

    c1, c2 = st.columns(2)
    with c1:
        st.plotly_chart(share_pie(items, f"Share {ov.forecast_year}"), use_container_width=True)
    with c2:
        st.plotly_chart(growth_bar(items, "CAGR"), use_container_width=True)

    table = segment_growth_table(model.time_series, region, segment_type, result.totals, config)
    st.dataframe(
        table.rename(columns={
            "Base": f"Size {ov.base_year}",
            "Forecast": f"Size {ov.forecast_year}",
            "Share_Base": f"Share {ov.base_year} (%)",
            "Share_Forecast": f"Share {ov.forecast_year} (%)",
            "CAGR": "CAGR (%)",
        }).round(2),
        use_container_width=True,
        hide_index=True,
    )

    for item in items:
        label, values = details(item)
        if values:
            with st.expander(item.name):
                st.markdown(f"**{label}:** " + ", ".join(values))


tab_type, tab_ingredient, tab_gender, tab_end_user = st.tabs(
    ["Product type", "Ingredient", "Gender", "End user"]
)

with tab_type:
    render_segment(
        model.product_types, config.type_segment, config.global_region,
        lambda p: ("Applications", p.applications),
    )
    for p in model.product_types:
        st.caption(f"**{p.name}**: {p.description}")

with tab_ingredient:
    render_segment(
        model.ingredients, config.ingredient_segment, config.global_region,
        lambda i: ("Benefits", i.benefits),
    )

with tab_gender:
    render_segment(
        model.gender, config.gender_segment, config.global_region,
        lambda g: ("Age groups", g.age_groups),
    )

with tab_end_user:
    # End-user rows may come from any region; the table only covers the global one.
    if model.end_users:
        c1, c2 = st.columns(2)
        with c1:
            st.plotly_chart(share_pie(model.end_users, f"Share {ov.forecast_year}"), use_container_width=True)
        with c2:
            st.plotly_chart(growth_bar(model.end_users, "CAGR"), use_container_width=True)
        for e in model.end_users:
            with st.expander(e.name):
                st.markdown("**Characteristics:** " + ", ".join(e.characteristics))
    else:
        st.info("No end user data available.")

"""PopuViz - Streamlit UI.

Time-scrubbing population pyramids for a developed and a developing country.
"""

import streamlit as st

from popuviz.chart import make_pyramid_figure, make_timeline_figure
from popuviz.data import (
    DEFAULT_YEAR,
    ELDERLY,
    WORKING,
    YEAR_MAX,
    YEAR_MIN,
    YOUTH,
    CountryArchetype,
    get_archetype,
    get_archetype_names,
    load_archetypes,
    scale_max,
)
from popuviz.insight import get_demographic_insight
from popuviz.logging_config import setup_logging
from popuviz.model import generate_snapshot, run_timeline, summarize

setup_logging()

st.set_page_config(page_title="PopuViz", layout="wide")
st.title("PopuViz Demographic Explorer")
st.caption("Visually exploring the evolution of human populations from the mid-20th century to 2100.")


@st.cache_data(show_spinner=False)
def cached_insight(year: int, archetype_code: str):
    return get_demographic_insight(year, CountryArchetype(archetype_code))


@st.cache_data(show_spinner=False)
def cached_timeline(archetype_code: str):
    return run_timeline(CountryArchetype(archetype_code))


# ── Sidebar: archetype and year ────────────────────────────────────────

st.sidebar.header("Country & Year")

selected_name = st.sidebar.radio("Country", get_archetype_names())
archetype = get_archetype(selected_name)
archetype_info = load_archetypes()[archetype]

year = st.sidebar.slider("Year", min_value=YEAR_MIN, max_value=YEAR_MAX, value=DEFAULT_YEAR)

# ── Pyramid ────────────────────────────────────────────────────────────

snapshot = generate_snapshot(year, archetype)
max_val = scale_max(archetype)
summary = summarize(snapshot)

col_chart, col_insight = st.columns([2, 1])

with col_chart:
    st.subheader(f"Population Pyramid: {year}")
    st.caption(archetype_info["notes"])
    st.plotly_chart(make_pyramid_figure(snapshot, max_val), use_container_width=True)

    col_y, col_w, col_e = st.columns(3)
    col_y.metric(YOUTH.label, f"{summary[YOUTH.name]:.1f}M")
    col_w.metric(WORKING.label, f"{summary[WORKING.name]:.1f}M")
    col_e.metric(ELDERLY.label, f"{summary[ELDERLY.name]:.1f}M")

# ── AI insight ─────────────────────────────────────────────────────────

with col_insight:
    st.subheader("AI Analysis")
    with st.spinner("Generating..."):
        insight = cached_insight(year, archetype.value)
    st.markdown(f"**{insight.title}**")
    st.write(insight.content)
    for stat in insight.key_stats:
        st.markdown(f"- {stat}")
    st.metric("Dependency Ratio", f"{summary['dependency_ratio']:.2f}")

# ── Population over time ───────────────────────────────────────────────

st.subheader("Population Over Time")
timeline = cached_timeline(archetype.value)
st.plotly_chart(make_timeline_figure(timeline, year), use_container_width=True)

# ── Snapshot table ─────────────────────────────────────────────────────

with st.expander("Snapshot data (millions)"):
    st.dataframe(snapshot.to_frame(), hide_index=True, use_container_width=True)

"""Plotly figures for the Streamlit front end."""

import plotly.graph_objects as go

from popuviz.geometry import PyramidLayout, layout
from popuviz.model import Snapshot, Timeline

MALE_COLOR = "#3498db"
FEMALE_COLOR = "#e74c3c"
LABEL_COLOR = "#94a3b8"


def make_pyramid_figure(snapshot: Snapshot, max_val: float, width: float = 800, height: float = 500) -> go.Figure:
    """Draw a snapshot as a back-to-back bar chart on a fixed pixel canvas."""
    geo = layout(snapshot.bins, max_val, width=width, height=height)
    fig = go.Figure()

    for bar in geo.bars:
        fig.add_shape(
            type="rect",
            x0=geo.male_axis_x - bar.male_bar_length, x1=geo.male_axis_x,
            y0=bar.y_top, y1=bar.y_top + bar.y_height,
            fillcolor=MALE_COLOR, opacity=0.8, line_width=0,
        )
        fig.add_shape(
            type="rect",
            x0=geo.female_axis_x, x1=geo.female_axis_x + bar.female_bar_length,
            y0=bar.y_top, y1=bar.y_top + bar.y_height,
            fillcolor=FEMALE_COLOR, opacity=0.8, line_width=0,
        )

    # Invisible markers so hovering a bar shows its value
    fig.add_trace(go.Scatter(
        x=[geo.male_axis_x - bar.male_bar_length / 2 for bar in geo.bars],
        y=[bar.y_center for bar in geo.bars],
        mode="markers", marker=dict(opacity=0), name="Male",
        customdata=[[b.age_range, b.male] for b in snapshot.bins],
        hovertemplate="%{customdata[0]}: %{customdata[1]:.2f}M<extra>Male</extra>",
    ))
    fig.add_trace(go.Scatter(
        x=[geo.female_axis_x + bar.female_bar_length / 2 for bar in geo.bars],
        y=[bar.y_center for bar in geo.bars],
        mode="markers", marker=dict(opacity=0), name="Female",
        customdata=[[b.age_range, b.female] for b in snapshot.bins],
        hovertemplate="%{customdata[0]}: %{customdata[1]:.2f}M<extra>Female</extra>",
    ))

    _add_labels(fig, geo)

    fig.update_layout(
        width=width,
        height=height,
        showlegend=False,
        plot_bgcolor="white",
        margin=dict(t=0, b=0, l=0, r=0),
        xaxis=dict(range=[0, width], visible=False, fixedrange=True),
        # Pixel y grows downward
        yaxis=dict(range=[height, 0], visible=False, fixedrange=True),
    )
    return fig


def _add_labels(fig: go.Figure, geo: PyramidLayout) -> None:
    for bar in geo.bars:
        fig.add_annotation(x=geo.center_x, y=bar.y_center, text=bar.age_range,
                           showarrow=False, font=dict(size=10, color=LABEL_COLOR))

    tick_y = geo.height - 25
    for tick in geo.ticks:
        for x in (tick.male_x, tick.female_x):
            fig.add_annotation(x=x, y=tick_y, text=tick.label, showarrow=False,
                               font=dict(size=9, color=LABEL_COLOR))

    caption_y = geo.height - 10
    fig.add_annotation(x=geo.male_axis_x - geo.half_width / 2, y=caption_y, text="<b>MALE</b>",
                       showarrow=False, font=dict(size=12, color=MALE_COLOR))
    fig.add_annotation(x=geo.female_axis_x + geo.half_width / 2, y=caption_y, text="<b>FEMALE</b>",
                       showarrow=False, font=dict(size=12, color=FEMALE_COLOR))


def make_timeline_figure(timeline: Timeline, marker_year: int) -> go.Figure:
    """Population by age bracket over time, with a marker at the selected year."""
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=timeline.year_list, y=timeline.population_series,
        mode="lines", name="Total Population",
        line=dict(width=3, color="#2c3e50"),
    ))
    fig.add_trace(go.Scatter(
        x=timeline.year_list, y=timeline.working_series,
        mode="lines", name="Working Age (15-64)",
        line=dict(width=2, color="#3498db"),
    ))
    fig.add_trace(go.Scatter(
        x=timeline.year_list, y=timeline.elderly_series,
        mode="lines", name="Elderly (65+)",
        line=dict(width=2, color="#e74c3c"),
    ))
    fig.add_trace(go.Scatter(
        x=timeline.year_list, y=timeline.youth_series,
        mode="lines", name="Youth (0-14)",
        line=dict(width=2, color="#2ecc71"),
    ))
    fig.add_vline(x=marker_year, line_dash="dot", line_color="gray")
    fig.update_layout(
        xaxis_title="Year",
        yaxis_title="Population (millions)",
        height=400,
        margin=dict(t=30, b=40),
    )
    return fig

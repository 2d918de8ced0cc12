# radial_figure.py
# Plotly rendering of a radial_core view model.

import numpy as np
import pandas as pd
import plotly.graph_objects as go

import chart_settings as CS
from radial_core import connector_extent, format_percent, radius_for


def _deg(rad):
    return float(np.degrees(rad))


def format_value(value):
    return "N/A" if pd.isna(value) else f"{value:.2f}"


def summary_subtext(region):
    return f"of metrics are stronger than the average of other Regions for {region}."


def hover_text(metric, region, value):
    return (f"<b>{metric['label']}</b><br>"
            f"Region: {region}<br>"
            f"Value: {format_value(value)}")


def _spokes(metrics, r_pairs):
    """One line trace for many radial segments, separated by None gaps."""
    r, theta = [], []
    for m, (r0, r1) in zip(metrics, r_pairs):
        a = _deg(m["angle"])
        r += [r0, r1, None]
        theta += [a, a, None]
    return r, theta


def build_figure(view, region_list=CS.REGION_LIST):
    metrics = view["metrics"]
    bands = view["layout"]
    summary = view["summary"]
    selected = view["region"]

    inner, outer = CS.INNER_RADIUS, CS.OUTER_RADIUS
    if metrics:
        inner, outer = metrics[0]["r_scale"].range

    fig = go.Figure()

    # Background wedges, one per metric
    wedge_base = inner + CS.WEDGE_INNER_OFFSET
    wedge_depth = (outer + CS.WEDGE_OUTER_OFFSET) - wedge_base
    fig.add_trace(go.Barpolar(
        r=[wedge_depth] * len(metrics),
        base=[wedge_base] * len(metrics),
        theta=[_deg(m["angle"]) for m in metrics],
        width=[_deg(bands.bandwidth)] * len(metrics),
        marker=dict(color=CS.WEDGE_COLOR, line=dict(width=0)),
        hovertext=[m["label"] for m in metrics],
        hoverinfo="text",
        showlegend=False,
        name="metrics",
    ))

    # Arc over the group of stronger metrics
    span = summary["strong_span"]
    if span is not None:
        arc_lo, arc_hi = CS.STRENGTH_ARC_OFFSETS
        fig.add_trace(go.Barpolar(
            r=[arc_hi - arc_lo],
            base=[outer + arc_lo],
            theta=[_deg((span["start"] + span["end"]) / 2)],
            width=[_deg(span["end"] - span["start"])],
            marker=dict(color=CS.STRENGTH_ARC_COLOR, line=dict(width=0)),
            hoverinfo="skip",
            name="stronger",
            showlegend=False,
        ))

    # Axis per metric
    r, theta = _spokes(metrics, [(inner, outer)] * len(metrics))
    fig.add_trace(go.Scatterpolar(
        r=r, theta=theta, mode="lines",
        line=dict(color=CS.AXIS_COLOR, width=1),
        hoverinfo="skip", showlegend=False, name="axes",
    ))

    # Dashed min-max range across the region dots
    r, theta = _spokes(metrics, [connector_extent(m) for m in metrics])
    fig.add_trace(go.Scatterpolar(
        r=r, theta=theta, mode="lines",
        line=dict(color=CS.CONNECTOR_COLOR, width=1.5, dash="dash"),
        hoverinfo="skip", showlegend=False, name="range",
    ))

    # One dot per region per metric
    for region in region_list:
        is_selected = region == selected
        values = [
            next((v["value"] for v in m["values_per_region"] if v["region"] == region), np.nan)
            for m in metrics
        ]
        dot_r = CS.SELECTED_DOT_RADIUS if is_selected else CS.OTHER_DOT_RADIUS
        fig.add_trace(go.Scatterpolar(
            r=[radius_for(m, v) for m, v in zip(metrics, values)],
            theta=[_deg(m["angle"]) for m in metrics],
            mode="markers",
            marker=dict(
                size=2 * dot_r,
                color=CS.SELECTED_COLOR if is_selected else CS.OTHER_COLOR,
                line=dict(color="white", width=1),
            ),
            hovertext=[hover_text(m, region, v) for m, v in zip(metrics, values)],
            hoverinfo="text",
            name=region,
            legendgroup="selected" if is_selected else "other",
        ))

    # Labels just outside the outer radius
    fig.add_trace(go.Scatterpolar(
        r=[outer + CS.LABEL_OFFSET] * len(metrics),
        theta=[_deg(m["angle"]) for m in metrics],
        mode="text",
        text=[m["label"] for m in metrics],
        textfont=dict(size=10),
        hoverinfo="skip", showlegend=False, name="labels",
    ))

    fig.add_annotation(text=f"<b>{format_percent(summary['percent'])}</b>",
                       showarrow=False, xref="paper", yref="paper",
                       x=0.5, y=0.52, font=dict(size=32))
    fig.add_annotation(text=summary_subtext(selected),
                       showarrow=False, xref="paper", yref="paper",
                       x=0.5, y=0.47, font=dict(size=11))

    fig.update_layout(
        polar=dict(
            barmode="overlay",
            radialaxis=dict(visible=False, range=[0, outer + CS.STRENGTH_ARC_OFFSETS[1] + 5]),
            # angle 0 at twelve o'clock, growing clockwise
            angularaxis=dict(visible=False, rotation=90, direction="clockwise"),
        ),
        height=CS.CHART_HEIGHT,
        margin=dict(l=40, r=40, t=40, b=40),
        legend=dict(orientation="h", y=-0.02),
        hovermode="closest",
    )
    return fig


def empty_figure(msg):
    fig = go.Figure()
    fig.add_annotation(text=msg, showarrow=False, xref="paper", yref="paper", x=0.5, y=0.5)
    fig.update_layout(
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        margin=dict(l=40, r=20, t=40, b=40),
    )
    return fig

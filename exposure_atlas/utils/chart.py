"""
Altair layers for the wage-vs-exposure scatter and its fitted trend.
"""
from __future__ import annotations

from typing import Optional

import altair as alt
import pandas as pd

from exposure_atlas.utils.glossary import EXPOSURE_MEASURES
from exposure_atlas.utils.regression import RegressionResult


def should_draw_trend(result: Optional[RegressionResult], min_r_squared: float = 0.0) -> bool:
    """No line when there is no fit, or when it explains less than the threshold."""
    if result is None:
        return False
    return result.r_squared >= min_r_squared


def trend_line_frame(result: RegressionResult) -> pd.DataFrame:
    start, end = result.points
    return pd.DataFrame({"x": [start.x, end.x], "y": [start.y, end.y]})


def wage_scatter_chart(
    df: pd.DataFrame,
    x: str,
    result: Optional[RegressionResult] = None,
    min_r_squared: float = 0.0,
    y: str = "median_annual_wage",
) -> alt.LayerChart:
    """
    Bubbles sized by employment on a log wage axis, plus the trend line when
    ``should_draw_trend`` allows it.
    """
    if x not in EXPOSURE_MEASURES:
        raise ValueError(f"Unknown exposure measure: {x}")

    x_title = f"AI exposure ({EXPOSURE_MEASURES[x]})"
    y_scale = alt.Scale(type="log")

    base = alt.Chart(df).mark_circle(opacity=0.4).encode(
        x=alt.X(f"{x}:Q", title=x_title),
        y=alt.Y(f"{y}:Q", title="Median annual wage", scale=y_scale),
        size=alt.Size("employment:Q", title="Employment", legend=None),
        color=alt.Color("education:N", title="Education"),
        tooltip=[
            "soc_code:N",
            alt.Tooltip("soc_title:N", title="occupation"),
            alt.Tooltip(f"{x}:Q", format=".2f", title="exposure"),
            alt.Tooltip(f"{y}:Q", format="$,.0f", title="median wage"),
            alt.Tooltip("employment:Q", format=",.0f"),
        ],
    )

    layers = [base]
    if should_draw_trend(result, min_r_squared):
        line = alt.Chart(trend_line_frame(result)).mark_line(color="#d62728").encode(
            x="x:Q", y=alt.Y("y:Q", scale=y_scale)
        )
        layers.append(line)

    return alt.layer(*layers)

"""Altair rendering of a `ChartModel` as a horizontal pyramid."""

from __future__ import annotations

import altair as alt
import pandas as pd

from population_pyramid.models import ChartModel
from population_pyramid.render import COLOR_PALETTE


def model_to_frame(model: ChartModel) -> pd.DataFrame:
    """Long-format DataFrame with one row per (age group, series).

    Columns: `age_group`, `series`, `percent` (signed), `share` (unsigned).
    """
    records = [
        {
            "age_group": label,
            "series": s.name,
            "percent": value,
            "share": abs(value),
        }
        for s in model.series
        for label, value in zip(model.labels, s.values)
    ]
    return pd.DataFrame(records, columns=["age_group", "series", "percent", "share"])


def pyramid_chart(model: ChartModel, height: int = 500) -> alt.Chart:
    """Build a stacked horizontal bar chart mirroring males to the left.

    Args:
        model: Chart model from the Aggregator.
        height: Chart height in pixels.

    Returns:
        Altair chart with age groups on the y axis in model order.
    """
    df = model_to_frame(model)
    max_abs = float(df["share"].max()) if not df.empty else 0.0
    limit = max(max_abs * 1.05, 1.0)

    color = alt.Color(
        "series:N",
        title=None,
        scale=alt.Scale(
            domain=[s.name for s in model.series],
            range=[COLOR_PALETTE[s.color_key] for s in model.series],
        ),
    )

    return (
        alt.Chart(df)
        .mark_bar()
        .encode(
            y=alt.Y("age_group:N", sort=list(model.labels), title="Age Group"),
            x=alt.X(
                "percent:Q",
                title="Percentage",
                stack=True,
                axis=alt.Axis(labelExpr="abs(datum.value)", grid=False),
                scale=alt.Scale(domain=[-limit, limit]),
            ),
            color=color,
            tooltip=[
                alt.Tooltip("age_group:N", title="Age Group"),
                alt.Tooltip("series:N", title="Series"),
                alt.Tooltip("share:Q", title="Percent", format=".2f"),
            ],
        )
        .properties(height=height)
    )

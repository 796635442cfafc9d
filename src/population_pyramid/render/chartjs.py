"""Chart.js payloads for the population pyramid.

`to_chartjs_data` produces the `data` object of a Chart.js bar chart and
`chart_options` the matching horizontal, stacked options. Tick and tooltip
formatting show magnitudes without the sign used to mirror the male side.
"""

from __future__ import annotations

from typing import Any

from population_pyramid.models import ChartModel
from population_pyramid.render import COLOR_PALETTE

AXIS_TITLE_COLOR = "#666"


def to_chartjs_data(model: ChartModel) -> dict[str, Any]:
    """Return `{labels, datasets}` for a Chart.js bar chart.

    Args:
        model: Chart model from the Aggregator.

    Returns:
        JSON-serializable dict with two datasets (males, females), each with
        `label`, signed `data` and `backgroundColor`.
    """
    return {
        "labels": list(model.labels),
        "datasets": [
            {
                "label": s.name,
                "data": list(s.values),
                "backgroundColor": COLOR_PALETTE[s.color_key],
            }
            for s in model.series
        ],
    }


def chart_options() -> dict[str, Any]:
    """Return Chart.js options laying the bars out as a pyramid."""
    return {
        "indexAxis": "y",
        "scales": {
            "x": {
                "stacked": True,
                "grid": {"display": False},
                "title": {
                    "display": True,
                    "text": "Percentage",
                    "color": AXIS_TITLE_COLOR,
                    "font": {"weight": "bold"},
                },
            },
            "y": {
                "stacked": True,
                "title": {"display": True, "text": "Age Group", "color": AXIS_TITLE_COLOR},
            },
        },
        "maintainAspectRatio": False,
    }


def format_tick(value: float) -> float:
    """Axis tick label: the unsigned percentage."""
    return abs(value)


def format_tooltip(label: str, value: float) -> str:
    """Tooltip text such as ``"Males: 12.34%"``."""
    prefix = f"{label}: " if label else ""
    return f"{prefix}{abs(value):.2f}%"

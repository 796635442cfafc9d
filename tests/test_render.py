from __future__ import annotations

import json

import pytest

from population_pyramid.aggregate.build_series import compute_chart_model
from population_pyramid.models import ViewKind
from population_pyramid.render import COLOR_PALETTE
from population_pyramid.render.altair_chart import model_to_frame, pyramid_chart
from population_pyramid.render.chartjs import (
    chart_options,
    format_tick,
    format_tooltip,
    to_chartjs_data,
)


def test_chartjs_data_shape(census_rows) -> None:
    model = compute_chart_model(census_rows, ViewKind.RURAL)
    data = to_chartjs_data(model)

    assert data["labels"] == ["0-4", "5-9", "10-14"]
    assert [d["label"] for d in data["datasets"]] == ["Rural Males", "Rural Females"]
    assert data["datasets"][0]["backgroundColor"] == "rgba(54, 162, 235, 0.5)"
    assert data["datasets"][1]["backgroundColor"] == "rgba(255, 99, 132, 0.5)"
    assert data["datasets"][0]["data"] == pytest.approx([-50.0, -30.0, -20.0])
    json.dumps(data)


def test_colors_are_per_sex_not_per_view(census_rows) -> None:
    for view in ViewKind:
        data = to_chartjs_data(compute_chart_model(census_rows, view))
        colors = [d["backgroundColor"] for d in data["datasets"]]
        assert colors == [COLOR_PALETTE["male"], COLOR_PALETTE["female"]]


def test_chart_options_are_horizontal_and_stacked() -> None:
    opts = chart_options()
    assert opts["indexAxis"] == "y"
    assert opts["scales"]["x"]["stacked"] is True
    assert opts["scales"]["y"]["title"]["text"] == "Age Group"


def test_tick_and_tooltip_hide_sign() -> None:
    assert format_tick(-12.5) == 12.5
    assert format_tooltip("Males", -12.3456) == "Males: 12.35%"
    assert format_tooltip("", 7) == "7.00%"


def test_altair_frame_and_chart_dict(census_rows) -> None:
    model = compute_chart_model(census_rows, ViewKind.TOTAL)
    df = model_to_frame(model)
    assert len(df) == 6
    assert set(df["series"]) == {"Males", "Females"}
    assert (df["share"] >= 0).all()

    vl = pyramid_chart(model).to_dict()
    assert vl["mark"]["type"] == "bar"
    assert vl["encoding"]["y"]["sort"] == ["0-4", "5-9", "10-14"]
    assert vl["encoding"]["color"]["scale"]["range"] == [
        COLOR_PALETTE["male"],
        COLOR_PALETTE["female"],
    ]


def test_altair_handles_empty_model() -> None:
    model = compute_chart_model([], ViewKind.TOTAL)
    vl = pyramid_chart(model).to_dict()
    assert vl["encoding"]["x"]["scale"]["domain"] == [-1.0, 1.0]

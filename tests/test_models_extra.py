from __future__ import annotations

import pytest
from pydantic import ValidationError

from population_pyramid.models import ChartModel, RawRow, SeriesModel, ViewKind


def test_raw_row_accepts_csv_column_names() -> None:
    row = RawRow.model_validate({"Age Group": "0-4", "Total Males": 10, "Urban Females": 3})
    assert row.age_group == "0-4"
    assert row.total_males == 10.0
    assert row.urban_females == 3.0
    assert row.rural_males == 0.0


def test_raw_row_rejects_negative_count() -> None:
    with pytest.raises(ValidationError):
        RawRow(age_group="0-4", total_males=-1)


def test_series_point_range_is_enforced() -> None:
    with pytest.raises(ValidationError):
        SeriesModel(name="Males", values=(-100.5,), color_key="male")


def test_chart_model_requires_exactly_two_series() -> None:
    s = SeriesModel(name="Males", values=(), color_key="male")
    with pytest.raises(ValidationError):
        ChartModel(view=ViewKind.TOTAL, labels=(), series=(s,))
    with pytest.raises(ValidationError):
        ChartModel(view=ViewKind.TOTAL, labels=(), series=(s, s, s))


def test_chart_model_is_frozen() -> None:
    s = SeriesModel(name="Males", values=(), color_key="male")
    model = ChartModel(view=ViewKind.TOTAL, labels=(), series=(s, s))
    with pytest.raises(ValidationError):
        model.labels = ("0-4",)


@pytest.mark.parametrize("label", ["urban", "Urban", " URBAN ", ViewKind.URBAN])
def test_view_kind_parse(label) -> None:
    assert ViewKind.parse(label) is ViewKind.URBAN


def test_view_kind_parse_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        ViewKind.parse("metro")
    assert ViewKind.RURAL.display_name == "Rural"


def test_raw_row_requires_age_group_label() -> None:
    with pytest.raises(ValidationError):
        RawRow(age_group="", total_males=1)

"""Pyramid series construction.

Functions in this module build a `ChartModel` from raw census rows.

Expectations:
- Input: a sequence of mappings keyed by the CSV column names ("Age Group",
  "Total Males", ...) with text or numeric values, or a pandas DataFrame
  with those columns.
- Output: a frozen `ChartModel` with the age groups in display order and a
  males/females series pair of signed percentages.

Malformed counts never raise: they are read as 0 and counted in
`ChartModel.coerced_cells`.
"""
from __future__ import annotations

import math
from typing import Any, Iterable, Mapping, Sequence

import pandas as pd

from population_pyramid.models import (
    AGE_GROUP_COLUMN,
    NUMERIC_COLUMNS,
    ChartModel,
    RawRow,
    SeriesModel,
    ViewKind,
)

AGGREGATE_AGE_GROUPS = frozenset({"All ages", "Age not stated"})

MALE_COLOR_KEY = "male"
FEMALE_COLOR_KEY = "female"

VIEW_COLUMNS: dict[ViewKind, tuple[str, str]] = {
    ViewKind.TOTAL: ("total_males", "total_females"),
    ViewKind.RURAL: ("rural_males", "rural_females"),
    ViewKind.URBAN: ("urban_males", "urban_females"),
}

SERIES_NAMES: dict[ViewKind, tuple[str, str]] = {
    ViewKind.TOTAL: ("Males", "Females"),
    ViewKind.RURAL: ("Rural Males", "Rural Females"),
    ViewKind.URBAN: ("Urban Males", "Urban Females"),
}

# CSV column name -> RawRow attribute name
FIELD_BY_COLUMN = {
    field.alias: name
    for name, field in RawRow.model_fields.items()
    if field.alias in NUMERIC_COLUMNS
}


# =========================================================
# PARSING
# =========================================================

def coerce_count(value: Any) -> float | None:
    """Read one count cell.

    Returns:
        The value as a non-negative finite float, or ``None`` when the cell
        is empty, non-numeric, non-finite, too large for a float or negative.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    else:
        text = str(value).strip()
        # float() accepts digit separators, CSV counts never carry them
        if not text or "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def parse_row(raw: Mapping[str, Any]) -> tuple[RawRow, int]:
    """Build a `RawRow` from a CSV mapping, reading bad counts as 0.

    Returns:
        A tuple of (row, number_of_coerced_cells).
    """
    coerced = 0
    values: dict[str, Any] = {}
    for column, name in FIELD_BY_COLUMN.items():
        number = coerce_count(raw.get(column))
        if number is None:
            coerced += 1
            number = 0.0
        values[name] = number

    label = raw.get(AGE_GROUP_COLUMN)
    values["age_group"] = "" if label is None else str(label)
    # raises ValidationError for an empty label; filter_age_groups drops those rows
    return RawRow.model_validate(values), coerced


def _records(dataset: Sequence[Mapping[str, Any]] | pd.DataFrame) -> list[Mapping[str, Any]]:
    if isinstance(dataset, pd.DataFrame):
        return dataset.to_dict(orient="records")
    return list(dataset)


# =========================================================
# FILTERING
# =========================================================

def _has_label(row: Mapping[str, Any]) -> bool:
    label = row.get(AGE_GROUP_COLUMN)
    return label is not None and str(label).strip() != ""


def filter_age_groups(rows: Iterable[Mapping[str, Any]]) -> list[Mapping[str, Any]]:
    """Drop the synthetic "All ages" and "Age not stated" rows, and rows
    without an age group label.

    Input order is preserved, so applying the filter twice gives the same
    rows as applying it once.
    """
    return [
        row
        for row in rows
        if _has_label(row) and row.get(AGE_GROUP_COLUMN) not in AGGREGATE_AGE_GROUPS
    ]


def prepare_frame(dataset: Sequence[Mapping[str, Any]] | pd.DataFrame) -> tuple[pd.DataFrame, int]:
    """Filter, reverse and parse rows into a numeric DataFrame.

    Args:
        dataset: Raw CSV mappings (or a DataFrame) in file order.

    Returns:
        A tuple of (frame, coerced_cells). The frame has one row per age
        group in reverse file order, with `age_group` and the six snake_case
        count columns.
    """
    kept = filter_age_groups(_records(dataset))
    kept.reverse()

    parsed: list[dict[str, Any]] = []
    coerced_total = 0
    for raw in kept:
        row, coerced = parse_row(raw)
        parsed.append(row.model_dump())
        coerced_total += coerced

    frame = pd.DataFrame(parsed, columns=list(RawRow.model_fields))
    return frame, coerced_total


# =========================================================
# PERCENTAGES
# =========================================================

def signed_percentages(counts: pd.Series, negative: bool = False) -> tuple[float, ...]:
    """Convert counts to shares of their sum, in percent.

    A zero sum yields 0 for every row instead of NaN. Counts whose sum
    overflows to infinity are scaled down by their maximum first.

    Args:
        counts: Non-negative counts, one per age group.
        negative: Negate the result (used for the male side of the pyramid).

    Returns:
        Tuple of floats in [-100, 100], unrounded.
    """
    counts = counts.astype(float)
    total = float(counts.sum())
    if math.isinf(total):
        counts = counts / float(counts.max())
        total = float(counts.sum())
    if total == 0:
        return tuple(0.0 for _ in range(len(counts)))

    shares = (counts / total * 100).abs()
    if negative:
        shares = -shares
    return tuple(float(v) for v in shares)


def compute_chart_model(
    dataset: Sequence[Mapping[str, Any]] | pd.DataFrame,
    view: ViewKind | str,
) -> ChartModel:
    """Return the population pyramid for `view`.

    The column pair is chosen once for the whole call, so sums and per-row
    shares always come from the same columns.

    Args:
        dataset: Raw CSV mappings in file order.
        view: `ViewKind` or its label ("total", "rural", "urban").

    Returns:
        `ChartModel` with labels in reversed file order and the males
        series (negative values) followed by the females series.
    """
    view = ViewKind.parse(view)
    frame, coerced = prepare_frame(dataset)

    male_col, female_col = VIEW_COLUMNS[view]
    male_name, female_name = SERIES_NAMES[view]

    males = SeriesModel(
        name=male_name,
        values=signed_percentages(frame[male_col], negative=True),
        color_key=MALE_COLOR_KEY,
    )
    females = SeriesModel(
        name=female_name,
        values=signed_percentages(frame[female_col]),
        color_key=FEMALE_COLOR_KEY,
    )

    return ChartModel(
        view=view,
        labels=tuple(frame["age_group"].tolist()),
        series=(males, females),
        coerced_cells=coerced,
    )

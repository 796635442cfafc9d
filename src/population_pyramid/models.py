"""Pydantic models for census rows and chart models.

`RawRow` is the typed form of one CSV record after lenient numeric coercion.
`SeriesModel` and `ChartModel` are the frozen outputs of the Aggregator that
renderers consume.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

AGE_GROUP_COLUMN = "Age Group"
NUMERIC_COLUMNS = (
    "Total Males",
    "Total Females",
    "Rural Males",
    "Rural Females",
    "Urban Males",
    "Urban Females",
)
EXPECTED_COLUMNS = (AGE_GROUP_COLUMN, *NUMERIC_COLUMNS)


class ViewKind(str, Enum):
    """Population view selecting which column pair feeds the chart."""
    TOTAL = "total"
    RURAL = "rural"
    URBAN = "urban"

    @classmethod
    def parse(cls, value: ViewKind | str) -> ViewKind:
        """Return the view for a member or a case-insensitive label.

        Raises:
            ValueError: if `value` names no view.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown view: {value!r}") from None

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class RawRow(BaseModel):
    """One age-group record with its six counts.

    Fields are populated by the CSV column names ("Total Males", ...) or by
    their snake_case attribute names.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")
    age_group: str = Field(..., min_length=1, alias="Age Group")
    total_males: float = Field(0.0, ge=0, alias="Total Males")
    total_females: float = Field(0.0, ge=0, alias="Total Females")
    rural_males: float = Field(0.0, ge=0, alias="Rural Males")
    rural_females: float = Field(0.0, ge=0, alias="Rural Females")
    urban_males: float = Field(0.0, ge=0, alias="Urban Males")
    urban_females: float = Field(0.0, ge=0, alias="Urban Females")


SeriesPoint = Annotated[float, Field(ge=-100.0, le=100.0)]


class SeriesModel(BaseModel):
    """One named, colored sequence of signed percentages (one per age group).

    Attributes:
        name: Legend label, e.g. "Rural Males".
        values: Signed percentages; negative for males.
        color_key: Per-sex color identifier ("male" or "female").
    """
    model_config = ConfigDict(frozen=True, extra="forbid")
    name: str
    values: tuple[SeriesPoint, ...]
    color_key: str


class ChartModel(BaseModel):
    """Chart-ready pyramid for one view.

    Attributes:
        view: View the model was computed for.
        labels: Age groups, in display order.
        series: Exactly two series, males first.
        coerced_cells: Number of numeric cells read as 0 because they were
            empty, non-numeric, non-finite or negative.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")
    view: ViewKind
    labels: tuple[str, ...]
    series: tuple[SeriesModel, ...] = Field(..., min_length=2, max_length=2)
    coerced_cells: int = Field(0, ge=0)

    @property
    def males(self) -> SeriesModel:
        return self.series[0]

    @property
    def females(self) -> SeriesModel:
        return self.series[1]

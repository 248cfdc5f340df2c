# Standard library
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Literal, NamedTuple

# Third-party
import polars as pl

# -----------------------------
# Sentinels and Labels
# -----------------------------


class Undefined(Enum):
    """Marker for a ratio that cannot be computed (dataset has no rows)."""

    NOT_APPLICABLE = "n/a"

    def __str__(self) -> str:
        return self.value


NOT_APPLICABLE = Undefined.NOT_APPLICABLE

TypeLabel = Literal["integer", "floating-point", "text", "date", "boolean"]

# -----------------------------
# Result Records
# -----------------------------


class MissingEntry(NamedTuple):
    """Missing-value percentage for one column."""

    column: str
    percent: float | Undefined


class DateRange(NamedTuple):
    """Min/max of the non-missing values of a date-like column."""

    column: str
    min_value: date | None
    max_value: date | None


class FrequencyEntry(NamedTuple):
    """One row of a frequency table."""

    label: object
    count: int


@dataclass(frozen=True)
class ColumnProfile:
    """Per-column summary."""

    name: str
    inferred_type: TypeLabel
    missing_ratio: float | Undefined


@dataclass(frozen=True, eq=False)
class DatasetReport:
    """Everything computed for one dataset during a report run."""

    name: str
    title: str
    row_count: int
    column_count: int
    columns: list[ColumnProfile]
    missing: list[MissingEntry]
    date_ranges: list[DateRange]
    frequencies: list[FrequencyEntry]
    category_column: str | None = None
    latest_year: int | None = None
    points: pl.DataFrame = field(default_factory=pl.DataFrame, repr=False)
    point_categories: list[FrequencyEntry] = field(default_factory=list)

    @property
    def point_count(self) -> int:
        return self.points.height

    def __repr__(self) -> str:
        return (
            f"DatasetReport({self.name}, rows={self.row_count}, "
            f"cols={self.column_count}, latest_year={self.latest_year})"
        )

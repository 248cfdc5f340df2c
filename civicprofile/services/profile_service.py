# Standard library
import logging
from collections.abc import Iterable, Sequence

# Third-party
import polars as pl

# Local imports
from civicprofile.core.config import DEFAULT_TOP_N
from civicprofile.core.models import (
    NOT_APPLICABLE,
    ColumnProfile,
    DateRange,
    FrequencyEntry,
    MissingEntry,
    Undefined,
)
from civicprofile.core.utils import infer_type_label
from civicprofile.core.validation import require_columns, validate_top_n
from civicprofile.datasets.dataset import Dataset

logger = logging.getLogger(__name__)

# -----------------------------
# Constants
# -----------------------------

COUNT_SUFFIX = "__count"
PERCENT_DECIMALS = 2

# -----------------------------
# Exclusion Predicates
# -----------------------------


def exclude_labels(column: str, labels: Iterable[str]) -> pl.Expr:
    """Predicate matching rows whose category is one of ``labels``."""
    return pl.col(column).is_in(list(labels))


def label_contains(
    column: str, keyword: str, *, case_sensitive: bool = True
) -> pl.Expr:
    """Predicate matching rows whose label contains ``keyword`` literally.

    Use ``~label_contains(...)`` as an exclusion to keep only matching rows.
    """
    expr = pl.col(column).cast(pl.String)
    if not case_sensitive:
        return expr.str.to_lowercase().str.contains(keyword.lower(), literal=True)
    return expr.str.contains(keyword, literal=True)


# -----------------------------
# Tabular Profiler
# -----------------------------


class TabularProfiler:
    """Stateless summaries over a Dataset.

    Every method is a pure function of its arguments; the dataset is only
    read, so one profiler can serve any number of datasets and threads.
    """

    def __init__(self, top_n: int = DEFAULT_TOP_N) -> None:
        validate_top_n(top_n)
        self.top_n: int = top_n

    # -----------------------------
    # Missing Values
    # -----------------------------

    def missing_ratios(self, dataset: Dataset) -> dict[str, float | Undefined]:
        """Fraction of missing entries per column (0.0-1.0).

        Every ratio is NOT_APPLICABLE when the dataset has no rows.
        """
        df: pl.DataFrame = dataset.data
        if df.height == 0:
            return dict.fromkeys(df.columns, NOT_APPLICABLE)

        null_counts: tuple[int, ...] = df.null_count().row(0)
        return {
            col: nulls / df.height
            for col, nulls in zip(df.columns, null_counts, strict=True)
        }

    def missing_table(self, dataset: Dataset) -> list[MissingEntry]:
        """Missing-value percentage per column, in column order.

        Args:
            dataset: Dataset to summarise

        Returns:
            One MissingEntry per column; percent is rounded to two decimals,
            or NOT_APPLICABLE for a dataset without rows
        """
        return [
            MissingEntry(col, _to_percent(ratio))
            for col, ratio in self.missing_ratios(dataset).items()
        ]

    # -----------------------------
    # Schema
    # -----------------------------

    def column_types(self, dataset: Dataset) -> dict[str, str]:
        """Inferred type label per column."""
        return {
            col: infer_type_label(dtype)
            for col, dtype in dataset.data.schema.items()
        }

    def column_profiles(self, dataset: Dataset) -> list[ColumnProfile]:
        types: dict[str, str] = self.column_types(dataset)
        ratios: dict[str, float | Undefined] = self.missing_ratios(dataset)
        return [
            ColumnProfile(name=col, inferred_type=types[col], missing_ratio=ratios[col])  # type: ignore[arg-type]
            for col in dataset.columns
        ]

    # -----------------------------
    # Date Coverage
    # -----------------------------

    def date_coverage(
        self, dataset: Dataset, date_columns: Sequence[str] | None = None
    ) -> list[DateRange]:
        """Earliest and latest non-missing value of each date column.

        Args:
            dataset: Dataset to summarise
            date_columns: Columns to cover; defaults to the dataset's
                declared date columns

        Returns:
            One DateRange per requested column, in request order. A column
            with no values gets ``(None, None)``.

        Raises:
            SchemaError: If a requested column does not exist
        """
        columns: list[str] = list(
            dataset.date_columns if date_columns is None else date_columns
        )
        require_columns(dataset.data, *columns)

        ranges: list[DateRange] = []
        for col in columns:
            values: pl.Series = dataset.data.get_column(col).drop_nulls()
            if values.is_empty():
                logger.debug("Date column %s of %s has no values", col, dataset.name)
                ranges.append(DateRange(col, None, None))
                continue
            ranges.append(DateRange(col, values.min(), values.max()))  # type: ignore[arg-type]
        return ranges

    # -----------------------------
    # Frequency Tables
    # -----------------------------

    def top_n_frequency(
        self,
        dataset: Dataset,
        category_column: str,
        n: int | None = None,
        exclude: pl.Expr | None = None,
    ) -> list[FrequencyEntry]:
        """Most frequent labels of a category column.

        Rows with a missing label never form their own bucket. Rows for which
        ``exclude`` evaluates true are dropped before counting. Ties keep the
        order in which labels first appear.

        Args:
            dataset: Dataset to count
            category_column: Column holding the labels
            n: Number of labels to keep (defaults to the profiler's top_n)
            exclude: Optional polars predicate selecting rows to drop

        Returns:
            (label, count) entries sorted by count, at most n long

        Raises:
            SchemaError: If category_column does not exist
            ProfileError: If n is not a positive integer
        """
        limit: int = self.top_n if n is None else n
        validate_top_n(limit)
        require_columns(dataset.data, category_column)

        frame: pl.DataFrame = dataset.data.filter(
            pl.col(category_column).is_not_null()
        )
        if exclude is not None:
            frame = frame.filter(~exclude.fill_null(value=False))

        return count_labels(frame, category_column, limit)


# -----------------------------
# Helpers
# -----------------------------


def count_labels(
    frame: pl.DataFrame, column: str, limit: int | None = None
) -> list[FrequencyEntry]:
    """Group, count and stable-sort the labels of ``column``."""
    # the grouped frame holds only ``column``, so a suffixed name is unique
    count_column: str = f"{column}{COUNT_SUFFIX}"
    counts: pl.DataFrame = (
        frame.group_by(column, maintain_order=True)
        .agg(pl.len().alias(count_column))
        .sort(count_column, descending=True, maintain_order=True)
    )
    if limit is not None:
        counts = counts.head(limit)
    return [
        FrequencyEntry(label, count)
        for label, count in counts.select(column, count_column).iter_rows()
    ]


def _to_percent(ratio: float | Undefined) -> float | Undefined:
    if isinstance(ratio, Undefined):
        return ratio
    return round(ratio * 100, PERCENT_DECIMALS)

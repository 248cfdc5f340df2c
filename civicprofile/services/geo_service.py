# Standard library
import logging

# Third-party
import polars as pl

# Local imports
from civicprofile.core.models import FrequencyEntry
from civicprofile.core.validation import (
    EmptyInputError,
    require_columns,
    require_temporal,
)
from civicprofile.datasets.dataset import Dataset
from civicprofile.services.profile_service import count_labels

logger = logging.getLogger(__name__)

# -----------------------------
# Latest-Year Filtering
# -----------------------------


def latest_year(dataset: Dataset, date_column: str) -> int:
    """Most recent calendar year present in a date column.

    Args:
        dataset: Dataset to inspect
        date_column: Parsed date/datetime column

    Returns:
        The maximum year among non-missing values

    Raises:
        SchemaError: If date_column does not exist or is not Date/Datetime
        EmptyInputError: If the column has no non-missing values
    """
    require_temporal(dataset.data, date_column)
    year: int | None = dataset.data.select(
        pl.col(date_column).dt.year().max()
    ).item()
    if year is None:
        msg = f"No dates in column '{date_column}' of dataset '{dataset.name}'"
        raise EmptyInputError(msg)
    return int(year)


def latest_year_points(
    dataset: Dataset,
    date_column: str,
    longitude: str = "LONGITUDE",
    latitude: str = "LATITUDE",
    category: str | None = None,
) -> pl.DataFrame:
    """Coordinates of the rows recorded in the latest available year.

    Rows missing either coordinate are dropped. When there is no latest
    year (no rows, or no dates) the result is empty but keeps its columns.

    Args:
        dataset: Dataset to filter
        date_column: Parsed date/datetime column that decides the year
        longitude: Longitude column
        latitude: Latitude column
        category: Optional label column carried along for grouping

    Returns:
        DataFrame with columns (longitude, latitude[, category])
    """
    columns: list[str] = [longitude, latitude]
    if category is not None:
        columns.append(category)
    require_columns(dataset.data, date_column, *columns)

    try:
        year: int = latest_year(dataset, date_column)
    except EmptyInputError as exc:
        logger.warning("%s; no points to map", exc)
        return dataset.data.select(columns).clear()

    points: pl.DataFrame = dataset.data.filter(
        (pl.col(date_column).dt.year() == year)
        & pl.col(longitude).is_not_null()
        & pl.col(latitude).is_not_null()
    ).select(columns)

    logger.info(
        "%s: %d points with coordinates in %d", dataset.name, points.height, year
    )
    return points


def points_per_category(
    points: pl.DataFrame, category: str
) -> list[FrequencyEntry]:
    """Number of points under each non-missing category label."""
    require_columns(points, category)
    return count_labels(points.filter(pl.col(category).is_not_null()), category)

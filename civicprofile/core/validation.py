# Standard library
from collections.abc import Iterable

# Third-party
import polars as pl

# -----------------------------
# Profiling Errors
# -----------------------------


class ProfileError(ValueError):
    """Base class for profiling failures."""


class SchemaError(ProfileError, KeyError):
    """Raised when a referenced column is absent or has an unusable dtype."""

    def __init__(
        self, column: str, available: Iterable[str], msg: str | None = None
    ) -> None:
        self.column: str = column
        self.available: list[str] = list(available)
        if msg is None:
            msg = (
                f"Column '{column}' not found. "
                f"Available columns: {', '.join(self.available) or '(none)'}"
            )
        super().__init__(msg)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class EmptyInputError(ProfileError):
    """Raised when a value is required but the input has no usable rows."""


# -----------------------------
# Validation Functions
# -----------------------------


def require_columns(df: pl.DataFrame, *columns: str) -> None:
    """Validate that every named column exists.

    Args:
        df: DataFrame to check
        *columns: Column names the caller is about to reference

    Raises:
        SchemaError: On the first missing column
    """
    for column in columns:
        if column not in df.columns:
            raise SchemaError(column, df.columns)


def validate_top_n(n: int) -> None:
    """Validate the truncation size of a frequency table.

    Args:
        n: Number of categories to keep

    Raises:
        ProfileError: If n is not a positive integer
    """
    if isinstance(n, bool) or not isinstance(n, int):
        msg = f"n must be an integer, got {type(n).__name__}"
        raise ProfileError(msg)

    if n < 1:
        msg = f"n must be positive, got {n}"
        raise ProfileError(msg)


def require_temporal(df: pl.DataFrame, column: str) -> None:
    """Validate that a column exists and holds parsed dates or datetimes.

    Raises:
        SchemaError: If the column is missing or not a Date/Datetime column
    """
    require_columns(df, column)
    dtype = df.schema[column]
    if not (dtype == pl.Date or dtype == pl.Datetime):
        msg = f"Column '{column}' must hold dates, got {dtype}"
        raise SchemaError(column, df.columns, msg)


def validate_positive(name: str, value: int) -> None:
    """Validate a positive integer setting.

    Raises:
        ProfileError: If value is not a positive integer
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        msg = f"{name} must be a positive integer, got {value!r}"
        raise ProfileError(msg)

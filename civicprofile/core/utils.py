# Standard library
import logging
from collections.abc import Sequence
from pathlib import Path

# Third-party
import polars as pl

# Local imports
from civicprofile.core.models import TypeLabel
from civicprofile.core.validation import require_columns

logger = logging.getLogger(__name__)

# -----------------------------
# Constants
# -----------------------------

TIME_DIRECTIVES = ("%H", "%I", "%M", "%S", "%T", "%R")

# -----------------------------
# File I/O utilities
# -----------------------------


def load_file(
    path: Path,
    date_columns: Sequence[str] = (),
    date_format: str | None = None,
) -> pl.DataFrame:
    """Auto-detect and load file as Polars DataFrame.

    Declared date columns stored as text are parsed; values that do not match
    the format become null. Float NaN is normalised to null so that null is
    the only missing marker downstream.
    """
    suffix: str = path.suffix.lower()
    if suffix == ".csv":
        df = pl.read_csv(path, infer_schema_length=10_000)
    elif suffix == ".parquet":
        df = pl.read_parquet(path)
    elif suffix == ".json":
        df = pl.read_json(path)
    elif suffix in [".jsonl", ".ndjson"]:
        df = pl.read_ndjson(path)
    else:
        msg: str = f"Unsupported file type: {suffix}"
        raise ValueError(msg)

    logger.info("Loaded %s: %d rows, %d columns", path.name, df.height, df.width)
    return normalize_frame(df, date_columns, date_format)


def normalize_frame(
    df: pl.DataFrame,
    date_columns: Sequence[str] = (),
    date_format: str | None = None,
) -> pl.DataFrame:
    """Parse date columns and fold NaN into null."""
    require_columns(df, *date_columns)

    exprs: list[pl.Expr] = [
        parse_date_expr(col, date_format)
        for col in date_columns
        if df.schema[col] == pl.String
    ]
    # a column with no values at all carries no dtype yet
    exprs.extend(
        pl.col(col).cast(pl.Date) for col in date_columns if df.schema[col] == pl.Null
    )
    exprs.extend(
        pl.col(col).fill_nan(None)
        for col, dtype in df.schema.items()
        if dtype in {pl.Float32, pl.Float64}
    )
    if not exprs:
        return df
    return df.with_columns(exprs)


def parse_date_expr(column: str, date_format: str | None) -> pl.Expr:
    """Non-strict string-to-date expression for a single column."""
    expr = pl.col(column).str.strip_chars()
    if date_format and not any(d in date_format for d in TIME_DIRECTIVES):
        return expr.str.to_date(format=date_format, strict=False)
    return expr.str.to_datetime(format=date_format, strict=False)


# -----------------------------
# Schema utilities
# -----------------------------


def infer_type_label(dtype: pl.DataType) -> TypeLabel:
    """Map a polars dtype onto the closed set of report type labels.

    Anything that is not numeric, boolean or a calendar type (including the
    Null dtype of an all-missing column and Object columns of mixed values)
    is reported as text.
    """
    if dtype == pl.Boolean:
        return "boolean"
    if dtype == pl.Date or dtype == pl.Datetime:
        return "date"
    if dtype.is_integer():
        return "integer"
    if dtype.is_float() or dtype == pl.Decimal:
        return "floating-point"
    return "text"

# Standard library
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

# Third-party
import polars as pl

# Local imports
from civicprofile.core.utils import load_file
from civicprofile.core.validation import require_columns

if TYPE_CHECKING:
    from civicprofile.core.config import SourceConfig

# -----------------------------
# Dataset
# -----------------------------


@dataclass(frozen=True, eq=False)
class Dataset:
    """Immutable, named snapshot of a loaded table.

    Polars null is the missing marker. ``date_columns`` names the columns
    already parsed into calendar values by the loader.
    """

    name: str
    data: pl.DataFrame
    date_columns: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        require_columns(self.data, *self.date_columns)

    @classmethod
    def from_source(cls, source: "SourceConfig", data_dir: Path) -> "Dataset":
        """Load a configured municipal source from ``data_dir``."""
        df: pl.DataFrame = load_file(
            source.path(data_dir),
            date_columns=source.date_columns,
            date_format=source.date_format,
        )
        return cls(name=source.key, data=df, date_columns=source.date_columns)

    @property
    def row_count(self) -> int:
        return self.data.height

    @property
    def columns(self) -> list[str]:
        return self.data.columns

    def __repr__(self) -> str:
        return (
            f"Dataset({self.name}, rows={self.row_count}, "
            f"cols={len(self.columns)})"
        )

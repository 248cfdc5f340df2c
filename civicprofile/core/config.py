"""
Report configuration.

Sources describe where each municipal dataset lives and which of its columns
the report reads; ``ReportConfig`` holds the run-wide tunables. Both are
immutable. Environment variables override the defaults via
``ReportConfig.from_env``.
"""

# Standard library
import os
from dataclasses import dataclass, field, replace
from pathlib import Path

# Local imports
from civicprofile.core.validation import ProfileError, validate_positive

# -----------------------------
# Constants
# -----------------------------

DEFAULT_TOP_N = 50
ENV_PREFIX = "CIVICPROFILE_"

# -----------------------------
# Source Configuration
# -----------------------------


@dataclass(frozen=True)
class SourceConfig:
    """Column layout of one municipal dataset."""

    key: str
    title: str
    filename: str
    category_column: str
    map_date_column: str
    date_columns: tuple[str, ...] = ()
    date_format: str | None = None
    longitude_column: str = "LONGITUDE"
    latitude_column: str = "LATITUDE"
    excluded_categories: tuple[str, ...] = ()
    category_keyword: str | None = None
    keyword_case_sensitive: bool = True

    def path(self, data_dir: Path) -> Path:
        return data_dir / self.filename


BUILDING_VIOLATIONS = SourceConfig(
    key="building_violations",
    title="Building Violations",
    filename="building_violations.csv",
    category_column="VIOLATION DESCRIPTION",
    map_date_column="VIOLATION DATE",
    date_columns=("VIOLATION DATE", "VIOLATION LAST MODIFIED DATE"),
    date_format="%m/%d/%Y",
)

ORDINANCE_VIOLATIONS = SourceConfig(
    key="ordinance_violations",
    title="Ordinance Violations",
    filename="ordinance_violations.csv",
    category_column="VIOLATION ORDINANCE",
    map_date_column="VIOLATION DATE",
    date_columns=(
        "VIOLATION DATE",
        "VIOLATION LAST MODIFIED DATE",
        "HEARING DATE",
    ),
    date_format="%m/%d/%Y",
)

SERVICE_REQUESTS = SourceConfig(
    key="service_requests",
    title="311 Service Requests",
    filename="311_service_requests.csv",
    category_column="SR_TYPE",
    map_date_column="CREATED_DATE",
    date_columns=("CREATED_DATE", "LAST_MODIFIED_DATE", "CLOSED_DATE"),
    date_format="%m/%d/%Y %I:%M:%S %p",
    excluded_categories=("311 INFORMATION ONLY CALL",),
)

DEFAULT_SOURCES: tuple[SourceConfig, ...] = (
    BUILDING_VIOLATIONS,
    ORDINANCE_VIOLATIONS,
    SERVICE_REQUESTS,
)

# -----------------------------
# Report Configuration
# -----------------------------


@dataclass(frozen=True)
class ReportConfig:
    """Run-wide report settings."""

    data_dir: Path = Path("data")
    top_n: int = DEFAULT_TOP_N
    parallel: bool = False
    max_workers: int = 3
    log_level: str = "INFO"
    sources: tuple[SourceConfig, ...] = field(default=DEFAULT_SOURCES)

    def __post_init__(self) -> None:
        validate_positive("top_n", self.top_n)
        validate_positive("max_workers", self.max_workers)

    @classmethod
    def from_env(cls, **overrides: object) -> "ReportConfig":
        """Build a config from ``CIVICPROFILE_*`` environment variables.

        Explicit keyword overrides win over the environment.

        Raises:
            ProfileError: If a numeric setting is not a positive integer
        """
        values: dict[str, object] = {}

        data_dir: str | None = os.getenv(f"{ENV_PREFIX}DATA_DIR")
        if data_dir:
            values["data_dir"] = Path(data_dir).expanduser().resolve()

        top_n: int | None = _env_int("TOP_N")
        if top_n is not None:
            values["top_n"] = top_n

        max_workers: int | None = _env_int("MAX_WORKERS")
        if max_workers is not None:
            values["max_workers"] = max_workers

        log_level: str | None = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if log_level:
            values["log_level"] = log_level.upper()

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)  # type: ignore[arg-type]

    def source(self, key: str) -> SourceConfig:
        """Look up a configured source by key."""
        for src in self.sources:
            if src.key == key:
                return src
        msg = f"Unknown source '{key}'. Known: {', '.join(self.source_keys)}"
        raise KeyError(msg)

    @property
    def source_keys(self) -> list[str]:
        return [src.key for src in self.sources]

    def with_sources(self, keys: list[str]) -> "ReportConfig":
        """Return a copy restricted to the given source keys."""
        return replace(self, sources=tuple(self.source(k) for k in keys))


# -----------------------------
# Helpers
# -----------------------------


def _env_int(name: str) -> int | None:
    raw: str | None = os.getenv(f"{ENV_PREFIX}{name}")
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        msg = f"{ENV_PREFIX}{name} must be an integer, got {raw!r}"
        raise ProfileError(msg) from exc

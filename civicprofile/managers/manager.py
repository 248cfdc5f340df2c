# Standard library
import logging
from concurrent import futures

# Third-party
import polars as pl
from rich.console import Console

# Local imports
from civicprofile.core.config import ReportConfig, SourceConfig
from civicprofile.core.models import DatasetReport
from civicprofile.core.validation import EmptyInputError
from civicprofile.datasets.dataset import Dataset
from civicprofile.services.display_service import DisplayService
from civicprofile.services.geo_service import (
    latest_year,
    latest_year_points,
    points_per_category,
)
from civicprofile.services.profile_service import (
    TabularProfiler,
    exclude_labels,
    label_contains,
)

logger = logging.getLogger(__name__)

# -----------------------------
# Report Manager
# -----------------------------


class ReportManager:
    """Report manager - single API surface for profiling the configured sources.
    """

    def __init__(
        self, config: ReportConfig | None = None, console: Console | None = None
    ) -> None:
        self.config: ReportConfig = config or ReportConfig.from_env()

        # Initialize services
        self._profiler = TabularProfiler(top_n=self.config.top_n)
        self._display_service = DisplayService(console)

    # -----------------------------
    # Loading
    # -----------------------------

    def load(self, source: SourceConfig) -> Dataset:
        """Load one configured source from the data directory."""
        logger.info("Loading %s from %s", source.title, self.config.data_dir)
        return Dataset.from_source(source, self.config.data_dir)

    def load_all(self) -> list[tuple[SourceConfig, Dataset]]:
        """Load every configured source, in configuration order."""
        return [(source, self.load(source)) for source in self.config.sources]

    # -----------------------------
    # Profiling
    # -----------------------------

    def profile(self, dataset: Dataset, source: SourceConfig) -> DatasetReport:
        """Run every summary over one dataset.

        Args:
            dataset: Loaded dataset
            source: Column layout the summaries read

        Returns:
            DatasetReport for the dataset
        """
        profiler: TabularProfiler = self._profiler

        try:
            year: int | None = latest_year(dataset, source.map_date_column)
        except EmptyInputError:
            year = None

        points: pl.DataFrame = latest_year_points(
            dataset,
            source.map_date_column,
            longitude=source.longitude_column,
            latitude=source.latitude_column,
            category=source.category_column,
        )

        report = DatasetReport(
            name=dataset.name,
            title=source.title,
            row_count=dataset.row_count,
            column_count=len(dataset.columns),
            columns=profiler.column_profiles(dataset),
            missing=profiler.missing_table(dataset),
            date_ranges=profiler.date_coverage(dataset, source.date_columns),
            frequencies=profiler.top_n_frequency(
                dataset,
                source.category_column,
                exclude=build_exclusion(source),
            ),
            category_column=source.category_column,
            latest_year=year,
            points=points,
            point_categories=points_per_category(points, source.category_column),
        )
        logger.info("Profiled %r", report)
        return report

    def run(
        self, datasets: list[tuple[SourceConfig, Dataset]]
    ) -> list[DatasetReport]:
        """Profile each dataset, returning reports in input order.

        With ``config.parallel`` the passes run in a thread pool; they share
        no mutable state.
        """
        if not self.config.parallel or len(datasets) < 2:
            return [self.profile(dataset, source) for source, dataset in datasets]

        workers: int = min(self.config.max_workers, len(datasets))
        with futures.ThreadPoolExecutor(max_workers=workers) as executor:
            pending: list[futures.Future[DatasetReport]] = [
                executor.submit(self.profile, dataset, source)
                for source, dataset in datasets
            ]
            return [fut.result() for fut in pending]

    def report(self) -> list[DatasetReport]:
        """Load, profile and display every configured source."""
        reports: list[DatasetReport] = self.run(self.load_all())
        for report in reports:
            self.show(report)
        return reports

    # -----------------------------
    # Display Operations
    # -----------------------------

    def show(self, report: DatasetReport) -> None:
        self._display_service.show_report(report)

    def show_sources(self) -> None:
        """Display the configured sources in a rich table."""
        self._display_service.show_sources(
            [(src.key, src.title, src.filename) for src in self.config.sources]
        )


# -----------------------------
# Helpers
# -----------------------------


def build_exclusion(source: SourceConfig) -> pl.Expr | None:
    """Combine a source's category filters into one exclusion predicate.

    Excluded labels drop their rows; a keyword keeps only rows whose label
    contains it.
    """
    predicates: list[pl.Expr] = []
    if source.excluded_categories:
        predicates.append(
            exclude_labels(source.category_column, source.excluded_categories)
        )
    if source.category_keyword:
        predicates.append(
            ~label_contains(
                source.category_column,
                source.category_keyword,
                case_sensitive=source.keyword_case_sensitive,
            )
        )

    if not predicates:
        return None
    return pl.any_horizontal(predicates)

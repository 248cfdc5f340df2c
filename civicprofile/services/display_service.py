# Standard library
from datetime import date, datetime

# Third-party
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Local imports
from civicprofile.core.models import (
    ColumnProfile,
    DatasetReport,
    DateRange,
    FrequencyEntry,
    MissingEntry,
    Undefined,
)

# -----------------------------
# Constants
# -----------------------------

NULL_PCT_HIGH_THRESHOLD = 50
NULL_PCT_MEDIUM_THRESHOLD = 10
ABSENT = "-"

# -----------------------------
# Display Service
# -----------------------------


class DisplayService:
    """Service for Rich console formatting of report sections."""

    def __init__(self, console: Console | None = None) -> None:
        self.console: Console = console or Console()

    # -----------------------------
    # Display Operations
    # -----------------------------

    def show_report(self, report: DatasetReport) -> None:
        """Print every section of a dataset report."""
        self.console.print(self._format_overview_panel(report))
        self.console.print(self.columns_table(report.columns, report.missing))
        if report.date_ranges:
            self.console.print(self.date_coverage_table(report.date_ranges))
        if report.category_column:
            self.console.print(
                self.frequency_table(report.frequencies, report.category_column)
            )
        if report.point_categories:
            self.console.print(
                self.point_categories_table(
                    report.point_categories,
                    report.category_column,
                    report.latest_year,
                )
            )

    def show_sources(self, sources: list[tuple[str, str, str]]) -> None:
        """List configured sources as (key, title, file) rows."""
        table: Table = Table(
            title="Sources", show_header=True, header_style="bold magenta"
        )
        table.add_column("Key", style="cyan")
        table.add_column("Title", style="green")
        table.add_column("File", style="yellow")
        for row in sources:
            table.add_row(*row)
        self.console.print(table)

    # -----------------------------
    # Table Builders
    # -----------------------------

    def columns_table(
        self, columns: list[ColumnProfile], missing: list[MissingEntry]
    ) -> Table:
        """Schema summary joined with missing-value percentages."""
        percents: dict[str, float | Undefined] = {
            entry.column: entry.percent for entry in missing
        }

        table: Table = Table(
            title="Columns", show_header=True, header_style="bold magenta"
        )
        table.add_column("Column", style="cyan")
        table.add_column("Type", style="yellow")
        table.add_column("Missing %", justify="right")

        for profile in columns:
            pct = percents[profile.name]
            table.add_row(profile.name, profile.inferred_type, _format_percent(pct))

        return table

    def date_coverage_table(self, ranges: list[DateRange]) -> Table:
        table: Table = Table(
            title="Date Coverage", show_header=True, header_style="bold magenta"
        )
        table.add_column("Column", style="cyan")
        table.add_column("Earliest", style="blue")
        table.add_column("Latest", style="blue")

        for entry in ranges:
            table.add_row(
                entry.column, _format_date(entry.min_value), _format_date(entry.max_value)
            )

        return table

    def frequency_table(self, entries: list[FrequencyEntry], label: str) -> Table:
        table: Table = Table(
            title=f"Top {len(entries)} by {label}",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("#", style="dim", justify="right")
        table.add_column(label, style="green")
        table.add_column("Count", justify="right", style="white")

        for rank, entry in enumerate(entries, 1):
            table.add_row(str(rank), str(entry.label), f"{entry.count:,}")

        return table

    def point_categories_table(
        self, entries: list[FrequencyEntry], label: str, year: int | None
    ) -> Table:
        """Mapped points of the latest year, counted per category."""
        table: Table = Table(
            title=f"Mapped points by {label} ({year})",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column(label, style="green")
        table.add_column("Points", justify="right", style="white")

        for entry in entries:
            table.add_row(str(entry.label), f"{entry.count:,}")

        return table

    # -----------------------------
    # Formatting Helpers
    # -----------------------------

    def _format_overview_panel(self, report: DatasetReport) -> Panel:
        sections: list[str] = [
            f"[bold cyan]Rows:[/] {report.row_count:,}",
            f"[bold cyan]Columns:[/] {report.column_count}",
        ]

        if report.latest_year is not None:
            sections.append(
                f"[bold cyan]Mapped points ({report.latest_year}):[/] "
                f"{report.point_count:,}"
            )
        else:
            sections.append("[bold cyan]Mapped points:[/] none")

        return Panel(
            "\n".join(sections),
            title=f"Dataset: {report.title}",
            border_style="bright_blue",
        )


def _format_percent(pct: float | Undefined) -> str:
    if isinstance(pct, Undefined):
        return f"[dim]{pct!s}[/]"

    # Color code by null percentage
    if pct > NULL_PCT_HIGH_THRESHOLD:
        color = "red"
    elif pct > NULL_PCT_MEDIUM_THRESHOLD:
        color = "yellow"
    else:
        color = "green"
    return f"[{color}]{pct:.2f}%[/]"


def _format_date(value: date | None) -> str:
    if value is None:
        return ABSENT
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    return value.isoformat()

"""
civicprofile CLI: descriptive-statistics report over municipal datasets.

Commands
--------
- ``report``: load each configured source from the data directory and print
  its schema, missing values, date coverage and top categories.
- ``sources``: list the configured sources and their expected file names.

Usage::

    civicprofile report --data-dir ./data
    civicprofile report --data-dir ./data --source service_requests --top-n 20
    civicprofile sources
"""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from civicprofile.core.config import ReportConfig
from civicprofile.core.log import configure_logging
from civicprofile.core.validation import ProfileError
from civicprofile.managers import ReportManager

console = Console()


# ── Shared options ───────────────────────────────────────────────────

@click.group()
@click.version_option(package_name="civicprofile")
def main() -> None:
    """civicprofile: municipal dataset profiling report."""


# ── report ───────────────────────────────────────────────────────────

@main.command("report")
@click.option("--data-dir", type=click.Path(exists=True, file_okay=False, path_type=Path), help="Directory holding the source files.")
@click.option("--source", "sources", multiple=True, help="Source key to include (repeat for several; default all).")
@click.option("--top-n", type=click.IntRange(min=1), help="Number of categories in each frequency table.")
@click.option("--parallel/--sequential", default=False, show_default=True, help="Profile sources concurrently.")
@click.option("--log-level", help="Logging level (default from CIVICPROFILE_LOG_LEVEL or INFO).")
def report(
    data_dir: Path | None,
    sources: tuple[str, ...],
    top_n: int | None,
    parallel: bool,
    log_level: str | None,
) -> None:
    """Profile the configured sources and print the report."""
    try:
        cfg = ReportConfig.from_env(
            data_dir=data_dir, top_n=top_n, parallel=parallel, log_level=log_level
        )
        configure_logging(cfg.log_level.upper())
        if sources:
            cfg = cfg.with_sources(list(sources))
        manager = ReportManager(cfg, console=console)
        reports = manager.report()
    except (KeyError, ProfileError, FileNotFoundError) as exc:
        raise _usage_failure(exc) from exc

    console.print(f"[bold green]✓[/] Profiled {len(reports)} dataset(s)")


# ── sources ──────────────────────────────────────────────────────────

@main.command("sources")
def list_sources() -> None:
    """List the configured sources."""
    try:
        cfg = ReportConfig.from_env()
    except ProfileError as exc:
        raise _usage_failure(exc) from exc
    ReportManager(cfg, console=console).show_sources()


def _usage_failure(exc: Exception) -> click.ClickException:
    # KeyError quotes its message in str()
    if isinstance(exc, KeyError) and exc.args:
        return click.ClickException(str(exc.args[0]))
    return click.ClickException(str(exc))


if __name__ == "__main__":
    main()

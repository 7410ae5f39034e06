from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Annotated

import typer
from rich.console import Console, Group
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.spinner import Spinner
from rich.text import Text
from result import Err

from fsshape.config.loader import load_config, sample_config_json
from fsshape.config.schema import AppConfig, default_config
from fsshape.models.scan import CustomRoots, DefaultRoots, RootSet, ScanOptions, ScanResult
from fsshape.models.stats import StatisticsRecord
from fsshape.scan import traverse
from fsshape.services.compare import compare as compare_stats
from fsshape.services.cook import cook as cook_stats
from fsshape.services.export import export_csv
from fsshape.services.serialize import StatsFileError, load, save
from fsshape.services.summary import (
    render_comparison,
    render_issues,
    render_scan_summary,
    render_skipped,
    render_stats,
)

console = Console()
app = typer.Typer(help="Measure the shape of directory trees.", no_args_is_help=True)


@dataclass(slots=True)
class _ScanProgress:
    current_path: str
    files: int
    directories: int
    start_time: float


def _truncate_path(path: str, max_width: int = 110) -> str:
    if len(path) <= max_width:
        return path
    keep = max_width - 3
    return f"...{path[-keep:]}"


def _render_scan_panel(progress: _ScanProgress) -> Panel:
    elapsed = time.perf_counter() - progress.start_time
    body = Group(
        Spinner("dots", text="Scanning directory tree...", style="bold #8abeb7"),
        Text.from_markup(f"[#81a2be]Path:[/] {escape(_truncate_path(progress.current_path))}"),
        Text.from_markup(
            f"[#b5bd68]Scanned:[/] {progress.directories:,} dirs, {progress.files:,} files"
            + f"    [#de935f]Elapsed:[/] {elapsed:.1f}s"
        ),
    )
    return Panel(
        body,
        title="[bold #81a2be]fsshape - Scanning...[/]",
        border_style="#373b41",
    )


def _scan_with_progress(roots: RootSet, options: ScanOptions) -> ScanResult:
    progress = _ScanProgress(current_path="", files=0, directories=0, start_time=time.perf_counter())

    with Live(_render_scan_panel(progress), console=console, refresh_per_second=12, transient=True) as live:

        def on_progress(current_path: str, files: int, directories: int) -> None:
            progress.current_path = current_path
            progress.files = files
            progress.directories = directories
            live.update(_render_scan_panel(progress))

        return traverse(roots, options, progress_callback=on_progress)


def _load_app_config() -> AppConfig:
    config_result = load_config()
    if isinstance(config_result, Err):
        console.print(f"[yellow]{escape(config_result.unwrap_err())} Using defaults.[/]")
        return default_config()
    return config_result.unwrap()


def _fail_file(error: StatsFileError) -> typer.Exit:
    console.print(f"[red]{escape(error.message)}: {escape(error.path)}[/]")
    return typer.Exit(1)


def _load_or_exit(path: str) -> StatisticsRecord:
    result = load(path)
    if isinstance(result, Err):
        raise _fail_file(result.unwrap_err())
    return result.unwrap()


def _save_or_exit(stats: StatisticsRecord, path: str) -> None:
    result = save(stats, path)
    if isinstance(result, Err):
        raise _fail_file(result.unwrap_err())
    console.print(f"[green]Statistics written to {escape(path)}[/]")


def _export_or_exit(stats: StatisticsRecord, directory: str) -> None:
    result = export_csv(stats, directory)
    if isinstance(result, Err):
        raise _fail_file(result.unwrap_err())
    console.print(f"[green]{len(result.unwrap())} CSV files written to {escape(directory)}[/]")


def _cook_and_report(stats: StatisticsRecord) -> None:
    report = cook_stats(stats)
    render_skipped(console, report.skipped)


@app.command()
def scan(
    paths: Annotated[list[str] | None, typer.Argument(help="Roots to scan. Defaults to the curated system roots.")] = None,
    output: Annotated[str | None, typer.Option("--output", "-o", help="Write statistics to this JSON file.")] = None,
    cook: Annotated[bool, typer.Option("--cook", "-c", help="Normalize the statistics before output.")] = False,
    csv_dir: Annotated[str | None, typer.Option("--csv-dir", help="Export one CSV per distribution here.")] = None,
    exclude: Annotated[
        list[str] | None, typer.Option("--exclude", "-x", help="File extension to leave out (repeatable).")
    ] = None,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Do not print the distribution tables.")] = False,
) -> None:
    """Walk directory trees and collect shape statistics."""
    config = _load_app_config()
    if exclude:
        config.excluded_extensions = [*config.excluded_extensions, *exclude]

    roots: RootSet = CustomRoots.of(*paths) if paths else DefaultRoots(tuple(config.default_roots))
    scan_result = _scan_with_progress(roots, config.scan_options())
    if isinstance(scan_result, Err):
        error = scan_result.unwrap_err()
        console.print(f"[red]Scan failed for {escape(error.path)}: {escape(error.message)}[/]")
        raise typer.Exit(1)
    report = scan_result.unwrap()

    render_issues(console, report.issues)
    render_scan_summary(console, report)
    if cook:
        _cook_and_report(report.stats)
    if not quiet:
        render_stats(console, report.stats, bar_width=config.summary_bar_width)
    if output is not None:
        _save_or_exit(report.stats, output)
    if csv_dir is not None:
        _export_or_exit(report.stats, csv_dir)


@app.command()
def cook(
    source: Annotated[str, typer.Argument(help="Raw statistics file.")],
    destination: Annotated[str, typer.Argument(help="Where to write the cooked statistics.")],
) -> None:
    """Normalize a raw statistics file into fractions."""
    stats = _load_or_exit(source)
    if stats.cooked:
        console.print(f"[red]{escape(source)} is already cooked.[/]")
        raise typer.Exit(1)
    _cook_and_report(stats)
    _save_or_exit(stats, destination)


@app.command()
def show(source: Annotated[str, typer.Argument(help="Statistics file to display.")]) -> None:
    """Print the distributions stored in a statistics file."""
    stats = _load_or_exit(source)
    render_stats(console, stats, bar_width=_load_app_config().summary_bar_width)


@app.command()
def export(
    source: Annotated[str, typer.Argument(help="Statistics file to export.")],
    directory: Annotated[str, typer.Argument(help="Directory that receives the CSV files.")],
) -> None:
    """Export each distribution as a key,value CSV file."""
    _export_or_exit(_load_or_exit(source), directory)


@app.command()
def compare(
    reference: Annotated[str, typer.Argument(help="Statistics of the reference tree.")],
    candidate: Annotated[str, typer.Argument(help="Statistics of the tree under test.")],
) -> None:
    """Show how far a candidate tree's distributions are from a reference."""
    ref = _load_or_exit(reference)
    cand = _load_or_exit(candidate)
    result = compare_stats(ref, cand)
    if isinstance(result, Err):
        console.print(f"[red]{escape(result.unwrap_err())}[/]")
        raise typer.Exit(1)
    render_comparison(console, result.unwrap(), cooked=ref.cooked)


@app.command("sample-config")
def sample_config() -> None:
    """Print the default configuration as JSON."""
    console.print_json(sample_config_json())


def cli() -> None:
    app()


if __name__ == "__main__":
    cli()

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fsshape.models.enums import StatsField
from fsshape.models.scan import ScanIssue, ScanReport
from fsshape.models.stats import Distribution, Number, StatisticsRecord
from fsshape.services.compare import FieldComparison
from fsshape.services.cook import SkippedField
from fsshape.services.formatting import format_bucket, format_bytes, format_percent, relative_bar

TITLES: dict[StatsField, str] = {
    StatsField.DIR_DEPTHS: "Directories by Depth",
    StatsField.SUBDIR_COUNTS: "Directories by Subdirectory Count",
    StatsField.FILE_COUNTS: "Directories by File Count",
    StatsField.FILE_SIZES: "Files by Size",
    StatsField.FILE_BYTES: "Bytes by File Size",
    StatsField.FILE_DEPTHS: "Files by Depth",
    StatsField.BYTE_DEPTHS: "Bytes by Depth",
}

_SIZE_KEYED = {StatsField.FILE_SIZES, StatsField.FILE_BYTES}
_BYTE_VALUED = {StatsField.FILE_BYTES, StatsField.BYTE_DEPTHS}


def _key_label(name: StatsField, key: int) -> str:
    if name in _SIZE_KEYED:
        return format_bucket(key)
    if name is StatsField.SUBDIR_COUNTS:
        return f"{key} subdirs"
    if name is StatsField.FILE_COUNTS:
        return f"{key} files"
    return f"depth {key}"


def _value_label(name: StatsField, value: Number, cooked: bool) -> str:
    if cooked:
        if name is StatsField.BYTE_DEPTHS:
            return f"2^{value:.2f} ({format_bytes(2**value)})"
        return format_percent(value)
    if name in _BYTE_VALUED:
        return format_bytes(value)
    return f"{value:,}"


def _distribution_table(name: StatsField, dist: Distribution, cooked: bool, bar_width: int) -> Table:
    title = TITLES[name]
    if cooked and name is StatsField.SUBDIR_COUNTS:
        title += " (cumulative)"
    elif cooked and name is StatsField.BYTE_DEPTHS:
        title = "Average File Size by Depth (log2)"
    table = Table(title=title, header_style="bold yellow")
    table.add_column("Key")
    table.add_column("Value", justify="right")
    table.add_column("", justify="left")
    peak = max(dist.values(), default=0)
    for key, value in dist.sorted_pairs():
        table.add_row(
            _key_label(name, key),
            _value_label(name, value, cooked),
            relative_bar(value, peak, width=bar_width),
        )
    return table


def render_stats(console: Console, stats: StatisticsRecord, *, bar_width: int = 16) -> None:
    for name, dist in stats.distributions():
        if not dist:
            console.print(f"[dim]{TITLES[name]}: no data[/dim]")
            continue
        console.print(_distribution_table(name, dist, stats.cooked, bar_width))


def render_scan_summary(console: Console, report: ScanReport) -> None:
    table = Table(title="Scan Summary", header_style="bold cyan")
    table.add_column("Root")
    table.add_column("Start Depth", justify="right")
    for root in report.roots:
        table.add_row(escape(root.path), str(root.depth))
    table.add_section()
    table.add_row(f"[bold]{report.directories:,}[/bold] dirs", "")
    table.add_row(f"[bold]{report.files:,}[/bold] files", "")
    table.add_row(f"[bold]{format_bytes(report.stats.total_bytes)}[/bold] counted", "")
    console.print(table)


def render_issues(console: Console, issues: list[ScanIssue], limit: int = 20) -> None:
    if not issues:
        return
    console.print(f"[yellow]{len(issues):,} paths skipped during scan[/yellow]")
    for issue in issues[:limit]:
        console.print(f"[yellow]  {escape(issue.path)}: {escape(issue.message)}[/yellow]")
    if len(issues) > limit:
        console.print(f"[yellow]  ... and {len(issues) - limit:,} more[/yellow]")


def render_skipped(console: Console, skipped: list[SkippedField]) -> None:
    for item in skipped:
        console.print(f"[yellow]{item.field.value}: {item.reason}[/yellow]")


def _diff_label(item: FieldComparison, cooked: bool) -> str:
    if cooked and item.field is not StatsField.BYTE_DEPTHS:
        return format_percent(item.max_abs_diff)
    return f"{item.max_abs_diff:,.4g}"


def render_comparison(console: Console, comparisons: list[FieldComparison], *, cooked: bool) -> None:
    table = Table(title="Distribution Comparison", header_style="bold cyan")
    table.add_column("Distribution")
    table.add_column("Max Difference", justify="right")
    table.add_column("At Key", justify="right")
    table.add_column("Keys (ref / cand)", justify="right")
    for item in comparisons:
        if item.worst_key is None:
            diff, key = "-", "-"
        else:
            diff = _diff_label(item, cooked)
            key = _key_label(item.field, item.worst_key)
        table.add_row(item.field.value, diff, key, f"{item.reference_keys} / {item.candidate_keys}")
    console.print(table)

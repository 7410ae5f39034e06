from __future__ import annotations

import math
from dataclasses import dataclass, field

from fsshape.models.enums import StatsField
from fsshape.models.stats import Distribution, Number, StatisticsRecord

NO_DATA = "no data to normalize"


@dataclass(slots=True, frozen=True)
class SkippedField:
    field: StatsField
    reason: str


@dataclass(slots=True)
class CookReport:
    stats: StatisticsRecord
    skipped: list[SkippedField] = field(default_factory=list)


def _normalize(dist: Distribution, total: Number) -> bool:
    if total <= 0:
        dist.clear()
        return False
    for key in dist:
        dist[key] = dist[key] / total
    return True


def _accumulate(dist: Distribution) -> None:
    """Replace each value with the running sum over keys up to and including it."""
    running: Number = 0
    for key in sorted(dist):
        running += dist[key]
        dist[key] = running


def _log_average(byte_depths: Distribution, file_depths: Distribution) -> None:
    """Turn per-depth byte totals into log2 of the average file size at that depth.

    *file_depths* must still hold raw counts.
    """
    averaged = {}
    for depth, files in file_depths.items():
        total = byte_depths.get(depth, 0)
        if files <= 0 or total <= 0:
            continue
        averaged[depth] = math.log2(total / files)
    byte_depths.clear()
    byte_depths.update(averaged)


def cook(stats: StatisticsRecord) -> CookReport:
    """Normalize a raw record in place.

    Fan-out distributions are divided by the number of directories sampled
    (roots included), so each sums to one; ``subdir_counts`` becomes a
    cumulative fraction.  A distribution whose divisor is zero is emptied and
    listed in the report instead of raising.
    """
    if stats.cooked:
        raise ValueError("statistics are already cooked")

    dir_total = stats.total_dirs
    sampled_dirs = stats.subdir_counts.total()
    file_total = stats.total_files
    byte_total = stats.total_bytes

    report = CookReport(stats=stats)

    _log_average(stats.byte_depths, stats.file_depths)
    if not stats.byte_depths:
        report.skipped.append(SkippedField(StatsField.BYTE_DEPTHS, NO_DATA))

    _accumulate(stats.subdir_counts)

    divisors = (
        (StatsField.DIR_DEPTHS, dir_total),
        (StatsField.SUBDIR_COUNTS, sampled_dirs),
        (StatsField.FILE_COUNTS, sampled_dirs),
        (StatsField.FILE_SIZES, file_total),
        (StatsField.FILE_BYTES, byte_total),
        (StatsField.FILE_DEPTHS, file_total),
    )
    for name, total in divisors:
        if not _normalize(stats.distribution(name), total):
            report.skipped.append(SkippedField(name, NO_DATA))

    stats.cooked = True
    return report

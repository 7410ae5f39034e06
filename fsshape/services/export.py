from __future__ import annotations

import csv
import io
import posixpath

from result import Err, Ok, Result

from fsshape.models.stats import Distribution, StatisticsRecord
from fsshape.services.fs import DEFAULT_FS, FileSystem
from fsshape.services.serialize import StatsFileError, StatsFileErrorCode


def distribution_csv(dist: Distribution) -> str:
    """Render *dist* as ``key,value`` rows, ascending by key, values as floats."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    for key, value in dist.sorted_pairs():
        writer.writerow([key, float(value)])
    return output.getvalue()


def export_csv(
    stats: StatisticsRecord, directory: str, fs: FileSystem = DEFAULT_FS
) -> Result[list[str], StatsFileError]:
    """Write one ``<field>.csv`` per distribution into *directory*."""
    written: list[str] = []
    try:
        fs.makedirs(directory)
        for name, dist in stats.distributions():
            path = posixpath.join(directory, f"{name.value}.csv")
            fs.write_text(path, distribution_csv(dist))
            written.append(path)
    except OSError as exc:
        return Err(StatsFileError(StatsFileErrorCode.WRITE_FAILED, directory, f"Cannot export CSV: {exc}"))
    return Ok(written)

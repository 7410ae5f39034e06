from __future__ import annotations

from dataclasses import dataclass

from result import Err, Ok, Result

from fsshape.models.enums import StatsField
from fsshape.models.stats import StatisticsRecord


@dataclass(slots=True, frozen=True)
class FieldComparison:
    field: StatsField
    max_abs_diff: float
    worst_key: int | None
    reference_keys: int
    candidate_keys: int


def compare(reference: StatisticsRecord, candidate: StatisticsRecord) -> Result[list[FieldComparison], str]:
    """Measure how far *candidate* strays from *reference*, field by field.

    Keys missing on either side count as zero.  Comparing raw with cooked
    statistics is meaningless and reported as an error.
    """
    if reference.cooked != candidate.cooked:
        return Err("Cannot compare raw statistics with cooked statistics.")

    results: list[FieldComparison] = []
    for name, ref in reference.distributions():
        cand = candidate.distribution(name)
        worst_key: int | None = None
        worst = 0.0
        for key in sorted(ref.keys() | cand.keys()):
            diff = abs(float(ref.get(key, 0)) - float(cand.get(key, 0)))
            if worst_key is None or diff > worst:
                worst_key, worst = key, diff
        results.append(
            FieldComparison(
                field=name,
                max_abs_diff=worst,
                worst_key=worst_key,
                reference_keys=len(ref),
                candidate_keys=len(cand),
            )
        )
    return Ok(results)

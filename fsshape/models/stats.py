from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TypeAlias

from fsshape.models.enums import StatsField

Number: TypeAlias = int | float

FIELD_ORDER: tuple[StatsField, ...] = tuple(StatsField)


class Distribution(dict[int, Number]):
    """Sparse mapping from a non-negative integer key to a count or fraction.

    Missing keys read as zero.
    """

    def add(self, key: int, amount: Number = 1) -> None:
        self[key] = self.get(key, 0) + amount

    def total(self) -> Number:
        return sum(self.values())

    def weighted_total(self) -> Number:
        return sum(key * value for key, value in self.items())

    def pairs(self) -> Iterator[tuple[int, Number]]:
        return iter(self.items())

    def sorted_pairs(self) -> Iterator[tuple[int, Number]]:
        for key in sorted(self):
            yield key, self[key]


@dataclass(slots=True)
class StatisticsRecord:
    dir_depths: Distribution = field(default_factory=Distribution)
    subdir_counts: Distribution = field(default_factory=Distribution)
    file_counts: Distribution = field(default_factory=Distribution)
    file_sizes: Distribution = field(default_factory=Distribution)
    file_bytes: Distribution = field(default_factory=Distribution)
    file_depths: Distribution = field(default_factory=Distribution)
    byte_depths: Distribution = field(default_factory=Distribution)
    cooked: bool = False

    def distribution(self, name: StatsField) -> Distribution:
        dist: Distribution = getattr(self, name.value)
        return dist

    def distributions(self) -> Iterator[tuple[StatsField, Distribution]]:
        """Yield every distribution in the persisted field order."""
        for name in FIELD_ORDER:
            yield name, self.distribution(name)

    def pairs(self, name: StatsField) -> Iterator[tuple[int, Number]]:
        return self.distribution(name).pairs()

    @property
    def total_files(self) -> Number:
        return self.file_depths.total()

    @property
    def total_bytes(self) -> Number:
        return self.byte_depths.total()

    @property
    def total_dirs(self) -> Number:
        return self.dir_depths.total()

"""Cumulative stacking of numerical series."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, NamedTuple, Sequence

from .utils import is_missing


class StackInterval(NamedTuple):
    """Extent of one series for one record. ``upper`` is NaN for a missing value."""

    lower: float
    upper: float
    data: Mapping[str, Any]

    @property
    def is_missing(self) -> bool:
        return math.isnan(self.lower) or math.isnan(self.upper)


@dataclass
class StackedSeries:
    """All intervals of one numerical key, in record order."""

    key: str
    index: int
    intervals: List[StackInterval] = field(default_factory=list)

    def __iter__(self) -> Iterator[StackInterval]:
        return iter(self.intervals)

    def __len__(self) -> int:
        return len(self.intervals)

    def __getitem__(self, idx) -> StackInterval:
        return self.intervals[idx]


def stack_transform(records: Sequence[Mapping[str, Any]], keys: Sequence[str]) -> List[StackedSeries]:
    """Stack ``keys`` of every record on top of each other.

    Series come back in the order of ``keys``. A missing or non-numeric value
    yields an interval whose upper bound is NaN; the running total carries on
    from that interval's lower bound, so the value counts as zero for the
    series stacked above it.
    """
    stacked = [StackedSeries(key=key, index=i) for i, key in enumerate(keys)]
    for record in records:
        total = 0.0
        for series in stacked:
            value = record.get(series.key)
            if is_missing(value):
                series.intervals.append(StackInterval(total, math.nan, record))
                continue
            upper = total + float(value)
            series.intervals.append(StackInterval(total, upper, record))
            total = upper
    return stacked

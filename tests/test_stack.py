"""Unit tests for cumulative stacking."""

from __future__ import annotations

import math
from decimal import Decimal
from fractions import Fraction

import pytest

from bargraph import stack_transform


def _bounds(series):
    return [(iv.lower, iv.upper) for iv in series]


def test_two_record_scenario(rows) -> None:
    """Series x sits on zero, series y on top of x."""

    x, y = stack_transform(rows, ["x", "y"])
    assert x.key == "x"
    assert y.key == "y"
    assert _bounds(x) == [(0, 3), (0, 1)]
    assert _bounds(y) == [(3, 7), (1, 3)]


def test_series_order_follows_keys(rows) -> None:
    stacked = stack_transform(rows, ["y", "x"])
    assert [s.key for s in stacked] == ["y", "x"]
    assert [s.index for s in stacked] == [0, 1]
    assert _bounds(stacked[1]) == [(4, 7), (2, 3)]


def test_intervals_reference_source_records(rows) -> None:
    stacked = stack_transform(rows, ["x", "y"])
    assert stacked[0][0].data is rows[0]
    assert stacked[1][1].data is rows[1]


@pytest.mark.parametrize(
    "records, keys",
    [
        ([{"c": "a", "p": 1.5, "q": 2.25, "r": 0}], ["p", "q", "r"]),
        ([{"c": "a", "p": 10, "q": 0}, {"c": "b", "p": 0, "q": 7}], ["p", "q"]),
        ([{"c": str(i), "v1": i, "v2": i * 2, "v3": 100 - i} for i in range(20)], ["v1", "v2", "v3"]),
    ],
)
def test_stack_partitions_record_total(records, keys) -> None:
    """Intervals are contiguous, start at zero and end at the record total."""

    stacked = stack_transform(records, keys)
    for j, record in enumerate(records):
        intervals = [series[j] for series in stacked]
        assert intervals[0].lower == 0
        for below, above in zip(intervals, intervals[1:]):
            assert below.upper == above.lower
        for interval, key in zip(intervals, keys):
            assert interval.upper - interval.lower == pytest.approx(record[key])
        assert intervals[-1].upper == pytest.approx(sum(record[k] for k in keys))


def test_missing_value_is_nan_and_counts_as_zero() -> None:
    """A missing value has no upper bound; the next series continues below it."""

    records = [{"cat": "A", "x": None, "y": 2}, {"cat": "B", "y": 5}, {"cat": "C", "x": "n/a", "y": 1}]
    x, y = stack_transform(records, ["x", "y"])

    for interval in x:
        assert interval.lower == 0
        assert math.isnan(interval.upper)
        assert interval.is_missing
    assert _bounds(y) == [(0, 2), (0, 5), (0, 1)]
    assert not any(iv.is_missing for iv in y)


def test_missing_value_in_the_middle() -> None:
    records = [{"cat": "A", "x": 1, "y": None, "z": 4}]
    x, y, z = stack_transform(records, ["x", "y", "z"])
    assert _bounds(x) == [(0, 1)]
    assert y[0].lower == 1 and math.isnan(y[0].upper)
    assert _bounds(z) == [(1, 5)]


def test_booleans_are_not_numbers() -> None:
    x, = stack_transform([{"cat": "A", "x": True}], ["x"])
    assert math.isnan(x[0].upper)


def test_other_real_number_types_are_stacked() -> None:
    """Decimal and Fraction values count as numbers, not as missing."""

    x, y = stack_transform([{"cat": "A", "x": Decimal("1.5"), "y": Fraction(1, 2)}], ["x", "y"])
    assert _bounds(x) == [(0, 1.5)]
    assert _bounds(y) == [(1.5, 2.0)]
    assert not x[0].is_missing

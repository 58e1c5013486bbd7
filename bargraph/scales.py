"""Position functions for the categorical and numerical axes."""

from __future__ import annotations

import math
from typing import Any, Hashable, List, Mapping, Optional, Sequence, Tuple

from .utils import is_missing

LOG_FLOOR = 0.001

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def _js_round(x: float) -> int:
    return math.floor(x + 0.5)


def _tick_spec(start: float, stop: float, count: float) -> Tuple[int, int, float]:
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power < 0:
        inc = 10 ** -power / factor
        i1 = _js_round(start * inc)
        i2 = _js_round(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = 10 ** power * factor
        i1 = _js_round(start / inc)
        i2 = _js_round(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1
    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return i1, i2, inc


def nice_ticks(start: float, stop: float, count: int = 10) -> List[float]:
    """Round tick values (1, 2 or 5 times a power of ten) covering [start, stop]."""
    if not count > 0:
        return []
    if start == stop:
        return [start]
    reverse = stop < start
    if reverse:
        start, stop = stop, start
    i1, i2, inc = _tick_spec(start, stop, count)
    if not i2 >= i1:
        return []
    if inc < 0:
        ticks = [(i1 + i) / -inc for i in range(i2 - i1 + 1)]
    else:
        ticks = [(i1 + i) * inc for i in range(i2 - i1 + 1)]
    return ticks[::-1] if reverse else ticks


class BandScale:
    """Maps distinct categorical keys to equal pixel bands.

    The domain keeps first-occurrence order. Unknown keys map to ``None``.
    A descending range lays the bands out from its high end.
    """

    def __init__(self, domain: Sequence[Hashable], range: Tuple[float, float]):
        self.domain = list(dict.fromkeys(domain))
        self.range = (float(range[0]), float(range[1]))
        self._index = {key: i for i, key in enumerate(self.domain)}

    @property
    def step(self) -> float:
        if not self.domain:
            return 0.0
        return (self.range[1] - self.range[0]) / len(self.domain)

    @property
    def bandwidth(self) -> float:
        return abs(self.step)

    def __call__(self, key) -> Optional[float]:
        idx = self._index.get(key)
        if idx is None:
            return None
        if self.range[1] < self.range[0]:
            idx = len(self.domain) - 1 - idx
        return min(self.range) + self.bandwidth * idx

    def center(self, key) -> Optional[float]:
        start = self(key)
        return None if start is None else start + self.bandwidth / 2

    def ticks(self, count: Optional[int] = None) -> List[Hashable]:
        return list(self.domain)

    def __repr__(self):
        return f"BandScale(domain={self.domain!r}, range={self.range!r})"


class LinearScale:
    """Affine mapping from a numeric domain to a pixel range."""

    def __init__(self, domain: Tuple[float, float], range: Tuple[float, float]):
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range[0]), float(range[1]))

    def _normalize(self, value: float) -> float:
        d0, d1 = self.domain
        if d1 == d0:
            return 0.5
        return (value - d0) / (d1 - d0)

    def __call__(self, value: float) -> float:
        r0, r1 = self.range
        return r0 + self._normalize(float(value)) * (r1 - r0)

    def ticks(self, count: int = 10) -> List[float]:
        return nice_ticks(self.domain[0], self.domain[1], count)

    def __repr__(self):
        return f"{type(self).__name__}(domain={self.domain!r}, range={self.range!r})"


class LogScale(LinearScale):
    """Base-10 logarithmic mapping.

    Values at or below zero have no logarithm; they are placed at the domain
    floor so bars still start on the axis.
    """

    def _normalize(self, value: float) -> float:
        d0, d1 = self.domain
        if value <= 0:
            value = d0
        l0, l1 = math.log10(d0), math.log10(d1)
        if l1 == l0:
            return 0.5
        return (math.log10(value) - l0) / (l1 - l0)

    def ticks(self, count: int = 10) -> List[float]:
        d0, d1 = self.domain
        lo, hi = min(d0, d1), max(d0, d1)
        i = math.floor(math.log10(lo))
        j = math.ceil(math.log10(hi))
        if j - i < count:
            candidates = [k * 10.0 ** p for p in range(i, j + 1) for k in range(1, 10)]
        else:
            candidates = [10.0 ** p for p in range(i, j + 1)]
        return [v for v in candidates if lo * (1 - 1e-12) <= v <= hi * (1 + 1e-12)]


def data_min_max(grouped: bool, stack, records: Sequence[Mapping[str, Any]], keys: Sequence[str]) -> Tuple[float, float]:
    """Domain extent used by the numerical scale.

    Stacked charts read the minimum from the first series' lower bounds and
    the maximum from the last series' upper bounds. This is not a general
    extrema scan: negative values inside the stack can fall outside it.
    Grouped charts scan every value of every numerical field.
    """
    if not grouped:
        if not stack:
            return 0.0, 0.0
        lows = [iv.lower for iv in stack[0] if not is_missing(iv.lower)]
        highs = [iv.upper for iv in stack[-1] if not is_missing(iv.upper)]
        return (min(lows) if lows else 0.0), (max(highs) if highs else 0.0)

    values = [record.get(key) for record in records for key in keys]
    values = [v for v in values if not is_missing(v)]
    if not values:
        return 0.0, 0.0
    return min(values), max(values)

"""Bar geometry shared by vertical and horizontal, stacked and grouped charts.

Geometry is computed along two axis roles instead of x/y: the categorical
role (band position and bar thickness) and the numerical role (value position
and bar length). ``AxisRoles`` binds the roles to pixel attributes once per
layout, and every rectangle is produced through it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

from .config import Margins
from .utils import format_value, is_missing

LABEL_OFFSET = 10
GROUP_LABEL_INSET = 3.2


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class PlotArea:
    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_canvas(cls, width: float, height: float, margins: Margins) -> "PlotArea":
        return cls(
            left=margins.left,
            top=margins.top,
            right=width - margins.right,
            bottom=height - margins.bottom,
        )

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


@dataclass(frozen=True)
class AxisRoles:
    """Pixel attributes bound to the categorical and numerical roles."""

    position: str
    value: str
    thickness: str
    length: str
    vertical: bool

    @classmethod
    def for_orientation(cls, vertical: bool) -> "AxisRoles":
        if vertical:
            return cls(position="x", value="y", thickness="width", length="height", vertical=True)
        return cls(position="y", value="x", thickness="height", length="width", vertical=False)

    def rect(self, category_position: float, value_position: float, thickness: float, length: float) -> Rect:
        return Rect(
            **{
                self.position: category_position,
                self.value: value_position,
                self.thickness: thickness,
                self.length: length,
            }
        )

    def point(self, category_position: float, value_position: float) -> Tuple[float, float]:
        coords = {self.position: category_position, self.value: value_position}
        return coords["x"], coords["y"]

    def categorical_span(self, plot: PlotArea) -> Tuple[float, float]:
        """Pixel span the band scale covers."""
        if self.vertical:
            return plot.left, plot.right
        return plot.top, plot.bottom

    def numerical_span(self, plot: PlotArea) -> Tuple[float, float]:
        """Pixel positions of the domain start and end of the numerical scale."""
        if self.vertical:
            return plot.bottom, plot.top
        return plot.left, plot.right

    @property
    def label_offset(self) -> float:
        # labels sit above vertical bars and right of horizontal ones
        return -LABEL_OFFSET if self.vertical else LABEL_OFFSET


@dataclass(frozen=True)
class BarGeometry:
    """One bar, in axis-role terms. ``length`` is never negative."""

    category_position: float
    value_position: float
    length: float
    thickness: float
    key: str
    data: Mapping[str, Any]

    def rect(self, roles: AxisRoles) -> Rect:
        return roles.rect(self.category_position, self.value_position, self.thickness, self.length)


@dataclass(frozen=True)
class BarLabel:
    category_position: float
    value_position: float
    text: str
    key: str

    def point(self, roles: AxisRoles) -> Tuple[float, float]:
        return roles.point(self.category_position, self.value_position)


@dataclass
class SeriesGeometry:
    """Bars of one stacked series."""

    key: str
    bars: List[BarGeometry] = field(default_factory=list)
    labels: List[BarLabel] = field(default_factory=list)


@dataclass
class GroupGeometry:
    """Bars of one category in a grouped chart, drawn over a backdrop bar."""

    data: Mapping[str, Any]
    background: BarGeometry
    bars: List[BarGeometry] = field(default_factory=list)
    labels: List[BarLabel] = field(default_factory=list)


def block_count(n_categories: int, n_series: int, grouped: bool) -> int:
    """Bars sharing the categorical axis side by side."""
    return n_categories * n_series if grouped else n_categories


def compute_bar_width(available: float, n_categories: int, n_series: int, grouped: bool, padding: float) -> float:
    """Even share of the categorical axis per block, less the padding ratio."""
    blocks = block_count(n_categories, n_series, grouped)
    if blocks <= 0 or available <= 0:
        return 0.0
    return available / blocks * (1 - padding)


def _span(n_scale: Callable[[float], float], start: float, end: float) -> Tuple[float, float]:
    a, b = n_scale(start), n_scale(end)
    return min(a, b), abs(b - a)


def stacked_geometry(
    stack,
    c_series: str,
    c_scale: Callable[[Any], Optional[float]],
    n_scale: Callable[[float], float],
    bar_width: float,
    roles: AxisRoles,
) -> List[SeriesGeometry]:
    """Bars and labels for every interval of every stacked series."""
    result = []
    for series in stack:
        geometry = SeriesGeometry(key=series.key)
        for interval in series:
            position = c_scale(interval.data.get(c_series))
            if position is None:
                continue
            if not interval.is_missing:
                start, length = _span(n_scale, interval.lower, interval.upper)
                geometry.bars.append(
                    BarGeometry(position, start, length, bar_width, series.key, interval.data)
                )
            top = 0 if is_missing(interval.upper) else interval.upper
            geometry.labels.append(
                BarLabel(
                    category_position=position,
                    value_position=n_scale(top) + roles.label_offset,
                    text=format_value(interval.upper),
                    key=series.key,
                )
            )
        result.append(geometry)
    return result


def grouped_geometry(
    records: Sequence[Mapping[str, Any]],
    c_series: str,
    n_series: Sequence[str],
    c_scale: Callable[[Any], Optional[float]],
    n_scale: Callable[[float], float],
    bar_width: float,
    roles: AxisRoles,
    plot: PlotArea,
) -> List[GroupGeometry]:
    """Side-by-side bars per record, in ``n_series`` order."""
    span_start, span_end = roles.numerical_span(plot)
    backdrop_start, backdrop_length = min(span_start, span_end), abs(span_end - span_start)

    result = []
    for record in records:
        position = c_scale(record.get(c_series))
        if position is None:
            continue
        group = GroupGeometry(
            data=record,
            background=BarGeometry(
                position, backdrop_start, backdrop_length, bar_width * len(n_series), "background", record
            ),
        )
        for i, key in enumerate(n_series):
            value = record.get(key)
            offset = position + i * bar_width
            if not is_missing(value):
                start, length = _span(n_scale, 0, value)
                group.bars.append(BarGeometry(offset, start, length, bar_width, key, record))
            group.labels.append(
                BarLabel(
                    category_position=position + (i + 1) * bar_width - bar_width / GROUP_LABEL_INSET,
                    value_position=n_scale(0 if is_missing(value) else value) + roles.label_offset,
                    text=format_value(value),
                    key=key,
                )
            )
        result.append(group)
    return result

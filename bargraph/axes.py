"""Axis descriptors: which scale an axis draws, where, and with which ticks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Union

from .schemas.axis_options import AxisOptionsSchema
from .utils import format_value

DEFAULT_TICK_COUNT = 10
DEFAULT_TICK_SIZE = 6
DEFAULT_TICK_PADDING = 3


@dataclass(frozen=True)
class TickMark:
    value: Any
    position: float
    label: str


@dataclass(frozen=True)
class AxisDescriptor:
    """An axis generator for one scale.

    ``orient`` is ``"bottom"`` (horizontal axis, labels below) or ``"left"``
    (vertical axis, labels to the left).
    """

    scale: Callable[[Any], Optional[float]]
    orient: str
    ticks: Optional[int] = None
    tick_values: Optional[List[Any]] = None
    tick_format: Optional[Union[str, Callable[[Any], Any]]] = None
    tick_padding: float = DEFAULT_TICK_PADDING
    tick_size: float = DEFAULT_TICK_SIZE

    @classmethod
    def from_options(cls, scale, orient: str, options=None) -> "AxisDescriptor":
        if options is None:
            options = AxisOptionsSchema()
        elif not isinstance(options, AxisOptionsSchema):
            options = AxisOptionsSchema(**options)
        kwargs = {}
        # falsy options keep the defaults
        if options.ticks:
            kwargs["ticks"] = options.ticks
        if options.tick_values:
            kwargs["tick_values"] = list(options.tick_values)
        if options.tick_format:
            kwargs["tick_format"] = options.tick_format
        if options.tick_padding:
            kwargs["tick_padding"] = options.tick_padding
        if options.tick_size:
            kwargs["tick_size"] = options.tick_size
        return cls(scale=scale, orient=orient, **kwargs)

    def values(self) -> List[Any]:
        if self.tick_values:
            return list(self.tick_values)
        ticks = getattr(self.scale, "ticks", None)
        if ticks is None:
            return []
        return list(ticks(self.ticks or DEFAULT_TICK_COUNT))

    def format(self, value) -> str:
        if callable(self.tick_format):
            return str(self.tick_format(value))
        if self.tick_format:
            return format(value, self.tick_format)
        return format_value(value)

    def tick_marks(self) -> List[TickMark]:
        """Ticks with their pixel position; band scales tick at band centers."""
        center = getattr(self.scale, "center", None)
        marks = []
        for value in self.values():
            position = center(value) if center is not None else self.scale(value)
            if position is None:
                continue
            marks.append(TickMark(value=value, position=position, label=self.format(value)))
        return marks


@dataclass(frozen=True)
class AxisPair:
    c: AxisDescriptor
    n: AxisDescriptor


def build_axes(c_scale, n_scale, vertical: bool, c_options=None, n_options=None) -> AxisPair:
    """Categorical axis along the bottom of vertical charts, along the left otherwise."""
    c_orient, n_orient = ("bottom", "left") if vertical else ("left", "bottom")
    return AxisPair(
        c=AxisDescriptor.from_options(c_scale, c_orient, c_options),
        n=AxisDescriptor.from_options(n_scale, n_orient, n_options),
    )

"""Bar graph layout engine: stacking, scales, orientation-aware geometry and
a render sequence that draws onto any ``Surface``."""

from .axes import AxisDescriptor, AxisPair, TickMark, build_axes
from .chart import BarGraph, ChartLayout, ChartNotReadyError, LayoutOverrides
from .config import ChartConfig, Margins, ValidationResult
from .layout import AxisRoles, BarGeometry, PlotArea, Rect, block_count, compute_bar_width
from .scales import LOG_FLOOR, BandScale, LinearScale, LogScale, data_min_max, nice_ticks
from .stack import StackedSeries, StackInterval, stack_transform
from .surface import Node, PointerEvent, RecordingSurface, Surface, TooltipElement
from .tooltip import TooltipController, format_tooltip

__all__ = [
    "AxisDescriptor",
    "AxisPair",
    "AxisRoles",
    "BandScale",
    "BarGeometry",
    "BarGraph",
    "ChartConfig",
    "ChartLayout",
    "ChartNotReadyError",
    "LOG_FLOOR",
    "LayoutOverrides",
    "LinearScale",
    "LogScale",
    "Margins",
    "Node",
    "PlotArea",
    "PointerEvent",
    "RecordingSurface",
    "Rect",
    "StackInterval",
    "StackedSeries",
    "Surface",
    "TickMark",
    "TooltipController",
    "TooltipElement",
    "ValidationResult",
    "block_count",
    "build_axes",
    "compute_bar_width",
    "data_min_max",
    "format_tooltip",
    "nice_ticks",
    "stack_transform",
]

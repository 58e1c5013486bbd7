"""Bar graph: derived layout state and the render sequence.

Typical use::

    graph = BarGraph(data=rows, c_series="name", n_series=["a", "b"], vertical=True)
    graph.init()
    graph.render(RecordingSurface())

``init`` runs the granular steps in order (stack, numerical scale,
categorical scale, axes, bar width). Each step can be re-run on its own after
changing settings; every step recomputes its output from scratch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .axes import AxisPair, build_axes
from .config import ChartConfig, Margins
from .layout import (
    AxisRoles,
    GroupGeometry,
    PlotArea,
    SeriesGeometry,
    compute_bar_width,
    grouped_geometry,
    stacked_geometry,
)
from .renderers import axes as axes_renderer
from .renderers import bars as bars_renderer
from .renderers import legend as legend_renderer
from .renderers import titles as titles_renderer
from .scales import LOG_FLOOR, BandScale, LinearScale, LogScale, data_min_max
from .stack import StackedSeries, stack_transform
from .surface import Surface
from .tooltip import TooltipController

logger = logging.getLogger(__name__)


class ChartNotReadyError(RuntimeError):
    """A layout step or render was called before its inputs exist."""


@dataclass(frozen=True)
class ChartLayout:
    """Everything a render needs, captured when the render starts."""

    records: Sequence[Mapping[str, Any]]
    c_series: str
    n_series: Sequence[str]
    tooltip_series: Sequence[str]
    graph_title: Optional[str]
    c_axis_title: Optional[str]
    n_axis_title: Optional[str]
    vertical: bool
    grouped: bool
    tooltips: bool
    bar_labels: bool
    width: float
    height: float
    margins: Margins
    legend_radius: float
    bar_width: float
    stack: Sequence[StackedSeries]
    c_scale: Any
    n_scale: Any
    axes: AxisPair
    roles: AxisRoles

    @property
    def plot(self) -> PlotArea:
        return PlotArea.from_canvas(self.width, self.height, self.margins)

    def stacked_geometry(self) -> List[SeriesGeometry]:
        return stacked_geometry(self.stack, self.c_series, self.c_scale, self.n_scale, self.bar_width, self.roles)

    def grouped_geometry(self) -> List[GroupGeometry]:
        return grouped_geometry(
            self.records, self.c_series, self.n_series, self.c_scale, self.n_scale,
            self.bar_width, self.roles, self.plot,
        )


class LayoutOverrides:
    """Install externally built layout pieces.

    Nothing here is validated: scales, axes and stacks set through this entry
    point are used as given, and keeping them consistent with the
    configuration is the caller's job. A later init step replaces them.
    """

    def __init__(self, graph: "BarGraph"):
        self._graph = graph

    def set_stack(self, stack_data: Sequence[StackedSeries]):
        self._graph._stack = list(stack_data)

    def set_c_scale(self, c_scale):
        """``c_scale(key) -> band start``; a ``bandwidth`` attribute is optional."""
        self._graph._c_scale = c_scale

    def set_n_scale(self, n_scale):
        """``n_scale(value) -> pixel``."""
        self._graph._n_scale = n_scale

    def set_axes(self, c_axis, n_axis):
        self._graph._axes = AxisPair(c=c_axis, n=n_axis)


class BarGraph:
    """Bar graph made of a ChartConfig plus the layout derived from it."""

    def __init__(self, config: Optional[ChartConfig] = None, surface: Optional[Surface] = None, **settings):
        self.config = config if config is not None else ChartConfig()
        if settings:
            self.config.update(**settings)
        self.surface = surface
        self.overrides = LayoutOverrides(self)
        self._stack: Optional[List[StackedSeries]] = None
        self._c_scale = None
        self._n_scale = None
        self._axes: Optional[AxisPair] = None

    @property
    def stack_data(self) -> Optional[List[StackedSeries]]:
        return self._stack

    @property
    def c_scale(self):
        return self._c_scale

    @property
    def n_scale(self):
        return self._n_scale

    @property
    def axes(self) -> Optional[AxisPair]:
        return self._axes

    @property
    def bar_width(self) -> Optional[float]:
        return self.config.bar_width

    @property
    def roles(self) -> AxisRoles:
        return AxisRoles.for_orientation(self.config.vertical)

    @property
    def plot(self) -> PlotArea:
        return PlotArea.from_canvas(self.config.width, self.config.height, self.config.margins)

    def _require(self, step: str, **inputs):
        missing = [name for name, value in inputs.items() if value is None]
        if missing:
            raise ChartNotReadyError(f"{step} needs {', '.join(missing)} to be set first")

    # ------------------------------------------------------------------
    # layout steps
    # ------------------------------------------------------------------
    def init_stack(self):
        cfg = self.config
        self._require("init_stack", data=cfg.data, n_series=cfg.n_series)
        self._stack = stack_transform(cfg.data, cfg.n_series)

    def init_n_scale(self, log: bool = False):
        cfg = self.config
        self._require("init_n_scale", data=cfg.data, n_series=cfg.n_series)
        if not cfg.grouped:
            self._require("init_n_scale", stack_data=self._stack)

        low, high = data_min_max(cfg.grouped, self._stack, cfg.data, cfg.n_series)
        span = self.roles.numerical_span(self.plot)
        if log:
            floor = low if low > LOG_FLOOR else LOG_FLOOR
            if high < floor:
                logger.warning("log scale maximum %s is below the floor %s; using the floor", high, floor)
                high = floor
            self._n_scale = LogScale((floor, high), span)
        else:
            self._n_scale = LinearScale((0, high), span)
        logger.debug("numerical scale %r", self._n_scale)

    def init_c_scale(self):
        cfg = self.config
        self._require("init_c_scale", data=cfg.data, c_series=cfg.c_series)
        keys = [record.get(cfg.c_series) for record in cfg.data]
        self._c_scale = BandScale(keys, self.roles.categorical_span(self.plot))
        logger.debug("categorical scale %r", self._c_scale)

    def init_axes(self, c_axis_options=None, n_axis_options=None):
        self._require("init_axes", c_scale=self._c_scale, n_scale=self._n_scale)
        self._axes = build_axes(
            self._c_scale, self._n_scale, self.config.vertical, c_axis_options, n_axis_options
        )

    def init_bar_width(self):
        cfg = self.config
        self._require("init_bar_width", data=cfg.data, c_series=cfg.c_series, n_series=cfg.n_series)
        n_categories = len(dict.fromkeys(record.get(cfg.c_series) for record in cfg.data))
        plot = self.plot
        available = plot.width if cfg.vertical else plot.height
        cfg.bar_width = compute_bar_width(available, n_categories, len(cfg.n_series), cfg.grouped, cfg.padding)

    def init(self, log: bool = False, c_axis_options=None, n_axis_options=None):
        """Run every layout step with the current settings."""
        self.init_stack()
        self.init_n_scale(log=log)
        self.init_c_scale()
        self.init_axes(c_axis_options, n_axis_options)
        self.init_bar_width()

    def layout(self) -> ChartLayout:
        """Snapshot of the current layout; raises ChartNotReadyError if incomplete."""
        cfg = self.config
        self._require(
            "render",
            data=cfg.data,
            c_series=cfg.c_series,
            n_series=cfg.n_series,
            stack_data=self._stack,
            c_scale=self._c_scale,
            n_scale=self._n_scale,
            axes=self._axes,
            bar_width=cfg.bar_width,
        )
        return ChartLayout(
            records=list(cfg.data),
            c_series=cfg.c_series,
            n_series=list(cfg.n_series),
            tooltip_series=cfg.resolved_tooltip_series,
            graph_title=cfg.graph_title,
            c_axis_title=cfg.c_axis_title,
            n_axis_title=cfg.n_axis_title,
            vertical=cfg.vertical,
            grouped=cfg.grouped,
            tooltips=cfg.tooltips,
            bar_labels=cfg.bar_labels,
            width=cfg.width,
            height=cfg.height,
            margins=cfg.margins,
            legend_radius=cfg.legend_radius,
            bar_width=cfg.bar_width,
            stack=list(self._stack),
            c_scale=self._c_scale,
            n_scale=self._n_scale,
            axes=self._axes,
            roles=self.roles,
        )

    # ------------------------------------------------------------------
    # drawing
    # ------------------------------------------------------------------
    def clear(self):
        """Remove everything previously drawn. Settings and layout are kept."""
        if self.surface is None:
            return
        self.surface.clear()

    def render(self, surface: Optional[Surface] = None) -> ChartLayout:
        """Draw titles, legend, tooltip, bars and axes.

        Visuals are appended: rendering again without ``clear()`` draws a
        second copy on top of the first.
        """
        if surface is not None:
            self.surface = surface
        self._require("render", surface=self.surface)
        layout = self.layout()
        surface = self.surface

        context: Dict[str, Any] = {"logger": logger, "handlers": {}}
        titles_renderer.render(surface, layout, context)
        legend_renderer.render(surface, layout, context)
        if layout.tooltips:
            controller = TooltipController(layout.tooltip_series, surface.tooltip())
            context["handlers"] = controller.handlers()
        bars_renderer.render(surface, layout, context)
        axes_renderer.render(surface, layout, context)
        return layout

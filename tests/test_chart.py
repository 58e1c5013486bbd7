"""Render-level tests for BarGraph against the recording surface."""

from __future__ import annotations

import pytest

from bargraph import (
    BandScale,
    BarGraph,
    ChartNotReadyError,
    LinearScale,
    LogScale,
    PointerEvent,
    build_axes,
)


def _bar_rects(surface):
    bars = surface.find_all(kind="group", css_class="bars")
    assert len(bars) >= 1
    return [n for group in bars for n in group.find_all(kind="rect")]


def test_stacked_vertical_render(make_graph, surface) -> None:
    graph = make_graph(vertical=True)
    layout = graph.render(surface)

    assert graph.bar_width == pytest.approx(225)
    assert layout.c_scale("A") == 60
    assert layout.c_scale("B") == 360
    assert layout.n_scale(0) == pytest.approx(440)
    assert layout.n_scale(7) == pytest.approx(40)

    rects = _bar_rects(surface)
    assert len(rects) == 4
    assert len(surface.find_all(kind="rect", css_class="x")) == 2
    top = [r for r in surface.find_all(kind="rect", css_class="y") if r.datum["cat"] == "A"][0]
    assert top["y"] == pytest.approx(40)
    assert top["height"] == pytest.approx(400 * 4 / 7)
    assert top["width"] == pytest.approx(225)

    labels = [n["text"] for n in surface.find_all(kind="text", css_class="bar-label")]
    assert sorted(labels) == ["1", "3", "3", "7"]


def test_grouped_render_has_backdrops(make_graph, surface) -> None:
    graph = make_graph(vertical=True, grouped=True)
    graph.render(surface)

    assert len(_bar_rects(surface)) == 6
    backgrounds = surface.find_all(kind="rect", css_class="background")
    assert len(backgrounds) == 2
    assert all(r["fill"] == "#FFFFFF" for r in backgrounds)
    assert all(r["height"] == pytest.approx(400) for r in backgrounds)
    assert len(surface.find_all(kind="group", css_class="group")) == 2


def test_missing_values_labelled_na(surface) -> None:
    graph = BarGraph(data=[{"cat": "A", "x": None, "y": 4}], c_series="cat", n_series=["x", "y"])
    graph.init()
    graph.render(surface)

    labels = [n["text"] for n in surface.find_all(kind="text", css_class="bar-label")]
    assert labels == ["NA", "4"]
    assert len(surface.find_all(kind="rect", css_class="x")) == 0


def test_bar_labels_disabled(make_graph, surface) -> None:
    make_graph(bar_labels=False).render(surface)
    assert surface.find_all(kind="text", css_class="bar-label") == []


def test_render_before_init_raises(rows, surface) -> None:
    graph = BarGraph(data=rows, c_series="cat", n_series=["x", "y"])
    with pytest.raises(ChartNotReadyError):
        graph.render(surface)


def test_render_without_surface_raises(make_graph) -> None:
    with pytest.raises(ChartNotReadyError, match="surface"):
        make_graph().render()


def test_init_without_data_raises() -> None:
    graph = BarGraph(c_series="cat", n_series=["x"])
    with pytest.raises(ChartNotReadyError, match="data"):
        graph.init()


def test_init_axes_needs_scales(rows) -> None:
    graph = BarGraph(data=rows, c_series="cat", n_series=["x", "y"])
    with pytest.raises(ChartNotReadyError):
        graph.init_axes()


def test_clear_is_safe_before_render(make_graph) -> None:
    graph = make_graph()
    graph.clear()
    BarGraph().clear()


def test_render_twice_accumulates_and_clear_resets(make_graph, surface) -> None:
    graph = make_graph()
    graph.render(surface)
    graph.render()
    assert len(_bar_rects(surface)) == 8

    graph.clear()
    assert surface.root.children == []
    graph.render()
    assert len(_bar_rects(surface)) == 4


def test_stacked_tooltip_dispatch(make_graph, surface) -> None:
    graph = make_graph(vertical=True)
    graph.render(surface)
    tooltip = surface.tooltips[-1]
    rect = [r for r in surface.find_all(kind="rect", css_class="x") if r.datum["cat"] == "A"][0]

    assert surface.dispatch(rect, "pointerenter", PointerEvent(10, 20))
    assert tooltip.html == "Cat: A <br/> X: 3 <br/> Y: 4 <br/>"
    assert tooltip.opacity == 1.0

    surface.dispatch(rect, "pointermove", PointerEvent(30, 40))
    assert (tooltip.left, tooltip.top, tooltip.offset_x) == (30, 40, 25)

    surface.dispatch(rect, "pointerleave", PointerEvent(30, 40))
    assert tooltip.opacity == 0.0


def test_grouped_tooltip_bubbles_to_group(make_graph, surface) -> None:
    graph = make_graph(grouped=True, tooltip_series=["x"])
    graph.render(surface)
    bar = [r for r in surface.find_all(kind="rect", css_class="y") if r.datum["cat"] == "B"][0]

    assert bar.handlers == {}
    assert surface.dispatch(bar, "pointerenter", PointerEvent(0, 0))
    assert surface.tooltips[-1].html == "X: 1 <br/>"


def test_tooltips_disabled(make_graph, surface) -> None:
    make_graph(tooltips=False).render(surface)
    rect = surface.find_all(kind="rect", css_class="x")[0]
    assert surface.tooltips == []
    assert not surface.dispatch(rect, "pointerenter", PointerEvent(0, 0))


def test_legend_lists_series(make_graph, surface) -> None:
    make_graph().render(surface)
    legend = surface.find_all(kind="group", css_class="legend")[0]
    circles = legend.find_all(kind="circle")
    assert [c.css_class for c in circles] == ["x", "y"]
    assert all(c["r"] == 12 for c in circles)
    assert [t["text"] for t in legend.find_all(kind="text")] == ["x", "y"]


@pytest.mark.parametrize(
    "vertical, left_class, bottom_class",
    [(True, "n", "c"), (False, "c", "n")],
)
def test_axes_placement(make_graph, surface, vertical, left_class, bottom_class) -> None:
    make_graph(vertical=vertical).render(surface)
    axes = {a.css_class: a for a in surface.find_all(kind="axis")}
    assert set(axes) == {"n", "c"}
    assert axes[left_class]["orient"] == "left"
    assert axes[left_class]["translate"] == (60, 0)
    assert axes[bottom_class]["orient"] == "bottom"
    assert axes[bottom_class]["translate"] == (0, 440)


def test_titles(make_graph, surface) -> None:
    make_graph().render(surface)
    assert surface.find_all(kind="text", css_class="graph-title") == []

    surface.clear()
    make_graph(vertical=True, graph_title="Sales", n_axis_title="Units", c_axis_title="Region").render(surface)
    title = surface.find_all(kind="text", css_class="graph-title")[0]
    assert title["text"] == "Sales"
    assert (title["x"], title["y"]) == (390, 20)
    n_title = surface.find_all(kind="text", css_class="n-axis-title")[0]
    assert n_title["rotate"][0] == -90
    assert surface.find_all(kind="text", css_class="c-axis-title")[0]["text"] == "Region"


def test_orientation_swaps_roles(make_graph) -> None:
    square = {"width": 600, "height": 600, "margins": [50, 50, 50, 50]}
    rects = {}
    for vertical in (True, False):
        graph = make_graph(vertical=vertical, **square)
        layout = graph.layout()
        bar = layout.stacked_geometry()[0].bars[0]
        rects[vertical] = bar.rect(layout.roles)

    v, h = rects[True], rects[False]
    assert v.x == h.y
    assert v.width == pytest.approx(h.height)
    assert v.height == pytest.approx(h.width)
    assert h.x == pytest.approx(50)


def test_log_scale_floor(make_graph) -> None:
    graph = make_graph(log=True)
    assert isinstance(graph.n_scale, LogScale)
    assert graph.n_scale.domain == (0.001, 7.0)


def test_log_scale_keeps_positive_minimum(surface) -> None:
    rows = [{"cat": "A", "x": 5}, {"cat": "B", "x": 50}]
    graph = BarGraph(data=rows, c_series="cat", n_series=["x"], grouped=True)
    graph.init(log=True)
    assert graph.n_scale.domain == (5.0, 50.0)
    graph.render(surface)


def test_explicit_bar_width_after_init(make_graph, surface) -> None:
    graph = make_graph(vertical=True)
    assert graph.config.update(bar_width=10).is_valid
    graph.render(surface)
    assert all(r["width"] == 10 for r in _bar_rects(surface))

    graph.init_bar_width()
    assert graph.bar_width == pytest.approx(225)


def test_setting_change_needs_reinit(make_graph) -> None:
    graph = make_graph(vertical=True)
    graph.config.vertical = False
    graph.init()
    assert graph.c_scale.range == (40.0, 440.0)
    assert graph.axes.c.orient == "left"


def test_overrides_are_used_as_given(make_graph, surface) -> None:
    graph = make_graph(vertical=True)
    c_scale = BandScale(["B", "A"], (60, 660))
    n_scale = LinearScale((0, 14), (440, 40))
    graph.overrides.set_c_scale(c_scale)
    graph.overrides.set_n_scale(n_scale)
    axes = build_axes(c_scale, n_scale, vertical=True)
    graph.overrides.set_axes(axes.c, axes.n)
    layout = graph.render(surface)

    assert layout.c_scale is c_scale
    b_bar = [r for r in surface.find_all(kind="rect", css_class="x") if r.datum["cat"] == "B"][0]
    assert b_bar["x"] == 60
    assert b_bar["height"] == pytest.approx(400 / 14)


def test_override_stack(make_graph) -> None:
    graph = make_graph()
    graph.overrides.set_stack(graph.stack_data[:1])
    assert [s.key for s in graph.layout().stack] == ["x"]


def test_stack_intervals_refer_to_caller_records(make_graph, rows, surface) -> None:
    graph = make_graph()
    assert graph.stack_data[0][0].data is rows[0]
    graph.render(surface)
    rect = surface.find_all(kind="rect", css_class="y")[1]
    assert rect.datum is rows[1]

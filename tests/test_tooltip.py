"""Unit tests for tooltip content and pointer handlers."""

from __future__ import annotations

import math

from bargraph import PointerEvent, StackInterval, TooltipController, TooltipElement, format_tooltip


def test_format_capitalizes_and_marks_missing() -> None:
    record = {"cat": "A", "x": 3, "y": None}
    assert format_tooltip(record, ["cat", "x", "y"]) == "Cat: A <br/> X: 3 <br/> Y: NA <br/>"


def test_format_nan_and_absent_fields() -> None:
    record = {"cat": "A", "x": math.nan}
    assert format_tooltip(record, ["x", "missing"]) == "X: NA <br/> Missing: NA <br/>"


def test_format_no_fields() -> None:
    assert format_tooltip({"cat": "A"}, []) == ""


def test_enter_move_leave() -> None:
    element = TooltipElement()
    controller = TooltipController(["cat", "x"], element)
    handlers = controller.handlers()
    assert set(handlers) == {"pointerenter", "pointerleave", "pointermove"}

    record = {"cat": "B", "x": 1.5}
    handlers["pointerenter"](PointerEvent(0, 0), record)
    assert element.opacity == 1.0
    assert element.html == "Cat: B <br/> X: 1.5 <br/>"

    handlers["pointermove"](PointerEvent(120, 80), record)
    assert (element.left, element.top, element.offset_x) == (120, 80, 25)

    handlers["pointerleave"](PointerEvent(120, 80), record)
    assert element.opacity == 0.0
    assert element.html == "Cat: B <br/> X: 1.5 <br/>"


def test_interval_datum_uses_source_record() -> None:
    element = TooltipElement()
    controller = TooltipController(["cat"], element)
    controller.on_enter(PointerEvent(0, 0), StackInterval(0, 3, {"cat": "A", "x": 3}))
    assert element.html == "Cat: A <br/>"


def test_format_keeps_full_precision() -> None:
    record = {"cat": "A", "x": 12345.67, "y": 0.000125}
    assert format_tooltip(record, ["cat", "x", "y"]) == "Cat: A <br/> X: 12345.67 <br/> Y: 0.000125 <br/>"

"""Hover content for bars."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from .surface import PointerEvent, TooltipElement
from .utils import format_value

POINTER_OFFSET_X = 25


def _capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


def format_tooltip(record: Mapping[str, Any], fields: Sequence[str]) -> str:
    """``"Field: value <br/>"`` per field, missing values shown as NA."""
    parts = []
    for name in fields:
        parts.append(f"{_capitalize(name)}: {format_value(record.get(name))} <br/>")
    return " ".join(parts)


def _record_of(datum) -> Mapping[str, Any]:
    # stack intervals carry their source record in .data
    data = getattr(datum, "data", None)
    return data if isinstance(data, Mapping) else datum


class TooltipController:
    """Pointer handlers bound to one tooltip element.

    The handlers only touch the element, so they are safe to fire at any time.
    A controller belongs to a single render; a new render builds a new one.
    """

    def __init__(self, fields: Sequence[str], element: TooltipElement):
        self.fields = list(fields)
        self.element = element

    def on_enter(self, event: PointerEvent, datum):
        self.element.show(format_tooltip(_record_of(datum), self.fields))

    def on_leave(self, event: PointerEvent, datum):
        self.element.hide()

    def on_move(self, event: PointerEvent, datum):
        self.element.move_to(event.client_x, event.client_y, offset_x=POINTER_OFFSET_X)

    def handlers(self):
        return {
            "pointerenter": self.on_enter,
            "pointerleave": self.on_leave,
            "pointermove": self.on_move,
        }

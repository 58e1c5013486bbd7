"""Drawing surface contract and an in-memory implementation.

The chart never draws pixels itself. It creates groups and primitives on a
``Surface``, attaches pointer handlers to them and asks for a tooltip element.
``RecordingSurface`` keeps everything as a tree of ``Node`` objects, which is
enough for embedding code that draws by itself and for inspecting a render.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

Handler = Callable[["PointerEvent", Any], None]


@dataclass(frozen=True)
class PointerEvent:
    client_x: float
    client_y: float


@dataclass
class TooltipElement:
    """Floating element positioned in client coordinates."""

    html: str = ""
    opacity: float = 0.0
    left: Optional[float] = None
    top: Optional[float] = None
    offset_x: float = 0.0

    def show(self, html: str):
        self.html = html
        self.opacity = 1.0

    def hide(self):
        self.opacity = 0.0

    def move_to(self, left: float, top: float, offset_x: float = 0.0):
        self.left = left
        self.top = top
        self.offset_x = offset_x


class Surface(ABC):
    """Capabilities the render orchestrator needs from a drawing backend.

    ``parent`` is a node previously returned by ``group`` or ``None`` for the
    surface root. ``datum`` is handed back to pointer handlers.
    """

    @abstractmethod
    def group(self, parent, css_class: str, datum: Any = None): ...

    @abstractmethod
    def rect(self, parent, x: float, y: float, width: float, height: float,
             css_class: Optional[str] = None, fill: Optional[str] = None, datum: Any = None): ...

    @abstractmethod
    def text(self, parent, x: float, y: float, text: str, css_class: Optional[str] = None,
             anchor: str = "start", rotate: Optional[Tuple[float, float, float]] = None): ...

    @abstractmethod
    def circle(self, parent, cx: float, cy: float, r: float, css_class: Optional[str] = None): ...

    @abstractmethod
    def axis(self, parent, descriptor, translate: Tuple[float, float], css_class: Optional[str] = None): ...

    @abstractmethod
    def on(self, node, event_type: str, handler: Handler): ...

    @abstractmethod
    def tooltip(self) -> TooltipElement: ...

    @abstractmethod
    def clear(self): ...


@dataclass
class Node:
    kind: str
    css_class: Optional[str] = None
    attrs: Dict[str, Any] = field(default_factory=dict)
    datum: Any = None
    children: List["Node"] = field(default_factory=list)
    handlers: Dict[str, Handler] = field(default_factory=dict)
    parent: Optional["Node"] = field(default=None, repr=False, compare=False)

    def walk(self) -> Iterator["Node"]:
        yield self
        for child in self.children:
            yield from child.walk()

    def find_all(self, kind: Optional[str] = None, css_class: Optional[str] = None) -> List["Node"]:
        return [
            n for n in self.walk()
            if n is not self
            and (kind is None or n.kind == kind)
            and (css_class is None or n.css_class == css_class)
        ]

    def __getitem__(self, name):
        return self.attrs[name]


class RecordingSurface(Surface):
    """Surface that records the scene graph in memory."""

    def __init__(self):
        self.root = Node(kind="root")
        self.tooltips: List[TooltipElement] = []

    def _append(self, parent, node: Node) -> Node:
        target = parent if parent is not None else self.root
        node.parent = target
        target.children.append(node)
        return node

    def group(self, parent, css_class, datum=None):
        return self._append(parent, Node(kind="group", css_class=css_class, datum=datum))

    def rect(self, parent, x, y, width, height, css_class=None, fill=None, datum=None):
        attrs = {"x": x, "y": y, "width": width, "height": height}
        if fill is not None:
            attrs["fill"] = fill
        return self._append(parent, Node(kind="rect", css_class=css_class, attrs=attrs, datum=datum))

    def text(self, parent, x, y, text, css_class=None, anchor="start", rotate=None):
        attrs = {"x": x, "y": y, "text": text, "anchor": anchor}
        if rotate is not None:
            attrs["rotate"] = rotate
        return self._append(parent, Node(kind="text", css_class=css_class, attrs=attrs))

    def circle(self, parent, cx, cy, r, css_class=None):
        attrs = {"cx": cx, "cy": cy, "r": r}
        return self._append(parent, Node(kind="circle", css_class=css_class, attrs=attrs))

    def axis(self, parent, descriptor, translate, css_class=None):
        attrs = {
            "orient": descriptor.orient,
            "translate": translate,
            "ticks": descriptor.tick_marks(),
            "tick_size": descriptor.tick_size,
            "tick_padding": descriptor.tick_padding,
        }
        return self._append(parent, Node(kind="axis", css_class=css_class, attrs=attrs, datum=descriptor))

    def on(self, node, event_type, handler):
        node.handlers[event_type] = handler

    def tooltip(self):
        element = TooltipElement()
        self.tooltips.append(element)
        return element

    def clear(self):
        self.root.children.clear()
        self.tooltips.clear()

    def find_all(self, kind=None, css_class=None) -> List[Node]:
        return self.root.find_all(kind=kind, css_class=css_class)

    def dispatch(self, node: Node, event_type: str, event: PointerEvent) -> bool:
        """Deliver a pointer event to ``node`` or its nearest ancestor with a handler.

        Returns False if nobody handles it.
        """
        current = node
        while current is not None:
            handler = current.handlers.get(event_type)
            if handler is not None:
                handler(event, current.datum)
                return True
            current = current.parent
        return False

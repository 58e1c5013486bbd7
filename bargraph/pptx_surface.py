# -*- coding: utf-8 -*-
"""
pptx_surface.py
- Surface 実装: 棒グラフの描画命令を python-pptx の図形に変換する。
- ピクセル座標は geom（EMU の配置枠）に収まるよう等倍率で縮小する。
- スライドは静的なのでポインタイベントとツールチップは受け付けるだけ（何もしない）。
"""
from __future__ import annotations

import logging

from pptx.dml.color import RGBColor
from pptx.enum.shapes import MSO_CONNECTOR, MSO_SHAPE
from pptx.enum.text import PP_ALIGN, MSO_ANCHOR

from .surface import Surface, TooltipElement
from .utils import EMU_PER_PX, create_text_box, normalize_color, px_to_emu, series_color

logger = logging.getLogger(__name__)

# css class -> フォントサイズ(pt)
FONT_PT = {"graph-title": 14, "c-axis-title": 11, "n-axis-title": 11}
DEFAULT_FONT_PT = 9
AXIS_COLOR = "#333333"

_ALIGN = {"start": PP_ALIGN.LEFT, "middle": PP_ALIGN.CENTER, "end": PP_ALIGN.RIGHT}


class PptxSurface(Surface):
    """スライド上の配置枠 geom に棒グラフを描画する Surface"""

    def __init__(self, shapes, geom: dict, canvas_width: float, canvas_height: float,
                 theme: dict = None, series_keys=()):
        self._shapes = shapes
        self._geom = geom
        self._theme = theme or {}
        self._series = list(series_keys)
        self._created = []  # ルート直下に追加した図形（clear 用）
        self._warned_events = False

        # 縦横比を保って枠に収める縮尺
        sx = geom["width"] / max(1.0, canvas_width * EMU_PER_PX)
        sy = geom["height"] / max(1.0, canvas_height * EMU_PER_PX)
        self.scale = min(sx, sy)

    # ---- 座標変換 ----
    def _x(self, px):
        return self._geom["left"] + px_to_emu(px, self.scale)

    def _y(self, px):
        return self._geom["top"] + px_to_emu(px, self.scale)

    def _len(self, px):
        return px_to_emu(max(0.0, px), self.scale)

    def _target(self, parent):
        return parent.shapes if parent is not None else self._shapes

    def _track(self, parent, shape):
        if parent is None:
            self._created.append(shape)
        return shape

    def _color_for(self, css_class):
        if css_class not in self._series:
            self._series.append(css_class)
        return series_color(self._theme, css_class, self._series.index(css_class))

    def _font_color(self):
        return self._theme.get("font_color", "#000000")

    # ---- Surface ----
    def group(self, parent, css_class, datum=None):
        grp = self._target(parent).add_group_shape()
        return self._track(parent, grp)

    def rect(self, parent, x, y, width, height, css_class=None, fill=None, datum=None):
        shape = self._target(parent).add_shape(
            MSO_SHAPE.RECTANGLE, self._x(x), self._y(y), self._len(width), self._len(height)
        )
        r, g, b = normalize_color(fill) if fill else self._color_for(css_class)
        shape.fill.solid()
        shape.fill.fore_color.rgb = RGBColor(r, g, b)
        shape.line.fill.background()  # 枠線なし
        return self._track(parent, shape)

    def text(self, parent, x, y, text, css_class=None, anchor="start", rotate=None):
        pt = FONT_PT.get(css_class, DEFAULT_FONT_PT)
        # 文字数からおおよその箱サイズを見積もる（px）
        h = pt * 96 / 72 * 1.4
        w = max(1, len(str(text))) * pt * 96 / 72 * 0.6
        if anchor == "middle":
            left = x - w / 2
        elif anchor == "end":
            left = x - w
        else:
            left = x
        top = y - h * 0.75  # y はベースライン
        tb = create_text_box(
            self._target(parent),
            self._x(left),
            self._y(top),
            self._len(w),
            self._len(h),
            text,
            font_size=max(6, round(pt * min(1.0, self.scale * 1.5))),
            color=self._font_color(),
            align=_ALIGN.get(anchor, PP_ALIGN.LEFT),
            v_anchor=MSO_ANCHOR.BOTTOM,
        )
        if rotate is not None:
            tb.rotation = rotate[0] % 360
        return self._track(parent, tb)

    def circle(self, parent, cx, cy, r, css_class=None):
        shape = self._target(parent).add_shape(
            MSO_SHAPE.OVAL, self._x(cx - r), self._y(cy - r), self._len(2 * r), self._len(2 * r)
        )
        cr, cg, cb = self._color_for(css_class)
        shape.fill.solid()
        shape.fill.fore_color.rgb = RGBColor(cr, cg, cb)
        shape.line.fill.background()
        return self._track(parent, shape)

    def _line(self, shapes, x1, y1, x2, y2):
        line = shapes.add_connector(MSO_CONNECTOR.STRAIGHT, self._x(x1), self._y(y1), self._x(x2), self._y(y2))
        line.line.color.rgb = RGBColor(*normalize_color(AXIS_COLOR))
        return line

    def axis(self, parent, descriptor, translate, css_class=None):
        """軸線・目盛り・目盛りラベルをグループにまとめて描画する"""
        grp = self.group(parent, css_class or "axis")
        tx, ty = translate
        marks = descriptor.tick_marks()
        span = getattr(descriptor.scale, "range", None)
        if span is None:
            span = [m.position for m in marks] or [0.0, 0.0]
        lo, hi = min(span), max(span)
        size, pad = descriptor.tick_size, descriptor.tick_padding

        if descriptor.orient == "left":
            self._line(grp.shapes, tx, ty + lo, tx, ty + hi)
            for m in marks:
                self._line(grp.shapes, tx - size, ty + m.position, tx, ty + m.position)
                self.text(grp, tx - size - pad, ty + m.position + 4, m.label, css_class="tick", anchor="end")
        else:
            self._line(grp.shapes, tx + lo, ty, tx + hi, ty)
            for m in marks:
                self._line(grp.shapes, tx + m.position, ty, tx + m.position, ty + size)
                self.text(grp, tx + m.position, ty + size + pad + 10, m.label, css_class="tick", anchor="middle")
        return grp

    def on(self, node, event_type, handler):
        if not self._warned_events:
            logger.debug("pptx surface: pointer events are not supported; handlers ignored")
            self._warned_events = True

    def tooltip(self):
        # スライド上には表示されない（ハンドラからの更新は保持のみ）
        return TooltipElement()

    def clear(self):
        """このサーフェスが追加した図形をすべて削除する"""
        for shape in self._created:
            el = shape._element
            parent = el.getparent()
            if parent is not None:
                parent.remove(el)
        self._created = []

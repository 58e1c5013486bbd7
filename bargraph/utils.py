import math
import numbers
from decimal import Decimal

from pptx.util import Emu, Pt
from pptx.dml.color import RGBColor
from pptx.enum.text import PP_ALIGN, MSO_ANCHOR

# 96dpi 換算の 1px あたり EMU
EMU_PER_PX = 9525

# 系列の既定パレット
PALETTE_HEX = ["#4E79A7", "#F28E2B", "#59A14F", "#E15759", "#76B7B2", "#EDC948", "#B07AA1", "#9C755F"]


def pct_to_emu(pct, total_emu):
    """パーセンテージをEMUに変換する"""
    return int(total_emu * (pct / 100.0))


def px_to_emu(px, scale=1.0):
    """ピクセル座標をEMUに変換する（scale は描画面の縮尺）"""
    return Emu(int(round(px * scale * EMU_PER_PX)))


def parse_geom(pos_pct, prs):
    """
    パーセンテージで指定された位置とサイズをEMUに変換する。
    pos: {x, y, w, h} in percentage
    prs: Presentation object
    """
    slide_width = prs.slide_width
    slide_height = prs.slide_height

    return {
        "left": pct_to_emu(pos_pct["x"], slide_width),
        "top": pct_to_emu(pos_pct["y"], slide_height),
        "width": pct_to_emu(pos_pct["w"], slide_width),
        "height": pct_to_emu(pos_pct["h"], slide_height),
    }


def hex_to_rgb(hex_color):
    """HEXカラーコードをRGBタプルに変換する"""
    hex_color = hex_color.lstrip("#")
    return tuple(int(hex_color[i : i + 2], 16) for i in (0, 2, 4))


def normalize_color(color_val):
    """HEX(#RRGGBB) or (r,g,b) or [r,g,b] -> (r,g,b)"""
    if isinstance(color_val, (tuple, list)) and len(color_val) == 3:
        return tuple(int(v) for v in color_val)
    if isinstance(color_val, str):
        return hex_to_rgb(color_val)
    return (0, 0, 0)


def get_theme_color(theme, key, fallback):
    """テーマから色を取得してRGBタプルに変換"""
    raw = (theme or {}).get(key, fallback)
    return normalize_color(raw)


def series_color(theme, key, index):
    """系列キーの色を返す（テーマ優先、無ければパレット順）"""
    fallback = PALETTE_HEX[index % len(PALETTE_HEX)]
    return get_theme_color(theme, key, fallback)


def is_number(value):
    """bool を除く実数かどうか（numpy の数値型や Decimal も含む）"""
    return isinstance(value, (numbers.Real, Decimal)) and not isinstance(value, bool)


def is_missing(value):
    """None / 非数値 / NaN を欠損とみなす"""
    if not is_number(value):
        return True
    return math.isnan(value)


def format_value(value):
    """ラベル・ツールチップ用に値を文字列化（欠損は NA）"""
    if value is None:
        return "NA"
    if isinstance(value, float):
        if math.isnan(value):
            return "NA"
        if value.is_integer():
            return str(int(value))
        return repr(float(value))
    return str(value)


def create_text_box(
    shapes,
    left,
    top,
    width,
    height,
    text,
    font_size=10,
    bold=False,
    color="#000000",
    align=PP_ALIGN.LEFT,
    v_anchor=MSO_ANCHOR.MIDDLE,
):
    """共通のテキストボックス作成ヘルパー"""
    tb = shapes.add_textbox(left, top, width, height)
    tf = tb.text_frame
    tf.clear()
    tf.word_wrap = False
    tf.vertical_anchor = v_anchor
    tf.margin_left = tf.margin_right = tf.margin_top = tf.margin_bottom = 0
    p = tf.paragraphs[0]
    p.alignment = align
    p.space_before = 0
    p.space_after = 0
    p.text = str(text).strip()
    f = p.runs[0].font if p.runs else p.font
    f.size = Pt(font_size)
    f.bold = bold
    r, g, b = normalize_color(color)
    f.color.rgb = RGBColor(r, g, b)
    return tb

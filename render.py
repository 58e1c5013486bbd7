# -*- coding: utf-8 -*-
"""
render.py
- チャート文書(YAML) を読み込み、1 チャート 1 スライドで PPTX を生成するオーケストレータ。
- 特色:
  * 文書ノーマライザー: list ルートや単一チャートの dict も charts に包んで処理
  * チャート単位の検証（pydantic）: 不正なチャートは警告してスキップ
  * 設定値の検証は ChartConfig が行い、不正値はログに出して既定値のまま続行
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

import yaml
from pptx import Presentation
from pptx.util import Inches
from pydantic import ValidationError

from bargraph import BarGraph, ChartNotReadyError
from bargraph.pptx_surface import PptxSurface
from bargraph.utils import parse_geom
from chart_document import ChartDocument

logger = logging.getLogger("render")

BLANK_LAYOUT = 6  # 6は通常「白紙」


# =========================================================
# Slide size
# =========================================================
def set_slide_size(prs: Presentation, size_info: dict):
    """スライドサイズを設定する"""
    if not size_info:
        return
    if "preset" in size_info and size_info["preset"] == "16x9":
        prs.slide_width = Inches(10)
        prs.slide_height = Inches(5.625)
    elif "w_mm" in size_info and "h_mm" in size_info:
        # mm to EMU (1mm = 36000 EMU)
        prs.slide_width = int(size_info["w_mm"] * 36000)
        prs.slide_height = int(size_info["h_mm"] * 36000)


def _drop_slide(prs: Presentation, slide):
    """描画に失敗したスライドをプレゼンテーションから取り除く"""
    sld_ids = prs.slides._sldIdLst
    for sld_id in list(sld_ids):
        if prs.part.related_part(sld_id.rId) is slide.part:
            sld_ids.remove(sld_id)
            prs.part.drop_rel(sld_id.rId)
            return


# =========================================================
# Document normalizer
# =========================================================
def _normalize_document(doc):
    """
    受け取った文書を {version, meta, theme, charts} に正規化する。
    - list ルート: charts とみなす
    - dict ルート: charts が無くて c_series があれば単一チャートとして包む
    """

    def _mk_min(charts):
        return {"version": 1, "meta": {}, "theme": {}, "charts": charts}

    if doc is None:
        return _mk_min([])

    if isinstance(doc, list):
        return _mk_min(doc)

    if isinstance(doc, dict):
        if "charts" not in doc and "c_series" in doc:
            return _mk_min([doc])
        doc.setdefault("version", 1)
        doc.setdefault("meta", {})
        doc.setdefault("theme", {})
        doc.setdefault("charts", [])
        return doc

    raise TypeError(f"Chart document must be dict or list. Got: {type(doc)}")


# =========================================================
# Render
# =========================================================
def build_graph(chart) -> BarGraph:
    """検証済みチャートから BarGraph を作り、レイアウトを初期化する"""
    graph = BarGraph()
    result = graph.config.update(**chart.settings())
    if not result.is_valid:
        logger.warning(
            "Chart '%s': %d setting(s) rejected, defaults kept: %s",
            chart.id, len(result.errors), "; ".join(result.errors),
        )
    graph.init(log=chart.log, c_axis_options=chart.c_axis, n_axis_options=chart.n_axis)
    return graph


def render_document(doc_path: str, output_path: str) -> int:
    """YAML のチャート文書を読み込み、PowerPoint を生成する。描画したチャート数を返す"""
    with open(doc_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    doc = ChartDocument(**_normalize_document(raw))
    logger.info("Loaded %d chart(s) using series: %s", doc.get_chart_count(), ", ".join(doc.get_series_used()))

    prs = Presentation()
    set_slide_size(prs, doc.meta.slide_size)
    theme = dict(doc.theme or {})
    theme.setdefault("font_color", "#000000")  # デフォルトの文字色を黒に設定

    rendered = 0
    for idx, chart in doc.validated_charts():
        if isinstance(chart, ValidationError):
            logger.warning("Schema validation failed for chart %d: %s", idx, chart)
            logger.warning("Skipping chart %d due to validation error.", idx)
            continue
        chart_id = chart.id or f"chart_{idx}"

        slide = None
        try:
            graph = build_graph(chart)
            graph.layout()  # 未初期化のチャートはスライドを作る前に落とす
            slide = prs.slides.add_slide(prs.slide_layouts[BLANK_LAYOUT])
            geom = parse_geom(chart.pos.model_dump(), prs)
            surface = PptxSurface(
                slide.shapes,
                geom,
                graph.config.width,
                graph.config.height,
                theme=theme,
                series_keys=graph.config.n_series,
            )
            graph.render(surface)
        except ChartNotReadyError as e:
            logger.error("Chart '%s' is incomplete: %s", chart_id, e)
        except Exception as e:
            # 弱い失敗: 1 チャートの失敗で全体は止めない
            logger.error("Error rendering chart '%s': %s: %s", chart_id, type(e).__name__, e)
        else:
            rendered += 1
            logger.info("Rendered chart '%s'", chart_id)
            continue

        if slide is not None:
            _drop_slide(prs, slide)

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    prs.save(output_path)
    return rendered


# =========================================================
# CLI
# =========================================================
def _build_arg_parser():
    p = argparse.ArgumentParser(description="Render bar charts to PPTX from a YAML chart document.")
    p.add_argument(
        "input", nargs="?", default="examples/sample.yaml", help="Path to chart YAML"
    )
    p.add_argument(
        "-o", "--output", default="dist/output.pptx", help="Path to output .pptx"
    )
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p


def main(argv=None):
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    render_document(args.input, args.output)


if __name__ == "__main__":
    main()

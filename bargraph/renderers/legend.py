LEGEND_X_RATIO = 0.35


def render(surface, layout, context: dict):
    """系列ごとの凡例（円 + ラベル）を描画する"""
    logger = (context or {}).get("logger")
    legend = surface.group(None, "legend")
    r = layout.legend_radius

    if not layout.stack:
        if logger:
            logger.warning("legend: no stacked series; skip")
        return

    # 縦棒は下、横棒は上に配置
    cy = layout.height - layout.margins.bottom / 2 if layout.vertical else layout.margins.top / 2
    start = layout.width * LEGEND_X_RATIO

    for i, series in enumerate(layout.stack):
        surface.circle(legend, start + 2 * r + 16 * i * r, cy, r, css_class=series.key)
    for i, series in enumerate(layout.stack):
        surface.text(
            legend,
            start + 4 * r + 16 * i * r,
            cy + 0.3 * r,
            series.key,
            css_class=series.key,
            anchor="start",
        )

BACKGROUND_FILL = "#FFFFFF"


def _attach(surface, node, handlers):
    for event_type, handler in (handlers or {}).items():
        surface.on(node, event_type, handler)


def _draw_labels(surface, parent, labels, roles):
    for label in labels:
        x, y = label.point(roles)
        surface.text(parent, x, y, label.text, css_class="bar-label")


def _render_stacked(surface, bars, layout, handlers):
    """積み上げ棒: 系列ごとにグループを作り、区間ごとに矩形を置く"""
    roles = layout.roles
    for series in layout.stacked_geometry():
        g = surface.group(bars, series.key)
        for bar in series.bars:
            r = bar.rect(roles)
            node = surface.rect(g, r.x, r.y, r.width, r.height, css_class=series.key, datum=bar.data)
            _attach(surface, node, handlers)
        if layout.bar_labels:
            _draw_labels(surface, g, series.labels, roles)


def _render_grouped(surface, bars, layout, handlers):
    """グループ棒: カテゴリごとに背景棒 → 前景棒 → ラベルの順で描画"""
    roles = layout.roles
    for group in layout.grouped_geometry():
        g = surface.group(bars, "group", datum=group.data)

        bg = surface.group(g, "background")
        r = group.background.rect(roles)
        surface.rect(bg, r.x, r.y, r.width, r.height, css_class="background", fill=BACKGROUND_FILL)

        fg = surface.group(g, "foreground")
        for bar in group.bars:
            r = bar.rect(roles)
            surface.rect(fg, r.x, r.y, r.width, r.height, css_class=bar.key, datum=bar.data)

        if layout.bar_labels:
            _draw_labels(surface, g, group.labels, roles)

        # イベントはグループ単位で受ける
        _attach(surface, g, handlers)


def render(surface, layout, context: dict):
    """棒とバーラベルを描画する"""
    logger = (context or {}).get("logger")
    handlers = (context or {}).get("handlers", {})
    bars = surface.group(None, "bars")

    if layout.bar_width <= 0 and logger:
        logger.warning("bars: bar width is 0; bars will not be visible")

    if layout.grouped:
        _render_grouped(surface, bars, layout, handlers)
    else:
        _render_stacked(surface, bars, layout, handlers)

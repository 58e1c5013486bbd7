def render(surface, layout, context: dict):
    """グラフタイトルと軸タイトルを描画する"""
    m = layout.margins
    width, height = layout.width, layout.height
    titles = surface.group(None, "titles")

    # グラフタイトル
    if layout.graph_title:
        surface.text(
            titles,
            m.left + (width - m.left) / 2,
            m.top / 2 if layout.vertical else m.top / 4,
            layout.graph_title,
            css_class="graph-title",
            anchor="middle",
        )

    # 縦方向の軸タイトル（-90度回転）
    v = "n" if layout.vertical else "c"
    x = m.left / 2.5 if layout.vertical else 40
    y = m.top + (height - m.top - m.bottom) / 2
    v_title = layout.n_axis_title if layout.vertical else layout.c_axis_title
    if v_title:
        surface.text(titles, x, y, v_title, css_class=f"{v}-axis-title", anchor="middle", rotate=(-90, x, y))

    # 横方向の軸タイトル
    h = "c" if layout.vertical else "n"
    x = m.left + (width - m.left - m.right) / 2.25
    y = height - m.bottom / 1.75 if layout.vertical else height - m.bottom / 3
    h_title = layout.c_axis_title if layout.vertical else layout.n_axis_title
    if h_title:
        surface.text(titles, x, y, h_title, css_class=f"{h}-axis-title", anchor="end")

def render(surface, layout, context: dict):
    """縦軸・横軸を描画する（縦棒なら数値軸が縦、横棒なら分類軸が縦）"""
    m = layout.margins
    axes = surface.group(None, "axes")

    # 縦軸: プロット左端に配置
    v = "n" if layout.vertical else "c"
    v_axis = layout.axes.n if layout.vertical else layout.axes.c
    surface.axis(axes, v_axis, (m.left, 0), css_class=v)

    # 横軸: プロット下端に配置
    h = "c" if layout.vertical else "n"
    h_axis = layout.axes.c if layout.vertical else layout.axes.n
    surface.axis(axes, h_axis, (0, layout.height - m.bottom), css_class=h)

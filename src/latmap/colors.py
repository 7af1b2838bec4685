WHITE = "rgb(255,255,255)"
BLACK = "rgb(0,0,0)"
VERY_DARK_GREY = "rgb(60,60,60)"
DARK_GREY = "rgb(190,190,190)"
GREY = "rgb(230,230,230)"


def rgb(r: float, g: float, b: float) -> str:
    return f"rgb({round(r)},{round(g)},{round(b)})"


def color(scale: str, ratio: float) -> str:
    """
    Map a density ratio (0 = empty, 1 = densest cell) to a fill color.

    Zero is always white, even though the linear ramp starts at a
    pale tint for the smallest non-zero ratio.
    """
    if ratio == 0:
        return WHITE
    if scale == "linear":
        return rgb(255, 240 * (1 - ratio), 220 * (1 - ratio))
    return BLACK

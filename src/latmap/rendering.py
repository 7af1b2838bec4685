import logging

from . import colors
from .histogram import HistogramGrid
from .models import CellHover, HeatmapConfig
from .svg import Document, Line, Rect, Text
from .utils import format_number

logger = logging.getLogger(__name__)

GRID_LABEL_EVERY = 10  # columns between vertical grid lines


def time_label(column: int, step_sec: float) -> str:
    start = column * step_sec
    if step_sec > 1:
        return f"{format_number(start)}-{format_number(start - 1 + step_sec)}"
    return format_number(start)


def latency_label(row: int, config: HeatmapConfig) -> str:
    low = config.min_lat + row * config.step_lat
    high = config.min_lat + (row + 1) * config.step_lat
    return f"{format_number(low)}-{format_number(high)}{config.units_lat}"


def render(grid: HistogramGrid, config: HeatmapConfig) -> Document:
    """
    Draw a binned grid. ``config`` must be the resolved configuration
    returned by ``build_grid``.
    """
    stats = grid.stats
    box = config.box_size
    fs = config.font_size
    xpad = config.side_pad
    bottom_pad = config.bottom_pad
    width = stats.largest_column * box + xpad * 2
    height = stats.largest_row * box + config.top_pad + bottom_pad
    logger.debug(f"Creating image, height/width: {height}, {width}")

    doc = Document(width, height)
    doc.add(Rect(0, 0, width, height, colors.WHITE))
    doc.add(Text(int(width / 2), fs * 2, config.title, fs + 5, config.font_type,
                 colors.BLACK, anchor="middle"))
    doc.add(Text(int(width / 2), height - fs - 1, config.x_axis_text, fs,
                 config.font_type, colors.BLACK, anchor="middle"))
    doc.add(Text(xpad, height - 2.5 * fs, " ", fs, config.font_type, colors.BLACK,
                 extra={"id": "details"}))

    ytop = height - (bottom_pad + stats.largest_row * box - box)
    ybot = height - bottom_pad + box
    if config.grid:
        right = xpad + stats.largest_column * box
        doc.add(Line(xpad, ybot, right, ybot, colors.GREY))
        doc.add(Line(xpad, ytop, right, ytop, colors.GREY))
        for s in range(0, stats.largest_column + 1, GRID_LABEL_EVERY):
            x = xpad + s * box
            doc.add(Line(x, ybot, x, ytop, colors.GREY))
            doc.add(Text(x, ybot + fs, f"{format_number(s * config.step_sec)}s", fs,
                         config.font_type, colors.DARK_GREY))

    if not grid.is_empty():
        _draw_cells(doc, grid, config, height)

    if config.grid:
        doc.add(Text(xpad + 5, ybot - fs + 4,
                     f"{format_number(config.min_lat)}{config.units_lat}", fs,
                     config.font_type, colors.VERY_DARK_GREY))
        doc.add(Text(xpad + 5, ytop + fs + 4,
                     f"{format_number(config.max_lat)}{config.units_lat}", fs,
                     config.font_type, colors.VERY_DARK_GREY))

    logger.info(f"Rendered {len(doc)} primitives ({width}x{height})")
    return doc


def _draw_cells(doc: Document, grid: HistogramGrid, config: HeatmapConfig,
                height: float) -> None:
    stats = grid.stats
    box = config.box_size
    for s in range(stats.largest_column + 1):
        total = grid.column_total(s)
        if total == 0:
            continue
        acc = 0
        x1 = config.side_pad + s * box
        tr = time_label(s, config.step_sec)
        for l in range(stats.largest_row + 1):
            c = grid.count(s, l)
            if c == 0:
                continue
            acc += c
            y1 = height - (config.bottom_pad + l * box)
            hover = CellHover(tr, latency_label(l, config), c, acc, total)
            fill = colors.color(config.color_scale, c / stats.largest_count)
            doc.add(Rect(x1, y1, x1 + box, y1 + box, fill, hover))

__all__ = [
    "HeatmapConfig",
    "HeatmapError",
    "HistogramGrid",
    "Document",
    "build_grid",
    "build_heatmap",
    "color",
    "read_samples",
    "render",
]


from .models import HeatmapConfig
from .errors import HeatmapError
from .histogram import HistogramGrid, build_grid
from .svg import Document
from .core import build_heatmap
from .colors import color
from .reader import read_samples
from .rendering import render

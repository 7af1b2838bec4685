import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .histogram import HistogramGrid, build_grid
from .models import HeatmapConfig, SampleSet
from .reader import read_samples
from .rendering import render
from .svg import Document

logger = logging.getLogger(__name__)


@dataclass
class HeatmapResult:
    samples: SampleSet
    grid: HistogramGrid
    config: HeatmapConfig  # resolved
    document: Document

    @property
    def svg(self) -> str:
        return self.document.to_svg()


def build_heatmap(lines: Iterable[str], config: HeatmapConfig) -> HeatmapResult:
    """
    Run the whole pipeline: read, bin, render.

    Raises a HeatmapError subclass before anything is rendered when the
    time unit, column count or latency resolution is unusable.
    """
    config.time_factor  # fail fast on a bad time unit
    samples = read_samples(lines)
    logger.info(
        f"Read {len(samples)} samples ({samples.discarded} lines discarded)"
    )
    grid, resolved = build_grid(samples, config)
    document = render(grid, resolved)
    return HeatmapResult(samples, grid, resolved, document)

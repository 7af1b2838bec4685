import logging
import math
from collections.abc import Iterator

from .errors import ResolutionTooHighError, TooManyColumnsError
from .models import GridStats, HeatmapConfig, SampleSet

logger = logging.getLogger(__name__)


class HistogramGrid:
    """Sparse (column, row) -> count table. Missing cells count as zero."""

    def __init__(self, largest_row: int = 0):
        self._columns: dict[int, dict[int, int]] = {}
        self._frozen = False
        self.stats = GridStats(largest_row=largest_row)

    def add(self, column: int, row: int) -> int:
        if self._frozen:
            raise RuntimeError("histogram grid is frozen")
        cells = self._columns.setdefault(column, {})
        count = cells.get(row, 0) + 1
        cells[row] = count

        stats = self.stats
        stats.binned += 1
        if column > stats.largest_column:
            stats.largest_column = column
        if count > stats.largest_count:
            stats.largest_count = count
        return count

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def count(self, column: int, row: int) -> int:
        return self._columns.get(column, {}).get(row, 0)

    def column_total(self, column: int) -> int:
        return sum(self._columns.get(column, {}).values())

    def cells(self) -> Iterator[tuple[int, int, int]]:
        for column in sorted(self._columns):
            cells = self._columns[column]
            for row in sorted(cells):
                yield column, row, cells[row]

    def is_empty(self) -> bool:
        return not self._columns

    def __len__(self) -> int:
        return sum(len(cells) for cells in self._columns.values())

    def __eq__(self, other) -> bool:
        if not isinstance(other, HistogramGrid):
            return NotImplemented
        return self._columns == other._columns and self.stats == other.stats


# ────────────────────────────────
# Configuration Resolution
# ────────────────────────────────


def check_column_limit(samples: SampleSet, config: HeatmapConfig) -> float:
    """Estimate the column count and fail before the grid is allocated."""
    if samples.start_time is None:
        return 0.0
    estimated = (
        (samples.end_time - samples.start_time) / config.time_factor / config.step_sec
    )
    if estimated > config.limit_col:
        raise TooManyColumnsError(estimated, config.limit_col)
    return estimated


def resolve_config(samples: SampleSet, config: HeatmapConfig) -> HeatmapConfig:
    max_lat = config.max_lat
    if max_lat is None:
        max_lat = samples.largest_latency
    step_lat = config.step_lat
    if step_lat is None:
        step_lat = math.floor((max_lat - config.min_lat) / config.rows)
    if step_lat <= 0:
        raise ResolutionTooHighError(step_lat)
    return config.model_copy(update={"max_lat": max_lat, "step_lat": step_lat})


def largest_row(config: HeatmapConfig) -> int:
    return math.floor((config.max_lat - config.min_lat) / config.step_lat)


# ────────────────────────────────
# Binning
# ────────────────────────────────


def build_grid(
    samples: SampleSet, config: HeatmapConfig
) -> tuple[HistogramGrid, HeatmapConfig]:
    """
    Bin ``samples`` into a frozen HistogramGrid.

    Returns the grid together with the resolved configuration (max_lat
    and step_lat filled in) that the renderer must use.
    """
    estimated = check_column_limit(samples, config)
    config = resolve_config(samples, config)
    time_factor = config.time_factor
    logger.debug(
        f"Estimated columns: {estimated:.0f}, latency window "
        f"[{config.min_lat}, {config.max_lat}] step {config.step_lat}"
    )

    grid = HistogramGrid(largest_row=largest_row(config))
    skipped = 0
    for sample in samples:
        if sample.latency < config.min_lat or sample.latency > config.max_lat:
            skipped += 1
            continue
        col = math.floor(((sample.time - samples.start_time) / time_factor) / config.step_sec)
        if col < 0 or (config.max_col is not None and col > config.max_col):
            skipped += 1
            continue
        row = math.floor((sample.latency - config.min_lat) / config.step_lat)
        grid.add(col, row)

    grid.stats.skipped = skipped
    grid.freeze()
    logger.info(
        f"Built grid: {grid.stats.binned} samples in {len(grid)} cells, "
        f"{skipped} skipped, largest_count={grid.stats.largest_count}"
    )
    return grid, config

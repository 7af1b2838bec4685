import pytest

from latmap.core import build_heatmap
from latmap.errors import ResolutionTooHighError, TimeUnitError, TooManyColumnsError
from latmap.histogram import HistogramGrid, build_grid
from latmap.models import HeatmapConfig
from latmap.reader import read_samples


def test_end_to_end_binning(end_to_end_lines, end_to_end_config):
    grid, _ = build_grid(read_samples(end_to_end_lines), end_to_end_config)
    assert list(grid.cells()) == [(0, 1, 1), (1, 2, 1), (2, 0, 1)]
    assert grid.stats.largest_column == 2
    assert grid.stats.largest_row == 2
    assert grid.stats.largest_count == 1


def test_column_guard():
    samples = read_samples(["0 1", "20000000 1"])
    config = HeatmapConfig(units_time="s", step_sec=1, limit_col=10)
    with pytest.raises(TooManyColumnsError):
        build_grid(samples, config)


def test_column_guard_uses_time_unit():
    samples = read_samples(["0 1", "20000000 1"])
    config = HeatmapConfig(units_time="us", step_sec=1, limit_col=100, max_lat=10, step_lat=1)
    grid, _ = build_grid(samples, config)
    assert grid.stats.largest_column == 20


def test_resolution_too_high():
    samples = read_samples(["0 5", "1 20"])
    config = HeatmapConfig(min_lat=0, max_lat=20, rows=50)
    with pytest.raises(ResolutionTooHighError):
        build_grid(samples, config)


def test_unknown_time_unit(end_to_end_lines):
    with pytest.raises(TimeUnitError):
        HeatmapConfig(units_time="min").time_factor
    with pytest.raises(TimeUnitError):
        build_heatmap(end_to_end_lines, HeatmapConfig(units_time="min"))


def test_max_lat_and_step_resolved_from_data():
    samples = read_samples(["0 100", "1 50"])
    _, resolved = build_grid(samples, HeatmapConfig(rows=10))
    assert resolved.max_lat == 100
    assert resolved.step_lat == 10


def test_latency_window_filters():
    samples = read_samples(["0 5", "1 15", "2 25"])
    config = HeatmapConfig(min_lat=10, max_lat=20, step_lat=5)
    grid, _ = build_grid(samples, config)
    assert list(grid.cells()) == [(1, 1, 1)]
    assert grid.stats.skipped == 2


def test_max_col_truncates():
    samples = read_samples([f"{t} 5" for t in range(10)])
    config = HeatmapConfig(max_col=4, max_lat=10, step_lat=1)
    grid, _ = build_grid(samples, config)
    assert grid.stats.largest_column == 4
    assert grid.stats.binned == 5
    assert grid.stats.skipped == 5


def test_samples_before_start_skipped():
    samples = read_samples(["10 5", "0 5"])
    grid, _ = build_grid(samples, HeatmapConfig(max_lat=10, step_lat=1))
    assert list(grid.cells()) == [(0, 5, 1)]


def test_time_unit_divisor():
    samples = read_samples(["0 1", "5000 1"])
    config = HeatmapConfig(units_time="ms", max_lat=10, step_lat=1)
    grid, _ = build_grid(samples, config)
    assert grid.count(5, 1) == 1


def test_largest_count():
    samples = read_samples(["0 1", "0 1", "0 1", "3 9"])
    grid, _ = build_grid(samples, HeatmapConfig(max_lat=10, step_lat=1))
    assert grid.stats.largest_count == 3
    assert grid.count(0, 1) == 3
    assert grid.count(0, 2) == 0


def test_binning_is_idempotent(end_to_end_lines, end_to_end_config):
    samples = read_samples(end_to_end_lines)
    first, _ = build_grid(samples, end_to_end_config)
    second, _ = build_grid(samples, end_to_end_config)
    assert first == second


def test_grid_frozen_after_binning(end_to_end_lines, end_to_end_config):
    grid, _ = build_grid(read_samples(end_to_end_lines), end_to_end_config)
    assert grid.frozen
    with pytest.raises(RuntimeError):
        grid.add(0, 0)


def test_empty_grid_when_everything_filtered():
    samples = read_samples(["0 5", "1 6"])
    config = HeatmapConfig(min_lat=100, max_lat=200, step_lat=10)
    grid, _ = build_grid(samples, config)
    assert grid.is_empty()
    assert grid.stats.largest_count == 0


def test_column_total():
    grid = HistogramGrid(largest_row=3)
    grid.add(0, 0)
    grid.add(0, 2)
    grid.add(0, 2)
    assert grid.column_total(0) == 3
    assert grid.column_total(1) == 0


def test_max_latency_lands_in_top_row_and_is_drawn():
    result = build_heatmap(["0 20"], HeatmapConfig(max_lat=20, step_lat=10))
    assert result.grid.count(0, 2) == 1
    assert result.grid.stats.largest_row == 2
    cells = [r for r in result.document.rects() if r.hover is not None]
    assert len(cells) == 1
    assert cells[0].hover.latency_label == "20-30"


def test_last_column_is_drawn():
    config = HeatmapConfig(max_lat=20, step_lat=10, step_sec=10)
    result = build_heatmap(["0 5", "30 5"], config)
    assert result.grid.stats.largest_column == 3
    cells = [r for r in result.document.rects() if r.hover is not None]
    assert [c.hover.time_label for c in cells] == ["0-9", "30-39"]

import pytest

from latmap.models import HeatmapConfig


@pytest.fixture
def end_to_end_lines():
    return ["0 10\n", "10 20\n", "20 5\n"]


@pytest.fixture
def end_to_end_config():
    return HeatmapConfig(min_lat=0, max_lat=20, step_lat=10, step_sec=10)

from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import TimeUnitError

# Divisors that turn the raw time column into seconds
TIME_UNITS: dict[str, int] = {
    "s": 1,
    "ms": 1_000,
    "us": 1_000_000,
    "ns": 1_000_000_000,
}


class HeatmapConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    font_type: str = "Verdana"
    font_size: int = Field(12, gt=0)
    box_size: int = Field(8, gt=0)  # height and width of boxes
    title: str = "Latency Heat Map"
    x_axis_text: str = "Time"
    rows: int = Field(50, gt=0)  # used when step_lat is unset
    max_col: Optional[int] = None  # truncate beyond this column
    step_lat: Optional[float] = None
    step_sec: float = Field(1.0, gt=0)  # seconds per column
    min_lat: float = 0
    max_lat: Optional[float] = None
    units_lat: str = ""  # label only, eg "us"
    units_time: Optional[str] = None  # "s", "ms", "us" or "ns"
    limit_col: int = Field(10000, gt=0)
    grid: bool = False
    color_scale: str = "linear"

    @property
    def time_factor(self) -> int:
        if self.units_time is None:
            return 1
        try:
            return TIME_UNITS[self.units_time]
        except KeyError:
            raise TimeUnitError(self.units_time) from None

    @property
    def side_pad(self) -> int:
        return 10

    @property
    def top_pad(self) -> float:
        return self.font_size * 3

    @property
    def bottom_pad(self) -> float:
        pad = self.font_size * 4.5
        if self.grid:
            pad += self.font_size * 1.2
        return pad


@dataclass(frozen=True)
class Sample:
    time: float
    latency: float


@dataclass
class SampleSet:
    samples: list[Sample] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None
    largest_latency: float = 0
    discarded: int = 0

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self):
        return iter(self.samples)

    @property
    def latencies(self) -> list[float]:
        return [s.latency for s in self.samples]


@dataclass
class GridStats:
    largest_column: int = 0
    largest_row: int = 0
    largest_count: int = 0
    binned: int = 0
    skipped: int = 0


@dataclass(frozen=True)
class CellHover:
    time_label: str
    latency_label: str
    count: int
    acc: int
    total: int


@dataclass
class LatencyStats:
    count: int
    mean: float | None
    std: float | None
    p50: float | None
    p90: float | None
    p95: float | None
    p99: float | None
    min: float | None
    max: float | None

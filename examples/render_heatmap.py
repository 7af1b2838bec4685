"""
Render a heat map from a synthetic bimodal latency trace.

Usage:
  python examples/render_heatmap.py > heatmap.svg
"""
import argparse
import random
import sys

from latmap import HeatmapConfig, build_heatmap
from latmap.logging_config import setup_logging


def synthetic_trace(seconds: int, rate: int, seed: int = 1):
    rng = random.Random(seed)
    yield "time latency\n"
    for sec in range(seconds):
        for i in range(rate):
            t_us = sec * 1_000_000 + i * (1_000_000 // rate)
            # fast path ~200us, slow path ~2ms that drifts upward over time
            if rng.random() < 0.8:
                lat = rng.gauss(200, 40)
            else:
                lat = rng.gauss(2000 + sec * 10, 300)
            yield f"{t_us} {max(0, int(lat))}\n"


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--seconds", type=int, default=120)
    parser.add_argument("--rate", type=int, default=200, help="Events per second")
    parser.add_argument("--grid", action="store_true")
    args = parser.parse_args()

    setup_logging("INFO")
    config = HeatmapConfig(
        units_time="us",
        units_lat="us",
        max_lat=4000,
        rows=50,
        grid=args.grid,
        title="Synthetic Latency Heat Map",
    )
    result = build_heatmap(synthetic_trace(args.seconds, args.rate), config)
    sys.stdout.write(result.svg)


if __name__ == "__main__":
    main()

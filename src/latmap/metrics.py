import math
import logging
from collections.abc import Sequence

from .models import LatencyStats

logger = logging.getLogger(__name__)


def compute_stats(latencies: Sequence[float]) -> LatencyStats:
    n = len(latencies)
    logger.debug(f"Computing stats: count={n}")

    if n == 0:
        logger.info("No latencies recorded. Returning empty stats.")
        return LatencyStats(
            count=0,
            mean=None,
            std=None,
            p50=None,
            p90=None,
            p95=None,
            p99=None,
            min=None,
            max=None,
        )

    mean = sum(latencies) / n
    sum_sq = sum(x * x for x in latencies)
    std = math.sqrt(max(0.0, (sum_sq / n) - (mean * mean)))

    sl = sorted(latencies)

    def pct(p):
        return sl[max(0, min(n - 1, int(p * (n - 1))))]

    stats = LatencyStats(
        count=n,
        mean=mean,
        std=std,
        p50=pct(0.50),
        p90=pct(0.90),
        p95=pct(0.95),
        p99=pct(0.99),
        min=sl[0],
        max=sl[-1],
    )
    logger.info(
        f"Stats computed: count={n}, mean={mean:.3f}, p95={stats.p95:.3f}, max={stats.max:.3f}"
    )
    return stats

import logging
import math
import re
from collections.abc import Iterable

from .models import Sample, SampleSet

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(r"[a-zA-Z]")
# Plain decimal numbers only: no "1_000", "inf" or non-ASCII digits
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def parse_line(line: str) -> Sample | None:
    """Return the sample on ``line``, or None if it lacks two numeric fields."""
    fields = line.split()
    if len(fields) < 2:
        return None
    if not (_NUMBER_RE.fullmatch(fields[0]) and _NUMBER_RE.fullmatch(fields[1])):
        return None
    time = float(fields[0])
    latency = float(fields[1])
    if not (math.isfinite(time) and math.isfinite(latency)):
        return None
    return Sample(time, latency)


def read_samples(lines: Iterable[str]) -> SampleSet:
    """
    Parse ``<time> <latency>`` rows into a SampleSet.

    A first line containing any letter is a header and is always dropped.
    Malformed rows are skipped without error.
    """
    result = SampleSet()
    for lineno, line in enumerate(lines):
        if lineno == 0 and _HEADER_RE.search(line):
            logger.debug(f"Dropping header line: {line.strip()!r}")
            continue
        sample = parse_line(line)
        if sample is None:
            result.discarded += 1
            continue

        if result.start_time is None:
            result.start_time = sample.time
            result.end_time = sample.time
        elif sample.time > result.end_time:
            result.end_time = sample.time
        if sample.latency > result.largest_latency:
            result.largest_latency = sample.latency
        result.samples.append(sample)

    logger.debug(
        f"Input start/end times: {result.start_time}/{result.end_time}, "
        f"{len(result.samples)} samples, {result.discarded} lines discarded"
    )
    return result

"""
Turn ``perf script`` output into ``<second> <sub-second>`` rows for
sub-second offset heat maps, eg:

    perf script | latmap-offsets --ms | latmap --unitslatency=ms > heatmap.svg

Idle CPU samples (the swapper task sitting in an idle function) are dropped.
"""

import logging
import math
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum, auto

logger = logging.getLogger(__name__)

# Matches the event line and captures its timestamp, eg:
#   java 14375 [022] 28648.467079: cpu-clock:
#   swapper     0 [002] 6034779.719110:   10101010 cpu-clock:
EVENT_RE = re.compile(r" +([0-9.]+): .+?:")

IDLE_PROCESS = "swapper"
IDLE_FUNCTIONS = re.compile(
    r"(cpu_idle|cpu_bringup_and_idle|native_safe_halt|xen_hypercall_sched_op|xen_hypercall_vcpu_op)"
)
IDLE_LINE_RE = re.compile(rf"{IDLE_PROCESS} .* {IDLE_FUNCTIONS.pattern}")


class ParseState(Enum):
    AWAITING_EVENT = auto()
    COLLECTING_STACK = auto()


@dataclass
class PerfEvent:
    line: str
    timestamp: float
    stack: list[str] = field(default_factory=list)

    @property
    def is_idle(self) -> bool:
        if self.stack:
            return IDLE_PROCESS in self.line and any(
                IDLE_FUNCTIONS.search(frame) for frame in self.stack
            )
        return IDLE_LINE_RE.search(self.line) is not None


def parse_events(lines: Iterable[str]) -> Iterator[PerfEvent]:
    state = ParseState.AWAITING_EVENT
    event: PerfEvent | None = None
    for raw in lines:
        line = raw.rstrip("\n")
        match = EVENT_RE.search(line)

        if state is ParseState.COLLECTING_STACK:
            if match is None:
                if line.strip():
                    event.stack.append(line)
                continue
            yield event
            state = ParseState.AWAITING_EVENT

        if line.startswith("#") or match is None:
            continue
        event = PerfEvent(line, float(match.group(1)))
        state = ParseState.COLLECTING_STACK

    if state is ParseState.COLLECTING_STACK:
        yield event


def format_offset(
    timestamp: float,
    epoch: float,
    timezero: bool = False,
    timezerosecs: bool = False,
    ms: bool = False,
) -> str:
    if timezero:
        timestamp -= epoch
    elif timezerosecs:
        timestamp -= math.floor(epoch)
    text = f"{timestamp:.3f}" if ms else f"{timestamp:.6f}"
    return text.replace(".", " ")


def perf_offsets(
    lines: Iterable[str],
    timezero: bool = False,
    timezerosecs: bool = False,
    ms: bool = False,
) -> Iterator[str]:
    """Yield one output row per non-idle perf event."""
    epoch = None
    idle = 0
    for event in parse_events(lines):
        if epoch is None:
            epoch = event.timestamp
        if event.is_idle:
            idle += 1
            continue
        yield format_offset(event.timestamp, epoch, timezero, timezerosecs, ms)
    logger.debug(f"Skipped {idle} idle samples")

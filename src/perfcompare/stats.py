"""Summary statistics for metric samples.

Only the three measures used by the comparison table are provided:
arithmetic mean, population standard deviation and max.

The standard deviation uses the single-pass formula

    stdev = sqrt(sum(x * x) / n - mean * mean)

rather than the two-pass textbook form.  It loses precision through
cancellation when samples are large and tightly clustered; results
must stay numerically identical to earlier comparison runs, so the
formula is not changed.  A radicand pushed below zero by rounding
yields NaN, matching IEEE ``sqrt``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class SampleStats:
    """Mean, population standard deviation and max of one sample."""

    avg: float
    stdev: float
    max: float


NAN_STATS = SampleStats(avg=float("nan"), stdev=float("nan"), max=float("nan"))


def compute_sample_stats(sample: Sequence[float]) -> SampleStats:
    """Compute avg, stdev and max for *sample*.

    An empty sample has no statistics: all three fields are NaN.
    """
    n = len(sample)
    if n == 0:
        return NAN_STATS

    total = 0.0
    square_total = 0.0
    maximum = -math.inf
    for value in sample:
        total += value
        square_total += value * value
        maximum = max(maximum, value)

    avg = total / n
    radicand = square_total / n - avg * avg
    stdev = math.sqrt(radicand) if radicand >= 0 else float("nan")
    return SampleStats(avg=avg, stdev=stdev, max=maximum)

"""Causal moving-average filter over (time, A, B) sample series."""

from __future__ import annotations

from typing import List

from pulseinsight.decode.types import SampleSeries
from pulseinsight.errors import InsufficientData
from pulseinsight.util.logging import get_logger

logger = get_logger(__name__)


def smooth(series: SampleSeries, window_size: int) -> SampleSeries:
    """Average both line voltages over a trailing window of ``window_size`` samples.

    Output sample ``i`` carries the timestamp of raw sample ``i + window_size``
    and the mean of raw samples ``i .. i + window_size - 1``, so the result is
    ``window_size`` samples shorter than the input.

    The running mean is updated incrementally (subtract the oldest sample's
    share, add the newest) in a fixed order; threshold decisions downstream
    are sensitive to the last bits of these floats.
    """
    window_size = int(window_size)
    if window_size < 1:
        raise ValueError("window_size must be >= 1")
    rows = len(series)
    if rows < window_size:
        raise InsufficientData(f"smoothing needs at least {window_size} samples, got {rows}")

    times = series.time.tolist()
    wire_a = series.voltage_a.tolist()
    wire_b = series.voltage_b.tolist()
    n = float(window_size)

    average_a = 0.0
    average_b = 0.0
    for r in range(window_size):
        average_a += wire_a[r]
        average_b += wire_b[r]
    average_a /= n
    average_b /= n

    out_t: List[float] = []
    out_a: List[float] = []
    out_b: List[float] = []
    for r in range(rows - window_size):
        out_t.append(times[r + window_size])
        out_a.append(average_a)
        out_b.append(average_b)
        # drop the oldest sample
        average_a -= wire_a[r] / n
        average_b -= wire_b[r] / n
        # add the newest
        average_a += wire_a[r + window_size] / n
        average_b += wire_b[r + window_size] / n

    logger.debug("smoothed %d samples into %d", rows, len(out_t), extra={"window_size": window_size})
    return SampleSeries(out_t, out_a, out_b)

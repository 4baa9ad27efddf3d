"""Differential segmentation of A/B line voltages into bit-length symbol intervals."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from pulseinsight.decode.types import SampleSeries, Symbol, SymbolInterval
from pulseinsight.util.logging import get_logger

logger = get_logger(__name__)

THRESHOLD_V = 1.0


def bit_period_for(baud_rate: float) -> float:
    """Seconds per bit slot at ``baud_rate``."""
    if baud_rate <= 0:
        raise ValueError("baud_rate must be positive")
    return 1.0 / float(baud_rate)


def reference_time(series: SampleSeries, threshold: float = THRESHOLD_V) -> float:
    """Time of the first Space-polarity sample, or 0.0 when the trace has none.

    The first Space sample is taken as the leading edge of the first start bit.
    """
    hits = np.flatnonzero(series.differential < -threshold)
    if hits.size == 0:
        logger.warning("no Space-polarity sample found; reference time left at 0.0")
        return 0.0
    return float(series.time[hits[0]])


def _polarity(differential: np.ndarray, threshold: float) -> np.ndarray:
    """+1 for Mark, -1 for Space, 0 inside the noise band."""
    return np.where(differential > threshold, 1, np.where(differential < -threshold, -1, 0)).astype(np.int8)


def segment(series: SampleSeries, bit_period: float, threshold: float = THRESHOLD_V) -> List[SymbolInterval]:
    """Split a differential trace into Mark/Space runs of at most one bit period.

    Times are rebased so the first Space sample sits at 0. A run grows while
    samples keep its polarity and stay less than ``bit_period`` after the
    run's first sample; a sign flip, a noise-band sample, or a full bit period
    closes it. The closing sample is then considered as the start of the next
    run. Noise-band samples are dropped and leave gaps between intervals.

    Input must be ordered by time; this is not validated.
    """
    if bit_period <= 0:
        raise ValueError("bit_period must be positive")

    t0 = reference_time(series, threshold)
    times = (series.time - t0).tolist()
    polarity = _polarity(series.differential, threshold).tolist()
    rows = len(times)

    intervals: List[SymbolInterval] = []
    r = 0
    while r < rows:
        pol = polarity[r]
        if pol == 0:
            # below threshold: noise, not represented
            r += 1
            continue
        symbol = Symbol.MARK if pol > 0 else Symbol.SPACE
        start_time = times[r]
        end_time = start_time
        r += 1
        while r < rows and polarity[r] == pol and times[r] - start_time < bit_period:
            end_time = times[r]
            r += 1
        intervals.append(SymbolInterval.of(start_time, end_time, symbol))

    logger.debug("segmented %d samples into %d intervals (t0=%.9g)", rows, len(intervals), t0)
    return intervals


def intervals_to_series(intervals: Sequence[SymbolInterval]) -> SampleSeries:
    """Flatten intervals into a two-rows-per-interval normalized waveform for charts."""
    times: List[float] = []
    wire_a: List[float] = []
    wire_b: List[float] = []
    for interval in intervals:
        times.extend((interval.start_time, interval.end_time))
        wire_a.extend((interval.start_levels[0], interval.end_levels[0]))
        wire_b.extend((interval.start_levels[1], interval.end_levels[1]))
    return SampleSeries(times, wire_a, wire_b)

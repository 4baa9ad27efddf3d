"""Segment-then-frame convenience over a raw sample series."""

from __future__ import annotations

from typing import List, Tuple

from pulseinsight.decode.framer import decode_intervals
from pulseinsight.decode.types import DecodeResult, SampleSeries, SymbolInterval, intervals_span
from pulseinsight.dsp.segmenter import THRESHOLD_V, bit_period_for, segment
from pulseinsight.util.logging import get_logger

logger = get_logger(__name__)


def decode_waveform(
    series: SampleSeries,
    baud_rate: float,
    threshold: float = THRESHOLD_V,
) -> Tuple[List[SymbolInterval], DecodeResult]:
    """Return the symbol intervals and the decoded bit/byte traces for ``series``."""
    intervals = segment(series, bit_period_for(baud_rate), threshold)
    result = decode_intervals(intervals)
    first, last = intervals_span(intervals)
    logger.info(
        "decoded %d bytes from %d intervals spanning %.6f..%.6f s",
        len(result.codes),
        len(intervals),
        first,
        last,
        extra={"baud_rate": baud_rate},
    )
    return intervals, result
